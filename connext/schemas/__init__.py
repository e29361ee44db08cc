# File: connext/schemas/__init__.py
from .user import (
    User, UserCreate, UserUpdate, UserWithPermissions, EmployeeCreated,
    PasswordChangeRequest, PasswordResetRequest,
)
from .auth import LoginRequest, LoginResponse, TokenData, PermissionsResponse
from .client import (
    ClientOrganization, ClientOrganizationCreate, ClientOrganizationUpdate,
    ClientPoc, ClientPocCreate, ClientPocUpdate,
)
from .project import (
    Project, ProjectCreate, ProjectUpdate, ProjectActivity,
    BulkAssignRequest, BulkAssignResult, SendInvitationsRequest, SendInvitationsResult,
)
from .expert import Expert, ExpertCreate, ExpertUpdate, ExpertRegistration, VQAnswer
from .vetting_question import VettingQuestion, VettingQuestionCreate, VettingQuestionUpdate
from .project_expert import (
    ProjectExpert, ProjectExpertCreate, ProjectExpertUpdate,
    ScheduleAssignmentRequest, InviteResponse,
)
from .call_record import (
    CallRecord, CallRecordCreate, CallRecordUpdate,
    ScheduleCallRequest, CompleteCallRequest, CancelCallRequest, CUCalculation,
)
from .invitation_link import (
    InvitationLink, InvitationLinkCreate, InvitationLinkWithUrl,
    OnboardingInvitation, ExpertInvitation,
    AcceptInvitationRequest, DeclineInvitationRequest,
    QuickInviteRequest, QuickInviteDecisionRequest, InvitationResponseResult,
)
from .usage_record import UsageRecord, UsageRecordCreate
from .ra_incentive import AllRaIncentives, RaIncentiveDetail, RaIncentiveSummary
from .shortlist import ClientShortlist
from .project_detail import ProjectDetail, ProjectExpertWithExpert
from .reporting import DashboardStats
