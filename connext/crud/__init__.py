from .user import user
from .client import client_organization, client_poc
from .project import project
from .expert import expert
from .vetting_question import vetting_question
from .project_expert import project_expert
from .call_record import call_record
from .invitation_link import invitation_link
from .usage_record import usage_record

__all__ = [
    "user", "client_organization", "client_poc", "project", "expert", "vetting_question",
    "project_expert", "call_record", "invitation_link", "usage_record",
]
