from typing import Dict, List
from connext.schemas.call_record import CallRecord
from connext.schemas.expert import Expert
from connext.schemas.project import Project
from connext.schemas.project_expert import ProjectExpert
from connext.schemas.vetting_question import VettingQuestion


class ProjectExpertWithExpert(ProjectExpert):
    expert: Expert


class ProjectDetail(Project):
    """Project page payload: the project plus everything hanging off it."""

    vetting_questions: List[VettingQuestion] = []
    project_experts: List[ProjectExpertWithExpert] = []
    call_records: List[CallRecord] = []
    pipeline_counts: Dict[str, int] = {}
