# File: connext/api/v1/endpoints/projects.py
import io
import logging
from collections import Counter
from typing import Any, List

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from connext import crud, schemas
from connext.core import deps
from connext.core.email_service import email_service
from connext.db.database import get_db
from connext.models.invitation_link import InviteType
from connext.models.project import Project
from connext.models.project_expert import AssignmentStatus
from connext.models.user import User, UserRole
from connext.services import exports, pipeline
from connext.services import invitation_links as links

logger = logging.getLogger(__name__)
router = APIRouter()

require_project_manager = deps.require_roles(UserRole.ADMIN, UserRole.PM)


def _get_project_or_404(db: Session, project_id: int) -> Project:
    project = crud.project.get(db, id=project_id)
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


@router.get("", response_model=List[schemas.Project])
def list_projects(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    return crud.project.get_multi(db)


@router.post("", response_model=schemas.Project, status_code=status.HTTP_201_CREATED)
def create_project(
    project_in: schemas.ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_project_manager),
) -> Any:
    """Create a project. The creating PM is recorded when none is given."""
    data = project_in.model_dump()
    if data.get("created_by_pm_id") is None:
        data["created_by_pm_id"] = current_user.id
    if data.get("client_organization_id") is not None:
        organization = crud.client_organization.get(db, id=data["client_organization_id"])
        if not organization:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Client organization not found")
    project = crud.project.create(db, obj_in=data)
    pipeline.log_activity(db, project.id, "project_created", f"Project '{project.name}' created", user_id=current_user.id)
    db.commit()
    logger.info(f"Project {project.id} created by user {current_user.id}")
    return project


@router.get("/{project_id}", response_model=schemas.Project)
def read_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    return _get_project_or_404(db, project_id)


@router.patch("/{project_id}", response_model=schemas.Project)
def update_project(
    project_id: int,
    project_in: schemas.ProjectUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    project = _get_project_or_404(db, project_id)
    previous_status = project.status
    project = crud.project.update(db, db_obj=project, obj_in=project_in)
    if project.status != previous_status:
        pipeline.log_activity(
            db, project.id, "project_status_changed",
            f"Project status changed from {previous_status} to {project.status}",
            user_id=current_user.id, details={"from": previous_status, "to": project.status},
        )
        db.commit()
    return project


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_project_manager),
) -> None:
    _get_project_or_404(db, project_id)
    crud.project.remove(db, id=project_id)
    logger.info(f"Project {project_id} deleted by user {current_user.id}")


@router.get("/{project_id}/detail", response_model=schemas.ProjectDetail)
def read_project_detail(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    """Project with vetting questions, assigned experts, calls and pipeline counts"""
    project = _get_project_or_404(db, project_id)
    assignments = crud.project_expert.get_by_project(db, project_id=project_id)
    return schemas.ProjectDetail.model_validate({
        **schemas.Project.model_validate(project).model_dump(),
        "vetting_questions": crud.vetting_question.get_by_project(db, project_id=project_id),
        "project_experts": assignments,
        "call_records": crud.call_record.get_by_project(db, project_id=project_id),
        "pipeline_counts": dict(Counter(a.status for a in assignments)),
    }, from_attributes=True)


@router.get("/{project_id}/activities", response_model=List[schemas.ProjectActivity])
def list_project_activities(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    _get_project_or_404(db, project_id)
    return crud.project.get_activities(db, project_id=project_id)


@router.post("/{project_id}/experts/bulk", response_model=schemas.BulkAssignResult)
def bulk_assign_experts(
    project_id: int,
    payload: schemas.BulkAssignRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    """Assign several experts at once. Unknown or already assigned experts are skipped."""
    _get_project_or_404(db, project_id)
    created, skipped = [], []
    for expert_id in dict.fromkeys(payload.expert_ids):
        expert = crud.expert.get(db, id=expert_id)
        if not expert or crud.project_expert.get_by_project_and_expert(db, project_id=project_id, expert_id=expert_id):
            skipped.append(expert_id)
            continue
        crud.project_expert.create(db, obj_in={
            "project_id": project_id,
            "expert_id": expert_id,
            "notes": payload.notes,
        })
        created.append(expert_id)

    if created:
        pipeline.log_activity(
            db, project_id, "experts_assigned",
            f"{len(created)} expert(s) assigned to the project",
            user_id=current_user.id, details={"expertIds": created},
        )
        db.commit()
    logger.info(f"Bulk assign on project {project_id}: {len(created)} created, {len(skipped)} skipped")
    return {"created": created, "skipped": skipped}


@router.post("/{project_id}/invitations/send", response_model=schemas.SendInvitationsResult)
def send_project_invitations(
    project_id: int,
    payload: schemas.SendInvitationsRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    """Invite every assigned (not yet invited) expert, or only the given assignments"""
    _get_project_or_404(db, project_id)
    assignments = crud.project_expert.get_by_project(db, project_id=project_id)
    if payload.project_expert_ids is not None:
        wanted = set(payload.project_expert_ids)
        assignments = [a for a in assignments if a.id in wanted]

    invited, skipped = [], []
    for assignment in assignments:
        if assignment.status != AssignmentStatus.ASSIGNED.value:
            skipped.append(assignment.id)
            continue
        assignment = pipeline.invite(db, assignment, user_id=current_user.id)
        url = pipeline.invitation_url(assignment.invitation_token)
        background_tasks.add_task(
            email_service.send_expert_invitation_email,
            **links.invitation_email_args(assignment, url),
        )
        invited.append(assignment.id)

    logger.info(f"Sent {len(invited)} invitations for project {project_id}")
    return {"invited": invited, "skipped": skipped}


@router.post("/{project_id}/quick-invite", response_model=schemas.InviteResponse)
def quick_invite_expert(
    project_id: int,
    payload: schemas.QuickInviteRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    """Invite an existing expert with a one-click accept/decline link"""
    _get_project_or_404(db, project_id)
    expert = crud.expert.get(db, id=payload.expert_id)
    if not expert:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expert not found")

    assignment = crud.project_expert.get_by_project_and_expert(db, project_id=project_id, expert_id=expert.id)
    if assignment is None:
        assignment = crud.project_expert.create(db, obj_in={"project_id": project_id, "expert_id": expert.id})
    if assignment.status == AssignmentStatus.ASSIGNED.value:
        assignment = pipeline.invite(db, assignment, user_id=current_user.id)
    elif assignment.status != AssignmentStatus.INVITED.value or assignment.responded_at is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Expert has already responded to this project"
        )

    url = links.quick_invite_url(assignment.invitation_token)
    if payload.send_email:
        background_tasks.add_task(
            email_service.send_expert_invitation_email,
            **links.invitation_email_args(assignment, url),
        )
    return {"assignment": assignment, "invitation_url": url}


@router.post("/{project_id}/ra-invite-link", response_model=schemas.InvitationLinkWithUrl, status_code=status.HTTP_201_CREATED)
def create_ra_invite_link(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    """Registration link that credits new experts to the requesting recruiter"""
    _get_project_or_404(db, project_id)
    link = links.create_link(
        db,
        invite_type=InviteType.RA.value,
        project_id=project_id,
        ra_id=current_user.id,
        recruited_by=current_user.email,
        created_by_id=current_user.id,
    )
    data = schemas.InvitationLink.model_validate(link).model_dump()
    return schemas.InvitationLinkWithUrl(**data, invitation_url=links.build_link_url(link))


@router.get("/{project_id}/client-shortlist", response_model=schemas.ClientShortlist)
def read_client_shortlist(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    project = _get_project_or_404(db, project_id)
    return exports.build_client_shortlist(db, project)


@router.get("/{project_id}/client-shortlist/pdf")
def download_client_shortlist_pdf(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
):
    """Client-facing shortlist as a PDF download"""
    project = _get_project_or_404(db, project_id)
    pdf_bytes = exports.client_shortlist_pdf(exports.build_client_shortlist(db, project))
    return StreamingResponse(
        io.BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="shortlist_project_{project_id}.pdf"'},
    )
