from typing import Any, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from connext import crud, schemas
from connext.core import deps
from connext.db.database import get_db
from connext.models.user import User

router = APIRouter()


@router.get("", response_model=List[schemas.VettingQuestion])
def list_vetting_questions(
    project_id: Optional[int] = Query(None, alias="projectId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    if project_id is not None:
        return crud.vetting_question.get_by_project(db, project_id=project_id)
    return crud.vetting_question.get_multi(db)


@router.post("", response_model=schemas.VettingQuestion, status_code=status.HTTP_201_CREATED)
def create_vetting_question(
    question_in: schemas.VettingQuestionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    if not crud.project.get(db, id=question_in.project_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return crud.vetting_question.create(db, obj_in=question_in)


@router.patch("/{question_id}", response_model=schemas.VettingQuestion)
def update_vetting_question(
    question_id: int,
    question_in: schemas.VettingQuestionUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    question = crud.vetting_question.get(db, id=question_id)
    if not question:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Vetting question not found")
    return crud.vetting_question.update(db, db_obj=question, obj_in=question_in)


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_vetting_question(
    question_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> None:
    if not crud.vetting_question.remove(db, id=question_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Vetting question not found")
