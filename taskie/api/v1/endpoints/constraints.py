from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from taskie.db.session import get_session
from taskie.repositories import constraints as constraints_repo
from taskie.schemas import ConstraintCollection, ConstraintCreate, ConstraintRead

router = APIRouter()


@router.get("/", response_model=ConstraintCollection)
def list_constraints(session: Session = Depends(get_session)) -> ConstraintCollection:
    items = constraints_repo.list_constraints(session)
    return ConstraintCollection(items=[ConstraintRead.model_validate(item) for item in items])


@router.post("/", response_model=ConstraintRead, status_code=status.HTTP_201_CREATED)
def create_constraint(payload: ConstraintCreate, session: Session = Depends(get_session)) -> ConstraintRead:
    constraint = constraints_repo.create_constraint(
        session,
        title=payload.title,
        start_time=payload.start_time,
        end_time=payload.end_time,
        metadata_payload=payload.metadata_payload,
    )
    session.commit()
    session.refresh(constraint)
    return ConstraintRead.model_validate(constraint)


@router.delete("/{constraint_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_constraint(constraint_id: str, session: Session = Depends(get_session)) -> Response:
    if constraints_repo.get_constraint(session, constraint_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Constraint not found")
    constraints_repo.delete_constraint(session, constraint_id)
    session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
