"""Endpoints for follower-side relationship settings."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from chattrix.application.use_cases.relationships import (
    get_relationship,
    list_relationships,
    update_relationship,
)
from chattrix.domain.entities import MuteSettings, User
from chattrix.infrastructure.database import get_db
from chattrix.interfaces.api.dependencies import get_current_active_user
from chattrix.interfaces.api.schemas import RelationshipRead, RelationshipUpdate

router = APIRouter(prefix="/relationships", tags=["relationships"])


@router.get("/", response_model=list[RelationshipRead])
def read_relationships(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[RelationshipRead]:
    """Return the settings kept for every account the caller follows."""

    return [
        RelationshipRead.model_validate(relationship)
        for relationship in list_relationships(db, follower_id=current_user.id)
    ]


@router.get("/{following_id}", response_model=RelationshipRead)
def read_relationship(
    following_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> RelationshipRead:
    relationship = get_relationship(
        db, follower_id=current_user.id, following_id=following_id
    )
    return RelationshipRead.model_validate(relationship)


@router.patch("/{following_id}", response_model=RelationshipRead)
def patch_relationship(
    following_id: int,
    payload: RelationshipUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> RelationshipRead:
    mute_settings = None
    if payload.mute_settings is not None:
        mute_settings = MuteSettings(**payload.mute_settings.model_dump())
    try:
        relationship = update_relationship(
            db,
            follower_id=current_user.id,
            following_id=following_id,
            is_close_friend=payload.is_close_friend,
            is_favorite=payload.is_favorite,
            mute_settings=mute_settings,
            is_restricted=payload.is_restricted,
        )
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return RelationshipRead.model_validate(relationship)
