"""
User routes.

Admins can create and list users; a user can read, update and delete their
own record (admins can do so for anyone).
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import Principal, ensure_admin, ensure_correct_user_or_admin
from app.core.errors import UnauthorizedError
from app.core.security import create_token
from app.core.validation import validate_payload
from app.crud import user as user_crud
from app.schemas.common import MAX_INT, DeletedResponse
from app.schemas.user import (
    AppliedResponse,
    UserCreatedEnvelope,
    UserDetail,
    UserEnvelope,
    UserListEnvelope,
    UserNew,
    UserResponse,
    UserUpdate,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=UserCreatedEnvelope)
def create_user(
    payload: Any = Body(None),
    admin: Principal = Depends(ensure_admin),
    db: Session = Depends(get_db)
):
    """
    Add a new user. Unlike /auth/register this can create admins.

    Returns the user and a token for them: { user, token }
    """
    user_data = validate_payload(payload, UserNew)
    user = user_crud.register(db, user_data)

    logger.info(f"Admin {admin.username} created user {user.username}")
    return UserCreatedEnvelope(user=UserResponse.model_validate(user), token=create_token(user))


@router.get("", response_model=UserListEnvelope)
def list_users(
    admin: Principal = Depends(ensure_admin),
    db: Session = Depends(get_db)
):
    """List all users."""
    users = user_crud.find_all(db)
    return UserListEnvelope(users=[UserResponse.model_validate(u) for u in users])


@router.get("/{username}", response_model=UserEnvelope)
def get_user(
    username: str,
    principal: Principal = Depends(ensure_correct_user_or_admin),
    db: Session = Depends(get_db)
):
    """
    Get a user's profile, including the ids of jobs they applied to.
    """
    user = user_crud.get(db, username)
    return UserEnvelope(user=UserDetail.model_validate(user))


@router.patch("/{username}", response_model=UserEnvelope)
def update_user(
    username: str,
    payload: Any = Body(None),
    principal: Principal = Depends(ensure_correct_user_or_admin),
    db: Session = Depends(get_db)
):
    """
    Update a user. Data can include { firstName, lastName, password, email, isAdmin };
    only admins may change isAdmin.
    """
    user_data = validate_payload(payload, UserUpdate)
    if "is_admin" in user_data.model_fields_set and not principal.is_admin:
        raise UnauthorizedError("Only admins can change admin status")

    user = user_crud.update(db, username, user_data)

    logger.info(f"{principal.username} updated user {username}")
    return UserEnvelope(user=UserDetail.model_validate(user))


@router.delete("/{username}", response_model=DeletedResponse)
def delete_user(
    username: str,
    principal: Principal = Depends(ensure_correct_user_or_admin),
    db: Session = Depends(get_db)
):
    """Delete a user."""
    user_crud.remove(db, username)

    logger.info(f"{principal.username} deleted user {username}")
    return DeletedResponse(deleted=username)


@router.post("/{username}/jobs/{job_id}", response_model=AppliedResponse)
def apply_to_job(
    username: str,
    job_id: int = Path(..., ge=0, le=MAX_INT),
    principal: Principal = Depends(ensure_correct_user_or_admin),
    db: Session = Depends(get_db)
):
    """Record that the user applied to a job."""
    user_crud.apply_to_job(db, username, job_id)

    logger.info(f"User {username} applied to job {job_id}")
    return AppliedResponse(applied=job_id)
