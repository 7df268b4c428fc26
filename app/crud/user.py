"""
CRUD operations for the User model.

Keyed lookups raise NotFoundError when the user does not exist, so callers
never have to check for None.
"""

import logging
from typing import List, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import BadRequestError, NotFoundError, UnauthorizedError
from app.core.security import get_password_hash, verify_password
from app.models.job import Job
from app.models.user import Application, User
from app.schemas.user import UserNew, UserRegister, UserUpdate

logger = logging.getLogger(__name__)


def authenticate(db: Session, username: str, password: str) -> User:
    """
    Check a username/password pair.

    Raises:
        UnauthorizedError: If the user is unknown or the password is wrong
    """
    user = db.get(User, username)
    if user is None or not verify_password(password, user.password):
        raise UnauthorizedError("Invalid username/password")
    return user


def register(db: Session, user_data: Union[UserNew, UserRegister]) -> User:
    """
    Create a new user with a hashed password.

    Args:
        db: Database session
        user_data: Validated registration data

    Returns:
        Created User instance

    Raises:
        BadRequestError: If the username is taken
    """
    if db.get(User, user_data.username) is not None:
        raise BadRequestError(f"Duplicate username: {user_data.username}")

    db_user = User(
        username=user_data.username,
        password=get_password_hash(user_data.password),
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        email=user_data.email,
        is_admin=getattr(user_data, "is_admin", False),
    )

    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        # Username taken by a concurrent registration
        db.rollback()
        raise BadRequestError(f"Duplicate username: {user_data.username}")

    db.refresh(db_user)

    logger.info(f"Registered user {db_user.username} (admin={db_user.is_admin})")
    return db_user


def find_all(db: Session) -> List[User]:
    """Return all users ordered by username."""
    return db.query(User).order_by(User.username).all()


def get(db: Session, username: str) -> User:
    """
    Retrieve a user by username.

    Raises:
        NotFoundError: If no such user
    """
    user = db.get(User, username)
    if user is None:
        raise NotFoundError(f"No user: {username}")
    return user


def update(db: Session, username: str, user_data: UserUpdate) -> User:
    """
    Apply a partial update. Only fields present in the request are changed;
    a new password is hashed before storing.

    Raises:
        NotFoundError: If no such user
    """
    user = get(db, username)

    changes = user_data.model_dump(exclude_unset=True)
    if "password" in changes:
        changes["password"] = get_password_hash(changes["password"])

    for field, value in changes.items():
        setattr(user, field, value)

    db.commit()
    db.refresh(user)

    return user


def remove(db: Session, username: str) -> None:
    """
    Delete a user.

    Raises:
        NotFoundError: If no such user
    """
    user = get(db, username)
    db.delete(user)
    db.commit()


def apply_to_job(db: Session, username: str, job_id: int) -> Application:
    """
    Record that a user applied to a job.

    Raises:
        NotFoundError: If the user or the job does not exist
        BadRequestError: If the user already applied
    """
    get(db, username)
    if db.get(Job, job_id) is None:
        raise NotFoundError(f"No job: {job_id}")

    if db.get(Application, (username, job_id)) is not None:
        raise BadRequestError(f"Already applied to job: {job_id}")

    application = Application(username=username, job_id=job_id)
    db.add(application)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Already applied to job: {job_id}")

    return application
