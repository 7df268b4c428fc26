"""
Authentication endpoints.

- POST /auth/token: exchange username/password for a JWT
- POST /auth/register: create a (non-admin) account and receive a JWT
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import create_token
from app.core.validation import validate_payload
from app.crud import user as user_crud
from app.schemas.user import TokenResponse, UserAuth, UserRegister

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(payload: Any = Body(None), db: Session = Depends(get_db)):
    """
    Authenticate a user and return a token.

    Body: { username, password }
    """
    credentials = validate_payload(payload, UserAuth)
    user = user_crud.authenticate(db, credentials.username, credentials.password)
    return TokenResponse(token=create_token(user))


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(payload: Any = Body(None), db: Session = Depends(get_db)):
    """
    Register a new account. New accounts are never admins.

    Body: { username, password, firstName, lastName, email }
    """
    user_data = validate_payload(payload, UserRegister)
    user = user_crud.register(db, user_data)

    logger.info(f"New user registered: {user.username}")
    return TokenResponse(token=create_token(user))
