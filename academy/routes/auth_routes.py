import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import field_validator
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from academy.auth import jwt_handler
from academy.auth.dependencies import get_current_user
from academy.auth.passwords import hash_password, verify_password
from academy.core import config
from academy.core.schemas import CamelModel
from academy.database import get_db
from academy.models.user import ADMIN_ROLE, STUDENT_ROLE, User

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = 'Email already registered'
INVALID_CREDENTIALS_MESSAGE = 'Invalid credentials'


class RegisterRequest(CamelModel):
    email: str
    password: str
    name: str

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        normalized = value.strip().lower()
        if not normalized:
            raise ValueError('Email is required.')
        local_part, _, domain = normalized.partition('@')
        if not local_part or '.' not in domain:
            raise ValueError('Invalid email address.')
        return normalized

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        if not value:
            raise ValueError('Password is required.')
        return value

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Name is required.')
        return normalized


class LoginRequest(CamelModel):
    # The client sends the email as "username".
    username: str
    password: str


class UserResponse(CamelModel):
    id: int
    email: str
    name: str
    role: str
    created_at: datetime | None = None


class AuthResponse(UserResponse):
    access_token: str
    token_type: str = 'bearer'


def role_for_email(email: str) -> str:
    return ADMIN_ROLE if email in config.ADMIN_EMAILS else STUDENT_ROLE


def build_auth_response(user: User) -> AuthResponse:
    token = jwt_handler.create_access_token(subject=str(user.id))
    return AuthResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        created_at=user.created_at,
        access_token=token,
    )


def _duplicate_email_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'message': DUPLICATE_EMAIL_MESSAGE, 'field': 'email'},
    )


@router.post('/auth/register', response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    existing_user = db.query(User).filter(User.email == data.email).first()
    if existing_user:
        return _duplicate_email_response()

    user = User(
        email=data.email,
        hashed_password=hash_password(data.password),
        name=data.name,
        role=role_for_email(data.email),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email.
        db.rollback()
        return _duplicate_email_response()
    db.refresh(user)

    logger.info('Registered user %s with role %s', user.id, user.role)
    return build_auth_response(user)


@router.post('/auth/login', response_model=AuthResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    email = data.username.strip().lower()
    user = db.query(User).filter(User.email == email).first()
    if user is None or not verify_password(data.password, user.hashed_password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS_MESSAGE)

    return build_auth_response(user)


@router.post('/auth/logout')
def logout():
    # Tokens are stateless; the client drops its copy.
    return {'message': 'Logged out successfully'}


@router.get('/user', response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
