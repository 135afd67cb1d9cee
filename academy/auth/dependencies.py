from dataclasses import dataclass

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from academy.auth import jwt_handler
from academy.database import get_db
from academy.models.user import ADMIN_ROLE, User

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    """The authenticated caller of a single request."""

    user_id: int
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    @classmethod
    def from_user(cls, user: User) -> "Identity":
        return cls(user_id=user.id, email=user.email, role=user.role)


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=message)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None:
        raise _unauthorized("Unauthorized")

    try:
        payload = jwt_handler.decode_access_token(credentials.credentials)
    except jwt.PyJWTError as exc:
        raise _unauthorized("Invalid token") from exc

    subject = payload.get("sub")
    if not subject or not str(subject).isdigit():
        raise _unauthorized("Invalid token subject")

    user = db.query(User).filter(User.id == int(subject)).first()
    if user is None:
        raise _unauthorized("User not found")
    return user


def get_identity(user: User = Depends(get_current_user)) -> Identity:
    return Identity.from_user(user)


def require_admin(identity: Identity = Depends(get_identity)) -> Identity:
    if not identity.is_admin:
        raise _unauthorized("Admin only")
    return identity
