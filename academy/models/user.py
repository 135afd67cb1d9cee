"""User model definitions."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String
from academy.database import Base

STUDENT_ROLE = "student"
ADMIN_ROLE = "admin"


class User(Base):
    """Represents a registered account."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    name = Column(String, nullable=False)
    role = Column(String, nullable=False, default=STUDENT_ROLE)  # student/admin
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
