"""Enrollment model definitions."""

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Column, DateTime, Integer, String
from academy.database import Base


class EnrollmentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    # Valid stored value; nothing in the payment flow sets it yet.
    FAILED = "failed"


class Enrollment(Base):
    """Links a user to a course with a payment status.

    user_id and course_id carry no foreign keys: deleting a course leaves
    its enrollments behind.
    """
    __tablename__ = "enrollments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    course_id = Column(Integer, nullable=False)
    payment_id = Column(String, nullable=True)
    status = Column(String, nullable=False, default=EnrollmentStatus.PENDING.value)
    enrolled_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
