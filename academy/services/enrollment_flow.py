"""Enrollment and payment flow.

An enrollment starts ``pending`` and moves to ``paid`` once the client reports
a payment. The payment reference is stored as given: there is no gateway
signature check, so this is a demo trust model only.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from academy.auth.dependencies import Identity
from academy.core import config
from academy.models.course import Course
from academy.models.enrollment import Enrollment, EnrollmentStatus

logger = logging.getLogger(__name__)


class PaymentVerificationError(Exception):
    """Raised when an enrollment could not be marked as paid."""


def create_enrollment(db: Session, identity: Identity, course_id: int) -> Enrollment:
    # Neither the course nor an existing (user, course) enrollment is checked.
    enrollment = Enrollment(
        user_id=identity.user_id,
        course_id=course_id,
        status=EnrollmentStatus.PENDING.value,
    )
    db.add(enrollment)
    db.commit()
    db.refresh(enrollment)

    logger.info('User %s created enrollment %s for course %s', identity.user_id, enrollment.id, course_id)
    return enrollment


def verify_payment(
    db: Session,
    identity: Identity,
    enrollment_id: int,
    payment_id: str,
    order_id: str | None = None,
    signature: str | None = None,
) -> Enrollment:
    try:
        enrollment = db.query(Enrollment).filter(Enrollment.id == enrollment_id).first()
        if enrollment is None:
            raise PaymentVerificationError(f'Enrollment {enrollment_id} not found.')

        if enrollment.user_id != identity.user_id:
            logger.warning(
                'User %s verified payment for enrollment %s owned by user %s',
                identity.user_id,
                enrollment_id,
                enrollment.user_id,
            )
            if config.ENFORCE_ENROLLMENT_OWNERSHIP:
                raise PaymentVerificationError(f'Enrollment {enrollment_id} belongs to another user.')

        logger.debug('Payment order=%s signature_present=%s', order_id, bool(signature))

        enrollment.status = EnrollmentStatus.PAID.value
        enrollment.payment_id = payment_id
        db.commit()
        db.refresh(enrollment)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to record payment for enrollment %s', enrollment_id)
        raise PaymentVerificationError('Payment could not be recorded.') from exc

    logger.info('Enrollment %s marked paid', enrollment_id)
    return enrollment


def list_enrollments(db: Session, identity: Identity) -> list[tuple[Enrollment, Course]]:
    return (
        db.query(Enrollment, Course)
        .join(Course, Enrollment.course_id == Course.id)
        .filter(Enrollment.user_id == identity.user_id)
        .order_by(Enrollment.id.asc())
        .all()
    )
