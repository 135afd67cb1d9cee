from datetime import datetime

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from academy.auth.dependencies import Identity, get_identity
from academy.core.schemas import CamelModel, DatabaseId
from academy.database import get_db
from academy.routes.course_routes import CourseResponse
from academy.services import enrollment_flow

router = APIRouter(tags=['enrollments'])


class CreateEnrollmentRequest(CamelModel):
    course_id: DatabaseId


class VerifyPaymentRequest(CamelModel):
    enrollment_id: DatabaseId
    razorpay_payment_id: str
    razorpay_order_id: str | None = None
    razorpay_signature: str | None = None


class EnrollmentResponse(CamelModel):
    id: int
    user_id: int
    course_id: int
    payment_id: str | None = None
    status: str
    enrolled_at: datetime | None = None


class EnrollmentWithCourseResponse(CamelModel):
    enrollment: EnrollmentResponse
    course: CourseResponse


class VerifyPaymentResponse(CamelModel):
    success: bool


@router.get('/enrollments', response_model=list[EnrollmentWithCourseResponse])
def list_my_enrollments(
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    return [
        EnrollmentWithCourseResponse(
            enrollment=EnrollmentResponse.model_validate(enrollment),
            course=CourseResponse.model_validate(course),
        )
        for enrollment, course in enrollment_flow.list_enrollments(db, identity)
    ]


@router.post('/enrollments', response_model=EnrollmentResponse, status_code=status.HTTP_201_CREATED)
def create_enrollment(
    data: CreateEnrollmentRequest,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    return enrollment_flow.create_enrollment(db, identity, data.course_id)


@router.post('/enrollments/verify', response_model=VerifyPaymentResponse)
def verify_payment(
    data: VerifyPaymentRequest,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    try:
        enrollment_flow.verify_payment(
            db,
            identity,
            enrollment_id=data.enrollment_id,
            payment_id=data.razorpay_payment_id,
            order_id=data.razorpay_order_id,
            signature=data.razorpay_signature,
        )
    except enrollment_flow.PaymentVerificationError:
        # The enrollment stays pending; the client may retry.
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={'success': False})

    return VerifyPaymentResponse(success=True)
