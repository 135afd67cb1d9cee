import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import Field, field_validator
from sqlalchemy.orm import Session

from academy.auth.dependencies import Identity, require_admin
from academy.core.schemas import CamelModel, DatabaseIdPath
from academy.database import get_db
from academy.models.course import Course

router = APIRouter(tags=['courses'])

logger = logging.getLogger(__name__)


class CreateCourseRequest(CamelModel):
    title: str
    description: str
    price: int = Field(ge=0)
    duration: str
    instructor: str
    syllabus: list[str]
    category: str

    @field_validator('title', 'description', 'duration', 'instructor', 'category')
    @classmethod
    def validate_required_text(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Field is required.')
        return normalized

    @field_validator('syllabus')
    @classmethod
    def validate_syllabus(cls, value: list[str]) -> list[str]:
        topics = [topic.strip() for topic in value]
        if any(not topic for topic in topics):
            raise ValueError('Syllabus topics must not be blank.')
        return topics


class CourseResponse(CamelModel):
    id: int
    title: str
    description: str
    price: int
    duration: str
    instructor: str
    syllabus: list[str]
    category: str


def get_course_or_404(course_id: int, db: Session) -> Course:
    course = db.query(Course).filter(Course.id == course_id).first()
    if course is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Course not found',
        )
    return course


@router.get('/courses', response_model=list[CourseResponse])
def list_courses(db: Session = Depends(get_db)):
    return db.query(Course).order_by(Course.id.asc()).all()


@router.get('/courses/{course_id}', response_model=CourseResponse)
def get_course(course_id: DatabaseIdPath, db: Session = Depends(get_db)):
    return get_course_or_404(course_id, db)


@router.post('/courses', response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
def create_course(
    data: CreateCourseRequest,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    course = Course(**data.model_dump())
    db.add(course)
    db.commit()
    db.refresh(course)

    logger.info('Admin %s created course %s', identity.user_id, course.id)
    return course


@router.delete('/courses/{course_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_course(
    course_id: DatabaseIdPath,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    course = get_course_or_404(course_id, db)

    # Enrollments for this course are left in place.
    db.delete(course)
    db.commit()

    logger.info('Admin %s deleted course %s', identity.user_id, course_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
