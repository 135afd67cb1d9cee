import os

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')
os.environ.setdefault('SEED_COURSES', 'false')

from academy.auth.dependencies import Identity  # noqa: E402
from academy.database import Base  # noqa: E402
from academy.models.course import Course  # noqa: E402
from academy.models.enrollment import Enrollment  # noqa: E402
from academy.models.user import User  # noqa: E402


@pytest.fixture
def session_factory():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine, tables=[User.__table__, Course.__table__, Enrollment.__table__])
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def student(db) -> User:
    user = User(email='student@example.com', hashed_password='x', name='Student', role='student')
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def student_identity(student) -> Identity:
    return Identity.from_user(student)


@pytest.fixture
def course(db) -> Course:
    course = Course(
        title='Python for Data Science',
        description='Master Python and libraries like NumPy, Pandas, and Matplotlib.',
        price=3499,
        duration='35 Hours',
        instructor='Rahul Verma',
        syllabus=['Python Basics', 'NumPy & Pandas'],
        category='Data Science',
    )
    db.add(course)
    db.commit()
    db.refresh(course)
    return course
