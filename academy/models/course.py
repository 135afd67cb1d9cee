"""Course model definitions."""

from sqlalchemy import JSON, Column, Integer, String, Text
from academy.database import Base


class Course(Base):
    """Represents a catalog entry."""
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Integer, nullable=False)
    duration = Column(String, nullable=False)
    instructor = Column(String, nullable=False)
    syllabus = Column(JSON, nullable=False, default=list)
    category = Column(String, nullable=False)
