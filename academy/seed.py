"""Insert the default course catalog when it is empty.

Usage:
    python -m academy.seed
"""
import logging

from sqlalchemy.orm import Session

from academy.database import SessionLocal, init_db
from academy.models.course import Course

logger = logging.getLogger(__name__)

DEFAULT_COURSES = [
    {
        "title": "Java Programming Masterclass",
        "description": "Complete Java programming from scratch. Learn OOP, Collections, and Multithreading.",
        "price": 2999,
        "duration": "40 Hours",
        "instructor": "Dr. Anjali Sharma",
        "syllabus": ["Introduction to Java", "OOPs Concepts", "Exception Handling", "Collections Framework", "Multithreading"],
        "category": "Programming",
    },
    {
        "title": "Python for Data Science",
        "description": "Master Python and libraries like NumPy, Pandas, and Matplotlib.",
        "price": 3499,
        "duration": "35 Hours",
        "instructor": "Rahul Verma",
        "syllabus": ["Python Basics", "Data Structures", "NumPy & Pandas", "Data Visualization", "Mini Project"],
        "category": "Data Science",
    },
    {
        "title": "Web Development Bootcamp",
        "description": "Become a Full Stack Developer with MERN Stack.",
        "price": 4999,
        "duration": "60 Hours",
        "instructor": "Sandeep Singh",
        "syllabus": ["HTML/CSS/JS", "React.js", "Node.js & Express", "MongoDB", "Deployment"],
        "category": "Web Development",
    },
    {
        "title": "Data Structures & Algorithms",
        "description": "Ace your coding interviews with DSA in C++.",
        "price": 3999,
        "duration": "50 Hours",
        "instructor": "Amit Patel",
        "syllabus": ["Arrays & Strings", "Linked Lists", "Trees & Graphs", "Dynamic Programming", "Greedy Algorithms"],
        "category": "Computer Science",
    },
]


def seed_courses(db: Session) -> int:
    """Returns the number of courses inserted (zero if the catalog has any)."""
    if db.query(Course).first() is not None:
        return 0

    logger.info("Seeding courses...")
    db.add_all(Course(**fields) for fields in DEFAULT_COURSES)
    db.commit()
    return len(DEFAULT_COURSES)


def main() -> None:
    init_db()
    db = SessionLocal()
    try:
        inserted = seed_courses(db)
    finally:
        db.close()
    print(f"Inserted {inserted} course(s).")


if __name__ == "__main__":
    main()
