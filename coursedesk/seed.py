"""Load sample instructors, tags and courses. Run with ``python -m coursedesk.seed``."""
import logging

from sqlalchemy.orm import Session

from coursedesk.core.database import Base, SessionLocal, engine
from coursedesk.core.logging import configure_logging
from coursedesk.crud.instructor import instructor as crud_instructor
from coursedesk.crud.tag import tag as crud_tag
from coursedesk.schemas.course import CourseFormData
from coursedesk.services.course_writer import course_writer
import coursedesk.models  # noqa: F401

logger = logging.getLogger("coursedesk.seed")

INSTRUCTORS = [
    {
        "name": "John Doe",
        "email": "john.doe@example.com",
        "bio": "Experienced web developer with 10+ years in the industry.",
    },
    {
        "name": "Jane Smith",
        "email": "jane.smith@example.com",
        "bio": "Full-stack developer and UI/UX designer.",
    },
]

TAGS = [
    {"name": "JavaScript", "description": "Modern JavaScript programming"},
    {"name": "React", "description": "React.js framework"},
    {"name": "TypeScript", "description": "TypeScript programming language"},
]

COURSES = [
    {
        "title": "Complete React Development Course",
        "description": "Learn React from basics to advanced concepts",
        "price": 99.99,
        "instructor": "john.doe@example.com",
        "tags": ["JavaScript", "React"],
        "modules": [
            {
                "title": "Introduction to React",
                "order": 0,
                "lessons": [
                    {
                        "title": "What is React?",
                        "content": "Introduction to React library",
                        "videoUrl": "https://example.com/video1",
                        "order": 0,
                    },
                    {
                        "title": "Setting up React",
                        "content": "How to set up a React development environment",
                        "videoUrl": "https://example.com/video2",
                        "order": 1,
                    },
                ],
            },
            {
                "title": "React Components",
                "order": 1,
                "lessons": [
                    {
                        "title": "Functional Components",
                        "content": "Creating functional components in React",
                        "videoUrl": "https://example.com/video3",
                        "order": 0,
                    },
                ],
            },
        ],
    },
    {
        "title": "TypeScript Fundamentals",
        "description": "Master TypeScript for better JavaScript development",
        "price": 79.99,
        "instructor": "jane.smith@example.com",
        "tags": ["JavaScript", "TypeScript"],
        "modules": [
            {
                "title": "TypeScript Basics",
                "order": 0,
                "lessons": [
                    {
                        "title": "Introduction to TypeScript",
                        "content": "What is TypeScript and why use it?",
                        "videoUrl": "https://example.com/video4",
                        "order": 0,
                    },
                ],
            },
        ],
    },
]


def seed(db: Session) -> None:
    instructors = {}
    for data in INSTRUCTORS:
        existing = crud_instructor.get_by_email(db, email=data["email"])
        instructors[data["email"]] = existing or crud_instructor.create(db, obj_in=data)

    tags = {}
    for data in TAGS:
        existing = crud_tag.get_by_name(db, name=data["name"])
        tags[data["name"]] = existing or crud_tag.create(db, obj_in=data)

    for data in COURSES:
        instructor = instructors[data["instructor"]]
        if any(c.title == data["title"] for c in instructor.courses):
            logger.info(f"Course already present, skipping: {data['title']}")
            continue
        form = CourseFormData(
            title=data["title"],
            description=data["description"],
            price=data["price"],
            instructor_id=instructor.id,
            tag_ids=[tags[name].id for name in data["tags"]],
            modules=data["modules"],
        )
        course_writer.create(db, form)
        db.refresh(instructor)

    logger.info("Database seeded successfully!")


def main() -> None:
    configure_logging()
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
