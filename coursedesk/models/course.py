from datetime import datetime, timezone

from sqlalchemy import Column, String, Float, Integer, DateTime, ForeignKey, Table, CheckConstraint
from sqlalchemy.orm import relationship
from coursedesk.core.database import Base, generate_id


def _utcnow():
    return datetime.now(timezone.utc)


course_tags = Table(
    "course_tags",
    Base.metadata,
    Column("course_id", String(36), ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", String(36), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)

class Course(Base):
    __tablename__ = "courses"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_courses_price_non_negative"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    title = Column(String, index=True, nullable=False)
    description = Column(String, nullable=True)
    price = Column(Float, nullable=False, default=0)
    instructor_id = Column(String(36), ForeignKey("instructors.id", ondelete="RESTRICT"), nullable=False, index=True)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    instructor = relationship("Instructor", back_populates="courses")
    modules = relationship(
        "Module",
        back_populates="course",
        order_by="Module.order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    tags = relationship("Tag", secondary=course_tags, back_populates="courses", order_by="Tag.name", passive_deletes=True)

    __mapper_args__ = {"version_id_col": version}
