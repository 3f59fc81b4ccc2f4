from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from coursedesk.core.database import Base, generate_id
from coursedesk.models.course import _utcnow

class Module(Base):
    __tablename__ = "modules"

    id = Column(String(36), primary_key=True, default=generate_id)
    title = Column(String, nullable=False)
    order = Column(Integer, nullable=False, default=0)
    course_id = Column(String(36), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    course = relationship("Course", back_populates="modules")
    lessons = relationship(
        "Lesson",
        back_populates="module",
        order_by="Lesson.order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
