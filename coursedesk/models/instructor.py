from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from coursedesk.core.database import Base, generate_id
from coursedesk.models.course import _utcnow

class Instructor(Base):
    __tablename__ = "instructors"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    bio = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    # The store's RESTRICT rule decides whether an owning instructor can go
    courses = relationship("Course", back_populates="instructor", passive_deletes="all")

    @property
    def course_count(self):
        return len(self.courses)
