from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from coursedesk.core.database import Base, generate_id
from coursedesk.models.course import _utcnow, course_tags

class Tag(Base):
    __tablename__ = "tags"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String, unique=True, index=True, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    courses = relationship("Course", secondary=course_tags, back_populates="tags", passive_deletes=True)

    @property
    def usage_count(self):
        return len(self.courses)
