from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from coursedesk.core.database import Base, generate_id
from coursedesk.models.course import _utcnow

class Lesson(Base):
    __tablename__ = "lessons"

    id = Column(String(36), primary_key=True, default=generate_id)
    title = Column(String, nullable=False)
    content = Column(String, nullable=True)
    video_url = Column(String, nullable=True)
    order = Column(Integer, nullable=False, default=0)
    module_id = Column(String(36), ForeignKey("modules.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    module = relationship("Module", back_populates="lessons")
