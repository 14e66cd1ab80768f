from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from coursehub.core.database import Base

class Module(Base):
    __tablename__ = "modules"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    order = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    course = relationship("Course", back_populates="modules")
    lessons = relationship("Lesson", back_populates="module", order_by="Lesson.order")
    videos = relationship("Video", back_populates="module", order_by="Video.order")
    live_sessions = relationship("LiveSession", back_populates="module", order_by="LiveSession.order")
    quizzes = relationship("Quiz", back_populates="module", order_by="Quiz.order")
    uploads = relationship("Upload", back_populates="module", order_by="Upload.order")
    forums = relationship("Forum", back_populates="module", order_by="Forum.order")
