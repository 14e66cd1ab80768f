from sqlalchemy import Column, Integer, String, DateTime, Numeric, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from coursehub.core.database import Base, enum_values
from coursehub.core.constants import CourseStatusEnum

class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, index=True, nullable=False)
    description = Column(String, nullable=True)
    modality = Column(String, nullable=True)
    duration = Column(String, nullable=False)  # e.g. "40h"
    price = Column(Numeric(10, 2), nullable=False)
    status = Column(Enum(CourseStatusEnum, values_callable=enum_values, name="coursestatusenum"), nullable=False, default=CourseStatusEnum.DRAFT)
    image = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    modules = relationship("Module", back_populates="course", order_by="Module.order")
    enrollments = relationship("Enrollment", back_populates="course")
