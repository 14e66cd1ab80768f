from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum, Numeric, func
from coursehub.core.database import Base, enum_values
from coursehub.core.constants import CourseTestStatusEnum


class CourseTest(Base):
    __tablename__ = "course_tests"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    status = Column(
        Enum(CourseTestStatusEnum, values_callable=enum_values, name="courseteststatusenum"),
        nullable=False,
        default=CourseTestStatusEnum.PENDING,
    )
    score = Column(Numeric(5, 2), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
