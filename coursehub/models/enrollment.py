from sqlalchemy import Column, Integer, ForeignKey, DateTime, Enum as SQLEnum, Index, func, text
from sqlalchemy.orm import relationship
from coursehub.core.database import Base, enum_values
from coursehub.core.constants import EnrollmentStatusEnum

class Enrollment(Base):
    __tablename__ = "enrollments"
    __table_args__ = (
        # At most one active enrollment per (user, course)
        Index(
            "uq_enrollments_active_user_course",
            "user_id",
            "course_id",
            unique=True,
            postgresql_where=text("status = 'active'"),
            sqlite_where=text("status = 'active'"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    status = Column(
        SQLEnum(EnrollmentStatusEnum, values_callable=enum_values, name="enrollmentstatusenum"),
        nullable=False,
        default=EnrollmentStatusEnum.ACTIVE,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=True)

    user = relationship("User", back_populates="enrollments")
    course = relationship("Course", back_populates="enrollments")
