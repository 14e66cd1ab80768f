import logging
from sqlalchemy.orm import Session

from coursehub.core.exceptions import CertificateNotEligibleError, NotFoundError
from coursehub.crud.course import course as crud_course
from coursehub.crud.user import user as crud_user
from coursehub.schemas.progress import Certificate
from coursehub.services.progress import progress_service

logger = logging.getLogger(__name__)


class CertificateService:
    """Read-only: eligibility is recomputed from current progress on every call."""

    def is_eligible(self, db: Session, user_id: int, course_id: int) -> bool:
        return progress_service.course_completion(db, user_id, course_id).eligible

    def certificate_text(self, db: Session, user_id: int, course_id: int) -> str:
        course = crud_course.get(db, id=course_id)
        if not course:
            raise NotFoundError("Course not found.")
        if not self.is_eligible(db, user_id, course_id):
            raise CertificateNotEligibleError()

        user = crud_user.get(db, id=user_id)
        if not user:
            raise NotFoundError("User not found.")

        logger.info(f"Certificate issued to user {user_id} for course {course_id}")
        return f"Certificate of completion: {course.title} - Student: {user.full_name}"

    def get_certificate(self, db: Session, user_id: int, course_id: int) -> Certificate:
        return Certificate(
            course_id=course_id,
            user_id=user_id,
            certificate=self.certificate_text(db, user_id, course_id),
        )


certificate_service = CertificateService()
