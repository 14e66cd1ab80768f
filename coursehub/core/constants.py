from enum import Enum


class RoleEnum(str, Enum):
    STUDENT = "student"
    ADMIN = "admin"

class CourseStatusEnum(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"

class EnrollmentStatusEnum(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    CANCELLED = "cancelled"

class TaskStatusEnum(str, Enum):
    PENDING = "pending"
    SUBMITTED = "submitted"
    REVIEWED = "reviewed"

class CourseTestStatusEnum(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

class ContentKindEnum(str, Enum):
    """Reorderable collections, each ordered 1..N within its parent."""
    MODULES = "modules"
    LESSONS = "lessons"
    VIDEOS = "videos"
    LIVE_SESSIONS = "live_sessions"
    QUIZZES = "quizzes"
    UPLOADS = "uploads"
    FORUMS = "forums"

# Path segment used by the reorder endpoints -> kind
REORDER_PATH_KINDS = {
    "lessons": ContentKindEnum.LESSONS,
    "videos": ContentKindEnum.VIDEOS,
    "liveSessions": ContentKindEnum.LIVE_SESSIONS,
    "quizzes": ContentKindEnum.QUIZZES,
    "uploads": ContentKindEnum.UPLOADS,
    "foruns": ContentKindEnum.FORUMS,
}

COURSE_DURATION_PATTERN = r"^\d+h$"
