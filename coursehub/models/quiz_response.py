from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Numeric, func
from coursehub.core.database import Base


class QuizResponse(Base):
    """Append-only; rows are never updated after insert."""
    __tablename__ = "quiz_responses"

    id = Column(Integer, primary_key=True, index=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    answer = Column(String, nullable=False)
    is_correct = Column(Boolean, nullable=False)
    score = Column(Numeric(5, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
