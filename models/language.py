from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, func

from core.database import Base


class Language(Base):
    __tablename__ = "user_languages"
    __table_args__ = (
        UniqueConstraint("user_id", "iso_code", name="uq_user_languages_user_iso"),
        UniqueConstraint("user_id", "language_name", name="uq_user_languages_user_name"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    language_name = Column(String(50), nullable=False)
    iso_code = Column(String(10), nullable=True, index=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
