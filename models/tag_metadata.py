from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint

from core.database import Base


class TagMetadata(Base):
    __tablename__ = "tag_metadata"
    __table_args__ = (
        UniqueConstraint("user_id", "tag_name", name="uq_tag_metadata_user_tag"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    tag_name = Column(String(50), nullable=False, index=True)
    icon_name = Column(String(50), nullable=False, server_default="TagIcon")
    color_class = Column(String(50), nullable=True)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
