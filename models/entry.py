from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint

from core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EntryColumns:
    """Columns shared by words and native-language translations."""

    id = Column(Integer, primary_key=True)
    word = Column(String(255), nullable=False, index=True)
    translation = Column(String(255), nullable=False)
    notes = Column(Text, nullable=True)
    color = Column(String(255), nullable=True)
    image_url = Column(String(1024), nullable=True)
    ai_data = Column(JSON, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)


class Word(EntryColumns, Base):
    __tablename__ = "user_words"
    __table_args__ = (
        UniqueConstraint("user_id", "language_id", "word", name="uq_user_words_user_language_word"),
    )

    kind = "words"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    language_id = Column(Integer, ForeignKey("user_languages.id", ondelete="CASCADE"), nullable=False, index=True)


class Translation(EntryColumns, Base):
    __tablename__ = "user_translations"
    __table_args__ = (
        UniqueConstraint("user_id", "word", name="uq_user_translations_user_word"),
    )

    kind = "translations"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)


ENTRY_MODELS = {
    Word.kind: Word,
    Translation.kind: Translation,
}
