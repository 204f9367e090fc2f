"""create users, profiles, languages, entries and tag metadata

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2025-06-02 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _entry_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("word", sa.String(length=255), nullable=False),
        sa.Column("translation", sa.String(length=255), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("color", sa.String(length=255), nullable=True),
        sa.Column("image_url", sa.String(length=1024), nullable=True),
        sa.Column("ai_data", sa.JSON(), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    table_names = inspector.get_table_names()

    if "users" not in table_names:
        op.create_table(
            "users",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("email", sa.String(length=255), nullable=False),
            sa.Column("password_hash", sa.String(length=255), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        )
        op.create_index("ix_users_email", "users", ["email"], unique=True)

    if "profiles" not in table_names:
        op.create_table(
            "profiles",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
            sa.Column("username", sa.String(length=50), nullable=False),
            sa.Column("native_language", sa.String(length=50), nullable=False, server_default="English"),
            sa.Column("theme", sa.String(length=20), nullable=False, server_default="system"),
            sa.Column("word_sort_preference", sa.String(length=20), nullable=False, server_default="date_desc"),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        )
        op.create_index("ix_profiles_user_id", "profiles", ["user_id"], unique=True)
        op.create_index("ix_profiles_username", "profiles", ["username"], unique=True)

    if "user_languages" not in table_names:
        op.create_table(
            "user_languages",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
            sa.Column("language_name", sa.String(length=50), nullable=False),
            sa.Column("iso_code", sa.String(length=10), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
            sa.UniqueConstraint("user_id", "iso_code", name="uq_user_languages_user_iso"),
            sa.UniqueConstraint("user_id", "language_name", name="uq_user_languages_user_name"),
        )
        op.create_index("ix_user_languages_user_id", "user_languages", ["user_id"])
        op.create_index("ix_user_languages_iso_code", "user_languages", ["iso_code"])

    if "user_words" not in table_names:
        op.create_table(
            "user_words",
            *_entry_columns(),
            sa.Column(
                "language_id",
                sa.Integer(),
                sa.ForeignKey("user_languages.id", ondelete="CASCADE"),
                nullable=False,
            ),
            sa.UniqueConstraint("user_id", "language_id", "word", name="uq_user_words_user_language_word"),
        )
        for column in ("user_id", "language_id", "word", "created_at"):
            op.create_index(f"ix_user_words_{column}", "user_words", [column])

    if "user_translations" not in table_names:
        op.create_table(
            "user_translations",
            *_entry_columns(),
            sa.UniqueConstraint("user_id", "word", name="uq_user_translations_user_word"),
        )
        for column in ("user_id", "word", "created_at"):
            op.create_index(f"ix_user_translations_{column}", "user_translations", [column])

    if "tag_metadata" not in table_names:
        op.create_table(
            "tag_metadata",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
            sa.Column("tag_name", sa.String(length=50), nullable=False),
            sa.Column("icon_name", sa.String(length=50), nullable=False, server_default="TagIcon"),
            sa.Column("color_class", sa.String(length=50), nullable=True),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
            sa.UniqueConstraint("user_id", "tag_name", name="uq_tag_metadata_user_tag"),
        )
        op.create_index("ix_tag_metadata_user_id", "tag_metadata", ["user_id"])
        op.create_index("ix_tag_metadata_tag_name", "tag_metadata", ["tag_name"])


def downgrade() -> None:
    op.drop_table("tag_metadata")
    op.drop_table("user_translations")
    op.drop_table("user_words")
    op.drop_table("user_languages")
    op.drop_table("profiles")
    op.drop_table("users")
