from sqlalchemy import delete, select

from core import errors
from models.tag_metadata import TagMetadata
from repositories.base import Repository


class TagMetadataRepository(Repository):
    def save_metadata(self, *, user_id: int, tag_name: str, icon_name: str, color_class: str | None) -> TagMetadata:
        entity = self.get_metadata(user_id=user_id, tag_name=tag_name)

        if entity:
            entity.icon_name = icon_name
            entity.color_class = color_class
        else:
            entity = TagMetadata(
                user_id=user_id,
                tag_name=tag_name,
                icon_name=icon_name,
                color_class=color_class,
            )
            self.db.add(entity)

        self._commit(conflict_message="Metadata for this tag already exists.")
        self.db.refresh(entity)
        return entity

    def get_metadata(self, *, user_id: int, tag_name: str) -> TagMetadata | None:
        stmt = select(TagMetadata).where(
            TagMetadata.user_id == user_id,
            TagMetadata.tag_name == tag_name,
        )
        return self._execute(stmt).scalar_one_or_none()

    def list_metadata(self, user_id: int) -> list[TagMetadata]:
        stmt = select(TagMetadata).where(TagMetadata.user_id == user_id).order_by(TagMetadata.tag_name)
        return list(self._execute(stmt).scalars())

    def delete_metadata(self, *, user_id: int, tag_name: str) -> None:
        stmt = delete(TagMetadata).where(
            TagMetadata.user_id == user_id,
            TagMetadata.tag_name == tag_name,
        )
        result = self._execute(stmt)
        self._commit()
        if result.rowcount == 0:
            raise errors.StorageError(f'No custom metadata exists for tag "{tag_name}".', status_code=404)
