from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from core.database import get_db
from core.text import normalize_tag
from routers.auth import UserSession, get_current_session
from schemas.entry import EntryOut
from schemas.tag import TagEntriesOut, TagMetadataIn, TagMetadataOut, TagSummaryOut
from services.tag_services import TagService

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=list[TagSummaryOut])
async def list_tags(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return TagService(db).list_tags(session.user_id)


@router.get("/{tag_name}/entries", response_model=TagEntriesOut)
async def list_tag_entries(
    tag_name: str,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    grouped = TagService(db).entries_for_tag(user_id=session.user_id, tag_name=tag_name)
    return TagEntriesOut(
        tag_name=normalize_tag(tag_name),
        words=[EntryOut.model_validate(e, from_attributes=True) for e in grouped["words"]],
        translations=[EntryOut.model_validate(e, from_attributes=True) for e in grouped["translations"]],
    )


@router.put("/{tag_name}/metadata", response_model=TagMetadataOut)
async def save_tag_metadata(
    tag_name: str,
    data: TagMetadataIn,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    meta = TagService(db).save_metadata(
        user_id=session.user_id,
        tag_name=tag_name,
        icon_name=data.icon_name,
        color_class=data.color_class,
    )
    return TagMetadataOut.model_validate(meta, from_attributes=True)


@router.delete("/{tag_name}/metadata", status_code=204)
async def delete_tag_metadata(
    tag_name: str,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    TagService(db).delete_metadata(user_id=session.user_id, tag_name=tag_name)
    return Response(status_code=204)
