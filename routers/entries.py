from typing import Literal

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from core import errors
from core.database import get_db
from routers.auth import UserSession, get_current_session
from schemas.entry import (
    EnrichedEntryCreateIn,
    EnrichIn,
    EntryCreateIn,
    EntryDetailOut,
    EntryListOut,
    EntryOut,
    EntryUpdateIn,
    RandomSlugOut,
    TagsIn,
)
from repositories.entry_repo import UNSET
from services.enrichment import EnrichmentService, TextGenerator, get_text_generator
from services.entry_services import EntryService
from services.ordering import parse_sort
from services.payload import resolve_payload

router = APIRouter(prefix="/entries", tags=["entries"])

EntryKind = Literal["words", "translations"]


def _detail(svc: EntryService, entry, user_id: int) -> EntryDetailOut:
    out = EntryDetailOut.model_validate(entry, from_attributes=True)
    out.sections = resolve_payload(entry.ai_data)
    out.random_slug = svc.random_slug(
        user_id=user_id,
        current=svc.repo.slug_of(entry),
        language_id=getattr(entry, "language_id", None),
    )
    return out


@router.get("/{kind}", response_model=EntryListOut)
async def list_entries(
    kind: EntryKind,
    language_id: int | None = Query(None),
    sort: str | None = Query(None, description="date_desc, date_asc, alpha_asc or alpha_desc"),
    tag: str | None = Query(None),
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    order = parse_sort(sort, fallback=parse_sort(session.profile.word_sort_preference))
    svc = EntryService(db, kind)
    entries = svc.list(user_id=session.user_id, order=order, language_id=language_id, tag=tag)
    return {
        "sort": order,
        "entries": [EntryOut.model_validate(entry, from_attributes=True) for entry in entries],
    }


@router.post("/{kind}", response_model=EntryOut, status_code=201)
async def add_entry(
    kind: EntryKind,
    data: EntryCreateIn,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    svc = EntryService(db, kind)
    entry = svc.add(user_id=session.user_id, **data.model_dump())
    return EntryOut.model_validate(entry, from_attributes=True)


@router.post("/{kind}/enriched", response_model=EntryDetailOut, status_code=201)
async def add_enriched_entry(
    kind: EntryKind,
    data: EnrichedEntryCreateIn,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    generator: TextGenerator = Depends(get_text_generator),
):
    enrichment = EnrichmentService(db, generator)
    entry = await enrichment.add_enriched_entry(
        user_id=session.user_id,
        kind=kind,
        word=data.word,
        options=data.options,
        native_language=session.native_language,
        language_id=data.language_id,
        language_name=data.language_name,
        translation=data.translation,
        notes=data.notes,
        color=data.color,
        image_url=data.image_url,
        tags=data.tags,
    )
    return _detail(EntryService(db, kind), entry, session.user_id)


@router.get("/{kind}/random", response_model=RandomSlugOut)
async def random_entry(
    kind: EntryKind,
    current: str | None = Query(None),
    language_id: int | None = Query(None),
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    svc = EntryService(db, kind)
    return RandomSlugOut(slug=svc.random_slug(user_id=session.user_id, current=current, language_id=language_id))


@router.get("/words/slug/{slug}", response_model=EntryDetailOut)
async def get_word_by_slug(
    slug: str,
    language_id: int | None = Query(None),
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    svc = EntryService(db, "words")
    entry = svc.repo.get_by_word(user_id=session.user_id, word=slug.strip(), language_id=language_id)
    if entry is None:
        raise errors.NotFoundError("Entry not found")
    return _detail(svc, entry, session.user_id)


@router.get("/{kind}/{entry_id}", response_model=EntryDetailOut)
async def get_entry(
    kind: EntryKind,
    entry_id: int,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    svc = EntryService(db, kind)
    entry = svc.get(user_id=session.user_id, entry_id=entry_id)
    return _detail(svc, entry, session.user_id)


@router.put("/{kind}/{entry_id}", response_model=EntryOut)
async def update_entry(
    kind: EntryKind,
    entry_id: int,
    data: EntryUpdateIn,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    svc = EntryService(db, kind)
    entry = svc.replace(
        user_id=session.user_id,
        entry_id=entry_id,
        word=data.word,
        translation=data.translation,
        notes=data.notes,
        color=data.color,
        image_url=data.image_url,
        tags=UNSET if data.tags is None else data.tags,
    )
    return EntryOut.model_validate(entry, from_attributes=True)


@router.put("/{kind}/{entry_id}/tags", response_model=EntryOut)
async def update_entry_tags(
    kind: EntryKind,
    entry_id: int,
    data: TagsIn,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    svc = EntryService(db, kind)
    entry = svc.set_tags(user_id=session.user_id, entry_id=entry_id, tags=data.tags)
    return EntryOut.model_validate(entry, from_attributes=True)


@router.post("/{kind}/{entry_id}/enrich", response_model=EntryDetailOut)
async def enrich_entry(
    kind: EntryKind,
    entry_id: int,
    data: EnrichIn,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    generator: TextGenerator = Depends(get_text_generator),
):
    enrichment = EnrichmentService(db, generator)
    entry = await enrichment.enrich_existing(
        user_id=session.user_id,
        kind=kind,
        entry_id=entry_id,
        options=data.options,
        native_language=session.native_language,
        language_name=data.language_name,
    )
    return _detail(EntryService(db, kind), entry, session.user_id)


@router.delete("/{kind}/{entry_id}", status_code=204)
async def delete_entry(
    kind: EntryKind,
    entry_id: int,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    svc = EntryService(db, kind)
    svc.delete(user_id=session.user_id, entry_id=entry_id)
    return Response(status_code=204)
