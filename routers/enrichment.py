from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core import errors
from core.database import get_db
from routers.auth import UserSession, get_current_session
from schemas.enrichment import GenerateWordDetailsIn, GenerateWordDetailsOut
from services.enrichment import EnrichmentService, TextGenerator, get_text_generator

router = APIRouter(prefix="/api", tags=["enrichment"])


@router.get("/generate-word-details")
async def generate_word_details_status():
    return {"ok": True, "route": "generate-word-details"}


@router.post("/generate-word-details", response_model=GenerateWordDetailsOut)
async def generate_word_details(
    data: GenerateWordDetailsIn,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    generator: TextGenerator = Depends(get_text_generator),
):
    if not data.word_text.strip() or not data.language_name.strip() or data.options is None:
        raise errors.ValidationError("Missing required parameters", status_code=400)

    svc = EnrichmentService(db, generator)
    result = await svc.generate(
        word_text=data.word_text,
        language_name=data.language_name,
        options=data.options,
        native_language=data.native_language or session.native_language,
        native_phrase=data.is_native_phrase,
    )
    return GenerateWordDetailsOut(success=True, translation=result.translation, aiData=result.ai_data)
