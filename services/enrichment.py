import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Protocol

import httpx
from sqlalchemy.orm import Session

from core import errors
from core.config import settings
from core.text import require_text
from models.entry import ENTRY_MODELS, Word
from repositories.entry_repo import EntryRepository
from repositories.language_repo import LanguageRepository
from schemas.enrichment import EnrichmentOptions

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"^\s*```(?:json)?\s*\n?(.*?)\n?\s*```\s*$", re.DOTALL | re.IGNORECASE)

# key -> description, in the order the model is asked for them
_FIELD_DESCRIPTIONS = {
    "translation": "a string translating the word into {native}",
    "gender": "grammatical gender if the word is a noun (Masculine, Feminine or Neuter), otherwise null",
    "verb_forms": "object with the key verb forms (e.g. Infinitive, Past Participle) as strings, otherwise null",
    "full_conjugation_table": "object keyed by tense (Present, Preterit, Future, Past Perfect) whose values map pronouns to forms, otherwise null",
    "passive_forms": "string describing the passive voice forms, otherwise null",
    "noun_declension_table": "object with Singular and Plural arrays of {{case, form}} ordered Nominative, Accusative, Dative, Genitive, otherwise null",
    "adjective_declension_example": "array of {{case, example}} using a simple common adjective, ordered Nominative, Accusative, Dative, Genitive, Plural, otherwise null",
    "grammar": "a grammar explanation written entirely in {native}",
    "examples": "array of {examples} example sentences formatted as 'Target sentence. (Native translation.)'",
    "difficulty": "the CEFR level (A1 to C2) at which learners usually meet this word",
    "synonyms_antonyms": "object with 'synonyms' and 'antonyms' arrays of words in {language}",
    "mnemonic": "a short memory aid in {native}",
    "phrases": "array of common phrases or idioms formatted as 'Phrase in target - Translation in native'",
    "etymology": "a brief etymology in {native}",
}


def requested_fields(options: EnrichmentOptions) -> list[str]:
    fields = []
    if options.translation:
        fields.append("translation")
    if options.gender_verb_forms:
        fields += ["gender", "verb_forms"]
    if options.detailed_grammar_tables:
        fields += ["full_conjugation_table", "passive_forms", "noun_declension_table", "adjective_declension_example"]
    if options.grammar:
        fields.append("grammar")
    if options.examples > 0:
        fields.append("examples")
    if options.difficulty:
        fields.append("difficulty")
    if options.synonyms:
        fields.append("synonyms_antonyms")
    if options.mnemonic:
        fields.append("mnemonic")
    if options.phrases:
        fields.append("phrases")
    if options.etymology:
        fields.append("etymology")
    return fields


def build_prompt(
    word_text: str,
    language_name: str,
    options: EnrichmentOptions,
    native_language: str = "English",
    *,
    native_phrase: bool = False,
) -> tuple[str, str]:
    """Return (system, user) instructions naming exactly the requested keys."""
    fields = requested_fields(options)
    if not fields:
        raise errors.ValidationError("Select at least one detail to generate.")

    fmt = {"native": native_language, "language": language_name, "examples": options.examples}
    key_lines = [f'- "{key}": {_FIELD_DESCRIPTIONS[key].format(**fmt)}' for key in fields]

    if native_phrase:
        subject = f'For the {native_language} phrase "{word_text}" and its {language_name} translation'
    else:
        subject = f'For the {language_name} word "{word_text}"'

    lines = [
        "You are a language learning assistant.",
        f"{subject}, return a single JSON object with exactly these keys:",
        *key_lines,
        f'If "{word_text}" is not recognizable or appears to be nonsensical, respond ONLY with '
        '{"error": "Word not recognized"}.',
        f"The user's native language is {native_language}. All explanations must be written in {native_language}.",
    ]
    if options.explains():
        lines.append(
            f"Tailor all explanations, examples, mnemonics, phrases and etymology to a {options.level} (CEFR) learner."
        )
    lines += [
        "Provide null for keys that are not applicable (e.g. gender for a verb).",
        "Do not include any text outside the JSON object.",
    ]
    user = f'Generate the word details for "{word_text}" in {language_name}.'
    return "\n".join(lines), user


def strip_code_fence(text: str) -> str:
    match = _FENCE.match(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def parse_generated_json(text: str) -> dict[str, Any]:
    cleaned = strip_code_fence(text or "")
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise errors.GenerationError(
            "AI returned invalid data or failed",
            details=f"Response is not valid JSON: {cleaned[:200]}",
        ) from exc
    if not isinstance(data, dict):
        raise errors.GenerationError("AI returned invalid data or failed", details="Response is not a JSON object")
    return data


class TextGenerator(Protocol):
    async def generate(self, *, system: str, prompt: str) -> str: ...


class GeminiGenerator:
    """Single-attempt client for the hosted generateContent endpoint."""

    def __init__(
        self,
        *,
        api_key: str | None,
        model: str,
        base_url: str,
        temperature: float,
        max_output_tokens: int,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, transport: httpx.AsyncBaseTransport | None = None) -> "GeminiGenerator":
        return cls(
            api_key=settings.GEMINI_API_KEY,
            model=settings.GEMINI_MODEL,
            base_url=settings.GEMINI_BASE_URL,
            temperature=settings.GENERATION_TEMPERATURE,
            max_output_tokens=settings.GENERATION_MAX_OUTPUT_TOKENS,
            timeout=settings.GENERATION_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def generate(self, *, system: str, prompt: str) -> str:
        if not self.api_key:
            raise errors.GenerationUnavailableError("AI generation is not configured")

        body = {
            "systemInstruction": {"parts": [{"text": system}]},
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "maxOutputTokens": self.max_output_tokens,
                "responseMimeType": "application/json",
            },
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                r = await client.post(
                    f"{self.base_url}/models/{self.model}:generateContent",
                    headers={"x-goog-api-key": self.api_key, "Content-Type": "application/json"},
                    json=body,
                )
                r.raise_for_status()
            except httpx.HTTPError as exc:
                logger.error("Generation request to %s failed: %s", self.model, exc)
                raise errors.GenerationError("AI request failed", details=str(exc)) from exc

        try:
            data = r.json()
            parts = data["candidates"][0]["content"]["parts"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise errors.GenerationError("Unexpected AI response", details=r.text[:200]) from exc

        text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
        if not text.strip():
            raise errors.GenerationError("AI returned an empty response")
        return text


def get_text_generator() -> TextGenerator:
    return GeminiGenerator.from_settings()


@dataclass
class EnrichmentResult:
    translation: str | None
    ai_data: dict[str, Any]


class EnrichmentService:
    def __init__(self, db: Session, generator: TextGenerator):
        self.db = db
        self.generator = generator

    async def generate(
        self,
        *,
        word_text: str,
        language_name: str,
        options: EnrichmentOptions,
        native_language: str = "English",
        native_phrase: bool = False,
    ) -> EnrichmentResult:
        word_text = (word_text or "").strip()
        language_name = (language_name or "").strip()
        if not word_text or not language_name:
            raise errors.ValidationError("Missing required parameters")

        system, prompt = build_prompt(
            word_text, language_name, options, native_language, native_phrase=native_phrase
        )
        text = await self.generator.generate(system=system, prompt=prompt)
        ai_data = parse_generated_json(text)

        if ai_data.get("error"):
            logger.warning("AI indicated word %r not recognized in %s", word_text, language_name)
            raise errors.UnrecognizedInputError(
                f'Word "{word_text}" not recognized or processable in {language_name}.'
            )

        translation = ai_data.get("translation")
        if options.translation and not (isinstance(translation, str) and translation.strip()):
            logger.error("AI did not provide a valid translation string for %r", word_text)
            raise errors.GenerationError("AI failed to provide a translation.")
        return EnrichmentResult(
            translation=translation.strip() if isinstance(translation, str) else None,
            ai_data=ai_data,
        )

    def _language_name(self, *, user_id: int, language_id: int | None, fallback: str | None) -> str:
        if language_id is not None:
            language = LanguageRepository(self.db).get_language(language_id, user_id)
            if language is None:
                raise errors.NotFoundError("Language not found")
            return language.language_name
        if not fallback:
            raise errors.ValidationError("Language is required.", details={"field": "language_name"})
        return fallback

    async def add_enriched_entry(
        self,
        *,
        user_id: int,
        kind: str,
        word: str,
        options: EnrichmentOptions,
        native_language: str,
        language_id: int | None = None,
        language_name: str | None = None,
        translation: str | None = None,
        notes: str | None = None,
        color: str | None = None,
        image_url: str | None = None,
        tags=None,
    ):
        """Generate first; the entry is inserted only once generation succeeded."""
        model = ENTRY_MODELS[kind]
        repo = EntryRepository(self.db, model)
        is_word = model is Word
        trimmed = require_text(word, "word")
        if not options.translation:
            translation = require_text(translation, "translation")
        if is_word and language_id is None:
            raise errors.ValidationError("Language is required.", details={"field": "language_id"})
        language_name = self._language_name(
            user_id=user_id,
            language_id=language_id if is_word else None,
            fallback=language_name,
        )

        if repo.get_by_word(user_id=user_id, word=trimmed, language_id=language_id if is_word else None):
            raise errors.ConflictError(repo.conflict_message(trimmed))

        result = await self.generate(
            word_text=word,
            language_name=language_name,
            options=options,
            native_language=native_language,
            native_phrase=not is_word,
        )
        return repo.insert_entry(
            user_id=user_id,
            word=word,
            translation=result.translation or translation,
            language_id=language_id if is_word else None,
            notes=notes,
            color=color,
            image_url=image_url,
            ai_data=result.ai_data,
            tags=tags,
        )

    async def enrich_existing(
        self,
        *,
        user_id: int,
        kind: str,
        entry_id: int,
        options: EnrichmentOptions,
        native_language: str,
        language_name: str | None = None,
    ):
        model = ENTRY_MODELS[kind]
        repo = EntryRepository(self.db, model)
        entry = repo.require_entry(entry_id, user_id)
        is_word = model is Word
        language_name = self._language_name(
            user_id=user_id,
            language_id=entry.language_id if is_word else None,
            fallback=language_name,
        )

        result = await self.generate(
            word_text=entry.word,
            language_name=language_name,
            options=options,
            native_language=native_language,
            native_phrase=not is_word,
        )
        try:
            return repo.set_ai_data(entry_id, user_id=user_id, ai_data=result.ai_data)
        except (errors.StorageError, errors.ConflictError, errors.NotFoundError) as exc:
            logger.error("Entry %s exists but its AI details could not be saved: %s", entry_id, exc)
            raise errors.PersistenceError(
                "Failed to save entry after getting AI data.",
                details=exc.message,
            ) from exc
