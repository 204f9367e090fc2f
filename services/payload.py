"""Resolve free-form AI payloads into a fixed set of section shapes.

The hosted model returns arbitrary nested JSON. Each top-level value is
classified once, when an entry is read, into one of the section models below
so clients never have to inspect object keys themselves.
"""
import re
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

CASE_ORDER = ["Nominative", "Accusative", "Dative", "Genitive", "Plural"]
TENSE_ORDER = ["Present", "Preterit", "Future", "Past Perfect"]
PRONOUN_ORDER = ["ich", "du", "er/sie/es", "wir", "ihr", "sie"]
SKIPPED_KEYS = {"error"}


class TableRow(BaseModel):
    label: str
    cells: list[str]


class _Section(BaseModel):
    key: str
    title: str


class TextSection(_Section):
    kind: Literal["text"] = "text"
    text: str


class ListSection(_Section):
    kind: Literal["list"] = "list"
    items: list[str]


class SynonymsSection(_Section):
    kind: Literal["synonyms_antonyms"] = "synonyms_antonyms"
    synonyms: list[str] = []
    antonyms: list[str] = []


class VerbTableSection(_Section):
    kind: Literal["verb_table"] = "verb_table"
    columns: list[str]
    rows: list[TableRow]


class NounDeclensionSection(_Section):
    kind: Literal["noun_declension"] = "noun_declension"
    columns: list[str]
    rows: list[TableRow]


class AdjectiveDeclensionSection(_Section):
    kind: Literal["adjective_declension"] = "adjective_declension"
    rows: list[TableRow]


class KeyValueSection(_Section):
    kind: Literal["key_value"] = "key_value"
    rows: list[TableRow]


class RawSection(_Section):
    kind: Literal["raw"] = "raw"
    value: Any


Section = Annotated[
    Union[
        TextSection,
        ListSection,
        SynonymsSection,
        VerbTableSection,
        NounDeclensionSection,
        AdjectiveDeclensionSection,
        KeyValueSection,
        RawSection,
    ],
    Field(discriminator="kind"),
]


def format_key(key: str) -> str:
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), key.replace("_", " "))


def _squash(value: str) -> str:
    return re.sub(r"\s", "", value).lower()


def render_cell(cell: Any) -> str:
    if cell is None:
        return ""
    if isinstance(cell, str):
        return cell
    if isinstance(cell, dict):
        if cell.get("form"):
            return str(cell["form"])
        if cell.get("example"):
            return str(cell["example"])
        article = str(cell.get("article") or "")
        return article
    return str(cell)


def _ordered(keys: list[str], preferred: list[str]) -> list[str]:
    rank = {_squash(name): i for i, name in enumerate(preferred)}
    return sorted(keys, key=lambda k: (rank.get(_squash(k), len(preferred)), keys.index(k)))


def _case_map(value: Any) -> dict[str, str]:
    """Singular/Plural columns arrive either as {case, form} lists or case maps."""
    if isinstance(value, list):
        return {
            str(item.get("case")): render_cell(item)
            for item in value
            if isinstance(item, dict) and item.get("case")
        }
    if isinstance(value, dict):
        return {str(case): render_cell(cell) for case, cell in value.items()}
    return {}


def _is_noun_declension(value: Any) -> bool:
    return (
        isinstance(value, dict)
        and bool(value.get("Singular"))
        and bool(value.get("Plural"))
        and isinstance(value["Singular"], (dict, list))
    )


def _is_case_list(value: Any) -> bool:
    return (
        isinstance(value, list)
        and bool(value)
        and all(isinstance(item, dict) and "case" in item for item in value)
    )


def _is_case_map(value: Any) -> bool:
    if not isinstance(value, dict):
        return False
    cases = {_squash(c) for c in CASE_ORDER}
    return len([k for k in value if _squash(k) in cases]) > 2


def _is_conjugation_table(value: Any) -> bool:
    return (
        isinstance(value, dict)
        and bool(value)
        and all(isinstance(col, dict) and col for col in value.values())
    )


def _is_flat_map(value: Any) -> bool:
    return isinstance(value, dict) and all(
        v is None or isinstance(v, (str, int, float, bool)) for v in value.values()
    )


def resolve_section(key: str, value: Any) -> Section | None:
    title = format_key(key)
    if value is None:
        return None
    if isinstance(value, (str, int, float, bool)):
        return TextSection(key=key, title=title, text=str(value))
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return ListSection(key=key, title=title, items=value)
    if isinstance(value, dict) and ("synonyms" in value or "antonyms" in value) and _is_flat_lists(value):
        return SynonymsSection(
            key=key,
            title=title,
            synonyms=list(value.get("synonyms") or []),
            antonyms=list(value.get("antonyms") or []),
        )
    if _is_noun_declension(value):
        columns = [c for c in ("Singular", "Plural") if value.get(c)]
        maps = {c: _case_map(value[c]) for c in columns}
        cases: list[str] = []
        for mapping in maps.values():
            cases += [case for case in mapping if case not in cases]
        rows = [
            TableRow(label=case, cells=[maps[c].get(case, "") for c in columns])
            for case in _ordered(cases, CASE_ORDER)
        ]
        return NounDeclensionSection(key=key, title=title, columns=columns, rows=rows)
    if _is_case_list(value) or _is_case_map(value):
        mapping = _case_map(value)
        rows = [TableRow(label=case, cells=[mapping[case]]) for case in _ordered(list(mapping), CASE_ORDER)]
        return AdjectiveDeclensionSection(key=key, title=title, rows=rows)
    if _is_conjugation_table(value):
        columns = _ordered(list(value), TENSE_ORDER)
        pronouns: list[str] = []
        for col in columns:
            pronouns += [p for p in value[col] if p not in pronouns]
        rows = [
            TableRow(label=p, cells=[render_cell(value[col].get(p)) for col in columns])
            for p in _ordered(pronouns, PRONOUN_ORDER)
        ]
        return VerbTableSection(key=key, title=title, columns=columns, rows=rows)
    if _is_flat_map(value):
        rows = [
            TableRow(label=format_key(k), cells=[render_cell(v)])
            for k, v in value.items()
            if v is not None
        ]
        return KeyValueSection(key=key, title=title, rows=rows)
    return RawSection(key=key, title=title, value=value)


def _is_flat_lists(value: dict) -> bool:
    return all(v is None or (isinstance(v, list) and all(isinstance(i, str) for i in v)) for v in value.values())


def resolve_payload(ai_data: Any) -> list[Section]:
    if not isinstance(ai_data, dict):
        return []
    sections = []
    for key, value in ai_data.items():
        if key in SKIPPED_KEYS:
            continue
        section = resolve_section(key, value)
        if section is not None:
            sections.append(section)
    return sections


def entry_gender(ai_data: Any) -> str | None:
    """Masculine/Feminine/Neuter from an entry's payload, accepting articles."""
    if not isinstance(ai_data, dict) or not isinstance(ai_data.get("gender"), str):
        return None
    normalized = _squash(ai_data["gender"])
    if normalized in ("masculine", "der"):
        return "Masculine"
    if normalized in ("feminine", "die"):
        return "Feminine"
    if normalized in ("neuter", "das"):
        return "Neuter"
    return None
