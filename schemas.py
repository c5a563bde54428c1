"""Validation and normalization of publications API payloads."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any
from urllib.parse import urlparse

from models import (
    LABEL_COLLABORATIVE,
    LABEL_SERVICE,
    LABEL_TECH_DEV,
    Author,
    Journal,
    Link,
    Links,
    Publication,
    Xref,
)

LOGGER = logging.getLogger(__name__)

_YEAR_RE = re.compile(r"^\d{4}$")
_YEAR_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_ENVELOPE_STRING_FIELDS = ("entity", "iuid", "timestamp", "value", "started", "ended", "created", "modified")


class SchemaValidationError(ValueError):
    """Raised when a payload does not match the expected API shape."""


def normalize_label(value: str) -> str:
    """Map a free-text label value onto the closed category set.

    Unrecognized values are returned unchanged.
    """
    normalized = value.lower().strip()
    if "service" in normalized:
        return LABEL_SERVICE
    if "collab" in normalized:
        return LABEL_COLLABORATIVE
    if "tech" in normalized:
        return LABEL_TECH_DEV
    return value


def normalize_published(value: str) -> str:
    """Return ``value`` as an ISO calendar date string.

    Year-only and year-month values are expanded to the first day; full
    timestamps are reduced to their date part.
    """
    raw = value.strip()
    if _YEAR_RE.match(raw):
        candidate = f"{raw}-01-01"
    elif _YEAR_MONTH_RE.match(raw):
        candidate = f"{raw}-01"
    elif _DATE_RE.match(raw):
        candidate = raw
    else:
        try:
            return datetime.fromisoformat(raw.replace("Z", "+00:00")).date().isoformat()
        except ValueError as exc:
            raise SchemaValidationError(f"published is not a date: {value!r}") from exc

    try:
        return datetime.strptime(candidate, "%Y-%m-%d").date().isoformat()
    except ValueError as exc:
        raise SchemaValidationError(f"published is not a date: {value!r}") from exc


def parse_api_payload(payload: Any, source: str = "payload") -> list[Publication]:
    """Validate an API envelope and return its publications.

    Never raises: a malformed envelope is logged and yields no records.
    """
    try:
        return validate_api_payload(payload)
    except SchemaValidationError as exc:
        LOGGER.warning("Validation error for %s: %s", source, exc)
        return []


def validate_api_payload(payload: Any) -> list[Publication]:
    """Strict variant of :func:`parse_api_payload` that raises on bad input."""
    if not isinstance(payload, dict):
        raise SchemaValidationError("expected a JSON object envelope")

    for name in _ENVELOPE_STRING_FIELDS:
        if payload.get(name) is not None:
            _require_str(payload, name, "envelope")
    if "publications_count" in payload:
        count = payload["publications_count"]
        if isinstance(count, bool) or not isinstance(count, (int, float)):
            raise SchemaValidationError("envelope.publications_count must be a number")
    if "accounts" in payload and not isinstance(payload["accounts"], list):
        raise SchemaValidationError("envelope.accounts must be a list")

    records = payload.get("publications")
    if not isinstance(records, list):
        raise SchemaValidationError("envelope.publications must be a list")

    return [parse_publication(record, index) for index, record in enumerate(records)]


def parse_publication(record: Any, index: int = 0) -> Publication:
    """Build a :class:`Publication` from one raw API record."""
    where = f"publications[{index}]"
    if not isinstance(record, dict):
        raise SchemaValidationError(f"{where} must be an object")

    authors_raw = record.get("authors")
    if not isinstance(authors_raw, list):
        raise SchemaValidationError(f"{where}.authors must be a list")

    labels_raw = record.get("labels")
    if not isinstance(labels_raw, dict):
        raise SchemaValidationError(f"{where}.labels must be an object")
    labels: dict[str, str] = {}
    for name, value in labels_raw.items():
        if not isinstance(value, str):
            raise SchemaValidationError(f"{where}.labels[{name!r}] must be a string")
        labels[name] = normalize_label(value)

    xrefs_raw = record.get("xrefs") or []
    notes_raw = record.get("notes") or []
    if not isinstance(xrefs_raw, list):
        raise SchemaValidationError(f"{where}.xrefs must be a list")
    if not isinstance(notes_raw, list) or not all(isinstance(note, str) for note in notes_raw):
        raise SchemaValidationError(f"{where}.notes must be a list of strings")

    for flag in ("is_collab", "is_tech_dev"):
        if record.get(flag) is not None and not isinstance(record[flag], bool):
            raise SchemaValidationError(f"{where}.{flag} must be a boolean")

    return Publication(
        iuid=_require_str(record, "iuid", where),
        doi=_require_str(record, "doi", where),
        title=_require_str(record, "title", where),
        published=normalize_published(_require_str(record, "published", where)),
        authors=tuple(
            _parse_author(item, f"{where}.authors[{i}]") for i, item in enumerate(authors_raw)
        ),
        journal=_parse_journal(record.get("journal"), f"{where}.journal"),
        labels=labels,
        links=_parse_links(record.get("links"), f"{where}.links"),
        created=_require_str(record, "created", where),
        modified=_require_str(record, "modified", where),
        pmid=_optional_str(record, "pmid", where),
        abstract=_optional_str(record, "abstract", where),
        entity=_optional_str(record, "entity", where),
        timestamp=_optional_str(record, "timestamp", where),
        type=_optional_str(record, "type", where),
        xrefs=tuple(_parse_xref(item, f"{where}.xrefs[{i}]") for i, item in enumerate(xrefs_raw)),
        notes=tuple(notes_raw),
    )


def _parse_author(item: Any, where: str) -> Author:
    if not isinstance(item, dict):
        raise SchemaValidationError(f"{where} must be an object")
    researcher = item.get("researcher")
    return Author(
        given=_require_str(item, "given", where),
        family=_require_str(item, "family", where),
        initials=_require_str(item, "initials", where),
        orcid=_optional_str(item, "orcid", where),
        researcher=_parse_link(researcher, f"{where}.researcher") if researcher is not None else None,
    )


def _parse_journal(item: Any, where: str) -> Journal:
    if not isinstance(item, dict):
        raise SchemaValidationError(f"{where} must be an object")
    return Journal(
        title=_require_str(item, "title", where),
        volume=_optional_str(item, "volume", where),
        issue=_optional_str(item, "issue", where),
        issn=_optional_str(item, "issn", where),
        issn_l=_optional_str(item, "issn-l", where),
        pages=_optional_str(item, "pages", where),
    )


def _parse_links(item: Any, where: str) -> Links:
    if not isinstance(item, dict):
        raise SchemaValidationError(f"{where} must be an object")
    return Links(
        self_link=_parse_link(item.get("self"), f"{where}.self"),
        display=_parse_link(item.get("display"), f"{where}.display"),
    )


def _parse_link(item: Any, where: str) -> Link:
    if not isinstance(item, dict):
        raise SchemaValidationError(f"{where} must be an object")
    href = _require_str(item, "href", where)
    if not _is_url(href):
        raise SchemaValidationError(f"{where}.href is not a URL: {href!r}")
    return Link(href=href)


def _parse_xref(item: Any, where: str) -> Xref:
    if not isinstance(item, dict):
        raise SchemaValidationError(f"{where} must be an object")
    return Xref(db=_require_str(item, "db", where), key=_require_str(item, "key", where))


def _is_url(value: str) -> bool:
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _require_str(data: dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise SchemaValidationError(f"{where}.{key} must be a string")
    return value


def _optional_str(data: dict[str, Any], key: str, where: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise SchemaValidationError(f"{where}.{key} must be a string or null")
    return value
