from __future__ import annotations

from typing import Any, Callable

import pytest

from models import Author, Journal, Link, Links, Publication


def build_raw_record(
    iuid: str = "vasa-1524-09-01",
    doi: str = "211.18M/vasa-1524-09-01",
    published: str = "1524-09-01",
    labels: dict[str, str] | None = None,
    **overrides: Any,
) -> dict[str, Any]:
    """Return one publication record shaped like the label endpoint returns it."""
    record: dict[str, Any] = {
        "entity": "publication",
        "iuid": iuid,
        "timestamp": "2024-01-01T00:00:00Z",
        "doi": doi,
        "pmid": "12345678",
        "title": "Musings on defeating King Christian II and forming a new dynasty",
        "abstract": "An abstract.",
        "published": published,
        "type": "journal article",
        "authors": [
            {"given": "Gustav", "family": "Vasa", "initials": "GV", "orcid": None},
        ],
        "journal": {"title": "Malmö recess", "volume": "1", "issue": "1", "pages": "1521-23"},
        "labels": labels if labels is not None else {"NGI Stockholm (Genomics Applications)": "Collaborative"},
        "links": {
            "self": {"href": f"https://publications.scilifelab.se/publication/{iuid}.json"},
            "display": {"href": f"https://publications.scilifelab.se/publication/{iuid}"},
        },
        "created": "2024-01-01T00:00:00Z",
        "modified": "2024-01-02T00:00:00Z",
    }
    record.update(overrides)
    return record


def build_envelope(records: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "entity": "label",
        "iuid": "label-iuid",
        "timestamp": "2024-01-01T00:00:00Z",
        "links": {
            "self": {"href": "https://publications.scilifelab.se/label/x.json"},
            "display": {"href": "https://publications.scilifelab.se/label/x"},
        },
        "value": "NGI Stockholm (Genomics Applications)",
        "started": "2012",
        "ended": "",
        "created": "2016-01-01T00:00:00Z",
        "modified": "2024-01-01T00:00:00Z",
        "accounts": [],
        "publications_count": len(records),
        "publications": records,
    }


def build_publication(
    iuid: str = "pub-1",
    doi: str | None = None,
    published: str = "2024-01-01",
    labels: dict[str, str] | None = None,
    is_collab: bool | None = None,
    is_tech_dev: bool | None = None,
    **overrides: Any,
) -> Publication:
    """Return an already-validated Publication."""
    fields: dict[str, Any] = {
        "iuid": iuid,
        "doi": doi if doi is not None else f"10.1000/{iuid}",
        "title": f"Title {iuid}",
        "published": published,
        "authors": (Author(given="Ada", family="Lovelace", initials="A"),),
        "journal": Journal(title="Journal of Tests"),
        "labels": labels or {},
        "links": Links(
            self_link=Link(href=f"https://publications.scilifelab.se/publication/{iuid}.json"),
            display=Link(href=f"https://publications.scilifelab.se/publication/{iuid}"),
        ),
        "created": "2024-01-01",
        "modified": "2024-01-01",
        "is_collab": is_collab,
        "is_tech_dev": is_tech_dev,
    }
    fields.update(overrides)
    return Publication(**fields)


@pytest.fixture
def raw_record() -> Callable[..., dict[str, Any]]:
    return build_raw_record


@pytest.fixture
def envelope() -> Callable[[list[dict[str, Any]]], dict[str, Any]]:
    return build_envelope


@pytest.fixture
def publication() -> Callable[..., Publication]:
    return build_publication
