"""Shared typed models for the publications pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

LABEL_SERVICE = "Service"
LABEL_COLLABORATIVE = "Collaborative"
LABEL_TECH_DEV = "Technology development"

# Facility labels queried upstream and scanned by the classifier, in fetch order.
FACILITY_LABELS: tuple[str, ...] = (
    "NGI Stockholm (Genomics Applications)",
    "NGI Stockholm (Genomics Production)",
    "NGI Uppsala (SNP&SEQ Technology Platform)",
    "NGI Uppsala (Uppsala Genome Center)",
    "National Genomics Infrastructure",
    "NGI Short read",
    "NGI Long read",
    "NGI Other",
    "NGI Proteomics",
    "NGI Single cell",
    "NGI SNP genotyping",
    "NGI Spatial omics",
)


@dataclass(frozen=True, slots=True)
class Link:
    href: str

    def to_dict(self) -> dict[str, Any]:
        return {"href": self.href}


@dataclass(frozen=True, slots=True)
class Links:
    """Self (API) and display (web page) links of a record."""

    self_link: Link
    display: Link

    def to_dict(self) -> dict[str, Any]:
        return {"self": self.self_link.to_dict(), "display": self.display.to_dict()}


@dataclass(frozen=True, slots=True)
class Author:
    given: str
    family: str
    initials: str
    orcid: str | None = None
    researcher: Link | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "given": self.given,
            "family": self.family,
            "initials": self.initials,
            "orcid": self.orcid,
        }
        if self.researcher is not None:
            data["researcher"] = self.researcher.to_dict()
        return data


@dataclass(frozen=True, slots=True)
class Journal:
    title: str
    volume: str | None = None
    issue: str | None = None
    issn: str | None = None
    issn_l: str | None = None
    pages: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "volume": self.volume,
            "issue": self.issue,
            "issn": self.issn,
            "issn-l": self.issn_l,
            "pages": self.pages,
        }


@dataclass(frozen=True, slots=True)
class Xref:
    db: str
    key: str

    def to_dict(self) -> dict[str, Any]:
        return {"db": self.db, "key": self.key}


@dataclass(frozen=True, slots=True)
class Publication:
    """Normalized publication record as returned by the publications API.

    ``published`` is always an ISO calendar date (``YYYY-MM-DD``) once the
    record has been through the schema validator. ``is_collab`` and
    ``is_tech_dev`` stay ``None`` until the classifier has run.
    """

    iuid: str
    doi: str
    title: str
    published: str
    authors: tuple[Author, ...]
    journal: Journal
    labels: dict[str, str]
    links: Links
    created: str
    modified: str
    pmid: str | None = None
    abstract: str | None = None
    entity: str | None = None
    timestamp: str | None = None
    type: str | None = None
    xrefs: tuple[Xref, ...] = ()
    notes: tuple[str, ...] = ()
    is_collab: bool | None = None
    is_tech_dev: bool | None = None

    @property
    def year(self) -> str:
        return self.published.split("-")[0]

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dict with a stable key order."""
        data: dict[str, Any] = {
            "entity": self.entity,
            "iuid": self.iuid,
            "timestamp": self.timestamp,
            "doi": self.doi,
            "pmid": self.pmid,
            "title": self.title,
            "abstract": self.abstract,
            "published": self.published,
            "type": self.type,
            "authors": [author.to_dict() for author in self.authors],
            "journal": self.journal.to_dict(),
            "labels": dict(self.labels),
            "links": self.links.to_dict(),
            "xrefs": [xref.to_dict() for xref in self.xrefs],
            "notes": list(self.notes),
            "created": self.created,
            "modified": self.modified,
        }
        if self.is_collab is not None:
            data["is_collab"] = self.is_collab
        if self.is_tech_dev is not None:
            data["is_tech_dev"] = self.is_tech_dev
        return data


@dataclass(frozen=True, slots=True)
class PipelineOptions:
    """Configuration surface for one pipeline run."""

    download_limit: int = 50
    num: int = 5
    title: bool = True
    footer: bool = True
    randomise: bool = True
    max_collabs: int = -1
    tech_dev_is_collab: bool = True


@dataclass(frozen=True, slots=True)
class PipelineResult:
    html: str
    json: str
    warnings: tuple[str, ...] = ()
