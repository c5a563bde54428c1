"""Collaboration/technology-development classification and deduplication."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Iterable

from models import FACILITY_LABELS, LABEL_COLLABORATIVE, LABEL_TECH_DEV, PipelineOptions, Publication

LOGGER = logging.getLogger(__name__)


def classify_publication(
    publication: Publication,
    tech_dev_is_collab: bool = True,
    facilities: Iterable[str] = FACILITY_LABELS,
) -> Publication:
    """Return a copy of ``publication`` with ``is_collab``/``is_tech_dev`` set.

    Truth table for the tech-dev flag:
    - no facility label is ``Technology development`` -> False
    - tech-dev label and ``tech_dev_is_collab`` enabled -> True
    - tech-dev label and ``tech_dev_is_collab`` disabled -> same as ``is_collab``

    Flags depend only on the labels, so classifying twice gives the same result.
    """
    categories = [publication.labels.get(facility) for facility in facilities]
    is_collab = LABEL_COLLABORATIVE in categories
    has_tech_dev = LABEL_TECH_DEV in categories

    return replace(
        publication,
        is_collab=is_collab,
        is_tech_dev=has_tech_dev and (tech_dev_is_collab or is_collab),
    )


def classify_publications(
    publications: Iterable[Publication],
    tech_dev_is_collab: bool = True,
) -> list[Publication]:
    return [classify_publication(pub, tech_dev_is_collab) for pub in publications]


def deduplicate_publications(publications: Iterable[Publication]) -> list[Publication]:
    """Keep a record only if no earlier record shares its iuid or its doi.

    Dropped records still count as earlier records, so a record matching a
    dropped duplicate is dropped too. Blank identifiers never match.
    """
    seen_iuids: set[str] = set()
    seen_dois: set[str] = set()
    unique: list[Publication] = []

    for pub in publications:
        iuid = _identifier(pub.iuid)
        doi = _identifier(pub.doi)
        is_duplicate = (iuid and iuid in seen_iuids) or (doi and doi in seen_dois)
        if iuid:
            seen_iuids.add(iuid)
        if doi:
            seen_dois.add(doi)
        if not is_duplicate:
            unique.append(pub)

    return unique


def _identifier(value: str) -> str:
    return value.strip()


def sort_by_published(publications: Iterable[Publication]) -> list[Publication]:
    """Newest first; equal dates keep their incoming order."""
    return sorted(publications, key=lambda pub: date.fromisoformat(pub.published), reverse=True)


def process_publications(
    publications: list[Publication],
    options: PipelineOptions,
) -> list[Publication]:
    """Classify, deduplicate and date-sort the merged facility results."""
    classified = classify_publications(publications, options.tech_dev_is_collab)
    unique = deduplicate_publications(classified)
    LOGGER.info(
        "Classifier: total=%s unique=%s collab=%s tech_dev=%s",
        len(classified),
        len(unique),
        sum(1 for pub in unique if pub.is_collab),
        sum(1 for pub in unique if pub.is_tech_dev),
    )
    return sort_by_published(unique)
