"""SciLifeLab Publications ingestion helpers."""

from __future__ import annotations

import logging
from urllib.parse import quote

import requests

from models import FACILITY_LABELS, Publication
from schemas import parse_api_payload

# Public label endpoint of publications.scilifelab.se; one request per facility label.
PUBLICATIONS_API_URL = "https://publications.scilifelab.se/label"
REQUEST_TIMEOUT_SECONDS = 30
# Characters left unescaped in a path segment, matching encodeURIComponent.
_URI_COMPONENT_SAFE = "!*'()"


def build_label_url(facility: str, limit: int) -> str:
    """Return the label endpoint URL for one facility."""
    return f"{PUBLICATIONS_API_URL}/{quote(facility, safe=_URI_COMPONENT_SAFE)}.json?limit={limit}"


def fetch_facility_publications(facility: str, limit: int) -> list[Publication]:
    """Fetch and validate the publications tagged with one facility label.

    Returns an empty list on network errors, non-2xx responses, undecodable
    bodies or payloads that fail validation. Never retries.
    """
    url = build_label_url(facility, limit)

    try:
        response = requests.get(url, timeout=REQUEST_TIMEOUT_SECONDS)
        response.raise_for_status()
        payload = response.json()
    except requests.RequestException as exc:
        logging.warning("Publications fetch: failed for %s, skipping: %s", facility, exc)
        return []
    except ValueError as exc:
        logging.warning("Publications fetch: invalid JSON for %s, skipping: %s", facility, exc)
        return []

    publications = parse_api_payload(payload, source=facility)
    logging.info("Publications fetch: facility=%s count=%s", facility, len(publications))
    return publications


def fetch_all_publications(
    limit: int,
    facilities: tuple[str, ...] | list[str] = FACILITY_LABELS,
) -> list[Publication]:
    """Fetch every facility in order and concatenate the results.

    Duplicates across facilities are kept; the classifier removes them.
    """
    publications: list[Publication] = []
    for facility in facilities:
        publications.extend(fetch_facility_publications(facility, limit))

    logging.info(
        "Publications fetch: facilities=%s limit=%s total=%s",
        len(facilities),
        limit,
        len(publications),
    )
    return publications
