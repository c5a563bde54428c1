"""Publication aggregation pipeline: fetch, classify, filter, sample, render."""

from __future__ import annotations

import logging
import random
from typing import Callable

from classifier import process_publications
from filters import apply_collab_quota, sample_publications
from models import PipelineOptions, PipelineResult, Publication
from publications_feed import fetch_all_publications
from render import ERROR_HTML, render_html, render_json

LOGGER = logging.getLogger(__name__)

NO_PUBLICATIONS_WARNING = "No publications found when fetching"


def get_publications(
    options: PipelineOptions | None = None,
    fetch: Callable[[int], list[Publication]] | None = None,
    rng: random.Random | None = None,
) -> PipelineResult:
    """Run one full pipeline pass and return the rendered artifacts.

    Never raises. Total data unavailability and unexpected errors both yield
    the fixed error fragment with ``json == "[]"``; the reason is reported in
    ``warnings``.

    Args:
        options: Run configuration; defaults to ``PipelineOptions()``.
        fetch: Called with the per-facility download limit, returns the
            merged facility results in facility order. Defaults to
            :func:`publications_feed.fetch_all_publications`.
        rng: Optional random source for the shuffle (tests pass a seeded one).
    """
    options = options or PipelineOptions()
    fetch = fetch or fetch_all_publications
    warnings: list[str] = []

    try:
        fetched = fetch(options.download_limit)
        if not fetched:
            warnings.append(NO_PUBLICATIONS_WARNING)
            return _error_result(warnings)

        publications = process_publications(fetched, options)
        admitted = apply_collab_quota(publications, options.max_collabs)
        selected = sample_publications(admitted, options.num, options.randomise, rng=rng)
        LOGGER.info(
            "Pipeline: fetched=%s unique=%s admitted=%s selected=%s randomise=%s",
            len(fetched),
            len(publications),
            len(admitted),
            len(selected),
            options.randomise,
        )

        return PipelineResult(
            html=render_html(selected, title=options.title, footer=options.footer),
            json=render_json(selected),
            warnings=tuple(warnings),
        )
    except Exception as exc:
        LOGGER.exception("Pipeline failed: %s", exc)
        warnings.append(f"Error processing publications: {exc}")
        return _error_result(warnings)


def _error_result(warnings: list[str]) -> PipelineResult:
    return PipelineResult(html=ERROR_HTML, json="[]", warnings=tuple(warnings))
