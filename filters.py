"""Collaboration quota and output sampling for classified publications."""

from __future__ import annotations

import random
from typing import Iterable

from models import Publication

UNLIMITED_COLLABS = -1


def apply_collab_quota(publications: Iterable[Publication], max_collabs: int = UNLIMITED_COLLABS) -> list[Publication]:
    """Admit at most ``max_collabs`` collaboration publications, in input order.

    A negative threshold means unlimited; ``0`` drops every collaboration.
    Non-collaboration publications are always admitted and never counted.
    """
    admitted: list[Publication] = []
    num_collabs = 0

    for pub in publications:
        if pub.is_collab:
            if 0 <= max_collabs <= num_collabs:
                continue
            num_collabs += 1
        admitted.append(pub)

    return admitted


def sample_publications(
    publications: Iterable[Publication],
    num: int,
    randomise: bool = True,
    rng: random.Random | None = None,
) -> list[Publication]:
    """Optionally shuffle, then keep the first ``num`` publications.

    Shuffling is a uniform Fisher-Yates shuffle (``random.shuffle``). With
    ``randomise`` off the incoming (newest-first) order is kept.
    """
    selected = list(publications)
    if randomise:
        (rng or random).shuffle(selected)
    return selected[: max(num, 0)]
