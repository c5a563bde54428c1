import random

import pytest

from filters import apply_collab_quota, sample_publications


def _collabs(publication, count: int) -> list:
    return [publication(iuid=f"c{i}", is_collab=True, is_tech_dev=False) for i in range(count)]


def test_quota_caps_collaborations(publication) -> None:
    assert len(apply_collab_quota(_collabs(publication, 10), max_collabs=3)) == 3


def test_quota_unlimited_by_default(publication) -> None:
    assert len(apply_collab_quota(_collabs(publication, 10))) == 10


def test_quota_zero_rejects_every_collaboration(publication) -> None:
    pubs = _collabs(publication, 3) + [publication(iuid="plain", is_collab=False)]

    assert [p.iuid for p in apply_collab_quota(pubs, max_collabs=0)] == ["plain"]


def test_quota_keeps_non_collabs_and_order(publication) -> None:
    """Non-collaborations are never rejected and do not count toward the quota."""
    pubs = [
        publication(iuid="c1", is_collab=True),
        publication(iuid="p1", is_collab=False),
        publication(iuid="c2", is_collab=True),
        publication(iuid="p2", is_collab=False),
        publication(iuid="c3", is_collab=True),
    ]

    assert [p.iuid for p in apply_collab_quota(pubs, max_collabs=1)] == ["c1", "p1", "p2"]


def test_sample_without_randomise_keeps_order_and_truncates(publication) -> None:
    pubs = [publication(iuid=str(i)) for i in range(8)]

    assert [p.iuid for p in sample_publications(pubs, num=5, randomise=False)] == ["0", "1", "2", "3", "4"]


def test_sample_shorter_than_num_returns_everything(publication) -> None:
    pubs = [publication(iuid=str(i)) for i in range(2)]

    assert len(sample_publications(pubs, num=5, randomise=True)) == 2


def test_sample_randomise_is_a_permutation(publication) -> None:
    pubs = [publication(iuid=str(i)) for i in range(20)]

    shuffled = sample_publications(pubs, num=20, randomise=True, rng=random.Random(7))

    assert sorted(p.iuid for p in shuffled) == sorted(p.iuid for p in pubs)
    assert [p.iuid for p in shuffled] != [p.iuid for p in pubs]


def test_sample_randomise_reproducible_with_seed(publication) -> None:
    pubs = [publication(iuid=str(i)) for i in range(20)]

    first = sample_publications(pubs, num=5, randomise=True, rng=random.Random(42))
    second = sample_publications(pubs, num=5, randomise=True, rng=random.Random(42))

    assert first == second


@pytest.mark.parametrize("num", [0, -3])
def test_sample_non_positive_num_returns_nothing(publication, num: int) -> None:
    pubs = [publication(iuid=str(i)) for i in range(3)]

    assert sample_publications(pubs, num=num, randomise=False) == []
