from __future__ import annotations

import json

import pytest

from models import Author
from render import (
    ERROR_HTML,
    format_author_name,
    render_html,
    render_json,
    render_list_item,
    render_publication_modal,
)


@pytest.mark.parametrize(("raw", "expected"), [
    ("GUSTAV", "Gustav"),
    ("vasa", "Vasa"),
    ("ANNA-KARIN", "Anna-Karin"),
    ("McDonald", "McDonald"),
    ("van der Berg", "van der Berg"),
    ("de la cruz", "De La Cruz"),
    ("", ""),
])
def test_format_author_name(raw: str, expected: str) -> None:
    assert format_author_name(raw) == expected


def test_render_modal_contains_authors_abstract_and_links(publication) -> None:
    pub = publication(
        iuid="abc",
        doi="10.1/abc",
        pmid="999",
        abstract="The abstract text.",
        authors=(Author(given="ADA", family="LOVELACE", initials="A"),),
        is_collab=True,
        is_tech_dev=False,
    )

    html = render_publication_modal(pub)

    assert 'id="pub_abc"' in html
    assert 'title="Ada Lovelace">A Lovelace</span>' in html
    assert '<div class="modal-body small">The abstract text.</div>' in html
    assert "https://www.ncbi.nlm.nih.gov/pubmed/999" in html
    assert "https://dx.doi.org/10.1/abc" in html
    assert "https://publications.scilifelab.se/publication/abc" in html
    assert "NGI Collaboration" in html
    assert "NGI Technology development" not in html


def test_render_modal_without_abstract_hides_body(publication) -> None:
    html = render_publication_modal(publication(abstract=None))

    assert '<div class="modal-body d-none"></div>' in html
    assert "modal-footer border-0" in html


def test_render_list_item_shows_year_journal_and_badges(publication) -> None:
    pub = publication(iuid="x", published="2021-03-01", is_collab=True, is_tech_dev=True)

    html = render_list_item(pub)

    assert 'data-target="#pub_x"' in html
    assert "<em>Journal of Tests</em> (2021)" in html
    assert "list-pub-collab" in html
    assert "list-pub-techdev" in html
    assert html.count("badge badge-") == 2


def test_render_list_item_without_flags_has_no_badges(publication) -> None:
    html = render_list_item(publication(is_collab=False, is_tech_dev=False))

    assert "badge" not in html
    assert "list-pub-collab" not in html


def test_render_html_title_and_footer_toggles(publication) -> None:
    pubs = [publication(iuid="a", is_collab=False, is_tech_dev=False)]

    full = render_html(pubs, title=True, footer=True)
    bare = render_html(pubs, title=False, footer=False)

    assert full.startswith('<div class="ngisweden-publications mb-5"><h5>User Publications</h5>')
    assert "See all publications at" in full
    assert "<h5>User Publications</h5>" not in bare
    assert "See all publications at" not in bare
    # Modals are appended after the list container.
    assert bare.index("</div>", bare.index("list-group")) < bare.index('id="pub_a"')


def test_render_html_empty_list_is_still_valid() -> None:
    html = render_html([], title=True, footer=False)

    assert html == '<div class="ngisweden-publications mb-5"><h5>User Publications</h5><div class="list-group"></div></div>'
    assert html != ERROR_HTML


def test_render_json_shape_and_flags(publication) -> None:
    pubs = [publication(iuid="a", is_collab=True, is_tech_dev=False)]

    data = json.loads(render_json(pubs))

    assert len(data) == 1
    record = data[0]
    assert record["iuid"] == "a"
    assert record["is_collab"] is True
    assert record["is_tech_dev"] is False
    assert record["links"]["display"]["href"].endswith("/a")
    assert list(record)[-2:] == ["is_collab", "is_tech_dev"]


def test_render_json_empty_list() -> None:
    assert render_json([]) == "[]"
