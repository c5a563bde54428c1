"""HTML fragment and JSON artifact rendering for the publications list.

The HTML targets the Bootstrap 4 markup of the NGI Sweden website: a
``list-group`` of entries, each opening a modal with the full author list,
abstract and outbound links. Rendering is pure and never fails; an empty
list still produces a valid fragment and ``[]``.
"""

from __future__ import annotations

import json
import re
from html import escape
from typing import Iterable

from models import Author, Publication

ERROR_HTML = '<p class="text-muted"><em>Error: Publications could not be retrieved</em></p>'

PUBMED_URL = "https://www.ncbi.nlm.nih.gov/pubmed/"
DOI_URL = "https://dx.doi.org/"
ALL_PUBLICATIONS_URL = "https://publications.scilifelab.se/label/National%20Genomics%20Infrastructure"

_WORD_START_RE = re.compile(r"\b\w")

# ---------------------------------------------------------------------------
# Badges
# ---------------------------------------------------------------------------

_MODAL_COLLAB_BADGE = (
    '<span class="float-right badge badge-primary" '
    'title="A publication where a facility member is in the authors list" '
    'data-toggle="tooltip">NGI Collaboration</span>'
)
_MODAL_TECH_DEV_BADGE = (
    '<span class="float-right badge badge-success" '
    'title="A publication with facility internal technology development" '
    'data-toggle="tooltip">NGI Technology development</span>'
)
_LIST_COLLAB_BADGE = '<span class="badge badge-primary mt-3">NGI Collaboration</span>'
_LIST_TECH_DEV_BADGE = '<span class="badge badge-success mt-3 mx-1">NGI Technology development</span>'

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def format_author_name(name: str) -> str:
    """Title-case an ALL-CAPS or all-lowercase name; leave mixed case alone."""
    if name.isupper() or name.islower():
        return _WORD_START_RE.sub(lambda match: match.group().upper(), name.lower())
    return name


def _format_author(author: Author) -> str:
    given = format_author_name(author.given)
    family = format_author_name(author.family)
    return (
        f'<span class="pub-author" title="{escape(given)} {escape(family)}">'
        f"{author.initials} {family}</span>"
    )


# ---------------------------------------------------------------------------
# Fragments
# ---------------------------------------------------------------------------


def render_publication_modal(publication: Publication) -> str:
    """Render the detail modal for one publication."""
    authors = ", ".join(_format_author(author) for author in publication.authors)
    collab_badge = _MODAL_COLLAB_BADGE if publication.is_collab else ""
    tech_dev_badge = _MODAL_TECH_DEV_BADGE if publication.is_tech_dev else ""

    if publication.abstract:
        body = f'<div class="modal-body small">{publication.abstract}</div>'
        footer_class = "modal-footer"
    else:
        body = '<div class="modal-body d-none"></div>'
        footer_class = "modal-footer border-0"

    pmid = escape(publication.pmid or "")
    doi = escape(publication.doi)
    display_href = escape(publication.links.display.href)

    return f"""
        <div class="modal ngisweden-publications-modal fade" id="pub_{escape(publication.iuid)}" tabindex="-1" role="dialog" aria-hidden="true">
            <div class="modal-dialog modal-lg modal-dialog-centered modal-dialog-scrollable" role="document">
                <div class="modal-content">
                    <div class="modal-header">
                        <h5 class="modal-title">{publication.title}</h5>
                        <button type="button" class="close" data-dismiss="modal" aria-label="Close">
                            <span aria-hidden="true">&times;</span>
                        </button>
                    </div>
                    <div class="modal-sub-header">
                        <div class="font-weight-light pub-authors">{authors}</div>
                        <p class="mt-2 mb-0">{collab_badge}{tech_dev_badge}</p>
                    </div>
                    {body}
                    <div class="{footer_class}">
                        <button type="button" class="btn btn-sm btn-secondary" data-dismiss="modal">Close</button>
                        <a href="{PUBMED_URL}{pmid}" target="_blank" class="btn btn-sm btn-info">
                            Pubmed <i class="fas fa-external-link-alt fa-sm ml-2"></i>
                        </a>
                        <a href="{DOI_URL}{doi}" target="_blank" class="btn btn-sm btn-primary">
                            DOI <i class="fas fa-external-link-alt fa-sm ml-2"></i>
                        </a>
                        <a href="{display_href}" target="_blank" class="btn btn-sm btn-success">
                            SciLifeLab Pubs <i class="fas fa-external-link-alt fa-sm ml-2"></i>
                        </a>
                    </div>
                </div>
            </div>
        </div>
    """


def render_list_item(publication: Publication) -> str:
    """Render the list-group entry that opens a publication's modal."""
    classes = "list-group-item list-group-item-action"
    if publication.is_collab:
        classes += " list-pub-collab"
    if publication.is_tech_dev:
        classes += " list-pub-techdev"

    badges = ""
    if publication.is_collab or publication.is_tech_dev:
        badges = (
            '<span class="float-right" style="display:inline-block">'
            f"{_LIST_COLLAB_BADGE if publication.is_collab else ''}"
            f"{_LIST_TECH_DEV_BADGE if publication.is_tech_dev else ''}"
            "</span>"
        )

    return f"""
            <a data-toggle="modal" data-target="#pub_{escape(publication.iuid)}" href="{escape(publication.links.display.href)}"
                target="_blank" class="{classes}">
                {publication.title}<br>
                <small class="text-muted"><em>{publication.journal.title}</em> ({publication.year})</small>
                {badges}
            </a>
        """


def render_html(publications: Iterable[Publication], title: bool = True, footer: bool = True) -> str:
    """Render the full fragment: heading, list, footer, then one modal per entry."""
    publications = list(publications)
    list_items = "\n".join(render_list_item(pub) for pub in publications)
    modals = "\n".join(render_publication_modal(pub) for pub in publications)

    parts = ['<div class="ngisweden-publications mb-5">']
    if title:
        parts.append("<h5>User Publications</h5>")
    parts.append(f'<div class="list-group">{list_items}</div>')
    if footer:
        parts.append(
            f"""
                <p class="small text-muted mt-2">
                    See all publications at
                    <a href="{ALL_PUBLICATIONS_URL}"
                        target="_blank" class="text-muted">
                        publications.scilifelab.se
                    </a>
                </p>
            """
        )
    parts.append("</div>")
    parts.append(modals)
    return "".join(parts)


def render_json(publications: Iterable[Publication]) -> str:
    """Serialize publications as a pretty-printed JSON array."""
    return json.dumps([pub.to_dict() for pub in publications], indent=2, ensure_ascii=False)
