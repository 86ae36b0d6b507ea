"""Content search.

There is no separate index: a search is a query-time scan of ``documents.content``
for a case-insensitive, literal substring. ``%``, ``_`` and the escape character in
a term match themselves.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import ColumnElement

from .models import Document


def normalize_term(term: Optional[str]) -> Optional[str]:
    """Return None when the term should match every document."""
    if term is None or term == "":
        return None
    return term


def content_matches(term: str) -> ColumnElement[bool]:
    return Document.content.icontains(term, autoescape=True)

