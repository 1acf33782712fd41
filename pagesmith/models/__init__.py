"""Content model for Pagesmith."""

from pagesmith.models.page import Page, PageKind

__all__ = [
    "Page",
    "PageKind",
]
