"""Extracts title, indexable text and tag content from rendered page HTML."""

from __future__ import annotations

import re
from typing import Dict

from bs4 import BeautifulSoup

# Only the HTML between these markers is indexed; no markers = whole body
_SEARCH_REGION = re.compile(
    r'<!--\s*TYPO3SEARCH_begin\s*-->(.*?)<!--\s*TYPO3SEARCH_end\s*-->',
    flags=re.DOTALL | re.IGNORECASE,
)

_NON_CONTENT_TAGS = ["script", "style", "noscript", "template"]

# HTML tag -> document field; several tags may feed one field
TAG_TO_FIELD = {
    "h1": "tagsH1",
    "h2": "tagsH2H3",
    "h3": "tagsH2H3",
    "h4": "tagsH4H5H6",
    "h5": "tagsH4H5H6",
    "h6": "tagsH4H5H6",
    "u": "tagsInline",
    "b": "tagsInline",
    "strong": "tagsInline",
    "i": "tagsInline",
    "em": "tagsInline",
    "a": "tagsA",
}


def _collapse(text: str) -> str:
    return " ".join((text or "").split())


class PageContentExtractor:
    """
    Reads a rendered page once and exposes the three views the document
    builder needs. Parsing happens in the constructor, getters are cheap.
    """

    def __init__(self, content: str):
        self._content = content or ""
        self._page_soup = BeautifulSoup(self._content, "lxml")
        self._region_soup = BeautifulSoup(self._indexable_html(), "lxml")
        for node in self._region_soup.find_all(_NON_CONTENT_TAGS):
            node.decompose()

    def _indexable_html(self) -> str:
        regions = _SEARCH_REGION.findall(self._content)
        if regions:
            return "\n".join(regions)
        body = self._page_soup.body
        return str(body) if body is not None else self._content

    def get_page_title(self) -> str:
        title = self._page_soup.title
        if title is None or title.string is None:
            return ""
        return _collapse(title.get_text())

    def get_indexable_content(self) -> str:
        return _collapse(self._region_soup.get_text(" "))

    def get_tag_content(self) -> Dict[str, str]:
        """
        Field name -> space-joined text of all matching tags.
        Fields with no text are left out.
        """
        collected: Dict[str, list[str]] = {}
        for tag in self._region_soup.find_all(list(TAG_TO_FIELD)):
            text = _collapse(tag.get_text(" "))
            if text:
                collected.setdefault(TAG_TO_FIELD[tag.name], []).append(text)

        # Field order follows TAG_TO_FIELD, not document order
        ordered: Dict[str, str] = {}
        for field_name in dict.fromkeys(TAG_TO_FIELD.values()):
            if field_name in collected:
                ordered[field_name] = " ".join(collected[field_name])
        return ordered
