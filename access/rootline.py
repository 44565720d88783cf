"""
Access rootline: the chain of frontend user-group requirements a visitor
must satisfy to see a page, one element per level.

String form: elements joined by "/", each "<scope>:<groups>" where scope is
a page id, "c" for content elements or "r" for records. Example:
    "35:4/c:4,7"
"""

from typing import Iterable, List, Optional

ELEMENT_TYPE_PAGE = "page"
ELEMENT_TYPE_CONTENT = "content"
ELEMENT_TYPE_RECORD = "record"

_SCOPE_PREFIXES = {
    "c": ELEMENT_TYPE_CONTENT,
    "r": ELEMENT_TYPE_RECORD,
}

# Group id meaning "no restriction"
PUBLIC_GROUP = 0


class RootlineElementFormatError(ValueError):
    """Raised when a rootline element string cannot be parsed."""
    pass


class RootlineElement:
    """One level of the access rootline."""

    def __init__(self, element: str):
        scope, sep, groups = element.partition(":")
        scope = scope.strip()
        if not sep or not scope:
            raise RootlineElementFormatError(
                f"Could not parse access rootline element {element!r}, expected '<scope>:<groups>'"
            )

        if scope in _SCOPE_PREFIXES:
            self.type = _SCOPE_PREFIXES[scope]
            self.page_id: Optional[int] = None
        elif scope.isascii() and scope.isdigit():
            self.type = ELEMENT_TYPE_PAGE
            self.page_id = int(scope)
        else:
            raise RootlineElementFormatError(f"Unknown access rootline scope {scope!r} in {element!r}")

        self.groups = _parse_groups(groups, element)

    def get_groups(self) -> List[int]:
        return list(self.groups)

    def __str__(self):
        if self.type == ELEMENT_TYPE_PAGE:
            scope = str(self.page_id)
        elif self.type == ELEMENT_TYPE_CONTENT:
            scope = "c"
        else:
            scope = "r"
        return f"{scope}:{','.join(str(g) for g in self.groups)}"

    def __repr__(self):
        return f"RootlineElement({str(self)!r})"


def _parse_groups(raw: str, element: str) -> List[int]:
    groups = []
    for token in raw.split(","):
        token = token.strip()
        if token == "":
            continue
        try:
            groups.append(int(token))
        except ValueError:
            raise RootlineElementFormatError(f"Invalid group id {token!r} in {element!r}") from None
    return groups


class AccessRootline:
    """
    Ordered access requirements of a page.

    An empty rootline means the page is public.
    """

    ELEMENT_DELIMITER = "/"

    def __init__(self, access_rootline: Optional[str] = None):
        self.elements: List[RootlineElement] = []
        if access_rootline:
            for raw in access_rootline.split(self.ELEMENT_DELIMITER):
                if raw.strip():
                    self.elements.append(RootlineElement(raw))

    def push(self, element: RootlineElement) -> None:
        self.elements.append(element)

    def get_groups(self) -> List[int]:
        """All group ids of all elements, in rootline order, uncleaned."""
        groups: List[int] = []
        for element in self.elements:
            groups.extend(element.get_groups())
        return groups

    @staticmethod
    def clean_group_array(groups: Iterable) -> List[int]:
        """
        Drops the public placeholder and duplicate group ids.
        First-seen order is kept; the result is NOT sorted.
        """
        cleaned: List[int] = []
        for group in groups:
            group = int(group)
            if group == PUBLIC_GROUP or group in cleaned:
                continue
            cleaned.append(group)
        return cleaned

    def __str__(self):
        return self.ELEMENT_DELIMITER.join(str(e) for e in self.elements)

    def __repr__(self):
        return f"AccessRootline({str(self)!r})"

    def __len__(self):
        return len(self.elements)
