from dataclasses import dataclass, field
from typing import Dict, Any, Iterator, List, Optional

@dataclass(frozen=True)
class Page:
    """
    Input schema for the document builder.
    A rendered CMS page: identity, the raw page record and the final HTML.

    INVARIANT: Read-only. The builder never mutates the record.
    """
    id: int
    type: int = 0
    sys_language_uid: int = 0
    record: Dict[str, Any] = field(default_factory=dict)
    content: str = ""

    def get(self, column: str, default: Any = None) -> Any:
        """Read a page-record column, missing columns fall back to default."""
        return self.record.get(column, default)

    @classmethod
    def from_record(cls, record: Dict[str, Any], content: str = "") -> "Page":
        """Builds a Page from a raw record carrying uid/type/sys_language_uid columns."""
        return cls(
            id=int(record["uid"]),
            type=int(record.get("type", 0) or 0),
            sys_language_uid=int(record.get("sys_language_uid", 0) or 0),
            record=dict(record),
            content=content,
        )


class SearchDocument:
    """
    Output of the document builder: a flat, ordered field set for a search index.

    set_field() overwrites, add_field() appends and turns the field multi-valued.
    Field order is insertion order; overwriting keeps the original position.
    """

    def __init__(self, fields: Optional[Dict[str, Any]] = None):
        self._fields: Dict[str, Any] = {}
        for name, value in (fields or {}).items():
            self.set_field(name, value)

    def set_field(self, name: str, value: Any) -> None:
        # Lists are copied so add_field never appends to a caller-owned list
        self._fields[name] = list(value) if isinstance(value, list) else value

    def add_field(self, name: str, value: Any) -> None:
        if name not in self._fields:
            self._fields[name] = [value]
            return
        current = self._fields[name]
        if isinstance(current, list):
            current.append(value)
        else:
            self._fields[name] = [current, value]

    def get_field(self, name: str, default: Any = None) -> Any:
        return self._fields.get(name, default)

    def field_names(self) -> List[str]:
        return list(self._fields)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready copy; multi-valued fields are copied, not shared."""
        return {
            name: list(value) if isinstance(value, list) else value
            for name, value in self._fields.items()
        }

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __getitem__(self, name: str) -> Any:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchDocument):
            return NotImplemented
        return list(self._fields.items()) == list(other._fields.items())

    def __repr__(self) -> str:
        return f"SearchDocument(id={self._fields.get('id')!r}, fields={len(self._fields)})"
