"""Category tree nodes and the references callers use to point at them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

DEFAULT_ROOT_CATEGORY_ID = 1
DEFAULT_PATH_SEPARATOR = "->"


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(eq=False, kw_only=True)
class CategoryNode:
    """A node of the category tree.

    ``ancestors`` is the materialized path: ancestor ids ordered root-most first,
    including the root itself. ``id`` stays ``None`` until the node is flushed.
    """

    id: int | None = None
    parent_id: int | None
    description: str
    ancestors: tuple[int, ...] = ()
    active: bool = True
    added: datetime = field(default_factory=_utcnow)
    changed: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if not self.description or not self.description.strip():
            raise ValueError("category description must not be blank")
        if self.parent_id is not None and self.ancestors[-1:] != (self.parent_id,):
            raise ValueError("ancestors must end with the parent id")


@dataclass(frozen=True, slots=True)
class CategoryReference:
    """Points at a category either by identifier or by a root-to-target path.

    When both are set, an existing identifier wins and the path is only used as a
    fallback when the identifier is unknown.
    """

    identifier: int | None = None
    path: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.identifier is None and not self.path:
            raise ValueError("category reference needs an identifier or a path")
        for segment in self.path:
            if not segment or not segment.strip():
                raise ValueError(f"blank segment in category path {self.path!r}")

    @classmethod
    def by_id(cls, identifier: int) -> CategoryReference:
        return cls(identifier=identifier)

    @classmethod
    def by_path(cls, *segments: str) -> CategoryReference:
        return cls(path=tuple(segments))

    @classmethod
    def parse(cls, text: str, *, separator: str = DEFAULT_PATH_SEPARATOR) -> CategoryReference:
        """Build a path reference from ``"English->Cars->Mazda"`` style text."""
        return cls(path=tuple(text.split(separator)))

    @property
    def has_path(self) -> bool:
        return bool(self.path)

    def display(self, *, separator: str = DEFAULT_PATH_SEPARATOR) -> str:
        if self.path:
            return separator.join(self.path)
        return f"#{self.identifier}"
