"""
Category and Taxonomy Models

Represents the configurable grouping of metadata tags into named,
colored categories.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Iterator


class DisplayHint(Enum):
    """
    Fixed palette of display colors a category may be rendered with.

    Names mirror the sixteen classic console colors. Values are the names
    as written in taxonomy files.
    """

    BLACK = "Black"
    DARK_BLUE = "DarkBlue"
    DARK_GREEN = "DarkGreen"
    DARK_CYAN = "DarkCyan"
    DARK_RED = "DarkRed"
    DARK_MAGENTA = "DarkMagenta"
    DARK_YELLOW = "DarkYellow"
    GRAY = "Gray"
    DARK_GRAY = "DarkGray"
    BLUE = "Blue"
    GREEN = "Green"
    CYAN = "Cyan"
    RED = "Red"
    MAGENTA = "Magenta"
    YELLOW = "Yellow"
    WHITE = "White"

    @classmethod
    def parse(cls, text: Optional[str]) -> Optional['DisplayHint']:
        """
        Parse a palette name, ignoring case and surrounding whitespace.

        Args:
            text: Color name as found in configuration (e.g. "DarkCyan")

        Returns:
            Matching DisplayHint, or None if the name is not in the palette

        Example:
            >>> DisplayHint.parse("darkcyan")
            <DisplayHint.DARK_CYAN: 'DarkCyan'>
        """
        if not text:
            return None
        wanted = text.strip().lower()
        for hint in cls:
            if hint.value.lower() == wanted:
                return hint
        return None


@dataclass(frozen=True)
class KeyMapping:
    """
    A single tag reference inside a category.

    Attributes:
        match_key: Bare tag name (e.g. "Make"), never scheme-prefixed
        display_name: Label shown to the user (e.g. "Maker")
    """

    match_key: str
    display_name: str


@dataclass(frozen=True)
class Category:
    """
    Represents one named group of tags in a taxonomy.

    Key order is significant: the first listed key found in an image's
    metadata is reported first.

    Attributes:
        name: Category label (e.g. "Camera")
        display_hint: Color the category is rendered with
        keys: Ordered tag references

    Example:
        >>> camera = Category(
        ...     name="Camera",
        ...     display_hint=DisplayHint.CYAN,
        ...     keys=(KeyMapping("Make", "Maker"), KeyMapping("Model", "Model"))
        ... )
    """

    name: str
    display_hint: DisplayHint
    keys: Tuple[KeyMapping, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        """Convert category to dictionary representation."""
        return {
            'name': self.name,
            'display_hint': self.display_hint.value,
            'keys': [
                {'match_key': k.match_key, 'display_name': k.display_name}
                for k in self.keys
            ],
        }

    def __repr__(self) -> str:
        """String representation of Category."""
        return (
            f"Category(name='{self.name}', "
            f"hint={self.display_hint.value}, keys={len(self.keys)})"
        )


@dataclass(frozen=True)
class Taxonomy:
    """
    Ordered, immutable collection of categories loaded once per run.

    Earlier categories take precedence over later ones when classifying.
    """

    categories: Tuple[Category, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> 'Taxonomy':
        return cls(categories=())

    @property
    def is_empty(self) -> bool:
        return not self.categories

    def __iter__(self) -> Iterator[Category]:
        return iter(self.categories)

    def __len__(self) -> int:
        return len(self.categories)

    def to_dict(self) -> dict:
        return {'categories': [c.to_dict() for c in self.categories]}
