"""
Metadata Models

Represents raw metadata entries collected from an image and the
classification report built from them.
"""

from dataclasses import dataclass, field
from typing import List

from .category import Category


# Composite key building blocks shared by the collector, the classifier
# and the value formatter.
EXIF_PREFIX = "EXIF"
IPTC_PREFIX = "IPTC"
PROFILE_PREFIX = "Profile"
ATTRIBUTE_PREFIX = "Attribute"
XMP_KEY = "XMP"
MAKER_NOTE_MARKER = "MakerNote"

FILE_NAME_KEY = "FileName"
FILE_SIZE_KEY = "FileSize"
FILE_TYPE_KEY = "FileType"


def composite_key(prefix: str, name: str) -> str:
    """Build a scheme-qualified key such as "EXIF:Make"."""
    return f"{prefix}:{name}"


@dataclass(frozen=True)
class RawMetadataEntry:
    """
    A single raw key/value pair as collected from an image.

    Attributes:
        key: Composite ("EXIF:Make") or bare ("FileName") identifier
        value: Value rendered as text
    """

    key: str
    value: str


@dataclass(frozen=True)
class ClassifiedEntry:
    """
    A raw entry claimed by a category.

    Attributes:
        key: Raw key that was resolved (e.g. "EXIF:Make")
        display_name: Label from the taxonomy (e.g. "Maker")
        value: Raw value text
    """

    key: str
    display_name: str
    value: str


@dataclass
class CategoryMatches:
    """Entries matched by one category, in the category's key order."""

    category: Category
    entries: List[ClassifiedEntry] = field(default_factory=list)


@dataclass
class ClassificationReport:
    """
    Result of classifying one image's raw metadata against a taxonomy.

    Every raw entry appears exactly once: either in one category's
    matches or in the remainder.

    Attributes:
        categories: One CategoryMatches per taxonomy category, in taxonomy order
        remainder: Unclaimed raw entries, in extraction order

    Example:
        >>> report = classifier.classify(raw, taxonomy)
        >>> for group in report.categories:
        ...     print(group.category.name, len(group.entries))
    """

    categories: List[CategoryMatches] = field(default_factory=list)
    remainder: List[RawMetadataEntry] = field(default_factory=list)

    @property
    def matched_count(self) -> int:
        return sum(len(group.entries) for group in self.categories)

    @property
    def total_entries(self) -> int:
        return self.matched_count + len(self.remainder)

    def to_dict(self) -> dict:
        """Convert report to dictionary representation."""
        return {
            'categories': [
                {
                    'name': group.category.name,
                    'display_hint': group.category.display_hint.value,
                    'entries': [
                        {'key': e.key, 'display_name': e.display_name, 'value': e.value}
                        for e in group.entries
                    ],
                }
                for group in self.categories
            ],
            'remainder': [{'key': e.key, 'value': e.value} for e in self.remainder],
        }

    def __repr__(self) -> str:
        return (
            f"ClassificationReport(categories={len(self.categories)}, "
            f"matched={self.matched_count}, remainder={len(self.remainder)})"
        )
