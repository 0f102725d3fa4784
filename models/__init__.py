"""
Domain models for the image metadata scanner.

This package contains the taxonomy and metadata entities shared by the
collector, the classifier and the reporters.
"""

from .category import Category, DisplayHint, KeyMapping, Taxonomy
from .metadata import (
    RawMetadataEntry,
    ClassifiedEntry,
    CategoryMatches,
    ClassificationReport,
    composite_key,
)

__all__ = [
    'Category',
    'DisplayHint',
    'KeyMapping',
    'Taxonomy',
    'RawMetadataEntry',
    'ClassifiedEntry',
    'CategoryMatches',
    'ClassificationReport',
    'composite_key',
]
