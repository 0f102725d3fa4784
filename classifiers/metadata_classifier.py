"""
Metadata Classifier

Buckets a raw metadata mapping into taxonomy categories.
"""

import logging
from typing import Dict, Optional

from models import (
    Taxonomy,
    ClassifiedEntry,
    CategoryMatches,
    ClassificationReport,
    RawMetadataEntry,
)
from models.metadata import EXIF_PREFIX, composite_key

logger = logging.getLogger(__name__)


class MetadataClassifier:
    """
    Classifies raw metadata against an ordered taxonomy.

    Categories claim keys in taxonomy order and a claimed key leaves the
    pool, so a key is reported under the first category that lists it.
    Within a category, keys are reported in the category's key order.
    Each taxonomy key is looked up scheme-prefixed first ("EXIF:Make"),
    then bare ("Make").

    Example:
        >>> classifier = MetadataClassifier()
        >>> report = classifier.classify(
        ...     {"EXIF:Make": "Acme", "FileName": "a.jpg"}, taxonomy
        ... )
        >>> [e.key for e in report.remainder]
        ['FileName']
    """

    def __init__(self, scheme_prefix: str = EXIF_PREFIX):
        self.scheme_prefix = scheme_prefix

    def classify(self, raw: Dict[str, str], taxonomy: Taxonomy) -> ClassificationReport:
        """
        Classify raw metadata.

        Args:
            raw: Ordered mapping of composite key to value
            taxonomy: Categories to classify against

        Returns:
            ClassificationReport with one CategoryMatches per category and
            the unclaimed entries in their original order
        """
        pool = dict(raw)
        report = ClassificationReport()

        for category in taxonomy:
            matches = CategoryMatches(category=category)
            for mapping in category.keys:
                resolved = self._resolve(pool, mapping.match_key)
                if resolved is None:
                    continue
                matches.entries.append(ClassifiedEntry(
                    key=resolved,
                    display_name=mapping.display_name,
                    value=pool.pop(resolved),
                ))
            report.categories.append(matches)

        report.remainder = [RawMetadataEntry(key=k, value=v) for k, v in pool.items()]

        logger.debug(
            f"Classified {len(raw)} entries: "
            f"{report.matched_count} matched, {len(report.remainder)} remaining"
        )
        return report

    def _resolve(self, pool: Dict[str, str], match_key: str) -> Optional[str]:
        prefixed = composite_key(self.scheme_prefix, match_key)
        if prefixed in pool:
            return prefixed
        if match_key in pool:
            return match_key
        return None
