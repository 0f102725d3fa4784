"""
Taxonomy Loader

Parses the XML taxonomy resource into an ordered, immutable Taxonomy.

Expected document shape:

    <taxonomy>
      <category name="Camera" color="Cyan">
        <key raw="Make" display="Maker"/>
        <key raw="Model" display="Model"/>
      </category>
    </taxonomy>
"""

import os
import logging
import xml.etree.ElementTree as ET
from typing import Optional, List

from models import Category, DisplayHint, KeyMapping, Taxonomy

logger = logging.getLogger(__name__)


class TaxonomyLoader:
    """
    Loads a taxonomy from an XML file.

    Loading never raises. A missing file or a document that fails to parse
    yields an empty taxonomy; bad category or key elements are skipped one
    at a time.

    Attributes:
        category_tag: Element name of a category
        key_tag: Element name of a key inside a category

    Example:
        >>> taxonomy = TaxonomyLoader().load('taxonomy.xml')
        >>> [c.name for c in taxonomy]
        ['Camera', 'Exposure', 'Location']
    """

    category_tag = 'category'
    key_tag = 'key'

    def load(self, resource_path: str) -> Taxonomy:
        """
        Load a taxonomy from resource_path.

        Args:
            resource_path: Path to the XML taxonomy file

        Returns:
            Taxonomy in document order (empty on any load failure)
        """
        if not os.path.exists(resource_path):
            logger.warning(f"Taxonomy file not found: {resource_path}")
            self._report_working_directory()
            return Taxonomy.empty()

        try:
            root = ET.parse(resource_path).getroot()
            categories = self._parse_categories(root)
        except Exception as e:
            logger.error(f"Failed to load taxonomy from {resource_path}: {e}")
            return Taxonomy.empty()

        taxonomy = Taxonomy(categories=tuple(categories))
        logger.info(f"Loaded {len(taxonomy)} categories from {resource_path}")
        return taxonomy

    def loads(self, text: str) -> Taxonomy:
        """Load a taxonomy from an XML string. Same failure rules as load()."""
        try:
            root = ET.fromstring(text)
            categories = self._parse_categories(root)
        except Exception as e:
            logger.error(f"Failed to parse taxonomy: {e}")
            return Taxonomy.empty()
        return Taxonomy(categories=tuple(categories))

    def _parse_categories(self, root: ET.Element) -> List[Category]:
        categories = []
        for element in root.findall(self.category_tag):
            category = self._parse_category(element)
            if category is not None:
                categories.append(category)
        return categories

    def _parse_category(self, element: ET.Element) -> Optional[Category]:
        name = (element.get('name') or '').strip()
        color = element.get('color')

        if not name:
            logger.warning("Skipping category without a name")
            return None

        hint = DisplayHint.parse(color)
        if hint is None:
            logger.warning(f"Skipping category '{name}': unknown color '{color}'")
            return None

        keys = []
        for key_element in element.findall(self.key_tag):
            raw = (key_element.get('raw') or '').strip()
            display = (key_element.get('display') or '').strip()
            if not raw or not display:
                logger.debug(f"  Dropping incomplete key in '{name}': {key_element.attrib}")
                continue
            keys.append(KeyMapping(match_key=raw, display_name=display))

        return Category(name=name, display_hint=hint, keys=tuple(keys))

    @staticmethod
    def _report_working_directory():
        cwd = os.getcwd()
        try:
            entries = sorted(os.listdir(cwd))
        except OSError as e:
            logger.warning(f"  Could not list {cwd}: {e}")
            return
        logger.warning(f"  Files in {cwd}:")
        for entry in entries:
            logger.warning(f"    {entry}")
