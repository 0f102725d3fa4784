"""
Metadata Collector

Flattens every metadata scheme embedded in an image (EXIF, XMP, IPTC,
opaque profiles and well-known attributes) into one ordered mapping of
composite key to text value.
"""

import os
import base64
import logging
from typing import Dict, Any, List, Optional

from models.metadata import (
    EXIF_PREFIX,
    IPTC_PREFIX,
    PROFILE_PREFIX,
    ATTRIBUTE_PREFIX,
    XMP_KEY,
    FILE_NAME_KEY,
    FILE_SIZE_KEY,
    FILE_TYPE_KEY,
    composite_key,
)
from .image_handle import ImageHandle

logger = logging.getLogger(__name__)


def _to_text(value: Any) -> str:
    """Render a backend value as text. Bytes are base64-encoded."""
    if isinstance(value, bytes):
        return base64.b64encode(value).decode('ascii')
    if isinstance(value, (list, tuple)):
        return ", ".join(_to_text(v) for v in value)
    return str(value)


class RawMetadataCollector:
    """
    Collects raw metadata from an opened image.

    Schemes are queried in a fixed order and each one is isolated: a
    failure is logged as a warning naming the scheme and the remaining
    schemes still run, so collect() never fails as a whole.

    Attributes:
        attribute_names: Well-known attributes emitted as "Attribute:<name>"
        consumed_profiles: Profile names already covered by dedicated schemes

    Example:
        >>> collector = RawMetadataCollector()
        >>> with ExifToolImage('/photos/a.jpg') as image:
        ...     raw = collector.collect(image)
        >>> raw['EXIF:Make']
        'SONY'
    """

    DEFAULT_ATTRIBUTES = ['Make', 'Model', 'Software', 'DateTimeOriginal', 'Copyright']
    CONSUMED_PROFILES = ('exif', 'xmp', 'iptc')

    def __init__(self, attribute_names: Optional[List[str]] = None):
        self.attribute_names = attribute_names or list(self.DEFAULT_ATTRIBUTES)
        self.consumed_profiles = set(self.CONSUMED_PROFILES)

    def collect(self, image: ImageHandle) -> Dict[str, str]:
        """
        Collect all schemes from an image into one ordered mapping.

        Args:
            image: Opened image handle

        Returns:
            Mapping of composite key to text value, in scheme query order
        """
        raw: Dict[str, str] = {}

        schemes = [
            ('EXIF', self._collect_exif),
            ('XMP', self._collect_xmp),
            ('IPTC', self._collect_iptc),
            ('profiles', self._collect_profiles),
            ('attributes', self._collect_attributes),
        ]

        for scheme_name, collect_scheme in schemes:
            try:
                collect_scheme(image, raw)
            except Exception as e:
                logger.warning(f"Could not read {scheme_name} metadata: {e}")

        logger.debug(f"Collected {len(raw)} raw entries")
        return raw

    def _collect_exif(self, image: ImageHandle, raw: Dict[str, str]):
        for tag, value in image.exif_tags().items():
            raw[composite_key(EXIF_PREFIX, tag)] = _to_text(value)

    def _collect_xmp(self, image: ImageHandle, raw: Dict[str, str]):
        text = image.xmp_text()
        if text:
            raw[XMP_KEY] = text

    def _collect_iptc(self, image: ImageHandle, raw: Dict[str, str]):
        for field_name, value in image.iptc_fields().items():
            raw[composite_key(IPTC_PREFIX, field_name)] = _to_text(value)

    def _collect_profiles(self, image: ImageHandle, raw: Dict[str, str]):
        for name in image.profile_names():
            if name.lower() in self.consumed_profiles:
                continue
            data = image.get_profile(name)
            if data is not None:
                raw[composite_key(PROFILE_PREFIX, name)] = _to_text(data)

    def _collect_attributes(self, image: ImageHandle, raw: Dict[str, str]):
        for name in self.attribute_names:
            value = image.get_attribute(name)
            if value:
                raw[composite_key(ATTRIBUTE_PREFIX, name)] = value


def file_entries(file_path: str) -> Dict[str, str]:
    """
    Build the filesystem-derived entries for a file.

    Args:
        file_path: Path to the image file

    Returns:
        Mapping with file name, size in bytes and uppercased extension

    Example:
        >>> file_entries('/photos/a.jpg')
        {'FileName': 'a.jpg', 'FileSize': '20480', 'FileType': '.JPG'}
    """
    return {
        FILE_NAME_KEY: os.path.basename(file_path),
        FILE_SIZE_KEY: str(os.path.getsize(file_path)),
        FILE_TYPE_KEY: os.path.splitext(file_path)[1].upper(),
    }
