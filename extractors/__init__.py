"""
Extractors package for the image metadata scanner.
"""

from .image_handle import ImageHandle, ExifToolImage, ImageReadError
from .metadata_collector import RawMetadataCollector, file_entries

__all__ = [
    'ImageHandle',
    'ExifToolImage',
    'ImageReadError',
    'RawMetadataCollector',
    'file_entries',
]
