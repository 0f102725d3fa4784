"""
Storage package for the image metadata scanner.
"""

from .image_folder import ImageFolder, DEFAULT_EXTENSIONS

__all__ = [
    'ImageFolder',
    'DEFAULT_EXTENSIONS',
]
