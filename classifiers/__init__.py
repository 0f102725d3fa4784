"""
Classifiers package for the image metadata scanner.
"""

from .metadata_classifier import MetadataClassifier

__all__ = ['MetadataClassifier']
