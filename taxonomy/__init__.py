"""
Taxonomy package for the image metadata scanner.
"""

from .taxonomy_loader import TaxonomyLoader

__all__ = ['TaxonomyLoader']
