"""
Text Reporter

Writes plain-text scan reports, one file per scanned image.
"""

import os
import logging
from typing import List, Optional

from .presentation import Line, plain_text

logger = logging.getLogger(__name__)


class TextReporter:
    """
    Generates text-format scan reports.

    Attributes:
        output_directory: Base directory for text reports

    Example:
        >>> reporter = TextReporter('metadata_reports/')
        >>> report_path = reporter.generate_report('DSC05760.JPG', lines)
    """

    def __init__(self, output_directory: str = 'metadata_reports'):
        """
        Initialize text reporter.

        Args:
            output_directory: Base directory for saving reports
        """
        self.output_directory = output_directory

    @classmethod
    def from_config(cls, config: dict) -> 'TextReporter':
        """Create TextReporter from a loaded configuration."""
        output_dir = config.get('paths', {}).get('reports_folder', 'metadata_reports')
        return cls(output_directory=output_dir)

    def generate_report(self, image_name: str, lines: List[Line],
                        subdirectory: Optional[str] = None,
                        filename: Optional[str] = None) -> str:
        """
        Generate text report for one scanned image.

        Args:
            image_name: Name of the scanned image file
            lines: Presentation lines from format_report()
            subdirectory: Optional subdirectory within output_directory
            filename: Optional custom filename (defaults to scan_<image>.txt)

        Returns:
            Path to generated report file
        """
        if subdirectory:
            output_dir = os.path.join(self.output_directory, subdirectory)
        else:
            output_dir = self.output_directory

        os.makedirs(output_dir, exist_ok=True)

        if not filename:
            safe_name = image_name.replace(' ', '_').replace('/', '_')
            filename = f"scan_{safe_name}.txt"

        output_path = os.path.join(output_dir, filename)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(f"Metadata scan: {image_name}\n")
            f.write("=" * 80 + "\n")
            for line in lines:
                f.write(plain_text(line) + "\n")

        logger.info(f"Generated text report: {output_path}")
        return output_path
