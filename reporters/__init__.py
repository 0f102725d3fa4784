"""
Reporters package for the image metadata scanner.
"""

from .value_formatter import ValueFormatter, PayloadPlaceholder
from .presentation import StyledToken, format_report, plain_text
from .console_reporter import ConsoleReporter
from .text_reporter import TextReporter

__all__ = [
    'ValueFormatter',
    'PayloadPlaceholder',
    'StyledToken',
    'format_report',
    'plain_text',
    'ConsoleReporter',
    'TextReporter',
]
