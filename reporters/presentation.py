"""
Presentation Records

Turns a classification report into styled text tokens. Tokens carry the
category's display hint; applying it to an output device is left to the
reporters.
"""

from dataclasses import dataclass
from typing import List, Optional

from models import ClassificationReport, DisplayHint
from .value_formatter import ValueFormatter

REMAINDER_TITLE = "Other"


@dataclass(frozen=True)
class StyledToken:
    """A piece of text with an optional display hint."""

    text: str
    hint: Optional[DisplayHint] = None


Line = List[StyledToken]


def format_report(report: ClassificationReport,
                  formatter: ValueFormatter,
                  title: Optional[str] = None,
                  include_empty: bool = False) -> List[Line]:
    """
    Build styled display lines for a classification report.

    Each category with matches becomes a bracketed header followed by
    "label: value" lines. Unclaimed entries follow under "Other", labelled
    with their raw key.

    Args:
        report: Classification report for one image
        formatter: Value formatter applied to every entry
        title: Optional heading line (e.g. the file name)
        include_empty: Also emit headers for categories with no matches

    Returns:
        List of lines, each a list of StyledToken
    """
    lines: List[Line] = []

    if title:
        lines.append([StyledToken(f"=== {title} ===")])

    for group in report.categories:
        if not group.entries and not include_empty:
            continue
        hint = group.category.display_hint
        lines.append([StyledToken(f"[{group.category.name}]", hint)])
        for entry in group.entries:
            value = formatter.format(entry.key, entry.value)
            lines.append([
                StyledToken(f"  {entry.display_name}", hint),
                StyledToken(f": {value}"),
            ])

    if report.remainder:
        lines.append([StyledToken(f"[{REMAINDER_TITLE}]")])
        for entry in report.remainder:
            value = formatter.format(entry.key, entry.value)
            lines.append([StyledToken(f"  {entry.key}: {value}")])

    return lines


def plain_text(line: Line) -> str:
    """Join a line's tokens without styling."""
    return "".join(token.text for token in line)
