"""
Console Reporter

Writes styled presentation lines to a terminal, mapping display hints to
colorama color codes.
"""

import sys
from typing import List, Optional, TextIO

import colorama
from colorama import Fore, Style

from models import DisplayHint
from .presentation import Line, plain_text


HINT_COLORS = {
    DisplayHint.BLACK: Fore.BLACK,
    DisplayHint.DARK_BLUE: Fore.BLUE,
    DisplayHint.DARK_GREEN: Fore.GREEN,
    DisplayHint.DARK_CYAN: Fore.CYAN,
    DisplayHint.DARK_RED: Fore.RED,
    DisplayHint.DARK_MAGENTA: Fore.MAGENTA,
    DisplayHint.DARK_YELLOW: Fore.YELLOW,
    DisplayHint.GRAY: Fore.WHITE,
    DisplayHint.DARK_GRAY: Fore.LIGHTBLACK_EX,
    DisplayHint.BLUE: Fore.LIGHTBLUE_EX,
    DisplayHint.GREEN: Fore.LIGHTGREEN_EX,
    DisplayHint.CYAN: Fore.LIGHTCYAN_EX,
    DisplayHint.RED: Fore.LIGHTRED_EX,
    DisplayHint.MAGENTA: Fore.LIGHTMAGENTA_EX,
    DisplayHint.YELLOW: Fore.LIGHTYELLOW_EX,
    DisplayHint.WHITE: Fore.LIGHTWHITE_EX,
}


class ConsoleReporter:
    """
    Prints presentation lines to a stream.

    Attributes:
        use_color: Apply colors for tokens that carry a display hint
        stream: Output stream (defaults to stdout)

    Example:
        >>> reporter = ConsoleReporter(use_color=True)
        >>> reporter.write_lines(format_report(report, ValueFormatter()))
    """

    def __init__(self, use_color: bool = True, stream: Optional[TextIO] = None):
        self.use_color = use_color
        self.stream = stream if stream is not None else sys.stdout
        if use_color:
            colorama.just_fix_windows_console()

    @classmethod
    def from_config(cls, config: dict) -> 'ConsoleReporter':
        """Create ConsoleReporter from a loaded configuration."""
        use_color = config.get('display', {}).get('use_color', True)
        return cls(use_color=use_color)

    def render_line(self, line: Line) -> str:
        """Render one line, colored if enabled."""
        if not self.use_color:
            return plain_text(line)

        parts = []
        for token in line:
            color = HINT_COLORS.get(token.hint) if token.hint else None
            if color:
                parts.append(f"{color}{token.text}{Style.RESET_ALL}")
            else:
                parts.append(token.text)
        return "".join(parts)

    def write_lines(self, lines: List[Line]):
        for line in lines:
            self.stream.write(self.render_line(line) + "\n")
        self.stream.flush()
