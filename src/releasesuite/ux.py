"""Terminal output helpers for the CLI."""

from __future__ import annotations

import os
import sys
from collections import Counter
from collections.abc import Sequence
from typing import TextIO

from releasesuite.models import ParsedRelease


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"


def _supports_color(stream: TextIO | None = None) -> bool:
    stream = stream or sys.stdout
    if os.environ.get("NO_COLOR"):
        return False
    if not hasattr(stream, "isatty") or not stream.isatty():
        return False
    return os.environ.get("TERM") != "dumb"


def colorize(text: str, color: str, bold: bool = False, stream: TextIO | None = None) -> str:
    if not _supports_color(stream):
        return text
    prefix = (Colors.BOLD if bold else "") + color
    return f"{prefix}{text}{Colors.RESET}"


def print_success(message: str, stream: TextIO | None = None) -> None:
    stream = stream or sys.stdout
    print(colorize("✓", Colors.GREEN, bold=True, stream=stream) + " " + message, file=stream)


def print_error(message: str, stream: TextIO | None = None) -> None:
    stream = stream or sys.stderr
    print(colorize("✗", Colors.RED, bold=True, stream=stream) + " " + message, file=stream)


def print_warning(message: str, stream: TextIO | None = None) -> None:
    stream = stream or sys.stdout
    print(colorize("⚠", Colors.YELLOW, bold=True, stream=stream) + " " + message, file=stream)


def print_header(message: str, stream: TextIO | None = None) -> None:
    stream = stream or sys.stdout
    print(colorize(message, Colors.CYAN, bold=True, stream=stream), file=stream)


def print_summary_box(
    title: str, items: Sequence[tuple[str, str | int]], stream: TextIO | None = None
) -> None:
    """Print a formatted summary box with key-value pairs."""
    stream = stream or sys.stdout
    max_key_len = max((len(k) for k, _ in items), default=0)

    print(colorize(f"\n{title}", Colors.CYAN, bold=True, stream=stream), file=stream)
    print(colorize("─" * 60, Colors.DIM, stream=stream), file=stream)
    for key, value in items:
        value_str = str(value)
        if isinstance(value, int) and value > 0:
            value_str = colorize(value_str, Colors.GREEN, bold=True, stream=stream)
        print(f"  {key.ljust(max_key_len)}  {value_str}", file=stream)
    print(colorize("─" * 60, Colors.DIM, stream=stream), file=stream)


def _category_counts(release: ParsedRelease) -> str:
    counts = Counter(item.category or "uncategorized" for item in release.items)
    return ", ".join(f"{name}={counts[name]}" for name in sorted(counts))


def print_release_table(
    releases: Sequence[ParsedRelease], limit: int | None = None, stream: TextIO | None = None
) -> None:
    """One row per release: version, date, item count and category mix.

    Releases with no items are dimmed; rows beyond ``limit`` collapse into a
    trailing ``... (N more)`` line.
    """
    stream = stream or sys.stdout
    shown = releases if limit is None else releases[:limit]
    for release in shown:
        row = f"  {release.version:<10} {release.release_date[:10]}  items: {len(release.items)}"
        if not release.items:
            print(colorize(row, Colors.DIM, stream=stream), file=stream)
            continue
        mix = colorize(f"({_category_counts(release)})", Colors.DIM, stream=stream)
        print(f"{row}  {mix}", file=stream)
    hidden = len(releases) - len(shown)
    if hidden > 0:
        print(f"  ... ({hidden} more)", file=stream)


__all__ = [
    "print_release_table",
    "Colors",
    "colorize",
    "print_success",
    "print_error",
    "print_warning",
    "print_header",
    "print_summary_box",
]
