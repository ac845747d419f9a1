"""
Greedy word-wrapping against an injected width measurement.

Width measurement depends on the font backend, so it is passed in as a plain
callable `measure_width(text, size) -> width` in the same units as the page
geometry. Any failure to measure is fatal: a guessed width would silently
corrupt the wrapping.

Consecutive spaces are not preserved: words are rejoined with single spaces.
"""

import math
from typing import Callable, List

from cvforge.contexts.rendering.exceptions import MeasurementError

MeasureWidth = Callable[[str, float], float]


def measure(measure_width: MeasureWidth, text: str, size: float) -> float:
    """
    Measure text, converting any failure into MeasurementError.

    Raises:
        MeasurementError: If measurement raises, or returns a negative or non-finite width
    """
    try:
        width = measure_width(text, size)
    except MeasurementError:
        raise
    except Exception as e:
        raise MeasurementError("Width measurement failed", text=text, size=size, original_error=e) from e

    if isinstance(width, bool) or not isinstance(width, (int, float)):
        raise MeasurementError(
            f"Width measurement returned {type(width).__name__}", text=text, size=size
        )
    if not math.isfinite(width) or width < 0:
        raise MeasurementError(f"Width measurement returned {width}", text=text, size=size)

    return float(width)


def wrap_text(
    paragraph: str, measure_width: MeasureWidth, size: float, max_width: float
) -> List[str]:
    """
    Break a single paragraph into lines no wider than max_width.

    Words are accumulated greedily. When adding the next word would exceed
    max_width and the line already has a word, the line is flushed and the word
    starts the next one. A word wider than max_width on its own gets a line to
    itself; words are never split.

    Args:
        paragraph: Text without newlines
        measure_width: Width of text at a font size
        size: Font size
        max_width: Maximum line width

    Returns:
        Wrapped lines; empty for a blank paragraph

    Example:
        >>> wrap_text("aa bb cc", lambda text, size: len(text), 10, 5)
        ['aa bb', 'cc']
    """
    words = [word for word in paragraph.split(" ") if word]

    lines = []
    current_line = ""
    for word in words:
        candidate = f"{current_line} {word}" if current_line else word
        if measure(measure_width, candidate, size) > max_width and current_line:
            lines.append(current_line)
            current_line = word
        else:
            current_line = candidate

    if current_line:
        lines.append(current_line)

    return lines


def wrap_paragraphs(
    text: str, measure_width: MeasureWidth, size: float, max_width: float
) -> List[str]:
    """
    Wrap text containing hard line breaks.

    The text is split on newlines and each paragraph is wrapped independently.
    A blank paragraph yields a single "" entry, which the layout renders as
    vertical space only.

    Returns:
        Wrapped lines in order, "" for blank lines
    """
    lines = []
    for paragraph in text.split("\n"):
        paragraph = paragraph.rstrip("\r")
        if not paragraph.strip():
            lines.append("")
            continue
        lines.extend(wrap_text(paragraph, measure_width, size, max_width))
    return lines
