"""
Draw Operation Data Structures

Positioned drawing primitives produced by the layout engine and consumed by the
PDF writer. Coordinates are in points with the origin at the bottom-left of the
page. All structures are immutable.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

# RGB components in [0, 1]
Color = Tuple[float, float, float]


class FontFace(str, Enum):
    """The two font faces available to the layout."""

    REGULAR = "regular"
    BOLD = "bold"


@dataclass(frozen=True)
class TextOp:
    """Draw one pre-wrapped line of text with its baseline at (x, y)."""

    x: float
    y: float
    content: str
    font: FontFace
    size: float
    color: Color


@dataclass(frozen=True)
class LineOp:
    """Draw a straight line segment."""

    start_x: float
    start_y: float
    end_x: float
    end_y: float
    thickness: float
    color: Color


DrawOp = Union[TextOp, LineOp]


@dataclass(frozen=True)
class Page:
    """
    One fixed-size page of output.

    Attributes:
        ops: Draw operations in drawing order
    """

    ops: Tuple[DrawOp, ...] = ()

    @property
    def text_ops(self) -> Tuple[TextOp, ...]:
        return tuple(op for op in self.ops if isinstance(op, TextOp))

    @property
    def lines(self) -> Tuple[str, ...]:
        """Text content of every text op, top to bottom."""
        return tuple(op.content for op in self.text_ops)
