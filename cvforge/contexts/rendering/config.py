"""
Page Geometry and Style Configuration

Defines the page canvas and the per-element typography used by the layout
engine, plus composable named presets loaded from YAML.

Presets are applied in order over the defaults, later presets overriding
earlier ones. Each preset may override keys under `geometry` and `style`,
which must already exist in the default structure.

Examples:
    # US Letter with the classic palette
    >>> geometry, style = load_layout_config(["page_letter", "palette_classic"])

    # A4 with tighter spacing and narrow margins
    >>> geometry, style = load_layout_config(["spacing_compact", "margins_narrow"])
"""

import os
from dataclasses import asdict, dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from cvforge.contexts.rendering.draw_ops import Color, FontFace
from cvforge.contexts.rendering.exceptions import LayoutConfigError

load_dotenv()
LAYOUT_PRESETS_PATH = Path(
    os.getenv("LAYOUT_PRESETS_PATH", Path(__file__).parent / "presets.yaml")
)


class ColorRole(str, Enum):
    """Palette slot an element is drawn in."""

    PRIMARY = "primary"
    ACCENT = "accent"
    MUTED = "muted"


@dataclass(frozen=True)
class PageGeometry:
    """
    Fixed page canvas, in points. Defaults to A4 portrait.

    Attributes:
        page_width: Page width
        page_height: Page height
        margin: Margin applied on all four sides
    """

    page_width: float = 595.28
    page_height: float = 841.89
    margin: float = 50.0

    def __post_init__(self):
        if self.margin < 0:
            raise LayoutConfigError(f"Margin must not be negative, got {self.margin}")
        if self.content_width <= 0 or self.content_height <= 0:
            raise LayoutConfigError(
                f"No room for content: {self.page_width}x{self.page_height} page "
                f"with {self.margin} margins"
            )

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def content_height(self) -> float:
        return self.page_height - 2 * self.margin

    @property
    def top(self) -> float:
        """Cursor position at the top of a fresh page."""
        return self.page_height - self.margin


@dataclass(frozen=True)
class ElementStyle:
    """
    Typography of one element class.

    Attributes:
        size: Font size in points
        font: Regular or bold face
        color: Palette slot
        advance: Vertical cursor advance after the element is drawn
    """

    size: float
    font: FontFace
    color: ColorRole
    advance: float


@dataclass(frozen=True)
class StyleConfig:
    """
    Typography, palette and spacing of the CV layout.

    Element advances are fixed constants: they do not depend on font metrics.
    """

    name: ElementStyle = ElementStyle(24.0, FontFace.BOLD, ColorRole.PRIMARY, 28.0)
    title: ElementStyle = ElementStyle(12.0, FontFace.REGULAR, ColorRole.ACCENT, 20.0)
    contact: ElementStyle = ElementStyle(9.0, FontFace.REGULAR, ColorRole.MUTED, 20.0)
    heading: ElementStyle = ElementStyle(11.0, FontFace.BOLD, ColorRole.PRIMARY, 6.0)
    body: ElementStyle = ElementStyle(10.0, FontFace.REGULAR, ColorRole.MUTED, 14.0)

    primary_color: Color = (0.169, 0.176, 0.329)
    accent_color: Color = (1.0, 0.463, 0.361)
    muted_color: Color = (0.4, 0.4, 0.45)

    # Full-width divider under the header
    divider_thickness: float = 1.0
    divider_gap: float = 20.0

    # Short rule under each section heading
    underline_width: float = 60.0
    underline_thickness: float = 2.0
    underline_gap: float = 14.0

    summary_gap: float = 10.0
    section_gap: float = 12.0
    # Space a section needs below the cursor to start on the current page
    section_min_space: float = 40.0

    contact_separator: str = "  |  "

    def color(self, role: ColorRole) -> Color:
        """Resolve a palette slot to its RGB color."""
        return {
            ColorRole.PRIMARY: self.primary_color,
            ColorRole.ACCENT: self.accent_color,
            ColorRole.MUTED: self.muted_color,
        }[role]


def load_layout_presets(config_path: Path = None) -> Dict[str, Any]:
    """
    Load the presets YAML file and flatten it to a single-level dict.

    Collapses nested structure: page.letter -> page_letter

    Args:
        config_path: Optional path to config file (defaults to LAYOUT_PRESETS_PATH)

    Returns:
        Flattened dict mapping preset names to configs
        Example: {"page_letter": {"geometry": {...}}, "palette_mono": {"style": {...}}}
    """
    if config_path is None:
        config_path = LAYOUT_PRESETS_PATH

    nested = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    flattened = {}
    for category, presets in nested.items():
        for name, config in presets.items():
            flattened[f"{category}_{name}"] = config

    return flattened


def load_layout_config(
    preset_names: Optional[List[str]] = None,
    config_path: Path = None,
) -> Tuple[PageGeometry, StyleConfig]:
    """
    Build page geometry and style from the defaults plus named presets.

    Args:
        preset_names: Presets to apply in order (e.g., ["page_letter", "spacing_compact"])
        config_path: Optional path to the presets file (defaults to LAYOUT_PRESETS_PATH)

    Returns:
        Tuple of (PageGeometry, StyleConfig)

    Raises:
        LayoutConfigError: If a preset is unknown, sets a key that doesn't exist,
            or produces an invalid value
    """
    base = OmegaConf.create(
        {"geometry": _to_plain(PageGeometry()), "style": _to_plain(StyleConfig())}
    )
    # Struct mode: merging a key that the defaults don't have is an error
    OmegaConf.set_struct(base, True)

    merged = base
    if preset_names:
        presets_dict = load_layout_presets(config_path)
        for preset_name in preset_names:
            if preset_name not in presets_dict:
                available = sorted(presets_dict.keys())
                raise LayoutConfigError(
                    f"Preset '{preset_name}' not found. Available presets: {available}"
                )
            try:
                merged = OmegaConf.merge(merged, presets_dict[preset_name])
            except OmegaConfBaseException as e:
                raise LayoutConfigError(f"Invalid preset '{preset_name}': {e}") from e

    values = OmegaConf.to_container(merged, resolve=True)
    try:
        geometry = PageGeometry(**{k: float(v) for k, v in values["geometry"].items()})
        style = _build_style(values["style"])
    except LayoutConfigError:
        raise
    except (TypeError, ValueError) as e:
        raise LayoutConfigError(f"Invalid layout configuration: {e}") from e

    return geometry, style


def _to_plain(config) -> Dict[str, Any]:
    """Dataclass -> YAML-compatible dict (enums as values, tuples as lists)."""

    def convert(value):
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, dict):
            return {k: convert(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [convert(v) for v in value]
        return value

    return convert(asdict(config))


def _build_color(value) -> Color:
    if len(value) != 3 or not all(0.0 <= float(c) <= 1.0 for c in value):
        raise LayoutConfigError(f"Color must be three components in [0, 1], got {value}")
    return tuple(float(c) for c in value)


def _build_style(values: Dict[str, Any]) -> StyleConfig:
    kwargs = {}
    for f in fields(StyleConfig):
        value = values[f.name]
        if f.type is ElementStyle:
            kwargs[f.name] = ElementStyle(
                size=float(value["size"]),
                font=FontFace(value["font"]),
                color=ColorRole(value["color"]),
                advance=float(value["advance"]),
            )
        elif f.name.endswith("_color"):
            kwargs[f.name] = _build_color(value)
        elif f.type is str:
            kwargs[f.name] = str(value)
        else:
            kwargs[f.name] = float(value)
    return StyleConfig(**kwargs)
