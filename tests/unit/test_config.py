"""
Unit tests for layout configuration and presets.
"""

import pytest

from cvforge.contexts.rendering.config import (
    ColorRole,
    PageGeometry,
    StyleConfig,
    load_layout_config,
    load_layout_presets,
)
from cvforge.contexts.rendering.draw_ops import FontFace
from cvforge.contexts.rendering.exceptions import LayoutConfigError


@pytest.mark.unit
class TestPageGeometry:
    """Tests for PageGeometry."""

    def test_defaults_are_a4(self):
        geometry = PageGeometry()
        assert (geometry.page_width, geometry.page_height) == (595.28, 841.89)
        assert geometry.content_width == pytest.approx(495.28)
        assert geometry.top == pytest.approx(791.89)

    def test_negative_margin_rejected(self):
        with pytest.raises(LayoutConfigError):
            PageGeometry(margin=-1.0)

    def test_margin_leaving_no_content_rejected(self):
        with pytest.raises(LayoutConfigError, match="No room for content"):
            PageGeometry(page_width=100.0, page_height=100.0, margin=50.0)

    def test_layout_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            PageGeometry(margin=-5.0)


@pytest.mark.unit
class TestStyleConfig:
    """Tests for StyleConfig defaults."""

    def test_element_defaults(self):
        style = StyleConfig()
        assert (style.name.size, style.name.font) == (24.0, FontFace.BOLD)
        assert style.body.advance == 14.0
        assert style.heading.font is FontFace.BOLD

    def test_color_roles_resolve(self):
        style = StyleConfig()
        assert style.color(ColorRole.PRIMARY) == style.primary_color
        assert style.color(ColorRole.ACCENT) == style.accent_color
        assert style.color(ColorRole.MUTED) == style.muted_color


@pytest.mark.unit
class TestLoadLayoutConfig:
    """Tests for load_layout_config() preset merging."""

    def test_no_presets_gives_defaults(self):
        geometry, style = load_layout_config()
        assert geometry == PageGeometry()
        assert style == StyleConfig()

    def test_presets_are_flattened(self):
        presets = load_layout_presets()
        assert "page_letter" in presets
        assert "palette_monochrome" in presets
        assert "spacing_compact" in presets

    def test_page_preset(self):
        geometry, _ = load_layout_config(["page_letter"])
        assert (geometry.page_width, geometry.page_height) == (612.0, 792.0)
        assert geometry.margin == 50.0

    def test_nested_style_override_keeps_other_keys(self):
        _, style = load_layout_config(["spacing_compact"])
        assert style.body.size == 9.5
        assert style.body.advance == 12.5
        assert style.body.font is FontFace.REGULAR
        assert style.body.color is ColorRole.MUTED

    def test_later_presets_win(self):
        geometry, _ = load_layout_config(["margins_narrow", "margins_wide"])
        assert geometry.margin == 72.0

    def test_palette_colors_are_tuples(self):
        _, style = load_layout_config(["palette_monochrome"])
        assert style.primary_color == (0.0, 0.0, 0.0)

    def test_unknown_preset(self):
        with pytest.raises(LayoutConfigError, match="not found"):
            load_layout_config(["page_tabloid"])

    def test_unknown_key_rejected(self, tmp_path):
        config_path = tmp_path / "presets.yaml"
        config_path.write_text("page:\n  odd:\n    geometry:\n      bleed: 3\n")

        with pytest.raises(LayoutConfigError, match="page_odd"):
            load_layout_config(["page_odd"], config_path=config_path)

    def test_impossible_geometry_rejected(self, tmp_path):
        config_path = tmp_path / "presets.yaml"
        config_path.write_text("margins:\n  huge:\n    geometry:\n      margin: 400\n")

        with pytest.raises(LayoutConfigError):
            load_layout_config(["margins_huge"], config_path=config_path)

    def test_bad_color_rejected(self, tmp_path):
        config_path = tmp_path / "presets.yaml"
        config_path.write_text("palette:\n  neon:\n    style:\n      accent_color: [2, 0, 0]\n")

        with pytest.raises(LayoutConfigError, match="Color"):
            load_layout_config(["palette_neon"], config_path=config_path)

    def test_bad_font_rejected(self, tmp_path):
        config_path = tmp_path / "presets.yaml"
        config_path.write_text("type:\n  fancy:\n    style:\n      body:\n        font: italic\n")

        with pytest.raises(LayoutConfigError):
            load_layout_config(["type_fancy"], config_path=config_path)
