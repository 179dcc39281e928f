#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_color_and_options.py
"""Unit tests for cursor color conversion and the option dataclasses."""

from dataclasses import FrozenInstanceError

import pytest

from mathedit.exceptions import ValidationError
from mathedit.options import EditorOptions, TeXRendererOptions
from mathedit.utils import to_hex


@pytest.mark.unit
class TestToHex:
    """Tests for color normalization."""

    @pytest.mark.parametrize(
        "color,expected",
        [
            ("#ff0000", "#ff0000"),
            ("#FF0000", "#ff0000"),
            ("ff0000", "#ff0000"),
            ("#f00", "#ff0000"),
            ("abc", "#aabbcc"),
            ("red", "#ff0000"),
            (" Blue ", "#0000ff"),
            ((0, 128, 255), "#0080ff"),
            ([255, 255, 255], "#ffffff"),
            ((1.0, 0.0, 0.5), "#ff0080"),
            ((0.0, 0.0, 0.0), "#000000"),
        ],
    )
    def test_valid(self, color, expected):
        """Test accepted color forms."""
        assert to_hex(color) == expected

    @pytest.mark.parametrize(
        "color",
        [
            "#ff00",
            "#gg0000",
            "chartreuse-ish",
            "",
            (256, 0, 0),
            (-1, 0, 0),
            (1.5, 0.0, 0.0),
            (0, 0),
            (0, 0, 0, 0),
            (True, 0, 0),
            ("255", 0, 0),
            None,
            0xFF0000,
        ],
    )
    def test_invalid(self, color):
        """Test rejected color values."""
        with pytest.raises(ValidationError):
            to_hex(color)


@pytest.mark.unit
class TestTeXRendererOptions:
    """Tests for renderer options."""

    def test_defaults(self):
        """Test the default markup tokens."""
        options = TeXRendererOptions()
        assert options.placeholder == r"\Box"
        assert options.cursor_glyph == r"\cursor"
        assert options.color_command == r"\textcolor"
        assert options.separate_commands is True
        assert options.fail_on_invalid_tree is False

    def test_frozen(self):
        """Test options cannot be mutated in place."""
        with pytest.raises(FrozenInstanceError):
            TeXRendererOptions().placeholder = "x"  # type: ignore[misc]

    def test_create_updated(self):
        """Test deriving a modified copy."""
        options = TeXRendererOptions()
        updated = options.create_updated(placeholder=r"\square")
        assert updated.placeholder == r"\square"
        assert options.placeholder == r"\Box"

    def test_empty_glyph_rejected(self):
        """Test the cursor glyph cannot be empty."""
        with pytest.raises(ValueError):
            TeXRendererOptions(cursor_glyph="")

    def test_color_command_must_be_command(self):
        """Test the color command needs a backslash and a name."""
        with pytest.raises(ValueError):
            TeXRendererOptions(color_command="textcolor")
        with pytest.raises(ValueError):
            TeXRendererOptions(color_command="\\")

    def test_from_mapping_dashes(self):
        """Test mapping keys may use dashes."""
        options = TeXRendererOptions.from_mapping({"separate-commands": False, "placeholder": "?"})
        assert options.separate_commands is False
        assert options.placeholder == "?"

    def test_from_mapping_unknown_key(self):
        """Test unknown keys are rejected with the valid names listed."""
        with pytest.raises(ValidationError) as exc_info:
            TeXRendererOptions.from_mapping({"glyph": "x"})
        assert exc_info.value.parameter_name == "glyph"
        assert "cursor_glyph" in str(exc_info.value)


@pytest.mark.unit
class TestEditorOptions:
    """Tests for controller options."""

    def test_defaults(self):
        """Test default editor options."""
        options = EditorOptions()
        assert options.cursor_color == "#000000"
        assert options.placeholder_when_empty is True
        assert options.validate_edits is False
        assert options.renderer == TeXRendererOptions()

    def test_color_normalized(self):
        """Test the cursor color is stored as #rrggbb."""
        assert EditorOptions(cursor_color="Red").cursor_color == "#ff0000"
        assert EditorOptions(cursor_color=(0, 0, 255)).cursor_color == "#0000ff"

    def test_invalid_color(self):
        """Test an invalid cursor color is rejected at construction."""
        with pytest.raises(ValidationError):
            EditorOptions(cursor_color="nope")

    def test_create_updated_normalizes(self):
        """Test derived copies normalize their color too."""
        assert EditorOptions().create_updated(cursor_color="#0F0").cursor_color == "#00ff00"

    def test_from_mapping_nested_renderer(self):
        """Test a nested renderer table becomes renderer options."""
        options = EditorOptions.from_mapping(
            {"cursor-color": "blue", "renderer": {"placeholder": r"\square", "separate_commands": False}}
        )
        assert options.cursor_color == "#0000ff"
        assert options.renderer.placeholder == r"\square"
        assert options.renderer.separate_commands is False

    def test_from_mapping_unknown_nested_key(self):
        """Test unknown keys in the renderer table are rejected."""
        with pytest.raises(ValidationError):
            EditorOptions.from_mapping({"renderer": {"bogus": 1}})
