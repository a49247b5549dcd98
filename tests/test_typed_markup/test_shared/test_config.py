"""Tests for the configuration system."""

import json
from dataclasses import FrozenInstanceError

import pytest

from typed_markup.shared.config import (
    ConfigError,
    ConfigValidationError,
    DateConfig,
    DocumentConfig,
    GlobalConfig,
    Indentation,
    IndentationKind,
    MarkupConfig,
    RenderConfig,
)


class TestIndentation:
    """Test suite for Indentation."""

    def test_spaces_unit(self):
        """Test that spaces indentation repeats a space."""
        assert Indentation.spaces(2).unit == "  "
        assert Indentation.spaces().unit == "    "

    def test_tabs_unit(self):
        """Test that tabs indentation repeats a tab."""
        assert Indentation.tabs().unit == "\t"
        assert Indentation.tabs(2).unit == "\t\t"

    def test_zero_count_is_allowed(self):
        """Test that a zero count yields an empty unit."""
        assert Indentation.spaces(0).unit == ""

    def test_negative_count_rejected(self):
        """Test that negative counts are rejected."""
        with pytest.raises(ValueError, match="indentation count"):
            Indentation.spaces(-1)

    def test_equality(self):
        """Test value equality of indentation settings."""
        assert Indentation.spaces(4) == Indentation(IndentationKind.SPACES, 4)
        assert Indentation.spaces(1) != Indentation.tabs(1)


class TestComponentConfigs:
    """Test suite for component configuration classes."""

    def test_render_defaults(self):
        """Test default render configuration."""
        config = RenderConfig()
        assert config.indentation is None
        assert config.max_depth == 500

    def test_render_validation(self):
        """Test render configuration validation."""
        with pytest.raises(ValueError, match="max_depth"):
            RenderConfig(max_depth=0)
        with pytest.raises(ValueError, match="indentation"):
            RenderConfig(indentation=4)

    def test_document_defaults(self):
        """Test default document configuration."""
        config = DocumentConfig()
        assert config.xml_version == "1.0"
        assert config.encoding == "UTF-8"
        assert config.include_declaration is True

    def test_document_validation(self):
        """Test document configuration validation."""
        with pytest.raises(ValueError, match="xml_version"):
            DocumentConfig(xml_version="2.0")
        with pytest.raises(ValueError, match="encoding"):
            DocumentConfig(encoding="")

    def test_date_validation(self):
        """Test date configuration validation."""
        assert DateConfig().default_time_zone == "UTC"
        with pytest.raises(ValueError, match="default_time_zone"):
            DateConfig(default_time_zone="")

    def test_global_validation(self):
        """Test global configuration validation."""
        assert GlobalConfig().logging_level == "WARNING"
        with pytest.raises(ValueError, match="logging_level"):
            GlobalConfig(logging_level="LOUD")

    @pytest.mark.parametrize(
        "component, field_name, value",
        [
            ("render", "max_depth", 0),
            ("document", "include_declaration", False),
            ("dates", "default_time_zone", "Asia/Tokyo"),
            ("global_", "logging_level", "DEBUG"),
        ],
    )
    def test_components_are_immutable(self, component, field_name, value):
        config = MarkupConfig()
        with pytest.raises(FrozenInstanceError):
            setattr(getattr(config, component), field_name, value)


class TestMarkupConfig:
    """Test suite for MarkupConfig."""

    def test_default_configuration(self):
        """Test default configuration values."""
        config = MarkupConfig()
        assert config.render.indentation is None
        assert config.document.include_declaration is True
        assert config.dates.default_time_zone == "UTC"
        assert config.global_.enable_correlation_tracking is True
        assert config.name is None

    def test_presets(self):
        """Test the compact and pretty presets."""
        assert MarkupConfig.compact().render.indentation is None
        assert MarkupConfig.compact().name == "compact"

        pretty = MarkupConfig.pretty(indent=2)
        assert pretty.render.indentation == Indentation.spaces(2)
        assert pretty.name == "pretty"

    def test_unknown_time_zone_rejected(self):
        """Test that the default time zone must resolve."""
        with pytest.raises(ConfigValidationError) as exc_info:
            MarkupConfig(dates=DateConfig(default_time_zone="Nowhere/Atlantis"))
        assert exc_info.value.field_name == "dates.default_time_zone"

    def test_known_time_zone_accepted(self):
        """Test that IANA names are accepted."""
        config = MarkupConfig(dates=DateConfig(default_time_zone="Europe/Stockholm"))
        assert config.dates.default_time_zone == "Europe/Stockholm"

    def test_override_nested_field(self):
        """Test component__field overrides."""
        config = MarkupConfig()
        new_config = config.override(
            render__indentation=Indentation.tabs(),
            document__include_declaration=False,
        )

        assert new_config.render.indentation == Indentation.tabs()
        assert new_config.document.include_declaration is False
        # Original is untouched
        assert config.render.indentation is None
        assert config.document.include_declaration is True

    def test_override_top_level_field(self):
        """Test overriding a top-level field."""
        config = MarkupConfig().override(name="custom")
        assert config.name == "custom"

    def test_override_unknown_component(self):
        """Test that unknown components are rejected."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration component"):
            MarkupConfig().override(renderer__max_depth=3)

    def test_override_invalid_value(self):
        """Test that invalid override values are reported as validation errors."""
        with pytest.raises(ConfigValidationError, match="max_depth"):
            MarkupConfig().override(render__max_depth=0)

    def test_validation_error_is_config_error(self):
        """Test the exception hierarchy."""
        assert issubclass(ConfigValidationError, ConfigError)

    def test_to_dict(self):
        """Test conversion to a dictionary."""
        data = MarkupConfig.pretty(indent=2).to_dict()

        assert data["render"]["indentation"] == {"kind": "SPACES", "count": 2}
        assert data["render"]["max_depth"] == 500
        assert data["document"]["encoding"] == "UTF-8"
        assert data["global_"]["logging_level"] == "WARNING"
        assert data["name"] == "pretty"

    def test_json_round_trip(self):
        """Test that a configuration survives JSON serialization."""
        original = MarkupConfig.pretty(indent=3).override(
            dates__default_time_zone="Europe/Paris"
        )
        restored = MarkupConfig.from_json(original.to_json())

        assert restored == original
        assert json.loads(original.to_json())["dates"]["default_time_zone"] == "Europe/Paris"

    def test_from_dict_tabs_indentation(self):
        """Test indentation described by kind name."""
        config = MarkupConfig.from_dict(
            {"render": {"indentation": {"kind": "TABS", "count": 1}}}
        )
        assert config.render.indentation == Indentation.tabs(1)

    def test_from_dict_unknown_key(self):
        """Test that unknown keys are not silently dropped."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration key") as exc_info:
            MarkupConfig.from_dict({"rendering": {}})
        assert "render" in exc_info.value.suggestions

    def test_from_dict_unknown_field(self):
        """Test that unknown fields in a component are rejected."""
        with pytest.raises(ConfigValidationError) as exc_info:
            MarkupConfig.from_dict({"render": {"colour": "blue"}})
        assert exc_info.value.field_name == "render"

    def test_from_dict_bad_indentation_kind(self):
        """Test that unknown indentation kinds are rejected."""
        with pytest.raises(ConfigValidationError, match="Unknown indentation kind"):
            MarkupConfig.from_dict({"render": {"indentation": {"kind": "DOTS"}}})

    def test_from_json_invalid(self):
        """Test invalid JSON handling."""
        with pytest.raises(ConfigValidationError, match="Invalid configuration JSON"):
            MarkupConfig.from_json("{not json")
        with pytest.raises(ConfigValidationError, match="must be an object"):
            MarkupConfig.from_json("[1, 2]")
