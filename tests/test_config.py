"""Unit tests for form configuration resolution."""

import pytest

from formstate.config import FormConfig
from formstate.errors import FormConfigError


def name(form, run_async_check):
    if not (form.get("name") or "").strip():
        return "Name is required"


def email(form, run_async_check):
    return None


class TestFormConfigResolution:
    """Test the three accepted configuration shapes."""

    def test_bare_validator_mapping(self):
        """Should treat a bare mapping as the validator map."""
        config = FormConfig.from_value({"name": name, "email": email})

        assert config.validators == {"name": name, "email": email}
        assert config.initial_values == {}
        assert config.fields == ["name", "email"]

    def test_validators_key(self):
        """Should take validators and initial values from their keys."""
        config = FormConfig.from_value({
            "validators": {"name": name},
            "initialValues": {"name": "Ada"},
        })

        assert config.fields == ["name"]
        assert config.initial_values == {"name": "Ada"}

    def test_initial_values_only(self):
        """Should use no validators when only initial values are given."""
        config = FormConfig.from_value({"initialValues": {"field": "test"}})

        assert config.validators == {}
        assert config.initial_values == {"field": "test"}

    def test_snake_case_initial_values(self):
        """Should accept the snake_case initial values key."""
        config = FormConfig.from_value({"initial_values": {"field": "test"}})

        assert config.validators == {}
        assert config.initial_values == {"field": "test"}

    def test_empty_validators_with_initial_values(self):
        """Should accept an empty validators mapping next to initial values."""
        config = FormConfig.from_value({"validators": {}, "initialValues": {"field": "test"}})

        assert config.validators == {}
        assert config.initial_values == {"field": "test"}

    def test_none_is_an_empty_form(self):
        """Should resolve None to a form without fields."""
        config = FormConfig.from_value(None)
        assert config.fields == []

    def test_form_config_passes_through(self):
        """Should return an existing FormConfig unchanged."""
        config = FormConfig(validators={"name": name})
        assert FormConfig.from_value(config) is config

    def test_declaration_order_is_kept(self):
        """Should keep fields in declaration order."""
        config = FormConfig.from_value({"b": name, "a": email, "c": name})
        assert config.fields == ["b", "a", "c"]


class TestFormConfigErrors:
    """Test rejection of malformed configuration."""

    def test_non_callable_validator(self):
        """Should reject a validator that is not callable."""
        with pytest.raises(FormConfigError) as exc_info:
            FormConfig.from_value({"name": "not a function"})

        assert exc_info.value.field == "name"
        assert "callable" in str(exc_info.value)

    def test_non_mapping_config(self):
        """Should reject a configuration that is not a mapping."""
        with pytest.raises(FormConfigError, match="mapping"):
            FormConfig.from_value(["name"])

    def test_to_dict(self):
        """Should serialize with camelCase configuration keys."""
        config = FormConfig.from_value({"validators": {"name": name}, "initialValues": {"name": "Ada"}})
        assert config.to_dict() == {
            "validators": {"name": name},
            "initialValues": {"name": "Ada"},
        }
