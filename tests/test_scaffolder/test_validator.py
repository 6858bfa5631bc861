"""Tests for generation-options validation."""

from __future__ import annotations

import pytest

from goscaffold.errors import OptionsValidationError
from goscaffold.models import GenerationOptions
from goscaffold.scaffolder.features import FeatureCatalog
from goscaffold.scaffolder.validator import OptionsValidator

pytestmark = pytest.mark.unit


@pytest.fixture
def validator(feature_catalog: FeatureCatalog) -> OptionsValidator:
    return OptionsValidator(feature_catalog)


def options(**overrides) -> GenerationOptions:
    values = {"category": "api", "variant": "echo", "module_path": "github.com/acme/shop"}
    values.update(overrides)
    return GenerationOptions(**values)


class TestValidOptions:
    def test_minimal(self, validator: OptionsValidator):
        assert validator.check(options()) == []
        validator.validate(options())

    def test_everything_set(self, validator: OptionsValidator):
        opts = options(
            category="webapp",
            variant="standard",
            database_type="postgresql",
            config_type="flags",
            log_format="json",
            features=["basic-auth", "gitignore"],
            premium_features=["automatic-https"],
        )
        assert validator.check(opts) == []

    def test_unknown_variant_is_not_a_validation_error(self, validator: OptionsValidator):
        assert validator.check(options(variant="fiber")) == []


class TestSingleFailures:
    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"category": "cli"}, "invalid application type"),
            ({"category": ""}, "invalid application type"),
            ({"category": "API"}, "invalid application type"),
            ({"variant": ""}, "router type is required"),
            ({"variant": "   "}, "router type is required"),
            ({"module_path": ""}, "module path is required"),
            ({"module_path": " \t"}, "module path is required"),
            ({"features": ["teleport"]}, "invalid feature: teleport"),
            ({"premium_features": ["teleport"]}, "invalid premium feature: teleport"),
            ({"database_type": "oracle"}, "invalid database type: oracle"),
            ({"config_type": "yaml"}, "invalid config type: yaml"),
            ({"log_format": "xml"}, "invalid log format: xml"),
        ],
    )
    def test_message(self, validator: OptionsValidator, overrides, message):
        with pytest.raises(OptionsValidationError) as exc_info:
            validator.validate(options(**overrides))
        assert str(exc_info.value) == message
        assert exc_info.value.errors == [message]

    def test_premium_feature_in_regular_list(self, validator: OptionsValidator):
        assert validator.check(options(features=["user-accounts"])) == [
            "invalid feature: user-accounts"
        ]

    def test_regular_feature_in_premium_list(self, validator: OptionsValidator):
        assert validator.check(options(premium_features=["gitignore"])) == [
            "invalid premium feature: gitignore"
        ]


class TestMultipleFailures:
    def test_all_collected_in_check_order(self, validator: OptionsValidator):
        opts = GenerationOptions(
            category="desktop",
            variant="",
            module_path="",
            features=["a", "basic-auth", "b"],
            premium_features=["c"],
            database_type="oracle",
        )
        assert validator.check(opts) == [
            "invalid application type",
            "router type is required",
            "module path is required",
            "invalid feature: a",
            "invalid feature: b",
            "invalid premium feature: c",
            "invalid database type: oracle",
        ]

    def test_message_is_first_failure(self, validator: OptionsValidator):
        with pytest.raises(OptionsValidationError) as exc_info:
            validator.validate(GenerationOptions())
        assert str(exc_info.value) == "invalid application type"
        assert len(exc_info.value.errors) == 3


def test_custom_categories(feature_catalog: FeatureCatalog):
    validator = OptionsValidator(feature_catalog, categories=["cli"])
    assert validator.check(options(category="cli")) == []
    assert validator.check(options(category="api")) == ["invalid application type"]


def test_custom_feature_table():
    validator = OptionsValidator(FeatureCatalog([]))
    assert validator.check(options(features=["basic-auth"])) == ["invalid feature: basic-auth"]
