"""Validation of :class:`GenerationOptions` before generation.

Every check runs, even after an earlier one has failed, so the caller always
gets the complete list of problems.  The raised error's message is the first
failure in check order.
"""

from __future__ import annotations

from typing import Iterable

from goscaffold.errors import OptionsValidationError
from goscaffold.models import GenerationOptions
from goscaffold.scaffolder.features import FeatureCatalog

DEFAULT_CATEGORIES: tuple[str, ...] = ("api", "webapp")
DATABASE_TYPES: tuple[str, ...] = ("none", "postgresql", "mysql", "sqlite")
CONFIG_TYPES: tuple[str, ...] = ("env", "flags")
LOG_FORMATS: tuple[str, ...] = ("json", "text")


class OptionsValidator:
    """Checks options against the category allow-list and the feature table."""

    def __init__(
        self,
        features: FeatureCatalog,
        categories: Iterable[str] = DEFAULT_CATEGORIES,
    ) -> None:
        self.features = features
        self.categories = tuple(categories)

    def check(self, options: GenerationOptions) -> list[str]:
        """Return every validation failure, in check order (empty when valid)."""
        errors: list[str] = []

        if options.category not in self.categories:
            errors.append("invalid application type")

        if not options.variant.strip():
            errors.append("router type is required")

        if not options.module_path.strip():
            errors.append("module path is required")

        for feature_id in options.features:
            if not self.features.is_available(feature_id, premium=False):
                errors.append(f"invalid feature: {feature_id}")

        for feature_id in options.premium_features:
            if not self.features.is_available(feature_id, premium=True):
                errors.append(f"invalid premium feature: {feature_id}")

        if options.database_type not in DATABASE_TYPES:
            errors.append(f"invalid database type: {options.database_type}")

        if options.config_type not in CONFIG_TYPES:
            errors.append(f"invalid config type: {options.config_type}")

        if options.log_format not in LOG_FORMATS:
            errors.append(f"invalid log format: {options.log_format}")

        return errors

    def validate(self, options: GenerationOptions) -> None:
        """Raise :class:`OptionsValidationError` if any check fails."""
        errors = self.check(options)
        if errors:
            raise OptionsValidationError(errors)
