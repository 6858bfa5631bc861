"""Feature table for generated scaffolds.

The catalog is an injected value: the service builds one from
:meth:`FeatureCatalog.default` or from a JSON file, and tests build their own.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from pydantic import TypeAdapter

from goscaffold.models import FeatureDescriptor

_DESCRIPTOR_LIST = TypeAdapter(list[FeatureDescriptor])

DEFAULT_FEATURES: tuple[FeatureDescriptor, ...] = (
    FeatureDescriptor(
        id="access-logging",
        name="Access Logging",
        description="Middleware for logging all requests and responses",
    ),
    FeatureDescriptor(
        id="admin-makefile",
        name="Admin Makefile",
        description="Makefile with common development tasks",
    ),
    FeatureDescriptor(
        id="automatic-versioning",
        name="Automatic Versioning",
        description="Use VCS revision as version number",
    ),
    FeatureDescriptor(
        id="basic-auth",
        name="Basic Authentication",
        description="HTTP basic authentication middleware",
    ),
    FeatureDescriptor(
        id="email",
        name="Email Support",
        description="Helpers for sending emails via SMTP",
    ),
    FeatureDescriptor(
        id="error-notifications",
        name="Error Notifications",
        description="Send error alerts to admin email",
    ),
    FeatureDescriptor(
        id="gitignore",
        name="Gitignore",
        description="Common .gitignore file for Go projects",
    ),
    FeatureDescriptor(
        id="live-reload",
        name="Live Reload",
        description="Auto-rebuild and restart during development",
    ),
    FeatureDescriptor(
        id="secure-cookies",
        name="Secure Cookies",
        description="Signed and encrypted cookie support",
    ),
    FeatureDescriptor(
        id="sql-migrations",
        name="SQL Migrations",
        description="Database migration tools",
    ),
    FeatureDescriptor(
        id="automatic-https",
        name="Automatic HTTPS",
        description="TLS certificate management via Let's Encrypt",
        is_premium=True,
    ),
    FeatureDescriptor(
        id="custom-error-pages",
        name="Custom Error Pages",
        description="Custom HTML pages for error responses",
        is_premium=True,
    ),
    FeatureDescriptor(
        id="user-accounts",
        name="User Accounts",
        description="User authentication and management",
        is_premium=True,
    ),
)


class FeatureCatalog:
    """Read-only lookup table of :class:`FeatureDescriptor` entries.

    Order is preserved as given; a duplicate id keeps the last descriptor.
    """

    def __init__(self, features: Iterable[FeatureDescriptor]) -> None:
        self._features: dict[str, FeatureDescriptor] = {}
        for feature in features:
            self._features[feature.id] = feature

    @classmethod
    def default(cls) -> "FeatureCatalog":
        """The built-in table: ten regular and three premium features."""
        return cls(DEFAULT_FEATURES)

    @classmethod
    def from_file(cls, path: str | Path) -> "FeatureCatalog":
        """Load a JSON array of feature descriptors.

        Raises:
            FileNotFoundError: If *path* does not exist.
            pydantic.ValidationError: If an entry is malformed.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls(_DESCRIPTOR_LIST.validate_json(raw))

    # -- Queries -----------------------------------------------------------

    def all(self) -> list[FeatureDescriptor]:
        return list(self._features.values())

    def regular(self) -> list[FeatureDescriptor]:
        return [f for f in self._features.values() if not f.is_premium]

    def premium(self) -> list[FeatureDescriptor]:
        return [f for f in self._features.values() if f.is_premium]

    def get(self, feature_id: str) -> Optional[FeatureDescriptor]:
        return self._features.get(feature_id)

    def is_available(self, feature_id: str, *, premium: bool) -> bool:
        """True if *feature_id* exists at exactly the requested tier."""
        feature = self._features.get(feature_id)
        return feature is not None and feature.is_premium == premium

    def __contains__(self, feature_id: object) -> bool:
        return feature_id in self._features

    def __len__(self) -> int:
        return len(self._features)
