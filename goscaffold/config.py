"""go-scaffold configuration.

Centralised, typed configuration for the service. All settings use Pydantic v2
models so they are validated at construction time and can be built from
environment variables without boiler-plate.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "scaffolder" / "templates"

_TRUTHY = {"1", "true", "yes", "on"}


class Config(BaseModel):
    """Global go-scaffold configuration.

    Instances are created once by the CLI or the app factory and then passed
    through the rest of the system.
    """

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8081, ge=1024, le=65535)
    template_dir: Path = Field(default=DEFAULT_TEMPLATE_DIR)
    work_dir: Path = Field(default_factory=lambda: Path(tempfile.gettempdir()) / "go-scaffold")
    archive_root: str = Field(default="codebase", min_length=1)
    template_suffix: str = Field(default=".j2", min_length=1)
    categories: list[str] = Field(default_factory=lambda: ["api", "webapp"])
    strict_variant_match: bool = Field(
        default=False,
        description="Fail instead of falling back to the first template set of a category",
    )
    features_file: Optional[Path] = Field(default=None)
    cleanup_on_shutdown: bool = Field(default=True)
    log_level: str = Field(default="INFO")

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            HOST, PORT, TEMPLATE_DIR, TEMP_DIR, LOG_LEVEL, FEATURES_FILE,
            STRICT_VARIANT_MATCH.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("HOST"):
            kwargs["host"] = os.environ["HOST"]
        if os.environ.get("PORT"):
            kwargs["port"] = int(os.environ["PORT"])
        if os.environ.get("TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["TEMPLATE_DIR"])
        if os.environ.get("TEMP_DIR"):
            kwargs["work_dir"] = Path(os.environ["TEMP_DIR"])
        if os.environ.get("LOG_LEVEL"):
            kwargs["log_level"] = os.environ["LOG_LEVEL"].upper()
        if os.environ.get("FEATURES_FILE"):
            kwargs["features_file"] = Path(os.environ["FEATURES_FILE"])
        if os.environ.get("STRICT_VARIANT_MATCH"):
            kwargs["strict_variant_match"] = (
                os.environ["STRICT_VARIANT_MATCH"].strip().lower() in _TRUTHY
            )
        return cls(**kwargs)

    def ensure_directories(self) -> None:
        """Create the scratch/archive directory if it does not exist."""
        self.work_dir.mkdir(parents=True, exist_ok=True)
