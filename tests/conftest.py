"""Shared pytest fixtures for the go-scaffold test suite.

Provides reusable fixtures for:
- A small on-disk template tree with rendered and verbatim files
- The default feature catalog
- Config, service and API client wired to temporary directories
- Valid generation options
"""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from goscaffold.api import create_app
from goscaffold.config import Config
from goscaffold.models import GenerationOptions
from goscaffold.scaffolder.features import FeatureCatalog
from goscaffold.service import ScaffoldService


# ---------------------------------------------------------------------------
# Template tree
# ---------------------------------------------------------------------------

SAMPLE_TEMPLATE_FILES: dict[str, str] = {
    "go.mod.j2": "module {{ module_path }}\n\ngo 1.22\n",
    "README.md.j2": (
        "# {{ app_name }}\n"
        "{% for feature in features %}\n"
        "- {{ feature }}\n"
        "{% endfor %}\n"
    ),
    "cmd/main.go.j2": (
        "package main\n"
        "\n"
        "// router: {{ variant }}, logs: {{ log_format }}\n"
        "{% if has_feature('basic-auth') %}\n"
        "// basic auth enabled\n"
        "{% endif %}\n"
    ),
    "ui/base.tmpl": "{{define \"base\"}}<h1>{{.Title}}</h1>{{end}}\n",
}


def write_template_set(root: Path, category: str, variant: str) -> Path:
    """Create ``<root>/<category>/<variant>/`` holding the sample files."""
    set_dir = root / category / variant
    for rel, content in SAMPLE_TEMPLATE_FILES.items():
        path = set_dir / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    (set_dir / "migrations").mkdir(parents=True, exist_ok=True)
    return set_dir


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """Template root with api/{chi,standard} and webapp/standard sets.

    Also holds a hidden directory and a stray file that the catalog must
    ignore.
    """
    root = tmp_path / "templates"
    write_template_set(root, "api", "chi")
    write_template_set(root, "api", "standard")
    write_template_set(root, "webapp", "standard")
    (root / "api" / ".cache").mkdir()
    (root / "NOTES.txt").write_text("not a category\n", encoding="utf-8")
    return root


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

@pytest.fixture
def feature_catalog() -> FeatureCatalog:
    return FeatureCatalog.default()


@pytest.fixture
def config(tmp_path: Path, template_root: Path) -> Config:
    return Config(
        template_dir=template_root,
        work_dir=tmp_path / "work",
        cleanup_on_shutdown=False,
    )


@pytest.fixture
def service(config: Config) -> ScaffoldService:
    return ScaffoldService.from_config(config)


@pytest.fixture
def client(config: Config, service: ScaffoldService) -> TestClient:
    with TestClient(create_app(config, service)) as test_client:
        yield test_client


@pytest.fixture
def valid_options() -> GenerationOptions:
    return GenerationOptions(
        category="api",
        variant="standard",
        module_path="github.com/acme/shop",
    )


@pytest.fixture
def add_template_set(template_root: Path):
    """Factory adding another sample set under ``template_root``."""

    def _add(category: str, variant: str) -> Path:
        return write_template_set(template_root, category, variant)

    return _add
