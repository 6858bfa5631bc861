"""Filesystem-backed catalog of template sets.

Templates live in a two-level layout, ``<root>/<category>/<variant>/``.  Every
query re-scans the directory so newly added sets show up without a restart.
"""

from __future__ import annotations

import os
from pathlib import Path

from goscaffold.errors import TemplateNotFoundError
from goscaffold.models import TemplateSet


class TemplateCatalog:
    """Lists and looks up :class:`TemplateSet` entries under a root directory."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)
        if not self.root.is_dir():
            raise TemplateNotFoundError(f"template directory does not exist: {self.root}")

    def list_all(self) -> list[TemplateSet]:
        """Return every template set, grouped by category in name order."""
        sets: list[TemplateSet] = []
        for category_dir in _sorted_subdirs(self.root):
            sets.extend(self.list_by_category(category_dir.name))
        return sets

    def list_by_category(self, category: str) -> list[TemplateSet]:
        """Return the template sets of one category.

        A category without a directory yields an empty list, not an error.
        """
        if not _is_plain_name(category):
            return []
        category_dir = self.root / category
        if not category_dir.is_dir():
            return []
        return [_make_template_set(category, d) for d in _sorted_subdirs(category_dir)]

    def get(self, template_id: str) -> TemplateSet:
        """Look up a set by its ``<category>-<variant>`` id.

        Raises:
            TemplateNotFoundError: If the id is malformed or no such set exists.
        """
        category, sep, variant = template_id.partition("-")
        if not sep or not category or not variant:
            raise TemplateNotFoundError(f"invalid template id: {template_id}")
        if not (_is_plain_name(category) and _is_plain_name(variant)):
            raise TemplateNotFoundError(f"template not found: {template_id}")
        path = self.root / category / variant
        if not path.is_dir():
            raise TemplateNotFoundError(f"template not found: {template_id}")
        return _make_template_set(category, path)

    def categories(self) -> list[str]:
        return [d.name for d in _sorted_subdirs(self.root)]


def _is_plain_name(name: str) -> bool:
    """True if *name* is a single visible directory name, never a path."""
    if not name or name.startswith((".", "_")):
        return False
    return not any(sep in name for sep in ("/", "\\", os.sep, os.altsep) if sep)


def _sorted_subdirs(path: Path) -> list[Path]:
    return sorted(
        (p for p in path.iterdir() if p.is_dir() and not p.name.startswith((".", "_"))),
        key=lambda p: p.name,
    )


def _make_template_set(category: str, path: Path) -> TemplateSet:
    variant = path.name
    return TemplateSet(
        id=f"{category}-{variant}",
        name=f"{category.capitalize()} with {variant.capitalize()} router",
        description=f"A {category} application using the {variant} router",
        category=category,
        variant=variant,
        path=path,
    )
