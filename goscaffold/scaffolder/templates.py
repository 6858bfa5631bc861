"""Jinja2 template rendering for scaffold generation.

Provides the TemplateRenderer class which loads templates from one template
set directory and renders them with per-request context data.  Files carrying
the template suffix are rendered and written without it; every other file is
copied byte-for-byte.
"""

from __future__ import annotations

import asyncio
import re
import shutil
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

TEMPLATE_SUFFIX = ".j2"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders one template tree into an output directory.

    Undefined variables raise instead of rendering as empty strings, so a
    typo in a template aborts generation rather than producing broken code.
    """

    def __init__(
        self, template_dir: str | Path, suffix: str = TEMPLATE_SUFFIX
    ) -> None:
        self.template_dir = Path(template_dir)
        self.suffix = suffix
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(enabled_extensions=(), default_for_string=False),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["slugify"] = _slugify_filter
        self.env.filters["pascal_case"] = _pascal_case_filter

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory, using
                ``/`` separators (e.g. ``"cmd/api/main.go.j2"``).
            context: Variables available inside the template.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        template = self.env.from_string(template_string)
        return template.render(**context)

    def is_template(self, path: str | Path) -> bool:
        return Path(path).name.endswith(self.suffix)

    def output_name(self, rel_path: str | Path) -> Path:
        """Map a path inside the template tree to its path in the output.

        ``"go.mod.j2"`` -> ``"go.mod"``; non-template paths are unchanged.
        """
        rel = Path(rel_path)
        if self.is_template(rel):
            return rel.with_name(rel.name[: -len(self.suffix)])
        return rel

    # -- File-based rendering (async) --------------------------------------

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically.
        """
        content = self.render(template_path, context)
        out = Path(output_path)
        await asyncio.to_thread(_write_file, out, content)
        return out

    async def copy_to_file(self, rel_path: str, output_path: str | Path) -> Path:
        """Copy a non-template file verbatim into the output tree."""
        out = Path(output_path)
        await asyncio.to_thread(_copy_file, self.template_dir / rel_path, out)
        return out

    async def render_tree(
        self, output_dir: str | Path, context: dict[str, Any]
    ) -> list[Path]:
        """Render or copy every file of the template tree into *output_dir*.

        Directory structure is preserved, including empty directories.  A
        template at ``cmd/api/main.go.j2`` is written to
        ``<output_dir>/cmd/api/main.go``.

        Returns:
            List of written file paths, in walk order.
        """
        out_base = Path(output_dir)
        written: list[Path] = []

        for source in sorted(self.template_dir.rglob("*")):
            rel = source.relative_to(self.template_dir)
            if source.is_dir():
                await asyncio.to_thread(
                    (out_base / rel).mkdir, parents=True, exist_ok=True
                )
                continue

            output_file = out_base / self.output_name(rel)
            if self.is_template(rel):
                path = await self.render_to_file(rel.as_posix(), output_file, context)
            else:
                path = await self.copy_to_file(rel.as_posix(), output_file)
            written.append(path)

        return written

    # -- Utility -----------------------------------------------------------

    def list_templates(self) -> list[str]:
        """Return a sorted list of all template paths in the tree."""
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in self.template_dir.rglob(f"*{self.suffix}")
            if p.is_file()
        )


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _slugify_filter(value: str) -> str:
    """Convert a string to a URL/filename-safe slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower().strip())
    return slug.strip("-")


def _pascal_case_filter(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``."""
    parts = re.split(r"[-_\s]+", value)
    return "".join(word.capitalize() for word in parts if word)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _copy_file(source: Path, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, destination)
