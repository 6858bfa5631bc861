"""Scaffold generation pipeline.

Takes validated ``GenerationOptions``, renders the matching template set into
a scratch directory, zips the result under a fixed root folder, and records
the archive in the repository under a fresh random handle.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
import zipfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from jinja2 import TemplateError

from goscaffold.errors import GenerationError, TemplateNotFoundError
from goscaffold.models import GeneratedArtifact, GenerationOptions, TemplateSet
from goscaffold.repository import ScaffoldRepository
from goscaffold.utils import generate_handle, module_basename, sanitize_name

from .catalog import TemplateCatalog
from .packager import DEFAULT_ARCHIVE_ROOT, write_archive
from .templates import TEMPLATE_SUFFIX, TemplateRenderer
from .validator import OptionsValidator

logger = logging.getLogger(__name__)


class ScaffoldGenerator:
    """Generation pipeline orchestrator.

    Steps for each request:
    1. Validate the options
    2. Select the template set for category and variant
    3. Render the template tree into ``<work_dir>/<handle>/``
    4. Zip it to ``<work_dir>/<handle>.zip``
    5. Save the artifact in the repository

    The scratch directory is always removed.  On failure the partial archive
    is removed as well and the cause is wrapped in a single
    :class:`GenerationError`.
    """

    def __init__(
        self,
        catalog: TemplateCatalog,
        repository: ScaffoldRepository,
        validator: OptionsValidator,
        work_dir: str | Path,
        *,
        archive_root: str = DEFAULT_ARCHIVE_ROOT,
        template_suffix: str = TEMPLATE_SUFFIX,
        strict_variant_match: bool = False,
    ) -> None:
        self.catalog = catalog
        self.repository = repository
        self.validator = validator
        self.work_dir = Path(work_dir)
        self.archive_root = archive_root
        self.template_suffix = template_suffix
        self.strict_variant_match = strict_variant_match

    # -- Public API --------------------------------------------------------

    async def generate(self, options: GenerationOptions) -> GeneratedArtifact:
        """Generate, package and store one scaffold.

        Raises:
            OptionsValidationError: If the options are invalid.
            TemplateNotFoundError: If no template set serves the category.
            GenerationError: If rendering or packaging fails.
        """
        self.validator.validate(options)
        template_set = self.select_template(options)

        handle = generate_handle()
        scratch_dir = self.work_dir / handle
        archive_path = self.work_dir / f"{handle}.zip"

        try:
            try:
                await asyncio.to_thread(scratch_dir.mkdir, parents=True, exist_ok=True)
            except OSError as exc:
                raise GenerationError("create scaffold directory", str(exc)) from exc

            # 1. Render the template tree
            renderer = TemplateRenderer(template_set.path, suffix=self.template_suffix)
            context = build_context(options, template_set)
            try:
                await renderer.render_tree(scratch_dir, context)
            except (OSError, UnicodeError, TemplateError) as exc:
                raise GenerationError("render template", str(exc)) from exc

            # 2. Package it
            try:
                size = await asyncio.to_thread(
                    write_archive, scratch_dir, archive_path, self.archive_root
                )
            except (OSError, zipfile.BadZipFile, ValueError) as exc:
                raise GenerationError("create zip archive", str(exc)) from exc

            artifact = GeneratedArtifact(
                handle=handle,
                options=options,
                template_id=template_set.id,
                created_at=datetime.now(timezone.utc),
                file_path=archive_path,
                size=size,
            )
            self.repository.save(artifact)
        except GenerationError:
            logger.error("Scaffold generation failed for %s", template_set.id, exc_info=True)
            await asyncio.to_thread(_remove_file, archive_path)
            raise
        finally:
            await asyncio.to_thread(shutil.rmtree, scratch_dir, True)

        logger.info(
            "Generated scaffold %s from %s (%d bytes)", handle, template_set.id, size
        )
        return artifact

    def select_template(self, options: GenerationOptions) -> TemplateSet:
        """Pick the template set for the options' category and variant.

        Without an exact ``<category>-<variant>`` match the first set of the
        category is used and a warning is logged, unless strict matching is
        enabled.

        Raises:
            TemplateNotFoundError: If the category has no template sets, or
                strict matching is on and the variant is missing.
        """
        templates = self.catalog.list_by_category(options.category)
        if not templates:
            raise TemplateNotFoundError(
                f"no templates found for application type: {options.category}"
            )

        wanted = f"{options.category}-{options.variant}"
        for template_set in templates:
            if template_set.id == wanted:
                return template_set

        if self.strict_variant_match:
            raise TemplateNotFoundError(f"template not found: {wanted}")

        fallback = templates[0]
        logger.warning(
            "No template set for %s; falling back to %s", wanted, fallback.id
        )
        return fallback


# ---------------------------------------------------------------------------
# Context building
# ---------------------------------------------------------------------------

def build_context(
    options: GenerationOptions, template_set: TemplateSet
) -> dict[str, Any]:
    """Build the Jinja2 template context for one generation request."""
    app_name = module_basename(options.module_path) or "app"
    return {
        "app_name": app_name,
        "binary": sanitize_name(app_name) or "app",
        "module_path": options.module_path.strip(),
        "category": options.category,
        "variant": template_set.variant,
        "database_type": options.database_type,
        "config_type": options.config_type,
        "log_format": options.log_format,
        "features": list(options.features),
        "premium_features": list(options.premium_features),
        "generated_at": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        "has_feature": options.has_feature,
    }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _remove_file(path: Path) -> None:
    """Best-effort removal of a partial archive."""
    try:
        path.unlink(missing_ok=True)
    except OSError:
        logger.debug("Could not remove %s", path, exc_info=True)
