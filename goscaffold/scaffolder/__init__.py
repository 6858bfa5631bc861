"""go-scaffold scaffolder -- renders template sets into zipped projects.

Quick usage::

    from goscaffold.scaffolder import (
        FeatureCatalog, OptionsValidator, ScaffoldGenerator, TemplateCatalog,
    )

    generator = ScaffoldGenerator(
        TemplateCatalog("templates"),
        ScaffoldRepository(),
        OptionsValidator(FeatureCatalog.default()),
        work_dir="/tmp/go-scaffold",
    )
    artifact = await generator.generate(options)
"""

from goscaffold.scaffolder.catalog import TemplateCatalog
from goscaffold.scaffolder.features import FeatureCatalog
from goscaffold.scaffolder.generator import ScaffoldGenerator, build_context
from goscaffold.scaffolder.packager import write_archive
from goscaffold.scaffolder.templates import TemplateRenderer
from goscaffold.scaffolder.validator import OptionsValidator

__all__ = [
    "FeatureCatalog",
    "OptionsValidator",
    "ScaffoldGenerator",
    "TemplateCatalog",
    "TemplateRenderer",
    "build_context",
    "write_archive",
]
