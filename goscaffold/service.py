"""Service facade used by the HTTP API and the CLI.

Wires the template catalog, feature table, validator, repository and
generation pipeline together from a single :class:`Config`.
"""

from __future__ import annotations

import logging

from goscaffold.config import Config
from goscaffold.models import (
    FeatureDescriptor,
    GeneratedArtifact,
    GenerationOptions,
    TemplateSet,
)
from goscaffold.repository import ScaffoldRepository
from goscaffold.scaffolder import (
    FeatureCatalog,
    OptionsValidator,
    ScaffoldGenerator,
    TemplateCatalog,
)

logger = logging.getLogger(__name__)


class ScaffoldService:
    """Entry point for every scaffold operation."""

    def __init__(
        self,
        catalog: TemplateCatalog,
        features: FeatureCatalog,
        repository: ScaffoldRepository,
        generator: ScaffoldGenerator,
    ) -> None:
        self.catalog = catalog
        self.features = features
        self.repository = repository
        self.generator = generator

    @classmethod
    def from_config(
        cls, config: Config, features: FeatureCatalog | None = None
    ) -> "ScaffoldService":
        """Build a service from configuration.

        The feature table comes from *features*, else ``config.features_file``,
        else the built-in default.
        """
        config.ensure_directories()
        if features is None:
            if config.features_file is not None:
                features = FeatureCatalog.from_file(config.features_file)
            else:
                features = FeatureCatalog.default()

        catalog = TemplateCatalog(config.template_dir)
        repository = ScaffoldRepository()
        generator = ScaffoldGenerator(
            catalog,
            repository,
            OptionsValidator(features, categories=config.categories),
            config.work_dir,
            archive_root=config.archive_root,
            template_suffix=config.template_suffix,
            strict_variant_match=config.strict_variant_match,
        )
        logger.debug(
            "Scaffold service ready (templates=%s, work_dir=%s, features=%d)",
            config.template_dir,
            config.work_dir,
            len(features),
        )
        return cls(catalog, features, repository, generator)

    async def generate_scaffold(self, options: GenerationOptions) -> GeneratedArtifact:
        return await self.generator.generate(options)

    def get_scaffold(self, handle: str) -> GeneratedArtifact:
        return self.repository.get(handle)

    def get_all_templates(self) -> list[TemplateSet]:
        return self.catalog.list_all()

    def get_templates_by_category(self, category: str) -> list[TemplateSet]:
        return self.catalog.list_by_category(category)

    def get_available_features(self) -> list[FeatureDescriptor]:
        return self.features.all()

    def remove_archives(self) -> int:
        """Delete the archives this service generated and forget their handles.

        Only files recorded in the repository are touched; anything else in
        the work directory is left alone.

        Returns:
            Number of repository entries removed.
        """
        removed = 0
        for artifact in self.repository.list():
            try:
                artifact.file_path.unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("Could not remove %s: %s", artifact.file_path, exc)
            self.repository.delete(artifact.handle)
            removed += 1
        return removed
