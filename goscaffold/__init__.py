"""go-scaffold -- generates downloadable Go project scaffolds.

Quick usage::

    from goscaffold.config import Config
    from goscaffold.models import GenerationOptions
    from goscaffold.service import ScaffoldService

    service = ScaffoldService.from_config(Config())
    artifact = await service.generate_scaffold(
        GenerationOptions(category="api", variant="echo", module_path="github.com/acme/shop")
    )
"""

__version__ = "1.0.0"
