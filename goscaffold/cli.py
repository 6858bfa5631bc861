"""Command-line interface for go-scaffold.

Usage::

    goscaffold serve --port 8081
    goscaffold generate --app-type api --router-type echo \\
        --module-path github.com/acme/shop --feature basic-auth -o shop.zip
    goscaffold templates --category api
    goscaffold features
"""

from __future__ import annotations

import argparse
import asyncio
import shutil
import sys
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from goscaffold import __version__
from goscaffold.config import Config
from goscaffold.errors import ScaffoldError
from goscaffold.models import GenerationOptions
from goscaffold.service import ScaffoldService
from goscaffold.utils import (
    configure_logging,
    console,
    find_available_port,
    format_size,
    print_error,
    print_success,
    print_table,
    print_warning,
)


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def cmd_serve(args: argparse.Namespace, config: Config) -> int:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from goscaffold.api import create_app

    if args.host:
        config.host = args.host
    requested = args.port or config.port
    port = find_available_port(requested, host=config.host)
    if port != requested:
        print_warning(f"Port {requested} is in use, using {port} instead")
    config.port = port

    app = create_app(config)
    console.print(f"Starting server on [bold]http://localhost:{port}[/bold]")
    console.print(f"API documentation at http://localhost:{port}/docs")
    uvicorn.run(app, host=config.host, port=port, log_level=config.log_level.lower())
    return 0


def cmd_generate(args: argparse.Namespace, config: Config) -> int:
    """Generate one scaffold locally and copy the archive to ``--output``."""
    options = GenerationOptions(
        category=args.app_type,
        variant=args.router_type,
        database_type=args.database_type,
        config_type=args.config_type,
        log_format=args.log_format,
        module_path=args.module_path,
        features=args.feature or [],
        premium_features=args.premium_feature or [],
    )
    service = ScaffoldService.from_config(config)

    try:
        artifact = asyncio.run(service.generate_scaffold(options))
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        return 1

    output = Path(args.output)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(artifact.file_path, output)
    except OSError as exc:
        print_error(f"Error: could not write {output}: {exc}")
        return 1
    finally:
        artifact.file_path.unlink(missing_ok=True)

    print_success(
        f"Scaffold written to {output} ({format_size(artifact.size)}, template {artifact.template_id})"
    )
    return 0


def cmd_templates(args: argparse.Namespace, config: Config) -> int:
    service = ScaffoldService.from_config(config)
    if args.category:
        templates = service.get_templates_by_category(args.category)
    else:
        templates = service.get_all_templates()
    if not templates:
        print_warning("No templates found")
        return 0
    print_table(
        ["ID", "Name", "Description"],
        [[t.id, t.name, t.description] for t in templates],
        title="Templates",
    )
    return 0


def cmd_features(args: argparse.Namespace, config: Config) -> int:
    service = ScaffoldService.from_config(config)
    print_table(
        ["ID", "Name", "Description", "Premium"],
        [
            [f.id, f.name, f.description, "yes" if f.is_premium else ""]
            for f in service.get_available_features()
        ],
        title="Features",
    )
    return 0


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="goscaffold",
        description="Go Scaffold Generator -- project skeletons from templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  goscaffold serve --port 8081\n"
            "  goscaffold generate --app-type api --router-type echo "
            "--module-path github.com/acme/shop -o shop.zip\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--template-dir",
        default=None,
        help="Template root directory (default: TEMPLATE_DIR or the bundled templates)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None, help="Bind address (default: HOST or 0.0.0.0)")
    serve.add_argument("--port", type=int, default=None, help="Port (default: PORT or 8081)")
    serve.set_defaults(func=cmd_serve)

    generate = subparsers.add_parser("generate", help="Generate a scaffold archive")
    generate.add_argument("--app-type", required=True, help="Application category: api or webapp")
    generate.add_argument("--router-type", required=True, help="Router: standard, chi, echo, gin")
    generate.add_argument("--module-path", required=True, help="Go module path")
    generate.add_argument("--database-type", default="none", help="none, postgresql, mysql, sqlite")
    generate.add_argument("--config-type", default="env", help="env or flags")
    generate.add_argument("--log-format", default="text", help="json or text")
    generate.add_argument(
        "--feature", action="append", help="Feature to include (repeatable)"
    )
    generate.add_argument(
        "--premium-feature", action="append", help="Premium feature to include (repeatable)"
    )
    generate.add_argument("--output", "-o", required=True, help="Destination zip file")
    generate.set_defaults(func=cmd_generate)

    templates = subparsers.add_parser("templates", help="List template sets")
    templates.add_argument("--category", default=None, help="Only list this category")
    templates.set_defaults(func=cmd_templates)

    features = subparsers.add_parser("features", help="List available features")
    features.set_defaults(func=cmd_features)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point for ``goscaffold`` and ``python -m goscaffold``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    load_dotenv()
    try:
        config = Config.from_env()
    except ValueError as exc:
        print_error(f"Error: invalid configuration: {exc}")
        sys.exit(1)
    if args.template_dir:
        config.template_dir = Path(args.template_dir)
    configure_logging(config.log_level)

    try:
        code = args.func(args, config)
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
