"""
CLI integration for the export targets.

Provides the ``acf``, ``graphql``, ``export``, ``targets``, ``version`` and
``sync`` subcommands used by ``headless-builder``.
"""

import argparse
import json
from pathlib import Path

import requests
from dotenv import dotenv_values
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from . import (
    GeneratorConfig,
    generate_code,
    get_generator,
    list_all_target_info,
    load_config,
)
from .core.config import ConfigError, LOCATION_STRATEGIES, get_config_manager
from ..export import ExportService
from ..logging_config import get_logger
from ..store import load_store
from ..versioning import BUMP_PARTS, compare_versions, increment_version

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()

ENV_FILE = ".env.local"
ENV_BUILDER_URL = "HEADLESS_BUILDER_URL"
ENV_PROJECT_ID = "HEADLESS_BUILDER_PROJECT_ID"
SYNC_TIMEOUT = 30

SYNTAX_LEXERS = {"acf": "json", "graphql": "graphql"}


def create_codegen_subparsers(subparsers):
    """
    Register every subcommand on the main parser's subparser group.

    Each subparser sets ``func`` to its handler, which takes the parsed
    arguments and returns an exit code.
    """
    for target, help_text in (
        ("acf", "Generate ACF field-group JSON"),
        ("graphql", "Generate a GraphQL SDL schema"),
    ):
        parser = subparsers.add_parser(
            target,
            help=help_text,
            description=help_text,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=f"""
Examples:
  headless-builder {target} --data builder.json --page home
  headless-builder {target} --data builder.json --project site -o out{_extension(target)}
            """.strip(),
        )
        _add_data_args(parser)
        scope = parser.add_mutually_exclusive_group(required=True)
        scope.add_argument("--page", metavar="ID", help="Export a single page")
        scope.add_argument("--project", metavar="ID", help="Export a whole project")
        parser.add_argument("--output", "-o", metavar="FILE", help="Output file")
        parser.add_argument(
            "--config", metavar="FILE", help="JSON configuration file"
        )
        if target == "acf":
            parser.add_argument(
                "--location-strategy",
                choices=LOCATION_STRATEGIES,
                help="How field groups are bound to pages (default: page-param)",
            )
        parser.set_defaults(func=handle_generate_command, target=target)

    export_parser = subparsers.add_parser(
        "export",
        help="Export ACF, GraphQL and page summaries of a project",
    )
    _add_data_args(export_parser)
    export_parser.add_argument("--project", metavar="ID", required=True)
    export_parser.add_argument("--output", "-o", metavar="FILE", help="Output file")
    export_parser.add_argument(
        "--config", metavar="FILE", help="JSON configuration file"
    )
    export_parser.set_defaults(func=handle_export_command)

    targets_parser = subparsers.add_parser("targets", help="List export targets")
    targets_parser.set_defaults(func=handle_targets_command)

    version_parser = subparsers.add_parser(
        "version", help="Component version helpers"
    )
    version_commands = version_parser.add_subparsers(
        dest="version_command", required=True
    )

    bump_parser = version_commands.add_parser("bump", help="Increment a version")
    bump_parser.add_argument("version", help="Current version, e.g. 1.2.3")
    bump_parser.add_argument(
        "--part", choices=BUMP_PARTS, default="patch", help="Part to increment"
    )
    bump_parser.set_defaults(func=handle_version_bump)

    diff_parser = version_commands.add_parser(
        "diff", help="Compare two stored versions of a component"
    )
    _add_data_args(diff_parser)
    diff_parser.add_argument("--component", metavar="ID", required=True)
    diff_parser.add_argument("version_a", help="Base version")
    diff_parser.add_argument("version_b", help="Compared version")
    diff_parser.set_defaults(func=handle_version_diff)

    sync_parser = subparsers.add_parser(
        "sync",
        help="Download a project's GraphQL schema from a running builder",
        description=(
            f"Missing options are read from {ENV_BUILDER_URL} and "
            f"{ENV_PROJECT_ID} in {ENV_FILE}."
        ),
    )
    sync_parser.add_argument("--builder-url", metavar="URL")
    sync_parser.add_argument("--project-id", metavar="ID")
    sync_parser.add_argument(
        "--output", "-o", default="schema.graphql", metavar="FILE"
    )
    sync_parser.set_defaults(func=handle_sync_command)


def _add_data_args(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--data",
        "-d",
        metavar="PATH|URL",
        required=True,
        help="Builder document (JSON file or http(s) URL)",
    )


def _extension(target: str) -> str:
    return ".json" if target == "acf" else ".graphql"


def _build_config(args: argparse.Namespace, target: str) -> GeneratorConfig:
    """Merge target defaults, the config file and CLI overrides."""
    overrides = {}
    if getattr(args, "location_strategy", None):
        overrides["location_strategy"] = args.location_strategy

    try:
        config = load_config(
            target, custom_config=overrides or None, config_file=args.config
        )
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e

    for warning in get_config_manager().validate_config(config):
        console.print(f"[yellow]⚠️  {warning}[/yellow]")
    return config


def _write_output(path: str, text: str, description: str):
    output_path = Path(path)
    try:
        output_path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise CLIError(f"Failed to write to {output_path}: {e}") from e
    console.print(f"[green]✓[/green] {description} saved to [cyan]{output_path}[/cyan]")


def handle_generate_command(args: argparse.Namespace) -> int:
    """Generate ACF JSON or GraphQL SDL for a page or project."""
    target = args.target
    config = _build_config(args, target)
    generator = get_generator(target, config)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        load_task = progress.add_task("[cyan]Loading builder data...", total=None)
        store = load_store(args.data)
        store.max_workers = config.max_fetch_workers
        if args.page:
            page = store.get_page(args.page)
            project, pages = None, None
        else:
            page = None
            project, pages = store.get_project_pages(args.project)
        progress.remove_task(load_task)

        gen_task = progress.add_task(f"[green]Generating {target}...", total=None)
        result = generate_code(generator, page=page, project=project, pages=pages)
        progress.remove_task(gen_task)

    if not result.success:
        console.print(f"[red]✗ {result.error_message}[/red]")
        return 1

    output_file = args.output or config.output_file
    if output_file:
        _write_output(output_file, result.code, f"Generated {target} output")
    else:
        console.print(Syntax(result.code, SYNTAX_LEXERS[target], theme="monokai"))

    if getattr(args, "verbose", 0) and result.metadata:
        metadata_table = Table(
            title="📊 Generation Metadata",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        metadata_table.add_column("Property", style="bold")
        metadata_table.add_column("Value", style="green")
        for key, value in result.metadata.items():
            metadata_table.add_row(key.replace("_", " ").title(), str(value))
        console.print()
        console.print(metadata_table)

    if result.warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {warning}")

    return 0


def handle_export_command(args: argparse.Namespace) -> int:
    """Write the complete project export envelope."""
    store = load_store(args.data)
    service = ExportService(store, config=args.config)
    try:
        payload = service.export_project_complete(args.project)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e

    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if args.output:
        _write_output(args.output, text, "Project export")
    else:
        console.print_json(text)
    return 0


def handle_targets_command(args: argparse.Namespace) -> int:
    """List registered export targets."""
    target_info = list_all_target_info()

    table = Table(
        title="📋 Export Targets", box=box.ROUNDED, title_style="bold cyan"
    )
    table.add_column("Target", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for name, info in sorted(target_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(name, info["file_extension"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print(
        Panel(
            "[bold]Usage:[/bold] headless-builder [cyan]TARGET[/cyan] "
            "--data [dim]builder.json[/dim] --page [dim]ID[/dim]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def handle_version_bump(args: argparse.Namespace) -> int:
    console.print(increment_version(args.version, args.part))
    return 0


def handle_version_diff(args: argparse.Namespace) -> int:
    """Show the field-level difference between two component versions."""
    store = load_store(args.data)
    comparison = compare_versions(
        store, args.component, args.version_a, args.version_b
    )
    diff = comparison["diff"]

    table = Table(
        title=f"🔍 {args.component}: {args.version_a} → {args.version_b}",
        box=box.SIMPLE,
        header_style="bold cyan",
    )
    table.add_column("Change", style="bold")
    table.add_column("Field Key")

    styles = {"added": "green", "removed": "red", "changed": "yellow"}
    for change, style in styles.items():
        for key in diff[change]:
            table.add_row(f"[{style}]{change}[/{style}]", key)

    if not any(diff.values()):
        console.print("[green]✓[/green] No field changes")
    else:
        console.print(table)
    return 0


def handle_sync_command(args: argparse.Namespace) -> int:
    """Download the project SDL from a builder server."""
    builder_url = args.builder_url
    project_id = args.project_id

    if not builder_url or not project_id:
        env = dotenv_values(Path.cwd() / ENV_FILE)
        builder_url = builder_url or env.get(ENV_BUILDER_URL)
        project_id = project_id or env.get(ENV_PROJECT_ID)

    if not builder_url or not project_id:
        raise CLIError(
            "Missing configuration: provide --builder-url and --project-id "
            f"or set {ENV_BUILDER_URL} and {ENV_PROJECT_ID} in {ENV_FILE}"
        )

    url = f"{builder_url.rstrip('/')}/api/export/projects/{project_id}/graphql"
    logger.info("Fetching schema from %s", url)

    with console.status("Fetching schema from builder..."):
        try:
            response = requests.get(url, timeout=SYNC_TIMEOUT)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise CLIError(
                f"API error: {e.response.status_code} {e.response.reason}"
            ) from e
        except requests.exceptions.ConnectionError as e:
            raise CLIError("Network error: could not connect to builder") from e
        except requests.exceptions.RequestException as e:
            raise CLIError(f"Request failed: {e}") from e

    _write_output(args.output, response.text, "Schema")
    return 0
