"""
Command-line interface for configuration generation.

Usage:
  auditgen generate manifest.json --output-dir Generated
  auditgen generate manifest.json --audit-fields AuditFields.txt --dry-run
  auditgen targets
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.syntax import Syntax
from rich import box

from . import __version__
from .codegen import (
    ArtifactRole,
    GenerationResult,
    RegistryError,
    generate_artifacts,
    get_generator,
    get_target_info,
    get_registry,
    list_targets,
    load_config,
)
from .codegen.core.config import ConfigError, GeneratorConfig, get_config_manager
from .discovery import ManifestError, load_manifest
from .logging_config import get_logger, setup_logging
from .utils import ResourceLoadError, find_additional_file, load_lines

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="auditgen",
        description="Generate audit-aware persistence configuration from entity metadata",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  auditgen generate manifest.json --output-dir Generated
  auditgen generate manifest.json --audit-fields AuditFields.txt --dry-run
  auditgen targets
        """.strip(),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    generate = subparsers.add_parser(
        "generate",
        help="Generate configuration artifacts from a manifest",
        description="Generate the audit base and one configuration per entity",
    )
    generate.add_argument("manifest", help="JSON manifest exported by the host scanner")
    generate.add_argument(
        "--target", "-t", default="csharp", help="Generation target (default: csharp)"
    )
    generate.add_argument(
        "--output-dir", "-o", help="Directory for generated files (default: generated)"
    )
    generate.add_argument("--config", help="Configuration file path (JSON)")
    generate.add_argument("--namespace", help="Namespace for all generated classes")

    fields_group = generate.add_mutually_exclusive_group()
    fields_group.add_argument(
        "--audit-fields",
        metavar="FILE",
        help="Audit field list (default: AuditFields.txt next to the manifest)",
    )
    fields_group.add_argument(
        "--audit-fields-url", metavar="URL", help="Fetch the audit field list from a URL"
    )

    generate.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't add the auto-generated header",
    )
    generate.add_argument(
        "--dry-run",
        action="store_true",
        help="Print generated code instead of writing files",
    )
    generate.add_argument(
        "--verbose", "-v", action="store_true", help="Show skipped declarations and debug logs"
    )
    generate.add_argument("--log-file", metavar="FILE", help="Also write logs to a file")
    generate.set_defaults(func=_handle_generate)

    targets = subparsers.add_parser("targets", help="List supported generation targets")
    targets.set_defaults(func=_handle_targets)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    setup_logging(
        "DEBUG" if getattr(args, "verbose", False) else "WARNING",
        getattr(args, "log_file", None),
    )

    try:
        return args.func(args)
    except (
        CLIError,
        ConfigError,
        ManifestError,
        RegistryError,
        ResourceLoadError,
        FileNotFoundError,
    ) as e:
        logger.debug("Command failed", exc_info=True)
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def _handle_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    manifest_path = Path(args.manifest)
    target = get_registry().resolve_name(args.target)
    config = _build_config(args, target)

    for warning in get_config_manager().validate_config(config):
        console.print(f"[yellow]⚠️ {warning}[/yellow]")

    generator = get_generator(target, config)
    builder_type = config.custom.get("builder_type", "EntityTypeBuilder")
    candidates = load_manifest(manifest_path, builder_type)
    audit_lines = _load_audit_fields(args, config, manifest_path)

    result = generate_artifacts(generator, candidates, audit_lines)
    if not result.success:
        raise CLIError(result.error_message)

    if not result.artifacts:
        console.print("[yellow]⚠️ No declarations produced configuration[/yellow]")
        _print_warnings(result, args.verbose)
        return 0

    if args.dry_run:
        _preview(result)
        _print_warnings(result, args.verbose)
        return 0

    output_dir = Path(args.output_dir or config.output_dir or "generated")
    written = _write_artifacts(result, output_dir)
    _print_summary(result, written)
    _print_warnings(result, args.verbose)
    return 0


def _handle_targets(args: argparse.Namespace) -> int:
    """List supported targets with details."""
    table = Table(title="📋 Supported Targets", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Target", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for name in list_targets():
        info = get_target_info(name)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {name}", info["file_extension"], info["class"], aliases)

    console.print(table)
    console.print(
        Panel(
            "[bold]Usage:[/bold] auditgen generate [dim]manifest.json[/dim] --target [cyan]TARGET[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def _build_config(args: argparse.Namespace, target: str) -> GeneratorConfig:
    """Build configuration from the config file and CLI overrides."""
    overrides = {}
    if args.namespace:
        overrides["namespace"] = args.namespace
    if args.no_comments:
        overrides["add_comments"] = False
    if args.output_dir:
        overrides["output_dir"] = args.output_dir

    try:
        return load_config(target, overrides, args.config)
    except TypeError as e:
        raise CLIError(f"Invalid configuration: {e}") from e


def _load_audit_fields(
    args: argparse.Namespace, config: GeneratorConfig, manifest_path: Path
) -> Optional[List[str]]:
    """Load the audit field list; None means it is absent or unavailable."""
    try:
        if args.audit_fields_url:
            return load_lines(url=args.audit_fields_url)

        if args.audit_fields:
            return load_lines(file_path=args.audit_fields)

        found = find_additional_file(manifest_path.parent, config.audit_fields_file)
        if found is None:
            logger.info("No %s found next to %s", config.audit_fields_file, manifest_path)
            return None
        return load_lines(file_path=found)
    except ResourceLoadError as e:
        # An unavailable list degrades to an empty base
        logger.warning("Audit field list unavailable: %s", e)
        return None


def _write_artifacts(result: GenerationResult, output_dir: Path) -> List[Path]:
    """Write every artifact to the output directory."""
    extension = result.metadata.get("file_extension", "")
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CLIError(f"Cannot create output directory {output_dir}: {e}") from e

    written = []
    for artifact in result.artifacts.values():
        path = output_dir / artifact.file_name(extension)
        try:
            path.write_text(artifact.text, encoding="utf-8")
        except OSError as e:
            raise CLIError(f"Cannot write {path}: {e}") from e
        logger.debug("Wrote %s", path)
        written.append(path)
    return written


def _preview(result: GenerationResult):
    """Print generated artifacts with syntax highlighting."""
    for artifact in result.artifacts.values():
        console.print(
            Panel(
                Syntax(artifact.text, "csharp", theme="monokai", line_numbers=False),
                title=f"📄 {artifact.name}",
                border_style="green" if artifact.role == ArtifactRole.ENTITY else "cyan",
            )
        )


def _print_summary(result: GenerationResult, written: List[Path]):
    """Print a table of written files."""
    table = Table(title="✅ Generated Configuration", box=box.SIMPLE, header_style="bold cyan")
    table.add_column("Artifact", style="bold green")
    table.add_column("Role", style="blue")
    table.add_column("File", style="dim")

    for artifact, path in zip(result.artifacts.values(), written):
        table.add_row(artifact.name, artifact.role.value, str(path))

    console.print(table)
    console.print(
        f"📊 {result.metadata.get('entity_count', 0)} entit"
        f"{'y' if result.metadata.get('entity_count') == 1 else 'ies'}, "
        f"{len(written)} file(s)"
    )


def _print_warnings(result: GenerationResult, verbose: bool):
    """Print diagnostics when running verbosely."""
    if not result.warnings:
        return
    if verbose:
        for warning in result.warnings:
            console.print(f"[dim]• {warning}[/dim]")
    else:
        console.print(
            f"[dim]{len(result.warnings)} diagnostic(s); use --verbose to show them[/dim]"
        )


if __name__ == "__main__":
    sys.exit(main())
