"""
Command-line interface for swiftgen.

Reads a JSON schema from a file, URL or stdin, generates Swift structs and
writes them to a new file (or prints them).
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from rich import box
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import GenerationResult, generate_from_schema
from .codegen.core.config import (
    FIELD_ORDERS,
    REQUIRED_MATCH_MODES,
    ConfigError,
    GeneratorConfig,
    get_config_manager,
)
from .codegen.core.schema import DecodeError, SchemaDocument, decode_schema
from .logging_config import get_logger, setup_logging
from .utils import (
    DestinationExistsError,
    SourceLoadError,
    default_destination,
    load_bytes,
    write_output,
)

logger = get_logger(__name__)

# Generated code goes to stdout, everything else to stderr
console = Console()
err_console = Console(stderr=True)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="swiftgen",
        description="Generate Swift structs from a JSON Schema document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  swiftgen schema.json
  swiftgen schema.json -o Sources/Models/User.swift
  swiftgen --url https://example.com/user.schema.json --stdout
  swiftgen --stdin --root-name Payload < schema.json
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group()
    input_group.add_argument("file", nargs="?", help="JSON schema file")
    input_group.add_argument("--url", help="URL to fetch the schema from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read the schema from standard input"
    )

    output_group = parser.add_mutually_exclusive_group()
    output_group.add_argument(
        "--output",
        "-o",
        metavar="FILE",
        help="Output file, must not exist (default: ./<RootType>.swift)",
    )
    output_group.add_argument(
        "--stdout", action="store_true", help="Print generated code instead"
    )

    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")

    gen_group = parser.add_argument_group("generation options")
    gen_group.add_argument(
        "--root-name",
        metavar="NAME",
        help="Struct name for a root schema without a title (default: Root)",
    )
    gen_group.add_argument(
        "--required-match",
        choices=sorted(REQUIRED_MATCH_MODES),
        help="Whether 'required' lists raw property names or PascalCase field names",
    )
    gen_group.add_argument(
        "--field-order",
        choices=sorted(FIELD_ORDERS),
        help="Keep document order or sort fields by name",
    )
    gen_group.add_argument(
        "--indent-size", type=int, metavar="N", help="Spaces per indent level"
    )
    gen_group.add_argument(
        "--spaces", action="store_true", help="Indent with spaces instead of tabs"
    )
    gen_group.add_argument(
        "--var", action="store_true", help="Declare fields with 'var' instead of 'let'"
    )
    gen_group.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't add comments to generated code",
    )

    misc_group = parser.add_argument_group("diagnostics")
    misc_group.add_argument(
        "--verbose", "-v", action="store_true", help="Show generation metadata"
    )
    misc_group.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING, INFO with --verbose)",
    )
    misc_group.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from a config file and CLI overrides."""
    overrides = {}

    if args.root_name:
        overrides["root_name"] = args.root_name
    if args.required_match:
        overrides["required_match"] = args.required_match
    if args.field_order:
        overrides["field_order"] = args.field_order
    if args.indent_size is not None:
        overrides["indent_size"] = args.indent_size
    if args.spaces or args.indent_size is not None:
        overrides["use_tabs"] = False
    if args.var:
        overrides["field_keyword"] = "var"
    if args.no_comments:
        overrides["add_comments"] = False
    if args.output:
        overrides["output_file"] = args.output

    manager = get_config_manager()
    try:
        config = manager.get_config(custom_config=overrides, config_file=args.config)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e

    for warning in manager.validate_config(config):
        err_console.print(f"[yellow]⚠️  {warning}[/yellow]")

    return config


def read_input(args: argparse.Namespace) -> Tuple[Optional[str], bytes]:
    """Read raw schema bytes from the selected source."""
    try:
        if args.file:
            return load_bytes(file_path=args.file)
        if args.url:
            return load_bytes(url=args.url)
        if args.stdin:
            return None, sys.stdin.buffer.read()
    except (SourceLoadError, OSError) as e:
        raise CLIError(f"Failed to load input: {e}") from e

    raise CLIError("Input source required (file, --url, or --stdin)")


def run_generation(document: SchemaDocument, config: GeneratorConfig) -> GenerationResult:
    """Generate code with a progress spinner on stderr."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=err_console,
        transient=True,
    ) as progress:
        task = progress.add_task("[green]Generating Swift code...", total=None)
        result = generate_from_schema(document, config)
        progress.remove_task(task)
    return result


def write_result(
    result: GenerationResult, config: GeneratorConfig, args: argparse.Namespace
) -> Optional[Path]:
    """Print or save the generated code. Returns the written path, if any."""
    if args.stdout:
        # Highlight only for a terminal; pipes and redirects get the exact code
        if console.is_terminal:
            console.print(Syntax(result.code, "swift", theme="monokai"))
        else:
            sys.stdout.write(result.code)
            sys.stdout.flush()
        return None

    if config.output_file:
        destination = Path(config.output_file)
    else:
        destination = default_destination(Path.cwd(), result.metadata["root_type"])

    try:
        path = write_output(destination, result.code)
    except DestinationExistsError as e:
        raise CLIError(f"{e} (refusing to overwrite)") from e
    except OSError as e:
        raise CLIError(f"Failed to write to {destination}: {e}") from e

    err_console.print(f"[green]✓[/green] Generated Swift code saved to [cyan]{path}[/cyan]")
    return path


def print_metadata(result: GenerationResult) -> None:
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

    err_console.print()
    err_console.print(metadata_table)


def print_warnings(result: GenerationResult) -> None:
    if not result.warnings:
        return
    err_console.print("\n[yellow]⚠️  Warnings:[/yellow]")
    for warning in result.warnings:
        err_console.print(f"  [yellow]•[/yellow] {warning}")
    err_console.print()


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line tool.

    Returns:
        Exit code (0 for success, 1 for any error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level or ("INFO" if args.verbose else "WARNING"))

    try:
        config = build_config(args)
        source, data = read_input(args)

        try:
            document = decode_schema(data, source=source)
        except DecodeError as e:
            raise CLIError(f"Invalid schema input: {e}") from e

        result = run_generation(document, config)
        if not result.success:
            err_console.print(f"[red]✗ {result.error_message}[/red]")
            return 1

        write_result(result, config, args)

        if args.verbose and result.metadata:
            print_metadata(result)
        print_warnings(result)
        return 0

    except CLIError as e:
        logger.debug(f"CLI error: {e}")
        err_console.print(f"[red]✗ Error:[/red] {e}")
        return 1
