"""
Command-line interface for prisma-extractor.

Parses a Prisma schema, writes TypeScript declarations and, optionally,
the metadata document.
"""

import argparse
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from .codegen import (
    ConfigError,
    ConfigValidationError,
    GenerationConfig,
    GeneratorError,
    SchemaError,
    __version__,
    emit,
    load_schema,
    resolve_config,
    write_default_config,
)
from .logging_config import get_logger, setup_logging
from .utils import OutputWriteError, write_metadata_file, write_text_file

logger = get_logger(__name__)

# Initialize rich consoles
console = Console()
error_console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="prisma-extractor",
        description="Generate TypeScript declarations from a Prisma schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  prisma-extractor
  prisma-extractor prisma/schema.prisma src/interfaces/database.ts
  prisma-extractor --config custom.json --metadata
  prisma-extractor --init
        """.strip(),
    )

    parser.add_argument(
        "schema",
        nargs="?",
        help="Prisma schema file (default: prismaSchema from the config)",
    )
    parser.add_argument(
        "output",
        nargs="?",
        help="TypeScript output file (default: outputFile from the config)",
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--init",
        action="store_true",
        help="Write the default configuration file and exit",
    )
    parser.add_argument(
        "--metadata",
        action="store_true",
        help="Write metadata.json next to the output even if the config disables it",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI.

    Args:
        argv: Argument list; ``sys.argv[1:]`` when omitted

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = create_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "WARNING")

    try:
        if args.init:
            return _write_init_config(args.config)

        config = resolve_config(args.config)
        return _run(args, config)

    except ConfigValidationError as e:
        error_console.print("[red]✗ Invalid configuration:[/red]")
        for violation in e.violations:
            error_console.print(f"  [red]•[/red] {violation}")
        return 1
    except (ConfigError, SchemaError, GeneratorError, OutputWriteError) as e:
        error_console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def _write_init_config(config_path: Optional[str]) -> int:
    """Write the default configuration document."""
    path = write_default_config(config_path)
    console.print(f"[green]✓[/green] Configuration file written to [cyan]{path}[/cyan]")
    return 0


def _run(args: argparse.Namespace, config: GenerationConfig) -> int:
    """Parse, generate and write outputs."""
    schema_path = Path(args.schema or config.prisma_schema)
    output_path = Path(args.output or config.output_file)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=error_console,
        transient=True,
    ) as progress:
        parse_task = progress.add_task("[cyan]Parsing Prisma schema...", total=None)
        model = load_schema(schema_path)
        progress.remove_task(parse_task)

        gen_task = progress.add_task(
            "[green]Generating TypeScript declarations...", total=None
        )
        result = emit(model, config)
        progress.remove_task(gen_task)

    if config.generate_metadata or args.metadata:
        metadata_path = write_metadata_file(output_path.parent, result.metadata)
        console.print(
            f"[green]✓[/green] Metadata saved to [cyan]{metadata_path}[/cyan]"
        )

    write_text_file(output_path, result.code)
    console.print(
        f"[green]✓[/green] TypeScript declarations saved to [cyan]{output_path}[/cyan]"
    )

    if result.warnings:
        error_console.print(
            Panel(
                "\n".join(f"• {warning}" for warning in result.warnings),
                title="⚠️  Warnings",
                border_style="yellow",
            )
        )

    logger.info(
        "Generated %d records and %d enums",
        len(model.records),
        len(model.enums),
    )
    return 0
