"""
Command-line interface for schema-generate.

Reads a model document, generates code for it and writes the result to a
file or stdout. Status messages go to stderr so generated code can be piped.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .codegen import (
    ConfigError,
    GeneratorError,
    RegistryError,
    generate_from_model,
    get_language_info,
    list_all_language_info,
    list_supported_languages,
    load_config,
)
from .codegen.core.config import GeneratorConfig
from .loader import ModelError, model_from_dict
from .logging_config import LOG_LEVELS, configure_logging, get_logger
from .utils import DocumentLoadError, load_document, load_document_from_stream

logger = get_logger(__name__)

console = Console(stderr=True)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="schema-generate",
        description="Generate JSON marshal/unmarshal code from a record model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  schema-generate model.json -p models -o models.go
  schema-generate --url https://example.com/model.json
  schema-generate --stdin < model.json
  schema-generate --list-languages
  schema-generate --language-info go
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="Model document (JSON)")
    input_group.add_argument("--url", help="URL to fetch the model document from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read the model document from standard input"
    )

    parser.add_argument(
        "--language", "-l", default="go", help="Target language (default: go)"
    )
    parser.add_argument("--output", "-o", help="Output file (default: stdout)")
    parser.add_argument("--config", help="Configuration file path (JSON)")
    parser.add_argument(
        "--package-name", "-p", "--package", help="Package name for generated code"
    )

    options = parser.add_argument_group("generation options")
    options.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't add comments to generated code",
    )
    options.add_argument(
        "--unsorted-additional-properties",
        action="store_true",
        help="Serialize additional properties in map iteration order",
    )
    options.add_argument(
        "--header-tool",
        metavar="NAME",
        help="Tool name written into the generated-code header",
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )
    info_group.add_argument(
        "--language-info",
        metavar="LANGUAGE",
        help="Show detailed info about a language and exit",
    )

    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--verbose", "-v", action="store_true", help="Show generation metadata"
    )
    output_group.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        if args.list_languages:
            return _list_languages()

        if args.language_info:
            return _show_language_info(args.language_info)

        if not (args.file or args.url or args.stdin):
            raise CLIError("Input source required (file, --url, or --stdin)")

        _validate_language(args.language)
        document = _get_input_document(args)
        config = _build_config(args)
        return _generate_and_output(document, args.language, config, args)

    except CLIError as e:
        logger.error("%s", e)
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def _list_languages() -> int:
    """List supported languages with details."""
    language_info = list_all_language_info()

    if not language_info:
        console.print("[yellow]⚠️ No code generators available[/yellow]")
        return 0

    table = Table(title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for lang_name, info in sorted(language_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {lang_name}", info["file_extension"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] schema-generate [dim]model.json[/dim] --language [cyan]LANGUAGE[/cyan]\n"
            "[bold]Info:[/bold] schema-generate --language-info [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def _show_language_info(language: str) -> int:
    """Show detailed information about a specific language."""
    _validate_language(language)
    info = get_language_info(language)

    info_text = f"""[bold]Language:[/bold] {info['name']}
[bold]File Extension:[/bold] {info['file_extension']}
[bold]Generator Class:[/bold] {info['class']}
[bold]Module:[/bold] {info['module']}"""
    if info["aliases"]:
        info_text += f"\n[bold]Aliases:[/bold] {', '.join(info['aliases'])}"

    console.print()
    console.print(
        Panel(info_text, title=f"🔧 {info['name'].title()} Generator", border_style="green")
    )

    config: GeneratorConfig = info["config"]
    config_table = Table(
        title="⚙️  Default Configuration",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    config_table.add_column("Setting", style="bold")
    config_table.add_column("Value", style="green")
    config_table.add_row("Package Name", str(config.package_name))
    config_table.add_row("Header Tool", str(config.header_tool))
    config_table.add_row("Add Comments", str(config.add_comments))
    config_table.add_row(
        "Sort Additional Properties", str(config.sort_additional_properties)
    )

    console.print()
    console.print(config_table)

    examples_text = f"""Generate to stdout:
[cyan]schema-generate --language {language} model.json[/cyan]

Generate to file:
[cyan]schema-generate -l {language} -o models{info['file_extension']} model.json[/cyan]

Custom package name:
[cyan]schema-generate -l {language} --package models model.json[/cyan]"""

    console.print()
    console.print(Panel(examples_text, title="💡 Usage Examples", border_style="blue"))
    return 0


def _validate_language(language: str) -> None:
    """Raise CLIError if a language is not supported."""
    try:
        get_language_info(language)
    except RegistryError as e:
        supported = ", ".join(list_supported_languages())
        raise CLIError(
            f"Unsupported language '{language}' (supported: {supported})"
        ) from e


def _get_input_document(args: argparse.Namespace) -> dict[str, Any]:
    """Load the model document from the selected input source."""
    try:
        if args.stdin:
            source, document = load_document_from_stream(sys.stdin)
        else:
            source, document = load_document(file_path=args.file, url=args.url)
    except (DocumentLoadError, FileNotFoundError) as e:
        raise CLIError(f"Failed to load input: {e}") from e

    logger.info("Loaded model document from %s", source)
    return document


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Merge the config file with CLI overrides."""
    overrides: dict[str, Any] = {}

    if args.package_name:
        overrides["package_name"] = args.package_name
    if args.output:
        overrides["output_file"] = args.output
    if args.no_comments:
        overrides["add_comments"] = False
    if args.unsorted_additional_properties:
        overrides["sort_additional_properties"] = False
    if args.header_tool:
        overrides["header_tool"] = args.header_tool

    try:
        return load_config(
            args.language.lower(),
            custom_config=overrides,
            config_file=args.config,
        )
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e


def _generate_and_output(
    document: dict[str, Any],
    language: str,
    config: GeneratorConfig,
    args: argparse.Namespace,
) -> int:
    """Generate code and write it to the configured destination."""
    try:
        model = model_from_dict(document)
    except ModelError as e:
        raise CLIError(f"Invalid model: {e}") from e

    try:
        result = generate_from_model(model, language, config)
    except (GeneratorError, RegistryError) as e:
        raise CLIError(str(e)) from e

    if result.warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {warning}")
        console.print()

    if not result.success:
        console.print(f"[red]✗ Code generation failed:[/red] {result.error_message}")
        return 1

    if config.output_file:
        output_path = Path(config.output_file)
        try:
            output_path.write_text(result.code, encoding="utf-8")
        except OSError as e:
            raise CLIError(f"Failed to write to {output_path}: {e}") from e
        console.print(
            f"[green]✓[/green] Generated {language} code saved to [cyan]{output_path}[/cyan]"
        )
    elif sys.stdout.isatty():
        Console().print(Syntax(result.code, language, theme="monokai"))
    else:
        sys.stdout.write(result.code)

    if args.verbose and result.metadata:
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

    return 0


if __name__ == "__main__":
    sys.exit(main())
