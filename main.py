"""
langtypes CLI Entry Point.

langtypes generates TypeScript declarations and exports for the translation
files of a Laravel project, so that frontend code can reference translation
keys and values with full type checking.

Every command runs the same pipeline:

1.  **Discovery**: Finds the translation directories of the project (and,
    optionally, of installed vendor packages) and names a source for each.
2.  **Scanning**: Reads PHP and JSON translation files per locale, without
    executing PHP.
3.  **Planning & Rendering**: Derives interfaces, key unions and value exports
    for the configured mode (`single`, `module`, `granular`).
4.  **Writing**: Writes the rendered files below the configured output path.

Usage:
    $ langtypes generate --path /path/to/laravel-app --mode module
    $ langtypes export --organize-by locale
    $ langtypes scan --json

Dependencies:
    - Typer: CLI argument parsing and app structure.
    - Rich: Terminal UI, colors, tables and progress visualization.
    - Inquirer: Interactive prompts for `init`.
"""

from contextlib import contextmanager
from dataclasses import replace
import json
from pathlib import Path
from typing import Annotated, Iterator

from rich import print as pr
from rich.table import Table
import typer

from constants import CONFIG_FILE_NAME
from core.analytics import TranslationAnalytics
from core.config import TranslationConfig, load_config
from core.exceptions import (
    ConfigurationError,
    DiscoveryEmptyError,
    FileIOError,
    ScanEmptyError,
)
from core.file_io import FilesystemFileWriter
from core.pipeline import (
    analyze_translations,
    export_keys,
    export_values,
    generate_types,
    scan_translations,
    validate_translations,
)
from core.statistics import ScanStatistics
from core.validation import ValidationReport
from models import (
    ExportFormat,
    GenerationMode,
    KeysFormat,
    ModuleFormat,
    OrganizeBy,
    ScanType,
    StructureFormat,
)
from ui.progress import NoOpProgressDisplay
from ui.prompts import confirm_overwrite, prompt_config
from utils import console, relative_to, set_verbose

app = typer.Typer(
    help="Generate TypeScript types and exports from Laravel translation files.",
    no_args_is_help=True,
)

PathOption = Annotated[
    Path,
    typer.Option(
        exists=True,  # Typer throws error if path doesn't exist
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        help="Root of the Laravel project",
    ),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        dir_okay=False,
        help=f"Configuration file (default: <path>/{CONFIG_FILE_NAME})",
    ),
]
VerboseOption = Annotated[
    bool, typer.Option("--verbose", "-v", help="Print debug information.")
]
LocaleOption = Annotated[
    list[str] | None,
    typer.Option("--locale", "-l", help="Only process this locale (repeatable)."),
]
ScanVendorOption = Annotated[
    bool, typer.Option("--scan-vendor", help="Include vendor translations.")
]


@app.command()
def generate(
    path: PathOption = Path.cwd(),
    config: ConfigOption = None,
    output: Annotated[
        str | None,
        typer.Option(help="Output directory, or the path of a `.ts` file."),
    ] = None,
    locale: LocaleOption = None,
    structure: Annotated[
        StructureFormat | None,
        typer.Option("--format", help="Interface format (overrides config)."),
    ] = None,
    scan: Annotated[
        ScanType | None, typer.Option(help="File types to scan (overrides config).")
    ] = None,
    mode: Annotated[
        GenerationMode | None,
        typer.Option(help="Generation mode (overrides config)."),
    ] = None,
    scan_vendor: ScanVendorOption = False,
    verbose: VerboseOption = False,
):
    """
    Generate TypeScript type definitions from the project's translation files.
    """
    set_verbose(verbose)
    run_config = load_run_config(
        path,
        config,
        locales=tuple(locale) if locale else None,
        format=structure,
        scan=scan,
        mode=mode,
        scan_vendor=scan_vendor or None,
    ).with_output(output)

    pr(f"[green]Generating translation types for: {path}...[/green]\n")
    with reported_errors():
        written = generate_types(path, run_config)
    print_written(written, path)


@app.command()
def export(
    path: PathOption = Path.cwd(),
    config: ConfigOption = None,
    output: Annotated[
        str | None, typer.Option(help="Output directory for exported values.")
    ] = None,
    locale: LocaleOption = None,
    mode: Annotated[
        GenerationMode | None, typer.Option(help="Export file layout.")
    ] = None,
    organize_by: Annotated[
        OrganizeBy | None, typer.Option(help="Organization of exported values.")
    ] = None,
    export_format: Annotated[
        ExportFormat | None, typer.Option("--format", help="Export file format.")
    ] = None,
    module_format: Annotated[
        ModuleFormat | None,
        typer.Option(help="Module system of JavaScript exports."),
    ] = None,
    verbose: VerboseOption = False,
):
    """
    Export translation values as TypeScript or JavaScript modules and/or JSON
    documents.
    """
    set_verbose(verbose)
    run_config = load_run_config(
        path, config, locales=tuple(locale) if locale else None
    )
    settings = run_config.translation_export
    run_config = replace(
        run_config,
        translation_export=replace(
            settings,
            path=output or settings.path,
            mode=mode or settings.mode,
            organize_by=organize_by or settings.organize_by,
            format=export_format or settings.format,
            module_format=module_format or settings.module_format,
        ),
    )

    pr(f"[green]Exporting translations for: {path}...[/green]\n")
    with reported_errors():
        written = export_values(path, run_config)
    print_written(written, path)


@app.command("export-keys")
def export_keys_command(
    path: PathOption = Path.cwd(),
    config: ConfigOption = None,
    output: Annotated[
        str | None, typer.Option(help="Path of the key file (overrides config).")
    ] = None,
    keys_format: Annotated[
        KeysFormat, typer.Option("--format", help="Declaration style of the keys.")
    ] = KeysFormat.UNION,
    source: Annotated[
        list[str] | None,
        typer.Option("--source", "-s", help="Only export this source (repeatable)."),
    ] = None,
    verbose: VerboseOption = False,
):
    """
    Export translation keys as TypeScript unions, enums or const objects.
    """
    set_verbose(verbose)
    run_config = load_run_config(path, config)

    pr(f"[green]Exporting translation keys ({keys_format}) for: {path}...[/green]\n")
    with reported_errors():
        written = export_keys(
            path,
            run_config,
            keys_format,
            tuple(source) if source else (),
            output=output,
        )
    print_written(written, path)


@app.command("scan")
def scan_command(
    path: PathOption = Path.cwd(),
    config: ConfigOption = None,
    scan_vendor: ScanVendorOption = False,
    as_json: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
    verbose: VerboseOption = False,
):
    """
    Scan translation files and show statistics per source.
    """
    set_verbose(verbose)
    run_config = load_run_config(path, config, scan_vendor=scan_vendor or None)

    if as_json:
        with reported_errors():
            statistics = scan_translations(
                path, run_config, progress_display=NoOpProgressDisplay()
            )
        typer.echo(json.dumps(statistics.to_dict(), indent=2, ensure_ascii=False))
        return

    pr("[green]🔍 Scanning for translation files...[/green]\n")
    with reported_errors():
        statistics = scan_translations(path, run_config)
    print_statistics(statistics, detailed=verbose)


@app.command()
def analytics(
    path: PathOption = Path.cwd(),
    config: ConfigOption = None,
    scan_vendor: ScanVendorOption = False,
    as_json: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
    detailed: Annotated[
        bool, typer.Option("--detailed", help="Show per-file and per-path breakdowns.")
    ] = False,
    verbose: VerboseOption = False,
):
    """
    Show totals, file types and averages over every translation file.
    """
    set_verbose(verbose)
    run_config = load_run_config(path, config, scan_vendor=scan_vendor or None)

    if as_json:
        with reported_errors():
            result = analyze_translations(
                path, run_config, progress_display=NoOpProgressDisplay()
            )
        typer.echo(
            json.dumps(result.to_dict(detailed=detailed), indent=2, ensure_ascii=False)
        )
        return

    pr("[green]📊 Analyzing translation files...[/green]\n")
    with reported_errors():
        result = analyze_translations(path, run_config)
    print_analytics(result, path, detailed=detailed)


@app.command()
def validate(
    path: PathOption = Path.cwd(),
    config: ConfigOption = None,
    locale: LocaleOption = None,
    as_json: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
    verbose: VerboseOption = False,
):
    """
    Check that every locale defines the same keys as the base locale.

    Exits with code 1 when inconsistencies are found.
    """
    set_verbose(verbose)
    run_config = load_run_config(
        path, config, locales=tuple(locale) if locale else None
    )

    progress_display = NoOpProgressDisplay() if as_json else None
    with reported_errors():
        report = validate_translations(
            path, run_config, progress_display=progress_display
        )

    if as_json:
        typer.echo(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        print_report(report, detailed=verbose)

    if not report.is_valid:
        raise typer.Exit(code=1)


@app.command()
def init(
    path: PathOption = Path.cwd(),
    config: ConfigOption = None,
    defaults: Annotated[
        bool,
        typer.Option("--defaults", help="Write the default configuration without prompting."),
    ] = False,
):
    """
    Create a configuration file for the project.
    """
    config_path = config if config is not None else path / CONFIG_FILE_NAME
    if config_path.exists() and not defaults and not confirm_overwrite(str(config_path)):
        pr("[yellow]Configuration left unchanged.[/yellow]")
        raise typer.Exit()

    new_config = TranslationConfig() if defaults else prompt_config(TranslationConfig())

    content = json.dumps(new_config.to_dict(), indent=2, ensure_ascii=False) + "\n"
    with reported_errors():
        written = FilesystemFileWriter(config_path.parent).write(config_path.name, content)
    pr(f"[green]Config saved to {written}.[/green]")


# ============================================================================
# Helpers
# ============================================================================


def load_run_config(path: Path, config_path: Path | None, **overrides) -> TranslationConfig:
    """
    Load the configuration file and apply CLI overrides.

    Raises:
        typer.Exit: If the configuration cannot be read or is invalid.
    """
    try:
        config = load_config(config_path if config_path is not None else path / CONFIG_FILE_NAME)
    except ConfigurationError as e:
        print_config_err(e)
    except FileIOError as e:
        print_file_io_err(e)
    return config.with_overrides(**overrides)


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn pipeline failures into user-facing messages and exit code 1."""
    try:
        yield
    except typer.Exit:
        raise
    except (DiscoveryEmptyError, ScanEmptyError) as e:
        print_empty_err(e)
    except ConfigurationError as e:
        print_config_err(e)
    except FileIOError as e:
        print_file_io_err(e)
    except Exception as e:  # noqa: BLE001
        # Catch-all for any unexpected errors - ensures users always see
        # a friendly message instead of a raw Python stack trace
        print_unexpected_err(e)


def print_written(written: list[Path], root: Path) -> None:
    for file_path in written:
        pr(f"  [dim]{relative_to(file_path, root)}[/dim]")
    pr(f"\n[bold green]✔ Wrote {len(written)} file(s).[/bold green]")


def print_statistics(statistics: ScanStatistics, detailed: bool = False) -> None:
    pr("[bold]📊 Translation Statistics:[/bold]\n")
    pr(f"[yellow]Locales:[/yellow] {', '.join(statistics.locales)}\n")

    table = Table("Source", "Files", "Total Keys")
    for source in statistics.sources:
        table.add_row(source.source, str(source.files), str(source.keys))
        if detailed:
            for file_key, keys in source.file_keys.items():
                table.add_row(f"  └─ {file_key}", "", str(keys))
    console.print(table)

    pr(
        f"\n[green]📈 Total: {len(statistics.sources)} sources, "
        f"{statistics.total_files} files, {statistics.total_keys} translation keys[/green]"
    )


def print_analytics(
    result: TranslationAnalytics, root: Path, detailed: bool = False
) -> None:
    overview = Table.grid(padding=(0, 4))
    overview.add_column(style="cyan")
    overview.add_column(justify="right")
    for label, value in (
        ("Total Paths", len(result.paths)),
        ("Total Files", result.total_files),
        ("Total Keys", f"{result.total_keys:,}"),
        ("Total Sources", result.total_sources),
        ("Total Locales", len(result.statistics.locales)),
        ("PHP Files", result.php_files),
        ("JSON Files", result.json_files),
        ("Avg Keys/File", result.avg_keys_per_file),
        ("Avg Keys/Source", result.avg_keys_per_source),
        ("PHP/JSON Ratio", result.php_vs_json_ratio),
    ):
        overview.add_row(label, str(value))
    console.print(overview)
    pr(f"\n[yellow]Locales:[/yellow] {', '.join(result.statistics.locales)}\n")

    table = Table("Source", "Files", "Keys", title="📦 Sources Breakdown")
    for source in result.statistics.sources:
        table.add_row(source.source, str(source.files), f"{source.keys:,}")
    console.print(table)

    if detailed:
        pr("\n[bold]📄 Detailed File Breakdown:[/bold]")
        for source, files in result.files.items():
            pr(f"[yellow]{source}:[/yellow]")
            for breakdown in files:
                pr(f"  - {breakdown.file_key}: {breakdown.keys} keys ({breakdown.type})")

        pr("\n[bold]📁 Discovered Paths:[/bold]")
        for status in result.paths:
            mark = "[green]\\[✓][/green]" if status.exists else "[red]\\[✗][/red]"
            pr(f"  {mark} {status.source}: {relative_to(status.path, root)}")

    if result.skipped_files:
        pr(f"\n[yellow]⚠ Skipped {len(result.skipped_files)} malformed file(s)[/yellow]")

    pr(
        f"\n[green]📈 {len(result.paths)} paths, {result.total_files} files and "
        f"{result.total_keys:,} translation keys across {result.total_sources} "
        f"sources and {len(result.statistics.locales)} locales.[/green]"
    )


def print_report(report: ValidationReport, detailed: bool = False) -> None:
    if report.skipped:
        pr("[yellow]⚠ Warning:[/yellow] Only one locale found. Nothing to validate.")
        return
    if report.is_valid:
        pr("[bold green]✅ All translations are consistent![/bold green]")
        return

    pr(f"❌ [bold red]Translation inconsistencies found[/bold red] (base locale: {report.base_locale})\n")
    current_source = None
    for issue in report.issues:
        if issue.source != current_source:
            pr(f"[yellow]Source: {issue.source}[/yellow]")
            current_source = issue.source
        pr(
            f"  [red]Locale {issue.locale}: {len(issue.missing)} missing, "
            f"{len(issue.extra)} extra[/red]"
        )
        if detailed:
            for label, keys in (("-", issue.missing), ("+", issue.extra)):
                for key in keys[:10]:
                    pr(f"    {label} {key}")
                if len(keys) > 10:
                    pr(f"    ... and {len(keys) - 10} more")


def print_empty_err(e: DiscoveryEmptyError | ScanEmptyError) -> None:
    """
    Displays a message when there is nothing to generate from.

    Raises:
        typer.Exit: Always raises with exit code 1 to terminate the application.
    """
    pr(f"❌ [bold red]{e.message}[/bold red]")
    pr(
        "\n[yellow]Quick Fix:[/yellow] Check the 'paths' option of your configuration "
        "and that each translation directory holds locale folders (en, pt_BR, ...)."
    )
    raise typer.Exit(code=1) from e


def print_config_err(e: ConfigurationError) -> None:
    """
    Displays a user-friendly error message for an invalid configuration.

    Raises:
        typer.Exit: Always raises with exit code 1 to terminate the application.
    """
    pr("❌ [bold red]Configuration Error[/bold red]")
    pr(e.message)
    if e.option:
        pr(f"Option: [yellow]{e.option}[/yellow]")
    raise typer.Exit(code=1) from e


def print_file_io_err(e: FileIOError) -> None:
    """
    Displays a user-friendly error message for file I/O operation failures.

    Prints formatted error messages to inform the user about file read/write
    issues, including the file path and diagnostic information for troubleshooting.

    Args:
        e (FileIOError): The exception that was raised, containing error details
            and file path information.

    Raises:
        typer.Exit: Always raises with exit code 1 to terminate the application.
    """
    pr("❌ [bold red]File I/O Error[/bold red]")
    pr(f"The app encountered an error while working with files: {e.message}")
    if e.file_path:
        pr(f"File path: [yellow]{e.file_path}[/yellow]")

    pr("\n[yellow]Quick Fix:[/yellow] Check file permissions and available disk space.")
    if e.original_exception:
        pr(f"\nTechnical details: {e.original_exception}")

    raise typer.Exit(code=1) from e


def print_unexpected_err(e: Exception) -> None:
    """
    Displays a user-friendly error message for unexpected errors.

    Args:
        e (Exception): The unexpected exception that was raised.

    Raises:
        typer.Exit: Always raises with exit code 1 to terminate the application.
    """
    pr("❌ [bold red]Unexpected Error[/bold red]")
    pr("An unexpected error occurred while processing your request.")
    pr(f"\n[yellow]Error Type:[/yellow] {type(e).__name__}")
    pr(f"[yellow]Error Message:[/yellow] {str(e)}")

    pr("\n--- PLEASE REPORT THIS ---")
    pr(f"Error Type: {type(e).__name__}")
    pr(f"Error Message: {e}")
    if e.__cause__:
        pr(f"Caused by: {e.__cause__}")

    raise typer.Exit(code=1) from e


if __name__ == "__main__":
    app()
