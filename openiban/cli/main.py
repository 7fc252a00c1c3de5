"""Main CLI entry point for openiban."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from openiban import __version__
from openiban.exceptions import ConfigurationError, RegistryError
from openiban.formatting import IbanFormat
from openiban.parser import IbanParser
from openiban.registry.loader import load_definitions
from openiban.registry.registry import IbanRegistry
from openiban.utils.config import get_settings
from openiban.utils.logging import configure_logging, get_logger
from openiban.validation.checksum import compute_check_digits
from openiban.validation.results import Invalid, Valid
from openiban.validation.validator import IbanValidator, normalize

app = typer.Typer(
    name="openiban",
    help="🏦 Validate and format International Bank Account Numbers",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)
console = Console()
logger = get_logger(__name__)

STYLES = {"flat": IbanFormat.FLAT, "partitioned": IbanFormat.PARTITIONED}


@dataclass
class CliState:
    registry: IbanRegistry
    validator: IbanValidator
    parser: IbanParser


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]openiban[/bold blue] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    registry_file: Optional[Path] = typer.Option(
        None,
        "--registry",
        "-r",
        help="YAML file with country definitions (default: built-in SWIFT table)",
        exists=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """openiban - IBAN validation and formatting."""
    settings = get_settings()
    configure_logging(
        log_level="DEBUG" if verbose else settings.log_level,
        json_logs=settings.json_logs,
        dev_mode=settings.dev_mode,
    )

    registry_file = registry_file or settings.registry_file
    try:
        if registry_file is not None:
            registry = IbanRegistry.from_definitions(load_definitions(registry_file))
        else:
            registry = IbanRegistry.swift()
    except (ConfigurationError, RegistryError) as e:
        console.print(f"[red]✗ Cannot load country registry: {escape(str(e))}[/]")
        raise typer.Exit(2)

    logger.debug(
        "cli_registry_loaded",
        country_count=len(registry),
        source=str(registry_file or "swift"),
    )
    validator = IbanValidator(registry, max_input_length=settings.max_input_length)
    ctx.obj = CliState(registry, validator, IbanParser(validator))


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj


@app.command()
def validate(
    ctx: typer.Context,
    values: list[str] = typer.Argument(..., help="IBANs to validate"),
) -> None:
    """✅ Validate one or more IBANs.

    Exits with status 1 if any value is invalid.

    Examples:
        openiban validate NL91ABNA0417164300
        openiban validate "NL91 ABNA 0417 1643 00" DE89370400440532013000
    """
    state = _state(ctx)

    table = Table(title="IBAN Validation", show_header=True)
    table.add_column("IBAN", style="cyan", no_wrap=True)
    table.add_column("Result", no_wrap=True)
    table.add_column("Details")

    invalid_count = 0
    for value in values:
        result = state.validator.validate(value)
        if isinstance(result, Valid):
            entry = state.registry.lookup(result.country_code)
            country = entry.name if entry and entry.name else result.country_code
            table.add_row(result.value, "[green]✓ valid[/]", country)
        else:
            invalid_count += 1
            table.add_row(escape(value), f"[red]✗ {result.kind.value}[/]", escape(result.message))

    console.print(table)

    if invalid_count:
        raise typer.Exit(1)


@app.command("format")
def format_iban(
    ctx: typer.Context,
    value: str = typer.Argument(..., help="IBAN to format"),
    style: str = typer.Option(
        "partitioned", "--style", "-s", help="Output style: flat|partitioned"
    ),
) -> None:
    """🔤 Print a valid IBAN in flat or partitioned form.

    Examples:
        openiban format nl91abna0417164300
        openiban format "NL91 ABNA 0417 1643 00" --style flat
    """
    fmt = STYLES.get(style.lower())
    if fmt is None:
        choices = ", ".join(STYLES)
        console.print(f"[red]✗ Unknown style '{escape(style)}', use one of: {choices}[/]")
        raise typer.Exit(2)

    outcome = _state(ctx).parser.attempt(value)
    if outcome.iban is None:
        reason = outcome.result.message if isinstance(outcome.result, Invalid) else "invalid"
        console.print(f"[red]✗ {escape(reason)}[/]")
        raise typer.Exit(1)

    console.print(outcome.iban.format(fmt), highlight=False)


@app.command()
def countries(ctx: typer.Context) -> None:
    """🌍 List the registered countries."""
    registry = _state(ctx).registry

    table = Table(title=f"Registered Countries ({len(registry)})", show_header=True)
    table.add_column("Code", style="cyan", no_wrap=True)
    table.add_column("Country")
    table.add_column("Length", justify="right")
    table.add_column("BBAN Pattern", style="magenta")

    for entry in registry:
        table.add_row(
            entry.country_code, entry.name or "", str(entry.total_length), str(entry.pattern)
        )

    console.print(table)


@app.command()
def country(
    ctx: typer.Context,
    code: str = typer.Argument(..., help="ISO 3166-1 alpha-2 country code"),
) -> None:
    """🔎 Show the IBAN format of one country."""
    entry = _state(ctx).registry.lookup(code.upper())
    if entry is None:
        console.print(f"[red]✗ Country {escape(code.upper())} is not registered[/]")
        raise typer.Exit(1)

    table = Table(title=f"{entry.country_code} {entry.name or ''}".strip(), show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("IBAN length", str(entry.total_length))
    table.add_row("BBAN length", str(entry.bban_length))
    table.add_row("BBAN pattern", str(entry.pattern))
    if entry.example:
        table.add_row("Example", entry.example)

    console.print(table)


@app.command("check-digits")
def check_digits(
    ctx: typer.Context,
    code: str = typer.Argument(..., help="ISO 3166-1 alpha-2 country code"),
    bban: str = typer.Argument(..., help="Basic Bank Account Number"),
) -> None:
    """🧮 Compute check digits and print the resulting IBAN.

    Example:
        openiban check-digits NL ABNA0417164300
    """
    state = _state(ctx)
    country_code = code.upper()
    bban = normalize(bban)

    entry = state.registry.lookup(country_code)
    if entry is None:
        console.print(f"[red]✗ Country {escape(country_code)} is not registered[/]")
        raise typer.Exit(1)
    if not entry.matches(bban):
        console.print(f"[red]✗ BBAN does not match the {country_code} format {entry.pattern}[/]")
        raise typer.Exit(1)

    digits = compute_check_digits(country_code, bban)
    console.print(f"{country_code}{digits}{bban}", highlight=False)


if __name__ == "__main__":
    app()
