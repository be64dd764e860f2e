"""CLI for the meal-plan validation engine.

Validates plan files offline through the same code path the API uses, and
runs or health-checks the API server.
"""

import json
from pathlib import Path

import httpx
import typer
import uvicorn
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.json import JSON
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from mealwise.config.settings import settings
from mealwise.core.logger import setup_logger
from mealwise.plans.logging import log_validation_result
from mealwise.plans.validate import validate_meal_plan
from mealwise.schemas.meal_plan_validation import MealPlanValidationRequest, MealPlanValidationResponse

# Initialize Rich console for output
console = Console()

# Initialize Typer app
app = typer.Typer(
    name="mealwise",
    help="Mealwise CLI - validate weekly meal plans",
    add_completion=False,
)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_BAD_INPUT = 2


def _setup_logging(debug: bool = False) -> None:
    setup_logger(level="DEBUG" if debug else settings.log_level, log_file=settings.log_file)


def _load_request(plan_file: Path) -> MealPlanValidationRequest:
    """Read and parse a plan file.

    Raises:
        typer.Exit: With code 2 if the file is missing, not JSON, or not a valid request
    """
    try:
        raw = plan_file.read_text(encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Error:[/red] Cannot read {escape(str(plan_file))}: {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(EXIT_BAD_INPUT) from e

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error:[/red] {escape(str(plan_file))} is not valid JSON: {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(EXIT_BAD_INPUT) from e

    try:
        return MealPlanValidationRequest.model_validate(payload)
    except ValidationError as e:
        console.print(f"[red]Error:[/red] {escape(str(plan_file))} is not a valid meal plan request", soft_wrap=True)
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            console.print(f"  - {escape(location)}: {escape(error['msg'])}", soft_wrap=True)
        raise typer.Exit(EXIT_BAD_INPUT) from e


def _print_response(response: MealPlanValidationResponse, show_diagnostics: bool) -> None:
    if response.is_valid:
        title = "[bold green]✓ Meal plan is valid[/bold green]"
    else:
        title = f"[bold red]✗ Meal plan is invalid ({len(response.errors)} errors)[/bold red]"
    console.print(Panel(title, expand=False))

    for error in response.errors:
        console.print(f"[red]ERROR[/red]   {escape(error)}", soft_wrap=True)
    for warning in response.warnings:
        console.print(f"[yellow]WARNING[/yellow] {escape(warning)}", soft_wrap=True)

    for check, reason in response.skipped.items():
        console.print(f"[dim]Skipped {check}: {reason.value}[/dim]")

    if show_diagnostics and response.diagnostics:
        table = Table(title="Diagnostics")
        table.add_column("Check", style="cyan")
        table.add_column("Message")
        table.add_column("Context", style="dim")
        for entry in response.diagnostics:
            context = ", ".join(f"{k}={v}" for k, v in entry.context.items())
            table.add_row(entry.check, escape(entry.message), escape(context))
        console.print(table)


@app.command()
def validate(
    plan_file: Path = typer.Argument(..., help="JSON file shaped like a /meal-plans/validate request"),
    diagnostics: bool = typer.Option(False, "--diagnostics", help="Show the validators' diagnostic entries"),
    as_json: bool = typer.Option(False, "--json", help="Print the response as JSON"),
    output_file: Path | None = typer.Option(None, "--output", "-o", help="Also write the JSON response to a file"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Validate a meal plan file.

    Exits 0 when the plan is valid, 1 when it has errors, 2 on unreadable input.
    """
    _setup_logging(debug)
    request = _load_request(plan_file)

    result = validate_meal_plan(
        request.meals,
        request.settings,
        request.week_start_date,
        request.history,
        request.recipe_slot_catalog,
        request.options,
    )
    log_validation_result(result, context="cli")

    include_diagnostics = diagnostics or request.include_diagnostics
    response = MealPlanValidationResponse.from_result(result, include_diagnostics=include_diagnostics)
    rendered = response.model_dump_json(indent=2)

    if output_file is not None:
        output_file.write_text(rendered, encoding="utf-8")
        logger.info(f"Validation response written to {output_file}")

    if as_json:
        console.print(JSON(rendered), soft_wrap=True)
    else:
        _print_response(response, include_diagnostics)

    raise typer.Exit(EXIT_VALID if response.is_valid else EXIT_INVALID)


@app.command()
def server(
    host: str = typer.Option(DEFAULT_HOST, "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(DEFAULT_PORT, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Run the FastAPI server."""
    _setup_logging(debug)
    logger.bind(context="cli").info(f"Starting FastAPI server on {host}:{port} (reload={reload})")
    uvicorn.run("mealwise.main:app", host=host, port=port, reload=reload, log_level="debug" if debug else "info")


@app.command()
def check_server(
    url: str = typer.Option(f"http://{DEFAULT_HOST}:{DEFAULT_PORT}", "--url", help="Base URL of the API server"),
) -> None:
    """Check that the API server is reachable."""
    try:
        response = httpx.get(f"{url}/health", timeout=2.0)
        response.raise_for_status()
    except httpx.RequestError as e:
        console.print(f"[red]✗ Server not reachable at {escape(url)}:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
    except httpx.HTTPStatusError as e:
        console.print(f"[red]✗ Server at {escape(url)} returned {e.response.status_code}[/red]")
        raise typer.Exit(1) from e

    console.print(Panel(f"[bold green]✓ Server healthy at {escape(url)}[/bold green]", expand=False))


if __name__ == "__main__":
    app()
