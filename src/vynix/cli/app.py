"""Main CLI application for vynix."""

import json
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from vynix import __version__
from vynix.cache import CacheSweeper
from vynix.cli.options import ModelOption, ProviderOption, VerboseOption, get_provider_name
from vynix.config import VynixConfig, get_config
from vynix.exceptions import VynixError
from vynix.service import AIService, GenerationResult, create_service
from vynix.utils.logging import setup_logging

app = typer.Typer(
    name="vynix",
    help="Cached AI generation for branching conversations",
    add_completion=True,
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"vynix version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Cached AI generation for branching conversations."""


def _bootstrap(verbose: bool) -> tuple[VynixConfig, AIService]:
    """Load config, configure logging and build the service."""
    config = get_config()
    setup_logging(
        level="DEBUG" if verbose else config.logging.level,
        log_file=config.logging.file,
        json_format=config.logging.json_format,
    )
    return config, create_service(config)


def _load_context(path: Path | None) -> list[dict[str, Any]]:
    """Read prior turns from a JSON file holding a list of role/content objects."""
    if path is None:
        return []
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise typer.BadParameter(f"Cannot read context file {path}: {e}") from e
    if not isinstance(data, list) or not all(isinstance(m, dict) for m in data):
        raise typer.BadParameter("Context file must contain a JSON list of objects.")
    return data


def _print_result(result: GenerationResult) -> None:
    cached_note = " (cached)" if result.cached else ""
    subtitle = (
        f"{result.provider} · {result.model} · {result.tokens} tokens · "
        f"{result.response_time} ms{cached_note}"
    )
    console.print(Panel(result.content, subtitle=subtitle, subtitle_align="right"))


def _print_stats(stats: dict[str, Any]) -> None:
    table = Table(title="Cache Statistics", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for field, value in stats.items():
        table.add_row(field, str(value))
    console.print(table)


@app.command()
def generate(
    prompt: str = typer.Argument(..., help="Prompt to send."),
    provider: ProviderOption = None,
    model: ModelOption = None,
    context_file: Path | None = typer.Option(
        None, "--context", "-c", help="JSON file with prior conversation turns."
    ),
    json_output: bool = typer.Option(False, "--json", help="Print the result as JSON."),
    verbose: VerboseOption = False,
) -> None:
    """Generate a single reply."""
    try:
        config, service = _bootstrap(verbose)
        provider_name = get_provider_name(provider, str(config.default_provider))
        context = _load_context(context_file)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=err_console,
            transient=True,
        ) as progress:
            progress.add_task(description="Generating...", total=None)
            result = service.generate(prompt, provider_name, model, context)

        if json_output:
            console.print_json(json.dumps(result.to_dict()))
        else:
            _print_result(result)

    except VynixError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(e.exit_code) from None


CHAT_HELP = (
    "Commands: /stats cache statistics, /cleanup purge expired entries, "
    "/clear empty the cache, /reset forget the conversation, /quit exit"
)


@app.command()
def chat(
    provider: ProviderOption = None,
    model: ModelOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Hold a conversation; repeated prompts in the same context are served from cache."""
    try:
        config, service = _bootstrap(verbose)
    except VynixError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(e.exit_code) from None

    provider_name = get_provider_name(provider, str(config.default_provider))
    context: list[dict[str, str]] = []

    console.print(f"[bold]vynix chat[/bold] ({provider_name})")
    console.print(f"[dim]{CHAT_HELP}[/dim]")

    with CacheSweeper(service.cache, config.cache.cleanup_interval_seconds):
        while True:
            try:
                line = typer.prompt("you", prompt_suffix="> ").strip()
            except typer.Abort:
                break

            if not line:
                continue
            if line == "/quit":
                break
            if line == "/stats":
                _print_stats(service.cache_stats())
                continue
            if line == "/cleanup":
                console.print(f"Removed {service.cache.cleanup()} expired entries")
                continue
            if line == "/clear":
                console.print(f"Cleared {service.clear_cache()} cache entries")
                continue
            if line == "/reset":
                context.clear()
                console.print("[dim]Conversation reset[/dim]")
                continue

            try:
                result = service.generate(line, provider_name, model, context)
            except VynixError as e:
                err_console.print(f"[red]Error:[/red] {e}")
                continue

            _print_result(result)
            context.append({"role": "user", "content": line})
            context.append({"role": "assistant", "content": result.content})


@app.command()
def providers(verbose: VerboseOption = False) -> None:
    """List available providers and their known models."""
    try:
        config, service = _bootstrap(verbose)
    except VynixError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(e.exit_code) from None

    if config.free_mode:
        console.print("[yellow]FREE_MODE is on[/yellow]")

    for name in service.available_providers():
        console.print(f"[cyan]{name}[/cyan]")
        for model in service.models(name):
            console.print(f"  {model}")


@app.command("test-connection")
def test_connection(
    provider: str = typer.Argument(..., help="Provider to test."),
    verbose: VerboseOption = False,
) -> None:
    """Check that a provider answers a short prompt."""
    try:
        _, service = _bootstrap(verbose)
    except VynixError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(e.exit_code) from None

    result = service.test_connection(provider)

    if result["success"]:
        console.print(f"[green]Connection to {provider} successful[/green]")
        console.print(result["response"])
    else:
        err_console.print(f"[red]Connection to {provider} failed:[/red] {result['error']}")
        raise typer.Exit(1)


@app.command("config")
def config_cmd(
    show_path: bool = typer.Option(
        False,
        "--path",
        help="Show config file path.",
    ),
) -> None:
    """Show current configuration."""
    from vynix.config.defaults import get_config_path

    if show_path:
        console.print(str(get_config_path()))
        return

    try:
        config = get_config()
    except VynixError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(e.exit_code) from None

    console.print("[bold]vynix configuration[/bold]\n")
    console.print(f"Config file: {get_config_path()}")
    console.print(f"Default provider: {config.default_provider}")
    console.print(f"Free mode: {config.free_mode}")

    console.print("\n[bold]Cache:[/bold]")
    console.print(f"  Max items: {config.cache.max_items}")
    console.print(f"  TTL: {config.cache.ttl_ms} ms")
    console.print(f"  Disabled: {config.cache.disabled}")
    console.print(f"  Cleanup interval: {config.cache.cleanup_interval_seconds} s")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
