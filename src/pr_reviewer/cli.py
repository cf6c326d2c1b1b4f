"""Command-line interface for PR Reviewer."""

import asyncio
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from pr_reviewer import __version__
from pr_reviewer.config import Config, load_config, require_valid, validate_config
from pr_reviewer.errors import ConfigurationError
from pr_reviewer.runner import RunOutcome, review_from_event, review_pull_request

console = Console()
logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load(config_path: str | None, require_event: bool) -> Config:
    """Load and validate configuration, exiting with status 1 if invalid."""
    try:
        config = load_config(Path(config_path) if config_path else None)
        return require_valid(config, require_event=require_event)
    except ConfigurationError as e:
        for error in str(e).split("; "):
            console.print(f"[red]Config error:[/red] {error}")
        sys.exit(1)


def _report(outcome: RunOutcome) -> None:
    """Print the outcome of a run for the operator."""
    result = outcome.result
    console.print(
        f"✅ Review complete: source=[cyan]{result.source.value}[/cyan], "
        f"has findings={result.has_findings}, files={outcome.files_reviewed}"
    )

    if outcome.dry_run:
        console.print("\n[yellow]Dry run - not posting to GitHub[/yellow]\n")
        print(result.body)

    changes = outcome.label_changes
    if changes.is_empty:
        console.print("   Labels already reflect review state")
    else:
        verb = "Would change" if outcome.dry_run else "Changed"
        console.print(f"   {verb} labels: +{changes.add} -{changes.remove}")

    if not outcome.dry_run:
        if outcome.comment_id is None:
            console.print("[yellow]⚠️  Review comment could not be posted[/yellow]")
        else:
            console.print(f"📝 Posted review comment {outcome.comment_id}")


def _execute(coro) -> None:
    """Run a review coroutine with the top-level failure boundary."""
    try:
        outcome = asyncio.run(coro)
    except ConfigurationError as e:
        console.print(f"[red]Config error:[/red] {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Review run failed: {e}")
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    _report(outcome)
    console.print("Code review action completed.")


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def cli(verbose: bool) -> None:
    """PR Reviewer - AI pull request review with review-state labels."""
    setup_logging(verbose)


@cli.command("run")
@click.option("--no-ai", is_flag=True, help="Skip the model and use the heuristic review only")
@click.option("--dry-run", is_flag=True, help="Don't post to GitHub")
@click.option("--config", "config_path", type=click.Path(exists=True), help="Config file path")
def run(no_ai: bool, dry_run: bool, config_path: str | None) -> None:
    """Review the PR named by the GitHub Actions event (GITHUB_EVENT_PATH)."""
    config = _load(config_path, require_event=True)
    console.print(f"🔍 Reviewing pull request event in [bold]{config.github.repository}[/bold]...")
    _execute(
        review_from_event(
            config,
            use_ai=not no_ai,
            dry_run=dry_run,
            on_status=lambda message: console.print(f"  → {message}"),
        )
    )


@cli.command("review-pr")
@click.argument("repo")
@click.argument("pr_number", type=int)
@click.option("--no-ai", is_flag=True, help="Skip the model and use the heuristic review only")
@click.option("--dry-run", is_flag=True, help="Don't post to GitHub")
@click.option("--config", "config_path", type=click.Path(exists=True), help="Config file path")
def review_pr(
    repo: str,
    pr_number: int,
    no_ai: bool,
    dry_run: bool,
    config_path: str | None,
) -> None:
    """Review a GitHub pull request by repository and number."""
    try:
        config = load_config(Path(config_path) if config_path else None)
    except ConfigurationError as e:
        console.print(f"[red]Config error:[/red] {e}")
        sys.exit(1)
    config.github.repository = repo
    errors = validate_config(config, require_event=False)
    if errors:
        for error in errors:
            console.print(f"[red]Config error:[/red] {error}")
        sys.exit(1)

    console.print(f"🔍 Reviewing PR #{pr_number} in [bold]{repo}[/bold]...")
    _execute(
        review_pull_request(
            config,
            pr_number,
            use_ai=not no_ai,
            dry_run=dry_run,
            on_status=lambda message: console.print(f"  → {message}"),
        )
    )


@cli.group("config")
def config_group() -> None:
    """Configuration commands."""
    pass


@config_group.command("validate")
@click.option("--config", "config_path", type=click.Path(exists=True), help="Config file path")
@click.option("--no-event", is_flag=True, help="Don't require GITHUB_EVENT_PATH")
def config_validate(config_path: str | None, no_event: bool) -> None:
    """Validate configuration."""
    try:
        config = load_config(Path(config_path) if config_path else None)
    except ConfigurationError as e:
        console.print(f"[red]Error loading config:[/red] {e}")
        sys.exit(1)

    errors = validate_config(config, require_event=not no_event)
    if errors:
        console.print("[red]Configuration is invalid:[/red]")
        for error in errors:
            console.print(f"  • {error}")
        sys.exit(1)
    else:
        console.print("[green]✓ Configuration is valid[/green]")


@config_group.command("show")
@click.option("--config", "config_path", type=click.Path(exists=True), help="Config file path")
def config_show(config_path: str | None) -> None:
    """Show current configuration (tokens are not printed)."""
    try:
        config = load_config(Path(config_path) if config_path else None)
    except ConfigurationError as e:
        console.print(f"[red]Error loading config:[/red] {e}")
        sys.exit(1)

    table = Table(title="Current Configuration")
    table.add_column("Setting")
    table.add_column("Value")

    table.add_row("Repository", config.github.repository or "(unset)")
    table.add_row("Event path", config.github.event_path or "(unset)")
    table.add_row("GitHub token", "set" if config.github.token else "(unset)")
    table.add_row("Model", config.model.name)
    table.add_row("Endpoint", config.model.endpoint)
    table.add_row("AI token", "set" if config.model.token else "(unset)")
    table.add_row("Structured output", str(config.model.structured_output))
    table.add_row("Prompt path", config.review.prompt_path)
    table.add_row("Max patch chars", str(config.review.max_patch_chars))
    table.add_row("Large change threshold", str(config.review.large_change_threshold))
    table.add_row("Debug print call", config.review.debug_print_call)

    console.print(table)


if __name__ == "__main__":
    cli()
