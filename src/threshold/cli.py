"""
Threshold CLI - run site login workflows from the command line.
"""
import asyncio
import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .automation.errors import UnknownSiteError
from .automation.scraper import BrowserScraper
from .automation.sites import SITE_FLOWS, get_flow
from .automation.types import ProgressType
from .config import ScraperOptions

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True)]
)
logger = logging.getLogger("threshold")

# Create console for rich output
console = Console()

PROGRESS_STYLES = {
    ProgressType.LOGIN_SUCCESS: "green",
    ProgressType.LOGIN_FAILED: "red",
    ProgressType.CHANGE_PASSWORD: "yellow",
}


def print_progress(company_id: str, progress: ProgressType) -> None:
    style = PROGRESS_STYLES.get(progress, "dim")
    console.print(f"[{style}]{company_id}: {progress.value}[/]")


@click.group(invoke_without_command=True)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Enable debug output",
    show_default=True
)
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Threshold - automated browser logins."""
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug mode enabled")

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
def sites() -> None:
    """List the sites with a registered login flow."""
    table = Table(title="Login flows")
    table.add_column("Site", style="cyan")
    table.add_column("Flow")
    for company_id, flow_cls in sorted(SITE_FLOWS.items()):
        table.add_row(company_id, flow_cls.__name__)
    console.print(table)


@cli.command()
@click.argument("site")
@click.option("--username", required=True, help="Account username or email")
@click.option("--password", default=None, help="Account password (prompted when omitted)")
@click.option("--show-browser", is_flag=True, default=False, envvar="THRESHOLD_SHOW_BROWSER",
              help="Run the browser with a visible window")
@click.option("--executable-path", default=None, envvar="THRESHOLD_EXECUTABLE_PATH",
              type=click.Path(dir_okay=False), help="Browser executable to launch")
@click.option("--timeout-ms", default=None, type=int, envvar="THRESHOLD_TIMEOUT_MS",
              help="Default timeout for page operations")
def login(
    site: str,
    username: str,
    password: Optional[str],
    show_browser: bool,
    executable_path: Optional[str],
    timeout_ms: Optional[int],
) -> None:
    """Log into SITE and report the result."""
    try:
        flow = get_flow(site)
    except UnknownSiteError as e:
        raise click.BadParameter(str(e), param_hint="SITE")

    if not password:
        password = click.prompt("Password", hide_input=True)

    options = ScraperOptions.from_env(
        flow.company_id,
        show_browser=show_browser or None,
        executable_path=executable_path,
        default_timeout_ms=timeout_ms,
    )
    scraper = BrowserScraper(flow, options)
    scraper.progress.on_progress(print_progress)

    try:
        outcome = asyncio.run(scraper.scrape({"username": username, "password": password}))
    except Exception as e:
        logger.debug("Login raised", exc_info=True)
        console.print(f"[red]✗[/] Login raised an error: {e}")
        sys.exit(2)

    if outcome.success:
        console.print(f"[green]✓[/] Logged into {flow.company_id}")
        return

    detail = outcome.error_message or outcome.error_type.value
    console.print(f"[red]✗[/] Login to {flow.company_id} failed: {detail}")
    sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
