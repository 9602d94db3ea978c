# hub_deploy/cli/main.py
"""Main CLI entry point for hub-deploy"""

import logging
import sys

import click
from rich.logging import RichHandler

from ..__version__ import __version__
from ..api import deploy
from ..api.exceptions import HubDeployError
from ..utils.output import console
from ..constants import APP_NAME, LOG_FORMAT, EXIT_FAILURE, EXIT_INTERRUPTED
from .utils.output import format_deploy_result, print_error

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ],
        force=True
    )

    # Adjust third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@click.command(name=APP_NAME, context_settings={'help_option_names': ['-h', '--help']})
@click.argument('tag', required=False)
@click.option('--skip-build', is_flag=True, help='Skip Docker build, only deploy existing image')
@click.option('--dry-run', is_flag=True, help='Show what would be done without executing')
@click.option('--no-cache', is_flag=True,
              help='Force rebuild without Docker cache (use after updating assets)')
@click.option('--local', 'strategy', flag_value='local',
              help='Build locally with docker buildx, then deploy')
@click.option('--remote', 'strategy', flag_value='remote',
              help='Build, push and deploy with Cloud Build')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False),
              help='Configuration file (default: ./.hub-deploy.yaml)')
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.version_option(__version__, prog_name=APP_NAME)
def cli(tag, skip_build, dry_run, no_cache, strategy, config_path, verbose, debug):
    """Build the Hub Chat image and deploy it to Cloud Run

    TAG is the Docker image tag (default: hub-chat-<git-hash>).

    Examples:

        # Build and deploy with auto-generated tag
        hub-deploy

        # Build and deploy with tag 'v1.0.0'
        hub-deploy v1.0.0

        # Rebuild without cache (for asset updates)
        hub-deploy --no-cache

        # Deploy existing image tagged 'v1.0.0'
        hub-deploy v1.0.0 --skip-build

        # Let Cloud Build build and deploy
        hub-deploy --remote
    """
    setup_logging(verbose=verbose, debug=debug)

    try:
        outcome = deploy(
            tag=tag,
            skip_build=skip_build,
            dry_run=dry_run,
            no_cache=no_cache,
            strategy=strategy,
            config_path=config_path,
        )
    except HubDeployError as e:
        logger.debug("Deployment aborted [%s]", e.error_code, exc_info=debug)
        print_error(str(e))
        sys.exit(EXIT_FAILURE)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(EXIT_INTERRUPTED)

    format_deploy_result(outcome)


def main():
    """Main entry point for the CLI application

    Unexpected exceptions are shown briefly; pass --debug for a traceback.
    """
    try:
        cli(prog_name=APP_NAME)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    main()
