from __future__ import annotations

import logging
import click
import typer
from typer.core import TyperCommand

from .core.config import load_config
from .core.console import setup_logging
from .core.decorators import handle_exceptions
from .core.directories import list_directories
from .core.response import build_response, write_response
from .core.workspaces import list_recent_projects

DIRS_FLAG = "--dirs"

app = typer.Typer(
    help="alfred-zed: Zed recent workspaces and project directories for Alfred.",
    add_completion=False,
)
logger = logging.getLogger(__name__)


class RawArgsCommand(TyperCommand):
    """Command that leaves every argument to the callback untouched.

    The launcher passes whatever the user typed, so tokens such as ``--help``
    or ``--`` must reach the query verbatim.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        super().parse_args(ctx, [])
        ctx.args = list(args)
        return ctx.args


def parse_invocation(argv: list[str]) -> tuple[bool, str | None]:
    """Split ``[--dirs] [query]`` into the directory-mode flag and the query.

    ``--dirs`` only counts as the first token; anything else is query text.
    """
    if argv and argv[0] == DIRS_FLAG:
        return True, argv[1] if len(argv) > 1 else None
    return False, argv[0] if argv else None


@app.command(
    cls=RawArgsCommand,
    context_settings={"help_option_names": []},
)
@handle_exceptions
def search(ctx: typer.Context) -> None:
    """Print matching items as an Alfred script filter JSON document."""
    dirs, query = parse_invocation(ctx.args)

    config, meta = load_config()
    setup_logging(level=config.log_level)

    if meta.error:
        logger.warning("Config file %s ignored: %s", meta.path, meta.error)
    else:
        logger.debug(
            "Loaded configuration from %s (file: %s, env overrides: %s)",
            meta.path,
            meta.file_loaded,
            sorted(meta.env_overrides),
        )

    if dirs:
        items = list_directories(query, config)
    else:
        items = list_recent_projects(query, config)

    logger.debug("%d items matched query %r", len(items), query)
    write_response(build_response(items))


def cli() -> None:
    app()


if __name__ == "__main__":
    cli()
