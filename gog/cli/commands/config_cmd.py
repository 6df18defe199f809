"""Config commands - inspect and change the user configuration."""

from __future__ import annotations

import typer

from gog.cli.context import build_context
from gog.core.config import LOG_LEVELS, is_valid_tag_prefix, save_config
from gog.core.errors import ErrorCode
from gog.core.result import Err
from gog.output.console import Style

config_app = typer.Typer(
    no_args_is_help=True,
    help="Show or change the gog user configuration.",
    add_completion=False,
)


@config_app.command("show")
def show() -> None:
    """Print the configuration file and the effective settings."""
    ctx = build_context()
    ctx.console.header(str(ctx.config_path))
    ctx.console.print(f"  tag_prefix: {ctx.config.tag_prefix!r}")
    ctx.console.print(f"  log_level:  {ctx.config.log_level}")
    effective = ctx.config.effective_log_level()
    if effective != ctx.config.log_level:
        ctx.console.print(f"  (log level overridden to {effective} by the environment)", Style.DIM)


@config_app.command("set-prefix")
def set_prefix(
    prefix: str = typer.Argument(..., help="Letters optionally followed by a dash, e.g. v or rel-"),
) -> None:
    """Set the default version tag prefix."""
    ctx = build_context()
    if not is_valid_tag_prefix(prefix):
        ctx.console.error(f"invalid tag prefix {prefix!r}")
        ctx.console.print("hint: use letters optionally followed by a dash, e.g. 'v' or 'rel-'", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    saved = save_config(ctx.config.with_tag_prefix(prefix), ctx.config_path)
    if isinstance(saved, Err):
        ctx.console.error(saved.error.message)
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))
    ctx.console.success(f"tag prefix set to {prefix!r}")


@config_app.command("set-log-level")
def set_log_level(
    level: str = typer.Argument(..., help=f"One of {', '.join(LOG_LEVELS)}"),
) -> None:
    """Set the console log level."""
    ctx = build_context()
    normalized = level.strip().upper()
    if normalized not in LOG_LEVELS:
        ctx.console.error(f"invalid log level {level!r}")
        ctx.console.print(f"hint: expected one of {', '.join(LOG_LEVELS)}", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    saved = save_config(ctx.config.with_log_level(normalized), ctx.config_path)
    if isinstance(saved, Err):
        ctx.console.error(saved.error.message)
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))
    ctx.console.success(f"log level set to {normalized}")
