"""Shared helpers, option decorators, and the main CLI group."""

from __future__ import annotations

import click

from .._hashing import DEFAULT_HASH, HASH_ALGORITHMS
from .._types import ChangeActionKind
from ..exceptions import DiffCopyError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _status(ctx, msg):
    """Emit a status message to stderr when verbose mode (-v) is on."""
    if ctx.obj.get("verbose"):
        click.echo(msg, err=True)


def _hasher(ctx) -> str:
    """Return the hash algorithm chosen with --hash / DIFFCOPY_HASH."""
    return ctx.obj.get("hash", DEFAULT_HASH)


def _click_error(exc: DiffCopyError) -> click.ClickException:
    """Wrap a library error for reporting (exit code 1)."""
    return click.ClickException(str(exc))


def _echo_action(path: str, action: ChangeActionKind | None, ctx) -> None:
    """Print ``+ path`` / ``~ path``; unchanged files only in verbose mode."""
    if action is not None:
        click.echo(f"{action.symbol} {path}")
    else:
        _status(ctx, f"= {path}")


def _dry_run_option(f):
    """Shared --dry-run / -n flag."""
    return click.option(
        "-n", "--dry-run", is_flag=True, default=False,
        help="Show what would change without writing anything.",
    )(f)


# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--hash", "hash_name", type=click.Choice(sorted(HASH_ALGORITHMS)),
              default=DEFAULT_HASH, show_default=True, envvar="DIFFCOPY_HASH",
              help="Hash algorithm used to compare contents (or set DIFFCOPY_HASH).")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output on stderr.")
@click.pass_context
def main(ctx, hash_name, verbose):
    """diffcopy: copy files only when their content differs.

    Identical destination files are never rewritten, so their
    modification times are preserved.

    \b
    Quick start:
      diffcopy file src.txt dest.txt
      generate | diffcopy bytes out.dat
      diffcopy dir ./build ./deploy

    \b
    Directory copies merge into the destination: files that exist only
    there are kept.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["hash"] = hash_name
