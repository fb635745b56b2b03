"""The file, bytes and dir commands."""

from __future__ import annotations

import os
import sys

import click

from .._exclude import ExcludeFilter
from .._hashing import resolve_hasher
from .._types import format_summary
from ..directory import diff_copy_dir, diff_copy_dir_dry_run
from ..exceptions import DiffCopyError
from ..files import diff_copy_bytes, diff_copy_file, plan_bytes, plan_file
from ._helpers import (
    main,
    _dry_run_option,
    _echo_action,
    _hasher,
    _click_error,
    _status,
)


@main.command("file")
@click.argument("source", type=click.Path(dir_okay=False))
@click.argument("dest", type=click.Path(dir_okay=False))
@_dry_run_option
@click.pass_context
def file_cmd(ctx, source, dest, dry_run):
    """Copy SOURCE to DEST unless DEST already has the same content."""
    hasher = _hasher(ctx)
    _status(ctx, f"Comparing {source} -> {dest} ({hasher})")
    try:
        if dry_run:
            action = plan_file(source, dest, resolve_hasher(hasher))
        else:
            action = diff_copy_file(source, dest, hasher=hasher)
    except DiffCopyError as exc:
        raise _click_error(exc) from exc
    _echo_action(dest, action, ctx)


@main.command("bytes")
@click.argument("dest", type=click.Path(dir_okay=False))
@_dry_run_option
@click.pass_context
def bytes_cmd(ctx, dest, dry_run):
    """Write standard input to DEST unless DEST already holds exactly those bytes."""
    data = sys.stdin.buffer.read()
    hasher = _hasher(ctx)
    _status(ctx, f"Comparing {len(data)} bytes from stdin -> {dest} ({hasher})")
    try:
        if dry_run:
            action = plan_bytes(data, dest, resolve_hasher(hasher))
        else:
            action = diff_copy_bytes(data, dest, hasher=hasher)
    except DiffCopyError as exc:
        raise _click_error(exc) from exc
    _echo_action(dest, action, ctx)


@main.command("dir")
@click.argument("source", type=click.Path(file_okay=False))
@click.argument("dest", type=click.Path(file_okay=False))
@_dry_run_option
@click.option("--exclude", multiple=True,
              help="Exclude files matching pattern (gitignore syntax, repeatable).")
@click.option("--exclude-from", "exclude_from", type=click.Path(exists=True),
              help="Read exclude patterns from file.")
@click.option("--gitignore", "use_gitignore", is_flag=True, default=False,
              help="Honor .gitignore files found in the source tree.")
@click.pass_context
def dir_cmd(ctx, source, dest, dry_run, exclude, exclude_from, use_gitignore):
    """Merge directory SOURCE into DEST, writing only files that differ.

    Files that exist only in DEST are left alone.
    """
    excl = ExcludeFilter(patterns=exclude, exclude_from=exclude_from,
                         gitignore=use_gitignore)
    hasher = _hasher(ctx)
    _status(ctx, f"Merging {source} -> {dest} ({hasher})")
    run = diff_copy_dir_dry_run if dry_run else diff_copy_dir
    try:
        report = run(source, dest, hasher=hasher,
                     exclude=excl if excl.active else None)
    except DiffCopyError as exc:
        raise _click_error(exc) from exc

    for action in report.actions():
        click.echo(f"{action.action.symbol} {action.path}")
    for path in report.unchanged:
        _status(ctx, f"= {path}")
    prefix = "Would apply: " if dry_run else ""
    _status(ctx, prefix + format_summary(report) + f" in {os.fspath(dest)}")
