"""Sub-command table and dispatch.

Every recognised token is a ``Command`` member, and ``handler_for`` maps
each member to exactly one handler. A handler returns either a value for
stdout (``str``) or the path an external action produced (``Path``). Paths
are not printed, so stdout carries only values CI captures.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from pathlib import Path
from typing import TypeAlias, assert_never

import typer

from cihelper.build.service import BuildService
from cihelper.cli.context import CLIContext
from cihelper.core.errors import ErrorCode
from cihelper.core.result import Err, Ok, Result
from cihelper.output.errors import CommandError, error_exit_code, print_error
from cihelper.version.artifact import artifact_basename, target_platform
from cihelper.version.package import split_base
from cihelper.version.resolver import VersionResolver

__all__ = ["Command", "Handler", "dispatch", "handler_for", "parse_command"]

UNKNOWN_COMMAND_MESSAGE = "unknown sub-command"

Handler: TypeAlias = Callable[[CLIContext], Result[str | Path, CommandError]]


class Command(StrEnum):
    ARTIFACT_BASENAME = "artifact-basename"
    BUILD = "build"
    BUILD_UI = "build-ui"
    BUNDLE = "bundle"
    DATE = "date"
    PREPARE_LEGAL = "prepare-legal"
    REVISION = "revision"
    VERSION = "version"
    VERSION_BASE = "version-base"
    VERSION_PRE = "version-pre"
    VERSION_MAJOR = "version-major"
    VERSION_META = "version-meta"
    VERSION_MINOR = "version-minor"
    VERSION_PACKAGE = "version-package"
    VERSION_PATCH = "version-patch"


def parse_command(token: str | None) -> Command | None:
    if token is None:
        return None
    try:
        return Command(token)
    except ValueError:
        return None


def _resolver(ctx: CLIContext) -> VersionResolver:
    return VersionResolver(ctx.settings, ctx.repository)


def _builder(ctx: CLIContext) -> BuildService:
    return BuildService(
        settings=ctx.settings,
        repository=ctx.repository,
        console=ctx.console,
        http=ctx.http,
    )


def _version(ctx: CLIContext) -> Result[str, CommandError]:
    return _resolver(ctx).resolve().map(lambda info: info.version)


def _version_base(ctx: CLIContext) -> Result[str, CommandError]:
    return _resolver(ctx).require_base()


def _version_pre(ctx: CLIContext) -> Result[str, CommandError]:
    return _resolver(ctx).prerelease()


def _version_meta(ctx: CLIContext) -> Result[str, CommandError]:
    return _resolver(ctx).metadata()


def _version_part(index: int) -> Handler:
    def handler(ctx: CLIContext) -> Result[str, CommandError]:
        return _resolver(ctx).require_base().map(lambda base: split_base(base)[index])

    return handler


def _version_package(ctx: CLIContext) -> Result[str, CommandError]:
    return _resolver(ctx).resolve().map(lambda info: info.package)


def _artifact_basename(ctx: CLIContext) -> Result[str, CommandError]:
    info = _resolver(ctx).resolve()
    if isinstance(info, Err):
        return info
    target = target_platform(ctx.settings, cwd=ctx.repository.path)
    if isinstance(target, Err):
        return target
    goos, goarch = target.value
    return Ok(artifact_basename(info.value.version, ctx.settings.pkg_name, goos, goarch))


def _date(ctx: CLIContext) -> Result[str, CommandError]:
    return ctx.repository.commit_date(ctx.settings.date_format)


def _revision(ctx: CLIContext) -> Result[str, CommandError]:
    return ctx.repository.revision()


def _build(ctx: CLIContext) -> Result[Path, CommandError]:
    return _builder(ctx).build()


def _build_ui(ctx: CLIContext) -> Result[Path, CommandError]:
    return _builder(ctx).build_ui()


def _bundle(ctx: CLIContext) -> Result[Path, CommandError]:
    return _builder(ctx).bundle()


def _prepare_legal(ctx: CLIContext) -> Result[Path, CommandError]:
    return _builder(ctx).prepare_legal()


def handler_for(command: Command) -> Handler:
    match command:
        case Command.ARTIFACT_BASENAME:
            return _artifact_basename
        case Command.BUILD:
            return _build
        case Command.BUILD_UI:
            return _build_ui
        case Command.BUNDLE:
            return _bundle
        case Command.DATE:
            return _date
        case Command.PREPARE_LEGAL:
            return _prepare_legal
        case Command.REVISION:
            return _revision
        case Command.VERSION:
            return _version
        case Command.VERSION_BASE:
            return _version_base
        case Command.VERSION_PRE:
            return _version_pre
        case Command.VERSION_MAJOR:
            return _version_part(0)
        case Command.VERSION_META:
            return _version_meta
        case Command.VERSION_MINOR:
            return _version_part(1)
        case Command.VERSION_PACKAGE:
            return _version_package
        case Command.VERSION_PATCH:
            return _version_part(2)
        case _:
            assert_never(command)


def dispatch(token: str | None, ctx: CLIContext) -> None:
    """Run the sub-command named by ``token``.

    Raises:
        typer.Exit: With code 1 for an unknown token, or the mapped exit code
            of the first error the command hit.
    """
    command = parse_command(token)
    if command is None:
        ctx.console.error(UNKNOWN_COMMAND_MESSAGE)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    match handler_for(command)(ctx):
        case Err(error):
            print_error(error, ctx.console)
            raise typer.Exit(code=error_exit_code(error))
        case Ok(str() as value):
            ctx.console.out(value)
        case Ok(_):
            # Actions already reported progress through their status lines.
            pass
