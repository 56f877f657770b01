from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
import typer

from cihelper.build.service import LEGAL_DOCUMENTS
from cihelper.cli.commands import Command, dispatch, handler_for, parse_command
from cihelper.cli.context import CLIContext
from cihelper.core.config import Settings
from cihelper.core.errors import ErrorCode
from cihelper.core.result import Err, Ok, Result
from cihelper.git.repository import Repository
from cihelper.output.console import MockConsole
from cihelper.platform.http import MockHttpClient
from cihelper.platform.process import ProcessError

REV = "0123456789abcdef0123456789abcdef01234567"


def _ctx(
    repository: Repository,
    *,
    settings: Settings | None = None,
) -> CLIContext:
    http = MockHttpClient()
    for url in LEGAL_DOCUMENTS:
        http.set_download(url, b"terms")
    return CLIContext(
        settings=settings or Settings(goos="linux", goarch="amd64"),
        repository=repository,
        console=MockConsole(),
        http=http,
    )


def _console(ctx: CLIContext) -> MockConsole:
    assert isinstance(ctx.console, MockConsole)
    return ctx.console


def _stub_processes(monkeypatch: pytest.MonkeyPatch, returncode: int = 0) -> None:
    import cihelper.build.service as service

    def fake_run_silent(
        cmd: list[str], cwd: Path, env: dict[str, str] | None = None
    ) -> Result[None, ProcessError]:
        if returncode:
            return Err(ProcessError(command=tuple(cmd), returncode=returncode, stdout="", stderr=""))
        return Ok(None)

    monkeypatch.setattr(service, "run_silent", fake_run_silent)


class TestParseCommand:
    def test_known_tokens(self) -> None:
        assert parse_command("version-package") is Command.VERSION_PACKAGE
        assert parse_command("build-ui") is Command.BUILD_UI

    @pytest.mark.parametrize("token", [None, "", "nonexistent", "VERSION", "version "])
    def test_unknown_tokens(self, token: str | None) -> None:
        assert parse_command(token) is None

    def test_every_command_has_a_handler(self) -> None:
        assert len(Command) == 15
        for command in Command:
            assert callable(handler_for(command))


class TestUnknownCommand:
    @pytest.mark.parametrize("token", [None, "nonexistent"])
    def test_exits_one(
        self,
        token: str | None,
        tmp_path: Path,
        fake_repository: Callable[..., Repository],
    ) -> None:
        repo = fake_repository(tmp_path)
        ctx = _ctx(repo)

        with pytest.raises(typer.Exit) as exc:
            dispatch(token, ctx)

        assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
        assert _console(ctx).stderr == ["error: unknown sub-command"]
        assert _console(ctx).stdout == []
        assert repo.calls == []  # type: ignore[attr-defined]


class TestValueCommands:
    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("version", "1.15.0"),
            ("version-base", "1.15.0"),
            ("version-pre", ""),
            ("version-meta", ""),
            ("version-major", "1"),
            ("version-minor", "15"),
            ("version-patch", "0"),
            ("version-package", "1.15.0"),
            ("artifact-basename", "vault_1.15.0_linux_amd64"),
            ("revision", REV),
            ("date", "2023-09-04T15:32:11Z"),
        ],
    )
    def test_prints_value(
        self,
        token: str,
        expected: str,
        version_checkout: Path,
        fake_repository: Callable[..., Repository],
    ) -> None:
        ctx = _ctx(fake_repository(version_checkout))

        dispatch(token, ctx)

        assert _console(ctx).stdout == [expected]
        assert _console(ctx).stderr == []

    def test_prerelease_and_metadata_from_settings(
        self,
        version_checkout: Path,
        fake_repository: Callable[..., Repository],
    ) -> None:
        settings = Settings(prerelease="rc1", metadata="ent", goos="linux", goarch="amd64")
        repo = fake_repository(version_checkout)

        for token, expected in [
            ("version", "1.15.0-rc1+ent"),
            ("version-package", "1.15.0~rc1+ent"),
            ("artifact-basename", "vault_1.15.0-rc1+ent_linux_amd64"),
        ]:
            ctx = _ctx(repo, settings=settings)
            dispatch(token, ctx)
            assert _console(ctx).stdout == [expected]

    def test_oss_metadata_is_unset(
        self,
        version_checkout: Path,
        fake_repository: Callable[..., Repository],
    ) -> None:
        ctx = _ctx(
            fake_repository(version_checkout),
            settings=Settings(metadata="oss"),
        )

        dispatch("version", ctx)

        assert _console(ctx).stdout == ["1.15.0"]

    @pytest.mark.parametrize("token", ["version", "version-base", "version-major", "version-package"])
    def test_empty_base_is_env_error(
        self,
        token: str,
        tmp_path: Path,
        fake_repository: Callable[..., Repository],
    ) -> None:
        ctx = _ctx(fake_repository(tmp_path))

        with pytest.raises(typer.Exit) as exc:
            dispatch(token, ctx)

        assert exc.value.exit_code == int(ErrorCode.ENV_ERROR)
        assert _console(ctx).stdout == []
        assert _console(ctx).stderr[0].startswith("error: version base is empty")

    def test_git_failure_propagates_exit_code(
        self,
        version_checkout: Path,
        fake_repository: Callable[..., Repository],
    ) -> None:
        repo = fake_repository(version_checkout, failing=frozenset({"revision"}))
        ctx = _ctx(repo)

        with pytest.raises(typer.Exit) as exc:
            dispatch("revision", ctx)

        assert exc.value.exit_code == 128
        assert _console(ctx).stderr == ["error: git rev-parse HEAD: not a git repository"]


class TestActionCommands:
    def test_build(
        self,
        version_checkout: Path,
        fake_repository: Callable[..., Repository],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        _stub_processes(monkeypatch)
        ctx = _ctx(fake_repository(version_checkout))

        dispatch("build", ctx)

        assert _console(ctx).find("--> Building Vault v1.15.0")
        assert _console(ctx).messages[-1].startswith("+ go build -v")
        assert not _console(ctx).find("OK ")

    def test_build_failure_uses_child_exit_code(
        self,
        version_checkout: Path,
        fake_repository: Callable[..., Repository],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        _stub_processes(monkeypatch, returncode=2)
        ctx = _ctx(fake_repository(version_checkout))

        with pytest.raises(typer.Exit) as exc:
            dispatch("build", ctx)

        assert exc.value.exit_code == 2
        assert _console(ctx).stderr == ["error: go generate failed (exit 2)"]

    def test_build_ui(
        self,
        tmp_path: Path,
        fake_repository: Callable[..., Repository],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        (tmp_path / "ui").mkdir()
        _stub_processes(monkeypatch)
        ctx = _ctx(fake_repository(tmp_path))

        dispatch("build-ui", ctx)

        assert (tmp_path / "http" / "web_ui").is_dir()
        assert not _console(ctx).has_error()

    def test_build_ui_without_ui_dir_is_io_error(
        self,
        tmp_path: Path,
        fake_repository: Callable[..., Repository],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        _stub_processes(monkeypatch)
        ctx = _ctx(fake_repository(tmp_path))
        before = Path.cwd()

        with pytest.raises(typer.Exit) as exc:
            dispatch("build-ui", ctx)

        assert exc.value.exit_code == int(ErrorCode.IO_ERROR)
        assert _console(ctx).stderr == [f"error: {tmp_path / 'ui'}: no such directory"]
        assert Path.cwd() == before

    def test_bundle(self, tmp_path: Path, fake_repository: Callable[..., Repository]) -> None:
        (tmp_path / "dist").mkdir()
        (tmp_path / "dist" / "vault").write_bytes(b"binary")
        ctx = _ctx(fake_repository(tmp_path))

        dispatch("bundle", ctx)

        assert (tmp_path / "vault.zip").is_file()

    def test_bundle_without_dist_is_io_error(
        self, tmp_path: Path, fake_repository: Callable[..., Repository]
    ) -> None:
        ctx = _ctx(fake_repository(tmp_path))

        with pytest.raises(typer.Exit) as exc:
            dispatch("bundle", ctx)

        assert exc.value.exit_code == int(ErrorCode.IO_ERROR)

    def test_prepare_legal(
        self, tmp_path: Path, fake_repository: Callable[..., Repository]
    ) -> None:
        ctx = _ctx(fake_repository(tmp_path))

        dispatch("prepare-legal", ctx)

        doc_dir = tmp_path / ".release/linux/package/usr/share/doc/vault"
        assert (doc_dir / "EULA.txt").read_bytes() == b"terms"
        assert (doc_dir / "TermsOfEvaluation.txt").read_bytes() == b"terms"
