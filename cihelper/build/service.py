"""External build actions: compile, UI build, bundling, legal staging.

Each action runs its steps in order from the repository root and stops at
the first failure. Working-directory changes are scoped with ``pushd`` so
the caller's directory is back in place however an action ends.
"""

from __future__ import annotations

import shlex
import shutil
from dataclasses import dataclass
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZipFile

from cihelper.build.errors import (
    BuildError,
    DownloadFailed,
    FilesystemError,
    OutputMissing,
    StepFailed,
)
from cihelper.build.ldflags import BuildInfo, build_ldflags
from cihelper.core.config import DEFAULT_BUNDLE_NAME, Settings
from cihelper.core.result import Err, Ok, Result
from cihelper.git.repository import GitError, Repository
from cihelper.output.console import ConsoleProtocol, Style
from cihelper.platform.directory import pushd
from cihelper.platform.http import HttpClient, RealHttpClient
from cihelper.platform.process import child_env, run_silent
from cihelper.version.resolver import VersionError, VersionResolver

__all__ = ["BuildService", "LEGAL_DOCUMENTS"]

LEGAL_DOCUMENTS = (
    "https://eula.hashicorp.com/EULA.txt",
    "https://eula.hashicorp.com/TermsOfEvaluation.txt",
)

_DIST_DIR = "dist"
_OUT_DIR = "out"
_WEB_UI_DIR = Path("http") / "web_ui"
_UI_DIR = "ui"
_PACKAGE_DOC_DIR = Path(".release") / "linux" / "package" / "usr" / "share" / "doc"


@dataclass(frozen=True, slots=True)
class _Step:
    name: str
    cmd: list[str]


class BuildService:
    """Runs the external build actions for one checkout."""

    def __init__(
        self,
        *,
        settings: Settings,
        repository: Repository,
        console: ConsoleProtocol,
        http: HttpClient | None = None,
    ) -> None:
        self._settings = settings
        self._repository = repository
        self._console = console
        self._http = http or RealHttpClient()
        self._resolver = VersionResolver(settings, repository)

    def build(self) -> Result[Path, BuildError | VersionError]:
        """Generate code and compile the binary into ``dist/``.

        Returns:
            Ok(dist directory) on success
        """
        info = self._resolver.resolve()
        if isinstance(info, Err):
            return info
        revision = self._repository.revision()
        if isinstance(revision, Err):
            return revision
        build_date = self._repository.commit_date(self._settings.date_format)
        if isinstance(build_date, Err):
            return build_date
        root = self._repository.toplevel()
        if isinstance(root, Err):
            return root
        checkout = _existing_dir(root.value)
        if isinstance(checkout, Err):
            return checkout

        ldflags = build_ldflags(
            info.value,
            BuildInfo(
                revision=revision.value,
                build_date=build_date.value,
                tags=self._settings.go_tags,
                strip_symbols=self._settings.remove_symbols,
            ),
        )

        with pushd(checkout.value) as here:
            # Generators run for the host, not the cross-compile target.
            generated = self._run(
                _Step("go generate", ["go", "generate", "./..."]),
                cwd=here,
                env=child_env({"GOOS": "", "GOARCH": ""}),
            )
            if isinstance(generated, Err):
                return generated

            self._console.print(ldflags.message)

            for name in (_DIST_DIR, _OUT_DIR):
                made = _mkdir(here / name)
                if isinstance(made, Err):
                    return made

            compile_step = _Step(
                "go build",
                [
                    "go",
                    "build",
                    "-v",
                    "-tags",
                    self._settings.go_tags,
                    "-ldflags",
                    ldflags.flags,
                    "-o",
                    f"{_DIST_DIR}/",
                ],
            )
            self._console.print(f"+ {shlex.join(compile_step.cmd)}", Style.DIM)
            compiled = self._run(compile_step, cwd=here)
            if isinstance(compiled, Err):
                return compiled

            return Ok(here / _DIST_DIR)

    def build_ui(self) -> Result[Path, BuildError | GitError]:
        """Install UI dependencies and build the web UI bundle.

        Returns:
            Ok(web UI output directory) on success
        """
        root = self._repository.toplevel()
        if isinstance(root, Err):
            return root

        ui_dir = _existing_dir(root.value / _UI_DIR)
        if isinstance(ui_dir, Err):
            return ui_dir

        web_ui = root.value.resolve() / _WEB_UI_DIR
        made = _mkdir(web_ui)
        if isinstance(made, Err):
            return made

        with pushd(ui_dir.value) as ui:
            for step in (
                _Step("yarn install", ["yarn", "install"]),
                _Step("npm rebuild", ["npm", "rebuild", "node-sass"]),
                _Step("yarn build", ["yarn", "run", "build"]),
            ):
                done = self._run(step, cwd=ui)
                if isinstance(done, Err):
                    return done

        return Ok(web_ui)

    def bundle(self) -> Result[Path, BuildError | GitError]:
        """Zip every file under ``dist/`` into the bundle, without directories.

        Returns:
            Ok(bundle path) on success
        """
        root = self._repository.toplevel()
        if isinstance(root, Err):
            return root

        bundle_path = self._settings.bundle_path or root.value / DEFAULT_BUNDLE_NAME
        dist = root.value / _DIST_DIR
        self._console.print(f"--> Bundling {_DIST_DIR}/* to {bundle_path}")

        files = sorted(p for p in dist.rglob("*") if p.is_file()) if dist.is_dir() else []
        if not files:
            return Err(OutputMissing(path=dist))

        try:
            bundle_path.parent.mkdir(parents=True, exist_ok=True)
            with ZipFile(bundle_path, "w", compression=ZIP_DEFLATED, strict_timestamps=False) as zf:
                for src in files:
                    zf.write(src, arcname=src.name)
        except OSError as e:
            return Err(FilesystemError(path=bundle_path, reason=str(e)))

        return Ok(bundle_path)

    def prepare_legal(self) -> Result[Path, BuildError | GitError]:
        """Download the license documents and stage them for Linux packages.

        Returns:
            Ok(staged documentation directory) on success
        """
        root = self._repository.toplevel()
        if isinstance(root, Err):
            return root

        checkout = _existing_dir(root.value)
        if isinstance(checkout, Err):
            return checkout

        with pushd(checkout.value) as here:
            dist = here / _DIST_DIR
            made = _mkdir(dist)
            if isinstance(made, Err):
                return made

            downloaded: list[Path] = []
            for url in LEGAL_DOCUMENTS:
                dest = dist / url.rsplit("/", 1)[-1]
                self._console.print(f"--> Downloading {url}", Style.DIM)
                result = self._http.download(url, dest)
                if isinstance(result, Err):
                    e = result.error
                    return Err(DownloadFailed(url=e.url, status=e.status, reason=e.message))
                downloaded.append(result.value)

            doc_dir = here / _PACKAGE_DOC_DIR / self._settings.pkg_name
            made = _mkdir(doc_dir)
            if isinstance(made, Err):
                return made

            for src in downloaded:
                try:
                    shutil.copyfile(src, doc_dir / src.name)
                except OSError as e:
                    return Err(FilesystemError(path=doc_dir / src.name, reason=str(e)))

            return Ok(doc_dir)

    def _run(
        self,
        step: _Step,
        *,
        cwd: Path,
        env: dict[str, str] | None = None,
    ) -> Result[None, StepFailed]:
        result = run_silent(step.cmd, cwd=cwd, env=env)
        if isinstance(result, Err):
            e = result.error
            return Err(
                StepFailed(
                    step=step.name,
                    command=e.command,
                    returncode=e.returncode,
                    detail=e.stderr.strip(),
                )
            )
        return Ok(None)


def _mkdir(path: Path) -> Result[Path, FilesystemError]:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return Err(FilesystemError(path=path, reason=str(e)))
    return Ok(path)


def _existing_dir(path: Path) -> Result[Path, FilesystemError]:
    if not path.is_dir():
        return Err(FilesystemError(path=path, reason="no such directory"))
    return Ok(path)
