from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from cihelper.core.config import Settings
from cihelper.git.repository import Repository
from cihelper.output.console import ConsoleProtocol, RichConsole
from cihelper.platform.http import HttpClient, RealHttpClient


@dataclass(frozen=True, slots=True)
class CLIContext:
    settings: Settings
    repository: Repository
    console: ConsoleProtocol
    http: HttpClient


def build_context() -> CLIContext:
    return CLIContext(
        settings=Settings.from_env(os.environ),
        repository=Repository(Path.cwd()),
        console=RichConsole(),
        http=RealHttpClient(),
    )
