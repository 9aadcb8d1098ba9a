"""Shared test fixtures for dox tests."""

import io
import logging
import subprocess
from pathlib import Path

import pytest
from rich.console import Console
from rich.logging import RichHandler
from typer.testing import CliRunner

from dox.config import DoxConfig
from dox.core import RunContext, Step, StepError
from dox.output import OutputContext


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def git_identity(monkeypatch: pytest.MonkeyPatch) -> None:
    """Give git commits an identity without touching global config."""
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@test.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@test.com")
    monkeypatch.delenv("TEAMCITY_VERSION", raising=False)


@pytest.fixture(autouse=True)
def drop_cli_log_handlers():
    """Remove handlers installed by configure_logging once a test ends."""
    yield
    root = logging.getLogger()
    for handler in [h for h in root.handlers if isinstance(h, RichHandler)]:
        root.removeHandler(handler)
    logging.getLogger("urllib3").setLevel(logging.NOTSET)


@pytest.fixture
def quiet_output() -> OutputContext:
    """Output context writing to a throwaway buffer."""
    return OutputContext(Console(file=io.StringIO(), no_color=True))


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with an initial commit."""
    repo = tmp_path / "repo"
    repo.mkdir()
    subprocess.run(["git", "init"], cwd=repo, check=True, capture_output=True)
    (repo / "README.md").write_text("# Test\n")
    subprocess.run(["git", "add", "."], cwd=repo, check=True, capture_output=True)
    subprocess.run(
        ["git", "commit", "-m", "Initial commit"],
        cwd=repo,
        check=True,
        capture_output=True,
    )
    return repo


@pytest.fixture
def bare_remote(tmp_path: Path) -> Path:
    """Create an empty bare repository to clone from and push to."""
    remote = tmp_path / "remote.git"
    subprocess.run(["git", "init", "--bare", str(remote)], check=True, capture_output=True)
    return remote


@pytest.fixture
def docs_input(tmp_path: Path) -> Path:
    """Create a documentation input directory.

    Contains .docfx/docfx.json, CHANGELOG.md and LICENSE.
    """
    input_dir = tmp_path / "docs"
    docfx_dir = input_dir / ".docfx"
    docfx_dir.mkdir(parents=True)
    (docfx_dir / "docfx.json").write_text('{"build": {"dest": "_site"}}')
    (input_dir / "CHANGELOG.md").write_text("# Changelog\n\n## 1.0.0\n- First release\n")
    (input_dir / "LICENSE").write_text("Boost Software License - Version 1.0\n")
    return input_dir


@pytest.fixture
def run_context(docs_input: Path) -> RunContext:
    """Run context over docs_input with default configuration."""
    return RunContext(config=DoxConfig(), input_dir=docs_input)


@pytest.fixture
def built_site(run_context: RunContext) -> Path:
    """Populate the DocFX output folder with a small generated site."""
    site = run_context.site_dir
    (site / "api").mkdir(parents=True)
    (site / "index.html").write_text(
        '<a href="https://gdx.dotbunny.com/api/GDX.html">API</a>\n'
        '<a href="https://github.com/dotBunny/GDX/blob/main/README.md">Source</a>\n'
    )
    (site / "api" / "GDX.html").write_text(
        '<a href="/index.html">Home</a> <a href="Other.html#members">Other</a>\n'
    )
    (site / "api" / "Other.html").write_text('<a href="../index.html">Home</a>\n')
    (site / "xrefmap.yml").write_text("href: https://gdx-dev.dotbunny.com/api/GDX.html\n")
    return site


class RecordingStep(Step):
    """Step that records its lifecycle calls into a shared log."""

    def __init__(
        self,
        identifier: str,
        requires: tuple[str, ...] = (),
        log: list[tuple[str, str]] | None = None,
        fail: bool = False,
    ) -> None:
        self.identifier = identifier
        self.header = identifier.title()
        self.requires = requires
        self.log = log if log is not None else []
        self.fail = fail

    def setup(self, context: RunContext) -> None:
        self.log.append(("setup", self.identifier))

    def execute(self, context: RunContext) -> None:
        self.log.append(("execute", self.identifier))
        if self.fail:
            raise StepError(f"{self.identifier} failed")

    def clean(self, context: RunContext) -> None:
        self.log.append(("clean", self.identifier))
