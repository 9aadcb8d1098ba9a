"""CLI integration tests for dox."""

import os
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from dox.cli import app


def _invoke(runner: CliRunner, *args: str):
    return runner.invoke(app, ["--no-color", *args])


class TestVersionCommand:
    """Tests for --version flag."""

    def test_version_shows_version(self, runner: CliRunner) -> None:
        """--version should display version string."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "dox 0.1.0" in result.output

    def test_version_short_flag(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0
        assert "dox" in result.output


class TestHelpCommand:
    """Tests for --help flag."""

    def test_help_shows_commands(self, runner: CliRunner) -> None:
        """--help should list all available commands."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ["generate", "deploy", "steps", "init", "links"]:
            assert command in result.output

    def test_no_args_shows_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, [])
        assert result.exit_code == 2
        assert "Usage:" in result.output


class TestStepsCommand:
    """Tests for the steps command."""

    def test_lists_registered_steps(self, runner: CliRunner) -> None:
        result = _invoke(runner, "steps")
        assert result.exit_code == 0
        assert "metadata" in result.output
        assert "validate" in result.output


class TestInitCommand:
    """Tests for the init command."""

    def test_creates_config(self, runner: CliRunner, tmp_path: Path) -> None:
        result = _invoke(runner, "init", "--input", str(tmp_path))
        assert result.exit_code == 0
        assert (tmp_path / "dox.toml").exists()
        assert "Created config template" in result.output

    def test_existing_config_untouched(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "dox.toml").write_text("# mine\n")
        result = _invoke(runner, "init", "--input", str(tmp_path))
        assert result.exit_code == 0
        assert "Config already exists" in result.output
        assert (tmp_path / "dox.toml").read_text() == "# mine\n"


class TestGenerateCommand:
    """Tests for the generate command."""

    def test_runs_selected_steps(self, runner: CliRunner, docs_input: Path) -> None:
        result = _invoke(
            runner, "generate", "-i", str(docs_input), "--steps", "files-changelog,FILES-LICENSE"
        )
        assert result.exit_code == 0, result.output
        assert "Generating with steps: files-changelog, files-license" in result.output
        assert "Generation complete." in result.output
        assert (docs_input / ".docfx" / "changelog.md").exists()
        assert (docs_input / ".docfx" / "license.md").exists()

    def test_no_known_steps_fails(self, runner: CliRunner, docs_input: Path) -> None:
        result = _invoke(runner, "generate", "-i", str(docs_input), "--steps", "nope")
        assert result.exit_code == 1
        assert "No steps defined." in result.output

    def test_empty_steps_fails(self, runner: CliRunner, docs_input: Path) -> None:
        """An explicitly empty list does not fall back to the configured default."""
        with patch("dox.steps.docfx.run_docfx") as run:
            result = _invoke(runner, "generate", "-i", str(docs_input), "-s", "")
        assert result.exit_code == 1
        assert "No steps defined." in result.output
        run.assert_not_called()

    def test_empty_steps_with_validation_fails(
        self, runner: CliRunner, docs_input: Path
    ) -> None:
        result = _invoke(
            runner, "generate", "-i", str(docs_input), "-s", " , ", "--validate-links"
        )
        assert result.exit_code == 1
        assert "No steps defined." in result.output

    def test_step_failure_exits_1(self, runner: CliRunner, docs_input: Path) -> None:
        """A failing step stops the run with exit code 1."""
        (docs_input / "LICENSE").unlink()
        result = _invoke(
            runner, "generate", "-i", str(docs_input), "-s", "files-license,files-changelog"
        )
        assert result.exit_code == 1
        assert "Unable to find" in result.output
        assert not (docs_input / ".docfx" / "changelog.md").exists()

    def test_missing_input_dir(self, runner: CliRunner, tmp_path: Path) -> None:
        result = _invoke(runner, "generate", "-i", str(tmp_path / "missing"))
        assert result.exit_code == 1
        assert "Input directory not found" in result.output

    def test_invalid_config(self, runner: CliRunner, docs_input: Path) -> None:
        (docs_input / "dox.toml").write_text("[site\n")
        result = _invoke(runner, "generate", "-i", str(docs_input), "-s", "files-license")
        assert result.exit_code == 1
        assert "Invalid" in result.output

    def test_unknown_options_ignored(self, runner: CliRunner, docs_input: Path) -> None:
        result = _invoke(
            runner, "generate", "-i", str(docs_input), "-s", "files-license", "--legacy-flag"
        )
        assert result.exit_code == 0, result.output

    def test_clean_before_run(self, runner: CliRunner, docs_input: Path) -> None:
        stale = docs_input / ".docfx" / "license.md"
        stale.write_text("stale")
        result = _invoke(runner, "generate", "-i", str(docs_input), "-s", "files-license", "--clean")
        assert result.exit_code == 0
        assert "stale" not in stale.read_text()

    def test_rewrites_links_for_host(
        self, runner: CliRunner, docs_input: Path, built_site: Path
    ) -> None:
        result = _invoke(runner, "generate", "-i", str(docs_input), "-s", "links", "--host", "dev")
        assert result.exit_code == 0, result.output
        assert "gdx-dev.dotbunny.com" in (built_site / "index.html").read_text()

    def test_output_copy_gets_host_links(
        self, runner: CliRunner, docs_input: Path, built_site: Path, tmp_path: Path
    ) -> None:
        out = tmp_path / "published"
        with patch("dox.steps.docfx.run_docfx", return_value=True):
            result = _invoke(
                runner, "generate", "-i", str(docs_input), "--host", "main", "--output", str(out),
                "-s", "build,links",
            )
        assert result.exit_code == 0, result.output
        xrefmap = (out / "xrefmap.yml").read_text()
        assert "gdx.dotbunny.com" in xrefmap
        assert "gdx-dev" not in xrefmap

    def test_validate_links_appends_step(
        self, runner: CliRunner, docs_input: Path, built_site: Path
    ) -> None:
        with (
            patch("dox.steps.links.is_online", return_value=True),
            patch("dox.core.link_validator.http.probe", return_value=200) as probe,
        ):
            result = _invoke(
                runner, "generate", "-i", str(docs_input), "-s", "links", "--host", "main",
                "--validate-links",
            )
        assert result.exit_code == 0, result.output
        assert "Generating with steps: links, validate" in result.output
        assert probe.called

    def test_deploy_skipped_while_hosting(self, runner: CliRunner, docs_input: Path) -> None:
        with (
            patch("dox.steps.docfx.serve", return_value=MagicMock(pid=1)),
            patch("dox.steps.docfx.wait_until_ready", return_value=True),
            patch("dox.commands.generate.run_deploy") as run_deploy,
        ):
            result = _invoke(
                runner, "generate", "-i", str(docs_input), "-s", "host", "--deploy", "-b", "dev"
            )
        assert result.exit_code == 0, result.output
        assert "Skipping deployment" in result.output
        run_deploy.assert_not_called()

    def test_deploys_after_run(self, runner: CliRunner, docs_input: Path) -> None:
        with patch("dox.commands.generate.run_deploy") as run_deploy:
            result = _invoke(
                runner, "generate", "-i", str(docs_input), "-s", "files-license", "--deploy",
                "-b", "main",
            )
        assert result.exit_code == 0, result.output
        run_deploy.assert_called_once()
        assert run_deploy.call_args.args[0].branch == "main"


class TestDeployCommand:
    """Tests for the deploy command."""

    def _configure(self, docs_input: Path, repository: Path) -> None:
        (docs_input / "dox.toml").write_text(f'[deploy]\nrepository = "{repository}"\n')

    def test_deploys_built_site(
        self, runner: CliRunner, docs_input: Path, built_site: Path, bare_remote: Path
    ) -> None:
        self._configure(docs_input, bare_remote)
        result = _invoke(runner, "deploy", "-b", "dev", "-i", str(docs_input))
        assert result.exit_code == 0, result.output
        assert "Deployed" in result.output

        remote_sha = subprocess.run(
            ["git", "rev-parse", "dev"], cwd=bare_remote, capture_output=True, text=True
        ).stdout.strip()
        assert remote_sha[:12] in result.output

    def test_second_deploy_reports_no_changes(
        self, runner: CliRunner, docs_input: Path, built_site: Path, bare_remote: Path
    ) -> None:
        self._configure(docs_input, bare_remote)
        _invoke(runner, "deploy", "-b", "dev", "-i", str(docs_input))
        result = _invoke(runner, "deploy", "-b", "dev", "-i", str(docs_input))
        assert result.exit_code == 0, result.output
        assert "already up to date" in result.output

    def test_set_user_env_exports_commit(
        self, runner: CliRunner, docs_input: Path, built_site: Path, bare_remote: Path
    ) -> None:
        self._configure(docs_input, bare_remote)
        with patch.dict(os.environ):
            result = _invoke(
                runner, "deploy", "-b", "dev", "-i", str(docs_input), "--set-user-env"
            )
            assert result.exit_code == 0, result.output
            assert len(os.environ["DOX_DEPLOY_COMMIT"]) == 40

    def test_unknown_branch_exits_1(
        self, runner: CliRunner, docs_input: Path, built_site: Path
    ) -> None:
        result = _invoke(runner, "deploy", "-b", "feature", "-i", str(docs_input))
        assert result.exit_code == 1
        assert "Unknown deployment branch" in result.output

    def test_missing_site_exits_1(self, runner: CliRunner, docs_input: Path) -> None:
        result = _invoke(runner, "deploy", "-b", "dev", "-i", str(docs_input))
        assert result.exit_code == 1
        assert "No built site found" in result.output

    def test_git_failure_exits_3(
        self, runner: CliRunner, docs_input: Path, built_site: Path, tmp_path: Path
    ) -> None:
        """Clone and push failures are reported with a distinct exit code."""
        self._configure(docs_input, tmp_path / "missing.git")
        result = _invoke(runner, "deploy", "-b", "dev", "-i", str(docs_input))
        assert result.exit_code == 3
        assert "Deployment failed" in result.output

    def test_branch_is_required(self, runner: CliRunner, docs_input: Path) -> None:
        result = _invoke(runner, "deploy", "-i", str(docs_input))
        assert result.exit_code == 2


class TestLinksCommands:
    """Tests for the links sub-commands."""

    def test_rewrite(self, runner: CliRunner, built_site: Path) -> None:
        result = _invoke(runner, "links", "rewrite", str(built_site), "--host", "local")
        assert result.exit_code == 0, result.output
        assert "Rewrote 2 file(s) for local." in result.output

    def test_rewrite_requires_host(self, runner: CliRunner, built_site: Path) -> None:
        result = _invoke(runner, "links", "rewrite", str(built_site))
        assert result.exit_code == 2

    def test_rewrite_missing_dir(self, runner: CliRunner, tmp_path: Path) -> None:
        result = _invoke(runner, "links", "rewrite", str(tmp_path / "nope"), "--host", "dev")
        assert result.exit_code == 1

    def test_check_summary(self, runner: CliRunner, built_site: Path) -> None:
        with patch("dox.core.link_validator.http.probe", return_value=200):
            result = _invoke(runner, "links", "check", str(built_site), "--host", "main")
        assert result.exit_code == 0, result.output
        assert "Files checked: 3" in result.output
        assert "Good Links: 5" in result.output
        assert "Bad Links: 0" in result.output

    def test_check_strict_fails_on_bad_links(self, runner: CliRunner, built_site: Path) -> None:
        with patch("dox.core.link_validator.http.probe", return_value=404):
            result = _invoke(
                runner, "links", "check", str(built_site), "--host", "main", "--strict"
            )
        assert result.exit_code == 1
        assert "Bad Links: 4" in result.output
        assert "GitHub Links: 1" in result.output
