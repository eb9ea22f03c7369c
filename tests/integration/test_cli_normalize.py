"""CLI tests for the `normalize` and `version` commands."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from crmhandlers import __version__
from crmhandlers.cli import app


def test_normalize_command_prints_plain_text_from_file(tmp_path: Path) -> None:
    """Normalize should read the file and print its plain-text rendition."""

    source = tmp_path / "note.html"
    source.write_text("<p>Hello &amp; welcome</p><br>Bye", encoding="utf-8")

    result = CliRunner().invoke(app, ["normalize", str(source)])

    assert result.exit_code == 0
    assert result.output == "Hello & welcome\nBye\n"


def test_normalize_command_reads_stdin_and_supports_legacy_mode() -> None:
    """Without a path the command should read stdin; `--legacy` switches rules."""

    result = CliRunner().invoke(app, ["normalize", "--legacy"], input="a<br>b&amp;c")

    assert result.exit_code == 0
    assert result.output == "ab&c\n"


def test_normalize_command_uses_mode_from_config(tmp_path: Path) -> None:
    """A YAML config should select the normalizer mode."""

    config_path = tmp_path / "crmhandlers.yml"
    config_path.write_text("normalizer_mode: legacy\n", encoding="utf-8")

    result = CliRunner().invoke(
        app, ["normalize", "--config", str(config_path)], input="<script>x</script>y"
    )

    assert result.exit_code == 0
    assert result.output == "xy\n"


def test_normalize_command_reports_missing_input_file(tmp_path: Path) -> None:
    """A missing input file should fail with stage-aware diagnostics."""

    result = CliRunner().invoke(app, ["normalize", str(tmp_path / "missing.html")])

    assert result.exit_code == 1
    assert "normalize failed at stage `read`" in result.output
    assert "Hint: Verify the path exists and is readable." in result.output


def test_normalize_command_reports_invalid_config(tmp_path: Path) -> None:
    """Invalid config values should be reported at the config stage."""

    config_path = tmp_path / "bad.yml"
    config_path.write_text("normalizer_mode: browser\n", encoding="utf-8")

    result = CliRunner().invoke(app, ["normalize", "--config", str(config_path)], input="x")

    assert result.exit_code == 1
    assert "normalize failed at stage `config`" in result.output


def test_version_command_prints_package_version() -> None:
    """Version should print the package version string."""

    result = CliRunner().invoke(app, ["version"])

    assert result.exit_code == 0
    assert result.output.strip() == __version__
