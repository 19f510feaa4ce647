from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Generator

import pytest
from click.testing import CliRunner

from rustc_meta.cli import cli

BANNER = (
    "rustc 1.47.0 (18bf6b4f0 2020-10-07)\n"
    "binary: rustc\n"
    "commit-hash: 18bf6b4f01a6feaf7259ba7cdae58031af1b7b39\n"
    "commit-date: 2020-10-07\n"
    "host: powerpc64le-unknown-linux-gnu\n"
    "release: 1.47.0\n"
    "LLVM version: 11.0\n"
)

BANNER_1_0_0 = (
    "rustc 1.0.0 (a59de37e9 2015-05-13) (built 2015-05-14)\n"
    "binary: rustc\n"
    "commit-hash: a59de37e99060162a2674e3ff45409ac73595c0e\n"
    "commit-date: 2015-05-13\n"
    "build-date: 2015-05-14\n"
    "host: x86_64-unknown-linux-gnu\n"
    "release: 1.0.0\n"
)


@pytest.fixture
def runner(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[CliRunner, None, None]:
    """CLI runner working in an empty directory with colors disabled."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.delenv("RUSTC", raising=False)
    monkeypatch.delenv("RUSTC_META_CONFIG", raising=False)
    yield CliRunner()
    logging.getLogger("rustc_meta").handlers.clear()


@pytest.fixture
def banner_file(tmp_path: Path) -> Path:
    path = tmp_path / "rustc-vV.txt"
    path.write_text(BANNER, encoding="utf-8")
    return path


@pytest.mark.integration
class TestShowFormats:
    """Tests for the output formats of ``rustc-meta show``."""

    def test_json(self, runner: CliRunner, banner_file: Path) -> None:
        result = runner.invoke(cli, ["show", "--input", str(banner_file), "--format", "json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {
            "version": "1.47.0",
            "channel": "stable",
            "commit_hash": "18bf6b4f01a6feaf7259ba7cdae58031af1b7b39",
            "commit_date": "2020-10-07",
            "build_date": None,
            "host": "powerpc64le-unknown-linux-gnu",
            "short_version_string": "rustc 1.47.0 (18bf6b4f0 2020-10-07)",
            "llvm_version": "11.0",
        }

    def test_simple(self, runner: CliRunner, banner_file: Path) -> None:
        result = runner.invoke(cli, ["show", "-i", str(banner_file), "-f", "simple"])

        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            "version: 1.47.0",
            "channel: stable",
            "commit-hash: 18bf6b4f01a6feaf7259ba7cdae58031af1b7b39",
            "commit-date: 2020-10-07",
            "build-date: -",
            "host: powerpc64le-unknown-linux-gnu",
            "llvm-version: 11.0",
        ]

    def test_table_is_default(self, runner: CliRunner, banner_file: Path) -> None:
        result = runner.invoke(cli, ["show", "--input", str(banner_file)])

        assert result.exit_code == 0, result.output
        assert "rustc 1.47.0 (18bf6b4f0 2020-10-07)" in result.output
        assert "powerpc64le-unknown-linux-gnu" in result.output
        assert "stable" in result.output
        # Rich markup for the channel must not leak into the output
        assert "[green]" not in result.output

    def test_format_is_case_insensitive(self, runner: CliRunner, banner_file: Path) -> None:
        result = runner.invoke(cli, ["show", "-i", str(banner_file), "-f", "JSON"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["version"] == "1.47.0"


@pytest.mark.integration
class TestShowSources:
    """Tests for where ``rustc-meta show`` reads its banner from."""

    def test_stdin(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["show", "--input", "-", "-f", "json"], input=BANNER_1_0_0)

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["build_date"] == "2015-05-14"
        assert data["llvm_version"] is None

    def test_missing_compiler(self, runner: CliRunner, tmp_path: Path) -> None:
        missing = str(tmp_path / "no-such-rustc")

        result = runner.invoke(cli, ["show", "--rustc", missing])

        assert result.exit_code == 1
        assert "[ERROR]" in result.output

    def test_rustc_from_environment(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("RUSTC", "env-rustc-does-not-exist")

        result = runner.invoke(cli, ["show"])

        assert result.exit_code == 1
        assert "env-rustc-does-not-exist" in result.output

    def test_missing_input_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["show", "-i", str(tmp_path / "missing.txt")])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_undecodable_stdin(self, runner: CliRunner) -> None:
        banner = BANNER.encode("utf-8").replace(b"commit-hash: ", b"commit-hash: \xff\xfe")

        result = runner.invoke(cli, ["show", "--input", "-", "-f", "simple"], input=banner)

        assert result.exit_code == 1
        assert not isinstance(result.exception, UnicodeDecodeError)
        assert "[ERROR] invalid UTF-8 output from `rustc -vV`" in result.output
        assert "position=" in result.output

    def test_undecodable_file(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "latin1.txt"
        path.write_bytes(BANNER.encode("utf-8").replace(b"host: ", b"host: \xe9"))

        result = runner.invoke(cli, ["show", "--input", str(path)])

        assert result.exit_code == 1
        assert "[ERROR] invalid UTF-8 output from `rustc -vV`" in result.output
        assert "Failed to read file" not in result.output


@pytest.mark.integration
class TestShowErrors:
    """Tests for banners that cannot be parsed."""

    def test_too_few_lines(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["show", "-i", "-"], input="rustc 1.47.0\n")

        assert result.exit_code == 1
        assert "unexpected `rustc -vV` format" in result.output

    def test_unknown_pre_release_tag(self, runner: CliRunner) -> None:
        banner = BANNER.replace("release: 1.47.0", "release: 1.47.0-rc.1")

        result = runner.invoke(cli, ["show", "-i", "-"], input=banner)

        assert result.exit_code == 1
        assert "unknown pre-release tag: rc" in result.output

    def test_bad_llvm_version(self, runner: CliRunner) -> None:
        banner = BANNER.replace("LLVM version: 11.0", "LLVM version: 11.1")

        result = runner.invoke(cli, ["show", "-i", "-"], input=banner)

        assert result.exit_code == 1
        assert "error parsing LLVM's version" in result.output


@pytest.mark.integration
class TestShowConfiguration:
    """Tests for configuration affecting ``rustc-meta show``."""

    def test_wider_line_range_from_config(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "rustc-meta.toml").write_text(
            "[rustc-meta]\nmax_banner_lines = 9\n", encoding="utf-8"
        )
        banner = BANNER + "extra: line\nanother: line\n"

        result = runner.invoke(cli, ["show", "-i", "-", "-f", "json"], input=banner)

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["llvm_version"] == "11.0"

    def test_default_line_range_rejects_long_banner(self, runner: CliRunner) -> None:
        banner = BANNER + "extra: line\nanother: line\n"

        result = runner.invoke(cli, ["show", "-i", "-"], input=banner)

        assert result.exit_code == 1

    def test_invalid_config_aborts(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "rustc-meta.toml").write_text(
            "[rustc-meta]\nunknown = 1\n", encoding="utf-8"
        )

        result = runner.invoke(cli, ["show", "-i", "-"], input=BANNER)

        assert result.exit_code == 1
        assert "Unknown configuration keys: unknown" in result.output

    def test_rustc_from_config(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "rustc-meta.toml").write_text(
            '[rustc-meta]\nrustc = "configured-rustc-does-not-exist"\n',
            encoding="utf-8",
        )

        result = runner.invoke(cli, ["show"])

        assert result.exit_code == 1
        assert "configured-rustc-does-not-exist" in result.output
