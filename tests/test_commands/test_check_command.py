from __future__ import annotations

import logging
from pathlib import Path
from typing import Generator, Optional

import pytest
from click.testing import CliRunner
from semantic_version import Version

from rustc_meta.cli import cli
from rustc_meta.commands.check import evaluate_checks
from rustc_meta.models import Channel, LLVMVersion, VersionMeta

STABLE_BANNER = (
    "rustc 1.47.0 (18bf6b4f0 2020-10-07)\n"
    "binary: rustc\n"
    "commit-hash: 18bf6b4f01a6feaf7259ba7cdae58031af1b7b39\n"
    "commit-date: 2020-10-07\n"
    "host: powerpc64le-unknown-linux-gnu\n"
    "release: 1.47.0\n"
    "LLVM version: 11.0\n"
)

NIGHTLY_BANNER = (
    "rustc 1.50.0-nightly (825637983 2020-11-18)\n"
    "binary: rustc\n"
    "commit-hash: 8256379832b5ecb7f71e8c5e2018446482223c12\n"
    "commit-date: 2020-11-18\n"
    "host: x86_64-unknown-linux-gnu\n"
    "release: 1.50.0-nightly\n"
)


@pytest.fixture
def runner(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[CliRunner, None, None]:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.delenv("RUSTC", raising=False)
    monkeypatch.delenv("RUSTC_META_CONFIG", raising=False)
    yield CliRunner()
    logging.getLogger("rustc_meta").handlers.clear()


def _meta(
    release: str = "1.47.0",
    channel: Channel = Channel.STABLE,
    llvm: Optional[LLVMVersion] = LLVMVersion(11, 0),
) -> VersionMeta:
    return VersionMeta(
        semver=Version(release),
        commit_hash=None,
        commit_date=None,
        build_date=None,
        channel=channel,
        host="x86_64-unknown-linux-gnu",
        short_version_string=f"rustc {release}",
        llvm_version=llvm,
    )


@pytest.mark.unit
class TestEvaluateChecks:
    """Tests for evaluate_checks."""

    def test_no_checks(self) -> None:
        assert evaluate_checks(_meta()) == []

    def test_min_version(self) -> None:
        results = evaluate_checks(_meta(), min_version=Version("1.40.0"))

        assert results == [(True, "rustc 1.47.0 >= 1.40.0")]

    def test_pre_release_below_release(self) -> None:
        """Test a nightly does not satisfy its own release version."""
        meta = _meta(release="1.50.0-nightly", channel=Channel.NIGHTLY)

        results = evaluate_checks(meta, min_version=Version("1.50.0"))

        assert results == [(False, "rustc 1.50.0-nightly >= 1.50.0")]

    def test_channel(self) -> None:
        results = evaluate_checks(_meta(), channel=Channel.NIGHTLY)

        assert results == [(False, "channel stable == nightly")]

    def test_min_llvm(self) -> None:
        results = evaluate_checks(_meta(), min_llvm=LLVMVersion(12, 0))

        assert results == [(False, "LLVM 11.0 >= 12.0")]

    def test_missing_llvm_fails(self) -> None:
        results = evaluate_checks(_meta(llvm=None), min_llvm=LLVMVersion(3, 9))

        assert results == [(False, "LLVM version not reported (need >= 3.9)")]

    def test_order(self) -> None:
        results = evaluate_checks(
            _meta(),
            min_llvm=LLVMVersion(10, 0),
            channel=Channel.STABLE,
            min_version=Version("1.0.0"),
        )

        assert [description.split()[0] for _, description in results] == [
            "rustc",
            "channel",
            "LLVM",
        ]
        assert all(passed for passed, _ in results)


@pytest.mark.integration
class TestCheckCommand:
    """Tests for ``rustc-meta check``."""

    def test_all_checks_pass(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli,
            [
                "check",
                "-i",
                "-",
                "--min-version",
                "1.40.0",
                "--channel",
                "stable",
                "--min-llvm",
                "10.0",
            ],
            input=STABLE_BANNER,
        )

        assert result.exit_code == 0, result.output
        assert result.output.count("[OK]") == 3
        assert "[FAIL]" not in result.output

    def test_failure_exits_one(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli,
            ["check", "-i", "-", "--min-version", "1.40.0", "--channel", "nightly"],
            input=STABLE_BANNER,
        )

        assert result.exit_code == 1
        assert "[OK] rustc 1.47.0 >= 1.40.0" in result.output
        assert "[FAIL] channel stable == nightly" in result.output

    def test_no_checks_requested(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", "-i", "-"], input=STABLE_BANNER)

        assert result.exit_code == 0
        assert "(no checks requested)" in result.output

    def test_nightly_llvm_not_reported(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli,
            ["check", "-i", "-", "--channel", "NIGHTLY", "--min-llvm", "11"],
            input=NIGHTLY_BANNER,
        )

        assert result.exit_code == 1
        assert "[OK] channel nightly == nightly" in result.output
        assert "[FAIL] LLVM version not reported (need >= 11.0)" in result.output

    def test_invalid_min_version(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["check", "-i", "-", "--min-version", "1.40"], input=STABLE_BANNER
        )

        assert result.exit_code == 2
        assert "--min-version" in result.output

    def test_invalid_min_llvm(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["check", "-i", "-", "--min-llvm", "3"], input=STABLE_BANNER
        )

        assert result.exit_code == 2
        assert "minor version component is required" in result.output

    def test_unknown_channel(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["check", "-i", "-", "--channel", "rc"], input=STABLE_BANNER
        )

        assert result.exit_code == 2

    def test_unparseable_banner(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["check", "-i", "-", "--min-version", "1.0.0"], input="garbage\n"
        )

        assert result.exit_code == 1
        assert "[ERROR]" in result.output

    def test_undecodable_stdin(self, runner: CliRunner) -> None:
        banner = STABLE_BANNER.encode("utf-8").replace(b"release: ", b"release: \xff")

        result = runner.invoke(
            cli, ["check", "-i", "-", "--min-version", "1.0.0"], input=banner
        )

        assert result.exit_code == 1
        assert "[ERROR] invalid UTF-8 output from `rustc -vV`" in result.output
