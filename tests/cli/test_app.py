# tests/cli/test_app.py
"""
Tests for cli/app.py - Main CLI entry point

Tests cover:
- Version and help output
- Configuration errors and setup help
- Terraform generation and JSON output
- Fatal discovery failures, warnings and interruption
"""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from cli.app import EXIT_ERROR, EXIT_INTERRUPTED, VERSION, cli
from core.auth import DiscoveryContext
from core.discovery import DiscoveryResult, Shape, Snapshot, TenancyInfo
from core.exceptions import ConfigurationError, FatalDiscoveryError, GenerationError, TolerableDiscoveryError
from core.parallel import ErrorCollector

TENANCY = "ocid1.tenancy.oc1..test"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def context():
    return DiscoveryContext(
        tenancy_id=TENANCY,
        user_id="ocid1.user.oc1..test",
        region="us-ashburn-1",
        profile="DEFAULT",
        config_path="/home/test/.oci/config",
        config_dir="/home/test/.oci",
    )


@pytest.fixture
def result():
    snapshot = Snapshot(
        tenancy=TenancyInfo(id=TENANCY, name="acme", home_region="us-ashburn-1"),
        shapes=[Shape("VM.Standard.E4.Flex", ocpus=1, memory_gb=16, is_flexible=True)],
    )
    return DiscoveryResult(snapshot=snapshot)


@pytest.fixture
def mocked(context, result):
    """load_context/discover patched to succeed"""
    with patch("cli.app.load_context", return_value=context) as load, patch(
        "cli.app.discover", return_value=result
    ) as discover:
        yield load, discover


# =============================================================================
# Version / Help
# =============================================================================


class TestVersionAndHelp:
    """Version and help output"""

    def test_version(self, runner):
        """--version prints the version from version.txt"""
        outcome = runner.invoke(cli, ["--version"])

        assert outcome.exit_code == 0
        assert f"oci-tf-bootstrap, version {VERSION}" in outcome.output

    def test_help(self, runner):
        """--help lists all options"""
        outcome = runner.invoke(cli, ["--help"])

        assert outcome.exit_code == 0
        for option in ("--profile", "--config", "--config-file", "--output", "--region", "--json", "--always-free"):
            assert option in outcome.output


# =============================================================================
# Configuration errors
# =============================================================================


class TestConfigurationErrors:
    """Configuration loading failures"""

    def test_missing_config_file_shows_setup_help(self, runner, tmp_path):
        """Missing config file exits 1 with setup instructions"""
        outcome = runner.invoke(cli, ["--config-file", str(tmp_path / "missing")])

        assert outcome.exit_code == EXIT_ERROR
        assert "oci setup config" in outcome.output

    def test_missing_profile_without_setup_help(self, runner):
        """Unknown profile exits 1 without setup instructions"""
        error = ConfigurationError("profile", "프로파일을 찾을 수 없습니다: NOPE")
        with patch("cli.app.load_context", side_effect=error):
            outcome = runner.invoke(cli, ["--profile", "NOPE"])

        assert outcome.exit_code == EXIT_ERROR
        assert "NOPE" in outcome.output
        assert "oci setup config" not in outcome.output

    def test_flags_resolved(self, runner, mocked, tmp_path):
        """Profile, config dir, region and always-free are forwarded"""
        load, _ = mocked

        runner.invoke(
            cli,
            ["--profile", "PROD", "--config", "/opt/oci", "-r", "ap-seoul-1", "--always-free", "-o", str(tmp_path)],
        )

        load.assert_called_once_with("PROD", "/opt/oci/config", "ap-seoul-1", True)


# =============================================================================
# Generation
# =============================================================================


class TestGeneration:
    """Terraform and JSON output"""

    def test_terraform_files(self, runner, mocked, tmp_path):
        """Default mode writes Terraform files"""
        out = tmp_path / "tf"

        outcome = runner.invoke(cli, ["-o", str(out)])

        assert outcome.exit_code == 0
        assert (out / "provider.tf").exists()
        assert (out / "network.tf").exists()
        assert "instance_example.tf" in outcome.output

    def test_always_free_generation(self, runner, mocked, tmp_path):
        """--always-free uses the always-free instance example"""
        outcome = runner.invoke(cli, ["--always-free", "-o", str(tmp_path)])

        assert outcome.exit_code == 0
        assert '"always_free"' in (tmp_path / "instance_example.tf").read_text(encoding="utf-8")

    def test_json_mode(self, runner, mocked, result, tmp_path):
        """--json writes the snapshot instead of Terraform files"""
        out = tmp_path / "tf"
        with patch("cli.app.output_json") as mock_output:
            outcome = runner.invoke(cli, ["--json", "-o", str(out)])

        assert outcome.exit_code == 0
        assert mock_output.call_args.args[0] is result.snapshot
        assert not out.exists()

    def test_generation_error(self, runner, mocked, tmp_path):
        """Write failure exits 1"""
        error = GenerationError("data.tf", PermissionError("denied"))
        with patch("cli.app.TerraformGenerator.generate", side_effect=error):
            outcome = runner.invoke(cli, ["-o", str(tmp_path)])

        assert outcome.exit_code == EXIT_ERROR
        assert "data.tf" in outcome.output


# =============================================================================
# Discovery outcomes
# =============================================================================


class TestDiscoveryOutcomes:
    """Fatal failures, warnings and interruption"""

    def test_fatal_failure(self, runner, context, tmp_path, service_error):
        """Fatal category failure exits 1 and writes nothing"""
        error = FatalDiscoveryError("shapes", service_error(401, "NotAuthenticated"))
        with patch("cli.app.load_context", return_value=context), patch("cli.app.discover", side_effect=error):
            outcome = runner.invoke(cli, ["-o", str(tmp_path / "tf")])

        assert outcome.exit_code == EXIT_ERROR
        assert "shapes" in outcome.output
        assert not (tmp_path / "tf").exists()

    def test_warnings_summarized(self, runner, mocked, result, tmp_path, service_error):
        """Tolerable failures are shown but the run succeeds"""
        collector = ErrorCollector()
        collector.collect(service_error(404, "NotAuthorizedOrNotFound"), "vcns", "discover")
        result.warnings = collector.errors
        result.skipped = [TolerableDiscoveryError("vcns")]

        outcome = runner.invoke(cli, ["-o", str(tmp_path)])

        assert outcome.exit_code == 0
        assert "경고 요약" in outcome.output
        assert "NotAuthorizedOrNotFound" in outcome.output
        assert "[vcns]" in outcome.output

    def test_keyboard_interrupt(self, runner, context, tmp_path):
        """Ctrl+C exits 130"""
        with patch("cli.app.load_context", return_value=context), patch(
            "cli.app.discover", side_effect=KeyboardInterrupt
        ):
            outcome = runner.invoke(cli, ["-o", str(tmp_path)])

        assert outcome.exit_code == EXIT_INTERRUPTED
