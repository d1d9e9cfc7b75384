"""Tests for the command-line interface."""

import pytest
from typer.testing import CliRunner

from orchestra import __version__
from orchestra.cli import app

runner = CliRunner()


@pytest.fixture
def fast_config(tmp_path):
    """Two simulated providers and a debate budget of one round."""
    path = tmp_path / "orchestra.yaml"
    path.write_text(
        "providers:\n"
        "  openai:\n"
        "    api_key: sk-test-openai\n"
        "    model: gpt-test\n"
        "  google:\n"
        "    api_key: sk-test-google\n"
        "default_provider: openai\n"
        "max_debate_rounds: 1\n",
        encoding="utf-8",
    )
    return path


def test_version():
    """Test the --version flag."""
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_providers(fast_config):
    """Test listing configured providers."""
    result = runner.invoke(app, ["providers", "--config", str(fast_config)])

    assert result.exit_code == 0
    assert "openai" in result.output
    assert "google" in result.output
    assert "gpt-test" in result.output


def test_query(fast_config):
    """Test a single-provider query."""
    result = runner.invoke(app, ["query", "Hello", "--config", str(fast_config)])

    assert result.exit_code == 0
    assert "simulated response" in result.output


def test_consensus(fast_config):
    """Test a consensus run."""
    result = runner.invoke(
        app, ["consensus", "Pick a database", "--config", str(fast_config)]
    )

    assert result.exit_code == 0
    assert "Consensus" in result.output
    assert "100%" in result.output


def test_debate(fast_config):
    """Test a debate run."""
    result = runner.invoke(app, ["debate", "Tabs or spaces?", "--config", str(fast_config)])

    assert result.exit_code == 0


def test_health(fast_config):
    """Test the health command."""
    result = runner.invoke(app, ["health", "--config", str(fast_config)])

    assert result.exit_code == 0
    assert "openai" in result.output


def test_unknown_provider_exits_with_error(fast_config):
    """Test unknown provider exits with error."""
    result = runner.invoke(
        app, ["query", "Hello", "-p", "ghost", "--config", str(fast_config)]
    )

    assert result.exit_code == 1
    assert "ghost" in result.output


def test_missing_config_file(tmp_path):
    """Test missing config file."""
    result = runner.invoke(app, ["providers", "--config", str(tmp_path / "missing.yaml")])

    assert result.exit_code == 1
    assert "Configuration error" in result.output


def test_config_without_providers(tmp_path):
    """Test config without providers."""
    path = tmp_path / "empty.yaml"
    path.write_text("default_provider: openai\n", encoding="utf-8")

    result = runner.invoke(app, ["providers", "--config", str(path)])

    assert result.exit_code == 1
    assert "No providers configured" in result.output
