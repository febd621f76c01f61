"""End-to-end CLI tests against the offline mock backend."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from help_articles.cli import app

runner = CliRunner()


@pytest.fixture
def mock_config(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        "source:\n"
        "  backend: mock\n"
        "  mock_min_latency: 0\n"
        "  mock_max_latency: 0\n"
        "logging:\n"
        "  console: false\n",
        encoding="utf-8",
    )
    return path


def test_list_renders_articles(mock_config: Path):
    result = runner.invoke(app, ["list", "--config", str(mock_config)])

    assert result.exit_code == 0, result.output
    assert "How to Reset Your Password" in result.output
    assert "fresh from server" in result.output


def test_list_with_search(mock_config: Path):
    result = runner.invoke(app, ["list", "--config", str(mock_config), "--search", "billing"])

    assert result.exit_code == 0, result.output
    assert "Billing Cycle Explained" in result.output
    assert "How to Reset Your Password" not in result.output


def test_show_renders_article(mock_config: Path):
    result = runner.invoke(app, ["show", "3", "--config", str(mock_config)])

    assert result.exit_code == 0, result.output
    assert "Setting Up Two-Factor Authentication" in result.output


def test_show_unknown_article_exits_with_error(mock_config: Path):
    result = runner.invoke(app, ["show", "999", "--config", str(mock_config)])

    assert result.exit_code == 1
    assert "Article 999 does not exist." in result.output
    assert "ARTICLE_NOT_FOUND" in result.output


def test_prefetch_succeeds(mock_config: Path):
    result = runner.invoke(app, ["prefetch", "--config", str(mock_config)])

    assert result.exit_code == 0, result.output
    assert "Prefetch complete." in result.output


def test_unknown_backend_is_rejected(mock_config: Path):
    result = runner.invoke(app, ["list", "--config", str(mock_config), "--backend", "ftp"])

    assert result.exit_code != 0
