"""
Tests for AgeCompute CLI.

Uses Click's CliRunner for testing CLI commands.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner

from agecompute.cli.main import cli
from agecompute.core.exceptions import InsightError, InsightFailure
from agecompute.llm.insight import InsightOutcome, InsightResponse, fallback_insight


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Keep any local agecompute.yaml and AGECOMPUTE_* variables out of the tests."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("AGECOMPUTE_INSIGHT_ENABLED", raising=False)


@pytest.fixture
def insight_service():
    """Patch InsightService so no request leaves the process."""
    with patch("agecompute.cli.main.InsightService") as mock_cls:
        mock_cls.return_value.fetch = AsyncMock(
            return_value=InsightOutcome(
                response=InsightResponse(
                    cultural_significance="而立之年",
                    zodiac_reading="属狗之人忠诚",
                    life_stage_advice="行稳致远",
                )
            )
        )
        yield mock_cls


class TestCLIBasics:
    def test_cli_help(self, runner: CliRunner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "compute" in result.output
        assert "lunar" in result.output

    def test_missing_config_file(self, runner: CliRunner):
        """Should exit with an error when --config points nowhere."""
        result = runner.invoke(cli, ["--config", "nope.yaml", "compute", "1995-01-01"])

        assert result.exit_code == 1
        assert "Configuration file not found" in result.output


class TestComputeCommand:
    """Test compute command."""

    def test_report(self, runner: CliRunner):
        result = runner.invoke(
            cli, ["compute", "1995-01-01", "--today", "2024-06-15", "--no-insight"]
        )

        assert result.exit_code == 0
        assert "出生日期：1995年1月1日" in result.output
        assert "周岁：29 岁" in result.output
        assert "虚岁：31 岁" in result.output
        assert "生肖：狗" in result.output
        assert "已度过：10,758 天" in result.output

    def test_json_output(self, runner: CliRunner):
        result = runner.invoke(
            cli, ["compute", "1995-01-01", "--today", "2024-06-15", "--no-insight", "--json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["birthDate"] == "1995-01-01"
        assert data["referenceDate"] == "2024-06-15"
        assert data["internationalAge"] == 29
        assert data["nominalAge"] == 31
        assert data["zodiacAnimal"] == "狗"
        assert data["daysToNextBirthday"] == 200
        assert "insight" not in data

    def test_birthday_today(self, runner: CliRunner):
        result = runner.invoke(
            cli, ["compute", "1995-06-15", "--today", "2024-06-15", "--no-insight"]
        )

        assert "距下次生日：0 天" in result.output

    def test_invalid_date(self, runner: CliRunner):
        """Should reject dates click cannot parse."""
        result = runner.invoke(cli, ["compute", "1995-02-30", "--no-insight"])

        assert result.exit_code == 2

    def test_future_birth_date_warns(self, runner: CliRunner):
        result = runner.invoke(
            cli, ["compute", "2030-01-01", "--today", "2024-06-15", "--no-insight"]
        )

        assert result.exit_code == 0
        assert "Warning" in result.output

    def test_insight_shown(self, runner: CliRunner, insight_service: MagicMock):
        result = runner.invoke(cli, ["compute", "1995-01-01", "--today", "2024-06-15", "--insight"])

        assert result.exit_code == 0
        assert "文化意义：而立之年" in result.output
        insight_service.return_value.fetch.assert_awaited_once()
        args = insight_service.return_value.fetch.call_args.args
        assert args[1:] == (29, 31, "狗")

    def test_insight_fallback_keeps_exit_code(self, runner: CliRunner, insight_service: MagicMock):
        """Should print fallback texts and exit 0 when the insight fails."""
        insight_service.return_value.fetch.return_value = InsightOutcome(
            error=InsightError("down", kind=InsightFailure.NETWORK)
        )

        result = runner.invoke(
            cli, ["compute", "1995-01-01", "--today", "2024-06-15", "--insight", "--json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["insightSource"] == "fallback"
        assert data["insight"] == fallback_insight("狗").to_dict()

    def test_invalid_timeout_falls_back(self, runner: CliRunner, monkeypatch):
        """Should print fallback texts and exit 0 when the timeout setting is unusable."""
        monkeypatch.setenv("AGECOMPUTE_INSIGHT_TIMEOUT", "soon")
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")

        result = runner.invoke(cli, ["compute", "1995-01-01", "--today", "2024-06-15", "--insight"])

        assert result.exit_code == 0
        assert f"属相解读：{fallback_insight('狗').zodiac_reading}" in result.output

    def test_insight_disabled_by_config(self, runner: CliRunner, insight_service: MagicMock, tmp_path):
        (tmp_path / "agecompute.yaml").write_text("insight:\n  enabled: false\n", encoding="utf-8")

        result = runner.invoke(cli, ["compute", "1995-01-01", "--today", "2024-06-15"])

        assert result.exit_code == 0
        insight_service.assert_not_called()


class TestLunarCommand:
    def test_lunar(self, runner: CliRunner):
        result = runner.invoke(cli, ["lunar", "2024-02-10"])

        assert result.exit_code == 0
        assert "公历：2024年2月10日" in result.output
        assert "正月初一" in result.output
        assert "农历年：2024" in result.output

    def test_lunar_solar_term(self, runner: CliRunner):
        result = runner.invoke(cli, ["lunar", "2024-02-04"])

        assert "节气：立春" in result.output
        assert "农历年：2023" in result.output
