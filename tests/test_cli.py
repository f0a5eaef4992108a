"""Tests for the better-fetch CLI."""

from unittest.mock import AsyncMock, patch

from typer.testing import CliRunner

from better_fetch.scraper.models import ToolResult
from cli.main import app

runner = CliRunner()


def test_fetch_prints_markdown():
    pipeline = AsyncMock(return_value=ToolResult(text="# Example Domain"))
    with patch("better_fetch.scraper.fetch_markdown", pipeline):
        result = runner.invoke(app, ["fetch", "https://example.com"])

    assert result.exit_code == 0, result.output
    assert "# Example Domain" in result.output
    pipeline.assert_awaited_once_with(
        "https://example.com", include_links=True, max_length=None
    )


def test_fetch_options_forwarded():
    pipeline = AsyncMock(return_value=ToolResult(text="short"))
    with patch("better_fetch.scraper.fetch_markdown", pipeline):
        result = runner.invoke(
            app, ["fetch", "https://example.com", "--no-links", "--max-length", "50"]
        )

    assert result.exit_code == 0, result.output
    pipeline.assert_awaited_once_with(
        "https://example.com", include_links=False, max_length=50
    )


def test_fetch_error_exits_non_zero():
    pipeline = AsyncMock(
        return_value=ToolResult(text="Error fetching URL: 404 Not Found", is_error=True)
    )
    with patch("better_fetch.scraper.fetch_markdown", pipeline):
        result = runner.invoke(app, ["fetch", "https://example.com/missing"])

    assert result.exit_code == 1
    assert "Error fetching URL: 404 Not Found" in result.output


def test_fetch_rejects_zero_max_length():
    pipeline = AsyncMock()
    with patch("better_fetch.scraper.fetch_markdown", pipeline):
        result = runner.invoke(app, ["fetch", "https://example.com", "--max-length", "0"])

    assert result.exit_code != 0
    pipeline.assert_not_awaited()


def test_serve_stdio():
    with patch("better_fetch.server.mcp.run") as mock_run:
        result = runner.invoke(app, ["serve", "--transport", "stdio"])

    assert result.exit_code == 0, result.output
    mock_run.assert_called_once_with(transport="stdio", show_banner=False)


def test_serve_http():
    with patch("uvicorn.run") as mock_run:
        result = runner.invoke(
            app, ["serve", "--transport", "http", "--host", "0.0.0.0", "--port", "9000"]
        )

    assert result.exit_code == 0, result.output
    mock_run.assert_called_once_with("better_fetch.api.app:app", host="0.0.0.0", port=9000)


def test_serve_unknown_transport():
    result = runner.invoke(app, ["serve", "--transport", "carrier-pigeon"])
    assert result.exit_code == 1
    assert "Unknown transport" in result.output
