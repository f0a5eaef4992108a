"""Build the :class:`ToolResult` returned to the caller."""

from __future__ import annotations

from better_fetch.scraper.models import ToolResult

ERROR_PREFIX = "Error fetching URL: "


def text_result(text: str) -> ToolResult:
    return ToolResult(text=text)


def error_result(detail: str) -> ToolResult:
    """Wrap *detail* as ``Error fetching URL: <detail>`` with the error flag set."""
    return ToolResult(text=f"{ERROR_PREFIX}{detail}", is_error=True)
