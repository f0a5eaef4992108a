"""Scraper package — fetch, classify, convert and clean a single URL."""

from better_fetch.scraper.models import FetchRequest, ToolResult
from better_fetch.scraper.pipeline import fetch_markdown, run_fetch

__all__ = ["fetch_markdown", "run_fetch", "FetchRequest", "ToolResult"]
