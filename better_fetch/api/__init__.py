"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from better_fetch.api import app

    uvicorn better_fetch.api:app
"""

from better_fetch.api.app import app

__all__ = ["app"]
