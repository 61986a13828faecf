"""Command-line entry point for running the LTA calendar parser API server."""
from __future__ import annotations

import os

import uvicorn

from lta_calendar.main import app


def main() -> None:
    """Serve the API with Uvicorn on ``PORT`` (3001 by default)."""

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "3001")), reload=False)


if __name__ == "__main__":
    main()
