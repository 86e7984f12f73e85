"""HTTP API for inferstat.

This module contains the FastAPI application serving the statistics to a
data-exploration front end.
"""

from inferstat.api.app import app

__all__ = [
    "app",
]
