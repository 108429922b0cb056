"""FastAPI application and routes.

This module provides a read-mostly REST API over the calculations.

## API Structure

- /api/sun - Sun position and event times
- /api/moon - Moon position, times, transit and illumination
- /api/registry - Named sun thresholds and deprecated names

Times are passed as ISO 8601 query parameters and returned as epoch
milliseconds.
"""

from sunmoon.api.app import create_app

__all__ = ["create_app"]
