"""Routers package."""

from . import (
    health,
    cache,
    fragments,
    pages,
)
