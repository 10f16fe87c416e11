"""Request-scoped helpers shared by the routers."""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from fastapi import Request


def get_db(request: Request) -> Path:
    """Database path from app state."""
    return request.app.state.db_path


def get_clock(request: Request) -> Callable[[], datetime]:
    """Clock from app state."""
    return request.app.state.clock
