"""Dependency injection for FastAPI endpoints"""

from datetime import date
from typing import Optional
from fastapi import Query, Request


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_as_of(
    as_of: Optional[date] = Query(None, description="Reference date for day counts (defaults to today)"),
) -> date:
    """Resolve the 'today' that runway day counts are measured from"""
    return as_of or date.today()
