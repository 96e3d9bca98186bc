"""Request dependencies."""

from fastapi import Request

from readtrack.core.record_store import RecordStore


def get_store(request: Request) -> RecordStore:
    """Record store attached to the running app."""
    return request.app.state.store
