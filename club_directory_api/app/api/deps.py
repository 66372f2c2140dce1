"""
Shared FastAPI dependencies.

The member store is owned by the application (``app.state``) rather
than by a module global, so each application instance, and each
test, works against its own collection.
"""

from fastapi import Request

from club_directory_api.app.services.member_store import MemberStore


def get_member_store(request: Request) -> MemberStore:
    """Return the store attached to the running application."""
    return request.app.state.member_store
