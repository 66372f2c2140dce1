"""
Service layer abstraction.

``MemberStore`` owns the in‑memory collection and every mutation of
it; ``MemberQueryEngine`` evaluates read requests against a snapshot
of that collection.  Handlers receive the store explicitly so that
tests can run against a fresh instance.
"""

from .member_query import MemberQueryEngine, MemberQuery  # noqa: F401
from .member_store import MemberStore  # noqa: F401
