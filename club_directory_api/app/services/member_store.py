"""
In‑memory store for club members.

``MemberStore`` is the single owner of the member collection.  Reads
return copies so callers never hold a reference into store state;
mutations are serialised through a lock so at most one create, update
or delete is in flight at a time, even when the ASGI server runs
handlers on a thread pool.
"""

import copy
import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set

from ..core.errors import IdGenerationError, NotFoundError, ValidationError
from ..schemas.member import MemberSeed
from .id_generator import IdGenerator, RandomIdGenerator


logger = logging.getLogger(__name__)

Member = Dict[str, Any]


class MemberStore:
    """Authoritative collection of members.

    Members are kept as plain dictionaries in insertion order, which
    is also the order ``list`` returns them in.
    """

    # Give up on the generator after this many colliding candidates.
    max_id_attempts = 1000

    def __init__(
        self,
        members: Optional[Iterable[Member]] = None,
        id_generator: Optional[IdGenerator] = None,
    ) -> None:
        self._lock = threading.Lock()
        self._id_generator = id_generator or RandomIdGenerator()
        self._members: List[Member] = []
        # Every id ever held by the store, so deleted ids are not reissued.
        self._issued_ids: Set[str] = set()
        for member in members or []:
            self._add_seed(member)

    @classmethod
    def from_json_file(cls, path: str, id_generator: Optional[IdGenerator] = None) -> "MemberStore":
        """Build a store seeded from a JSON array of member records.

        Each record is validated with ``MemberSeed``; records lacking
        an ``id`` are given one by the generator.
        """
        seed_path = Path(path)
        with seed_path.open("r", encoding="utf-8") as f:
            records = json.load(f)
        if not isinstance(records, list):
            raise ValueError(f"Seed file {seed_path} must contain a JSON array")
        store = cls(id_generator=id_generator)
        for record in records:
            seed = MemberSeed.model_validate(record)
            store._add_seed(seed.model_dump(exclude_unset=True))
        logger.info("Loaded %d members from %s", len(store), seed_path)
        return store

    def __len__(self) -> int:
        return len(self._members)

    def list(self) -> List[Member]:
        """Return a deep copy of the current collection."""
        return copy.deepcopy(self._members)

    def create(self, payload: Dict[str, Any]) -> Member:
        """Add a member and return it with its newly assigned ``id``.

        Raises ``ValidationError`` if ``name`` is missing or empty.
        Any ``id`` in the payload is replaced.
        """
        name = payload.get("name")
        if not name or not isinstance(name, str):
            raise ValidationError("Name is required")
        _check_activities(payload, allow_none=True)
        with self._lock:
            member = {key: value for key, value in payload.items() if key != "id"}
            if member.get("activities") is None:
                member["activities"] = []
            member = {"id": self._next_id(), **member}
            self._members.append(member)
            logger.info("Created member %s (%s)", member["id"], name)
            return copy.deepcopy(member)

    def update(self, member_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        """Merge ``patch`` into the member with ``member_id``.

        Fields present in ``patch`` overwrite stored values and absent
        fields are kept.  A patched ``id`` is ignored.  Returns the
        patch as accepted rather than the merged record, which is what
        existing clients of the service expect.

        Raises ``ValidationError`` if the patch would leave the member
        without a name or with ``activities`` that is not a list, and
        ``NotFoundError`` if no member has ``member_id``.
        """
        accepted = {key: value for key, value in patch.items() if key != "id"}
        if "name" in accepted and (not accepted["name"] or not isinstance(accepted["name"], str)):
            raise ValidationError("Name is required")
        _check_activities(accepted)
        with self._lock:
            index = self._index_of(member_id)
            merged = {**self._members[index], **copy.deepcopy(accepted)}
            self._members[index] = merged
            logger.info("Updated member %s: %s", member_id, sorted(accepted))
        return accepted

    def delete(self, member_id: str) -> None:
        """Remove the member with ``member_id``."""
        with self._lock:
            index = self._index_of(member_id)
            del self._members[index]
            logger.info("Deleted member %s", member_id)

    def _index_of(self, member_id: str) -> int:
        for index, member in enumerate(self._members):
            if member["id"] == member_id:
                return index
        raise NotFoundError("Member not found")

    def _next_id(self) -> str:
        """Draw an unused id from the generator.

        Raises ``IdGenerationError`` after ``max_id_attempts`` colliding
        candidates; that is a server fault, not a client error.
        """
        for _ in range(self.max_id_attempts):
            candidate = str(self._id_generator())
            if candidate not in self._issued_ids:
                self._issued_ids.add(candidate)
                return candidate
        raise IdGenerationError(
            f"Id generator produced no unused id in {self.max_id_attempts} attempts"
        )

    def _add_seed(self, member: Member) -> None:
        record = copy.deepcopy(dict(member))
        if not record.get("name"):
            raise ValueError(f"Seed member {record.get('id')!r} has no name")
        if record.get("id") is None:
            record["id"] = self._next_id()
        else:
            record["id"] = str(record["id"])
            if record["id"] in self._issued_ids:
                raise ValueError(f"Duplicate member id {record['id']} in seed data")
            self._issued_ids.add(record["id"])
        if record.get("activities") is None:
            record["activities"] = []
        self._members.append(record)


def _check_activities(fields: Dict[str, Any], allow_none: bool = False) -> None:
    """Reject ``activities`` values that are not a list of strings."""
    if "activities" not in fields:
        return
    activities = fields["activities"]
    if activities is None and allow_none:
        return
    if not isinstance(activities, list) or not all(isinstance(item, str) for item in activities):
        raise ValidationError("Activities must be a list of strings")
