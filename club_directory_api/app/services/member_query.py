"""
Search, filter and sort for the ``/members`` listing.

``MemberQueryEngine.run`` is a pure function of a collection and a
``MemberQuery``: it never mutates the members it is given.  The
pipeline always runs in the same order: name filter, rating filter,
activity filter, then sort.

Filtering is permissive.  ``rating`` is read the way browser clients
read integers: leading whitespace and sign, then the leading digits,
with anything after them ignored (``"3.5"`` and ``"3abc"`` mean 3).
A value with no leading integer does not raise; it produces a
predicate that no member satisfies, so the response is simply empty.
Empty‑string parameters are treated as absent, matching what browser
clients send for unset form fields.

Sorting uses ``sorted`` with a plain string key.  Members with equal
keys keep their relative order because Python's sort is stable, but
callers should not rely on any particular order among ties.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional


logger = logging.getLogger(__name__)

Member = Dict[str, Any]
Predicate = Callable[[Member], bool]

SORT_BY_NAME = "name"
ORDER_DESC = "desc"

_LEADING_INT = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|\d+)")


@dataclass
class MemberQuery:
    """Parameters of a listing request, as received from the client."""

    query: Optional[str] = None
    rating: Optional[str] = None
    activities: Optional[str] = None
    sort_by: Optional[str] = None
    order: Optional[str] = None


def _never(member: Member) -> bool:
    return False


def name_predicate(query: str) -> Predicate:
    needle = query.lower()

    def predicate(member: Member) -> bool:
        name = member.get("name")
        return isinstance(name, str) and needle in name.lower()

    return predicate


def parse_leading_int(value: Any) -> Optional[int]:
    """Parse the leading integer of ``value``, or return ``None``.

    Trailing characters are ignored and a ``0x`` prefix reads the
    digits as hexadecimal.
    """
    match = _LEADING_INT.match(str(value))
    if match is None:
        return None
    sign, digits = match.groups()
    number = int(digits[2:], 16) if digits[:2].lower() == "0x" else int(digits)
    return -number if sign == "-" else number


def rating_predicate(rating: Any) -> Predicate:
    """Match members whose rating equals the leading integer of ``rating``."""
    wanted = parse_leading_int(rating)
    if wanted is None:
        logger.debug("Unparseable rating filter %r matches no members", rating)
        return _never

    def predicate(member: Member) -> bool:
        value = member.get("rating")
        return isinstance(value, int) and not isinstance(value, bool) and value == wanted

    return predicate


def activity_predicate(activity: str) -> Predicate:
    def predicate(member: Member) -> bool:
        activities = member.get("activities")
        return bool(activities) and activity in activities

    return predicate


def sort_key(sort_by: str) -> Callable[[Member], str]:
    """Return the key function for ``sort_by``.

    ``name`` sorts on the lower‑cased name; any other value sorts on
    the activities joined with ``", "`` and lower‑cased.
    """
    if sort_by == SORT_BY_NAME:
        return lambda member: (member.get("name") or "").lower()
    return lambda member: ", ".join(member.get("activities") or []).lower()


class MemberQueryEngine:
    """Evaluate a ``MemberQuery`` against a collection of members."""

    @staticmethod
    def predicates(params: MemberQuery) -> List[Predicate]:
        """Build the filter predicates for ``params`` in pipeline order."""
        predicates: List[Predicate] = []
        if params.query:
            predicates.append(name_predicate(params.query))
        if params.rating:
            predicates.append(rating_predicate(params.rating))
        if params.activities:
            predicates.append(activity_predicate(params.activities))
        return predicates

    @classmethod
    def run(cls, members: Iterable[Member], params: MemberQuery) -> List[Member]:
        """Return the members matching ``params``, sorted if requested."""
        result = list(members)
        for predicate in cls.predicates(params):
            result = [member for member in result if predicate(member)]
        if params.sort_by:
            result = sorted(
                result,
                key=sort_key(params.sort_by),
                reverse=params.order == ORDER_DESC,
            )
        logger.debug("Query %s matched %d members", params, len(result))
        return result
