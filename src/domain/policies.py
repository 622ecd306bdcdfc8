"""Row ownership policy.

Reads are open on every table. Writes are allowed only to the principal that
owns the row; likes are never updated in place.
"""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from core.exceptions import AuthorizationError


class WriteAction(StrEnum):
    """Kinds of row writes the policy distinguishes."""

    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class TablePolicy:
    """Which column names the owner and which writes the owner may perform."""

    owner_column: str
    allowed: frozenset[WriteAction]


_ALL_WRITES = frozenset(WriteAction)

TABLE_POLICIES: dict[str, TablePolicy] = {
    "profiles": TablePolicy(owner_column="id", allowed=_ALL_WRITES),
    "posts": TablePolicy(owner_column="user_id", allowed=_ALL_WRITES),
    "likes": TablePolicy(
        owner_column="user_id",
        allowed=frozenset({WriteAction.INSERT, WriteAction.DELETE}),
    ),
    "comments": TablePolicy(owner_column="user_id", allowed=_ALL_WRITES),
}


def authorize_write(
    table: str,
    action: WriteAction,
    principal_id: UUID | None,
    owner_id: UUID | None,
) -> None:
    """Raise AuthorizationError unless ``principal_id`` may perform ``action`` on the row.

    For inserts ``owner_id`` is the owner being written; for updates and deletes
    it is the owner currently stored.
    """
    policy = TABLE_POLICIES.get(table)
    if policy is None:
        return

    details = {"table": table, "action": action.value}
    if principal_id is None:
        raise AuthorizationError("No acting user for this write", details=details)
    if action not in policy.allowed:
        raise AuthorizationError(f"{action.value.capitalize()} is not permitted on {table}", details=details)
    if owner_id != principal_id:
        raise AuthorizationError("You can only modify your own content", details=details)
