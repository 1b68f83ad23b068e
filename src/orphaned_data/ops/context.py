"""
Request-scoped context for operations.

Every operation function receives an :class:`OperationContext` as its first
argument.  It carries everything the host framework used to keep in global
state: the database connection, the table names of the install, the type
registry, the acting user, and the notice queue for the current request.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from orphaned_data.core.capabilities import ANONYMOUS, User
from orphaned_data.core.protocols import Connection
from orphaned_data.core.schema import TableNames
from orphaned_data.core.types import TypeRegistry
from orphaned_data.ops.notices import NoticeQueue


@dataclass
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        conn: Database connection satisfying :class:`Connection`.
        registry: Content type registry for this process.
        tables: Prefixed table names of the install.
        user: The acting user; capability checks go through it.
        request_id: Unique ID for this invocation (auto-generated).
        caller: Origin of the request: ``"admin"``, ``"cli"`` or ``"sdk"``.
        dry_run: When ``True``, mutating operations only report what they would do.
        notices: Messages to show once on the next render.
        orphaned_types: Orphaned type names found when the context was built.
        metadata: Arbitrary key/value pairs forwarded to logging.
    """

    conn: Connection
    registry: TypeRegistry = field(default_factory=TypeRegistry.with_builtins)
    tables: TableNames = field(default_factory=TableNames)
    user: User = ANONYMOUS
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    caller: str = "sdk"
    dry_run: bool = False
    notices: NoticeQueue = field(default_factory=NoticeQueue)
    orphaned_types: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
