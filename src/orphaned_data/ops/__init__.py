"""
Operations layer.

Transport-agnostic functions shared by the admin screen and the CLI.  Every
operation takes an :class:`~orphaned_data.ops.context.OperationContext` and a
typed request, and returns an :class:`~orphaned_data.ops.result.OperationResult`.
"""

from orphaned_data.ops.context import OperationContext
from orphaned_data.ops.result import OperationError, OperationResult, PagedResult

__all__ = ["OperationContext", "OperationError", "OperationResult", "PagedResult"]
