"""Exceptions raised at the collaborator boundary (stores, insight service)."""

from __future__ import annotations


class FlowSyncError(Exception):
    """Base class for all FlowSync errors."""


class NotFoundError(FlowSyncError):
    """Update, delete or lookup of a record id that does not exist."""

    def __init__(self, kind: str, record_id):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} not found: {record_id}")


class UnsupportedOperationError(FlowSyncError):
    """Attempt to hand-edit derived data such as a generated insight."""

    def __init__(self, operation: str = ""):
        self.operation = operation
        msg = "operation not supported on derived data"
        if operation:
            msg = f"{msg} ({operation})"
        super().__init__(msg)
