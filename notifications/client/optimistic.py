"""Optimistic local mutations with explicit commit and rollback."""

from enum import Enum
from types import TracebackType

import structlog

from notifications.client.state import NotificationState

logger = structlog.get_logger(__name__)


class OperationStatus(str, Enum):
    PENDING = "pending"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class InvalidTransitionError(RuntimeError):
    """commit or rollback was called on an operation that already finished."""


class OptimisticOperation:
    """Tracks one optimistic mutation: ``pending -> committed | rolled_back``.

    The state is snapshotted on creation. Used as a context manager, the
    operation commits when the block exits normally and rolls back (restoring
    the snapshot) when it raises; the exception is never suppressed.
    """

    def __init__(self, state: NotificationState, name: str) -> None:
        self.state = state
        self.name = name
        self.status = OperationStatus.PENDING
        self._snapshot = state.snapshot()

    def commit(self) -> None:
        self._transition(OperationStatus.COMMITTED)

    def rollback(self) -> None:
        self._transition(OperationStatus.ROLLED_BACK)
        self.state.restore(self._snapshot)
        logger.info("optimistic_operation_rolled_back", operation=self.name)

    def _transition(self, target: OperationStatus) -> None:
        if self.status is not OperationStatus.PENDING:
            raise InvalidTransitionError(
                f"{self.name} is already {self.status.value}, cannot move to {target.value}"
            )
        self.status = target

    def __enter__(self) -> "OptimisticOperation":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if self.status is OperationStatus.PENDING:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        return False
