"""Transaction management.

Transaction is the handle adapters hand out from begin_transaction() and
that commands carry. Used as a context manager it commits on success and
rolls back on exception.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from row_reflect.core.exceptions import TransactionStateError

logger = logging.getLogger(__name__)


class _TxState(Enum):
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class Transaction:
    """Transaction over a DB-API connection exposing commit() and rollback()."""

    def __init__(self, connection: Any) -> None:
        self._connection = connection
        self._state = _TxState.ACTIVE

    @property
    def connection(self) -> Any:
        return self._connection

    @property
    def is_active(self) -> bool:
        return self._state == _TxState.ACTIVE

    def __enter__(self) -> Transaction:
        self._check_active("enter")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        if self._state == _TxState.ACTIVE:
            if exc_type is not None:
                self.rollback()
            else:
                self.commit()

    def commit(self) -> None:
        """Explicitly commit the transaction."""
        self._check_active("commit")
        self._connection.commit()
        self._state = _TxState.COMMITTED
        logger.debug("Transaction committed")

    def rollback(self) -> None:
        """Explicitly rollback the transaction."""
        if self._state == _TxState.COMMITTED:
            raise TransactionStateError("committed", "rollback")
        if self._state == _TxState.ROLLED_BACK:
            raise TransactionStateError("rolled_back", "rollback")
        self._connection.rollback()
        self._state = _TxState.ROLLED_BACK
        logger.debug("Transaction rolled back")

    def _check_active(self, action: str) -> None:
        if self._state != _TxState.ACTIVE:
            raise TransactionStateError(self._state.value, action)
