"""Unit tests for Transaction."""

from __future__ import annotations

import pytest

from row_reflect.core.exceptions import TransactionStateError
from row_reflect.core.transaction import Transaction


class RecordingConnection:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def commit(self) -> None:
        self.calls.append("commit")

    def rollback(self) -> None:
        self.calls.append("rollback")


class TestTransaction:
    def test_commit_on_success(self) -> None:
        conn = RecordingConnection()
        with Transaction(conn) as tx:
            assert tx.is_active
        assert conn.calls == ["commit"]
        assert not tx.is_active

    def test_rollback_on_exception(self) -> None:
        conn = RecordingConnection()
        with pytest.raises(RuntimeError, match="boom"), Transaction(conn):
            raise RuntimeError("boom")
        assert conn.calls == ["rollback"]

    def test_explicit_rollback_inside_block(self) -> None:
        conn = RecordingConnection()
        with Transaction(conn) as tx:
            tx.rollback()
        assert conn.calls == ["rollback"]

    def test_commit_after_rollback_fails(self) -> None:
        tx = Transaction(RecordingConnection())
        tx.rollback()
        with pytest.raises(TransactionStateError) as exc_info:
            tx.commit()
        assert exc_info.value.current_state == "rolled_back"

    def test_rollback_after_commit_fails(self) -> None:
        tx = Transaction(RecordingConnection())
        tx.commit()
        with pytest.raises(TransactionStateError):
            tx.rollback()

    def test_double_commit_fails(self) -> None:
        tx = Transaction(RecordingConnection())
        tx.commit()
        with pytest.raises(TransactionStateError):
            tx.commit()
