"""Unit tests for the database-null marker."""

from __future__ import annotations

import copy
import pickle

from row_reflect.core.dbnull import DBNull, _DBNullType, is_null


class TestDBNull:
    def test_singleton(self) -> None:
        assert _DBNullType() is DBNull
        assert copy.deepcopy(DBNull) is DBNull
        assert pickle.loads(pickle.dumps(DBNull)) is DBNull

    def test_falsy_and_repr(self) -> None:
        assert not DBNull
        assert repr(DBNull) == "DBNull"

    def test_is_null(self) -> None:
        assert is_null(None)
        assert is_null(DBNull)
        assert not is_null(0)
        assert not is_null("")
