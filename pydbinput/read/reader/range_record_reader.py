################################################################################
#  Licensed to the Apache Software Foundation (ASF) under one
#  or more contributor license agreements.  See the NOTICE file
#  distributed with this work for additional information
#  regarding copyright ownership.  The ASF licenses this file
#  to you under the Apache License, Version 2.0 (the
#  "License"); you may not use this file except in compliance
#  with the License.  You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
# limitations under the License.
################################################################################

import logging
from enum import Enum
from typing import Callable, Optional

import pyarrow

from pydbinput.common.db_input_exception import (InvalidStateError, ReaderCreationError,
                                                 RowDecodeError, RowReadError)
from pydbinput.read.dialect import Dialect
from pydbinput.read.query_spec import QuerySpec
from pydbinput.read.reader.iface.record_iterator import ListRecordIterator, RecordIterator
from pydbinput.read.reader.iface.record_reader import RecordReader
from pydbinput.read.split import DBInputSplit
from pydbinput.read.window_clause import WindowClauseBuilder
from pydbinput.schema.data_types import PyarrowFieldParser
from pydbinput.table.row.result_set_row import ResultSetRow

logger = logging.getLogger(__name__)


class ReaderState(Enum):
    UNSTARTED = "unstarted"
    ACTIVE = "active"
    EXHAUSTED = "exhausted"
    CLOSED = "closed"


class RangeRecordReader(RecordReader[ResultSetRow]):
    """
    Reads the rows of one split through a cursor of its own.

    The query is issued on the first next() or read_batch() call; an empty split never
    touches the database. The connection belongs to the caller and is left open by close();
    an on_close callback lets its owner release it once the reader is done.
    """

    def __init__(self,
                 connection,
                 query_spec: QuerySpec,
                 split: DBInputSplit,
                 dialect: Dialect,
                 window_clause_builder: WindowClauseBuilder,
                 fetch_size: int = 1000,
                 on_close: Optional[Callable[[], None]] = None):
        if fetch_size < 1:
            raise ValueError(f"Fetch size must be positive, got {fetch_size}.")
        self.connection = connection
        self.query_spec = query_spec
        self.split = split
        self.dialect = dialect
        self.fetch_size = fetch_size
        self.select_query = window_clause_builder(query_spec, split)
        self._on_close = on_close

        self._field_names = query_spec.field_names
        self._pa_types = [PyarrowFieldParser.from_db_type(field.type) if field.is_typed() else None
                          for field in query_spec.fields]
        self._cursor = None
        self._current_row: Optional[ResultSetRow] = None
        self._pos = 0
        self._state = ReaderState.UNSTARTED

    @property
    def state(self) -> ReaderState:
        return self._state

    def next(self) -> bool:
        self._check_not_closed()
        if self._state == ReaderState.EXHAUSTED:
            return False
        if self._state == ReaderState.UNSTARTED and not self._start():
            return False

        try:
            row = self._cursor.fetchone()
        except Exception as e:
            raise RowReadError(self.query_spec.table_name, str(e), self.split, self.dialect) from e
        if row is None:
            self._exhaust()
            return False

        self._current_row = self._decode(row)
        self._pos += 1
        self._state = ReaderState.ACTIVE
        return True

    def get_current_row(self) -> ResultSetRow:
        if self._state != ReaderState.ACTIVE or self._current_row is None:
            raise InvalidStateError(
                f"No current row in state {self._state.name}: call next() and check it returned True first.")
        return self._current_row

    def read_batch(self) -> Optional[RecordIterator[ResultSetRow]]:
        self._check_not_closed()
        if self._state == ReaderState.EXHAUSTED:
            return None
        if self._state == ReaderState.UNSTARTED and not self._start():
            return None

        try:
            rows = self._cursor.fetchmany(self.fetch_size)
        except Exception as e:
            raise RowReadError(self.query_spec.table_name, str(e), self.split, self.dialect) from e
        if not rows:
            self._exhaust()
            return None

        batch = [self._decode(row) for row in rows]
        self._pos += len(batch)
        self._current_row = None
        self._state = ReaderState.ACTIVE
        return ListRecordIterator(batch)

    def get_pos(self) -> int:
        return self._pos

    def get_progress(self) -> float:
        if self.split.length == 0:
            return 1.0
        return min(1.0, self._pos / self.split.length)

    def close(self):
        if self._state == ReaderState.CLOSED:
            return
        self._release_cursor()
        self._current_row = None
        self._state = ReaderState.CLOSED
        if self._on_close is not None:
            self._on_close()

    def _start(self) -> bool:
        if self.split.is_empty():
            logger.debug("Split %s of table %s is empty, skipping query", self.split, self.query_spec.table_name)
            self._exhaust()
            return False

        logger.debug("Reading split %s with %s query: %s", self.split, self.dialect.name, self.select_query)
        cursor = None
        try:
            cursor = self.connection.cursor()
            cursor.arraysize = self.fetch_size
            cursor.execute(self.select_query)
        except Exception as e:
            if cursor is not None:
                cursor.close()
            raise ReaderCreationError(self.query_spec.table_name, str(e), self.split, self.dialect) from e
        self._cursor = cursor
        return True

    def _decode(self, row) -> ResultSetRow:
        values = list(row)
        if len(values) != len(self._field_names):
            self._abort(f"expected {len(self._field_names)} columns {self._field_names}, got {len(values)}")

        for pos, pa_type in enumerate(self._pa_types):
            if pa_type is None:
                continue
            value = values[pos]
            if value is None:
                if not self.query_spec.fields[pos].type.nullable:
                    self._abort(f"null value in NOT NULL column {self._field_names[pos]}")
                continue
            try:
                values[pos] = PyarrowFieldParser.coerce_value(value, pa_type)
            except (pyarrow.ArrowException, TypeError, ValueError, OverflowError) as e:
                self._abort(f"value {value!r} of column {self._field_names[pos]} is not a valid {pa_type}", e)

        return ResultSetRow(tuple(values), self._field_names)

    def _abort(self, reason: str, cause: Optional[BaseException] = None):
        row_pos = self._pos
        self.close()
        error = RowDecodeError(self.query_spec.table_name, reason, self.split, self.dialect, row_pos)
        if cause is not None:
            raise error from cause
        raise error

    def _exhaust(self):
        self._release_cursor()
        self._current_row = None
        self._state = ReaderState.EXHAUSTED

    def _release_cursor(self):
        if self._cursor is None:
            return
        cursor, self._cursor = self._cursor, None
        try:
            cursor.close()
        except Exception as e:
            logger.warning("Failed to close cursor of split %s: %s", self.split, e)

    def _check_not_closed(self):
        if self._state == ReaderState.CLOSED:
            raise InvalidStateError(f"Reader of split {self.split} is closed.")

