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
from typing import Callable, Optional

from pydbinput.common.db_input_exception import ReaderCreationError
from pydbinput.connection.connection_provider import ConnectionProvider
from pydbinput.read.dialect import Dialect
from pydbinput.read.query_spec import QuerySpec
from pydbinput.read.reader.range_record_reader import RangeRecordReader
from pydbinput.read.split import DBInputSplit
from pydbinput.read.window_clause import window_clause_builder

logger = logging.getLogger(__name__)


class ReaderDispatcher:
    """
    Creates the reader of a split, paging through it the way the connected database
    does best.

    The connection and its dialect are fixed at construction. A dispatcher built through
    create() owns its connection and closes it in close(); one passed in stays with the caller.
    """

    def __init__(self,
                 connection,
                 dialect: Dialect,
                 query_spec: QuerySpec,
                 fetch_size: int = 1000,
                 owns_connection: bool = False):
        self.connection = connection
        self.dialect = dialect
        self.query_spec = query_spec
        self.fetch_size = fetch_size
        self._owns_connection = owns_connection
        self._closed = False

    @classmethod
    def create(cls,
               connection_provider: ConnectionProvider,
               query_spec: QuerySpec,
               fetch_size: int = 1000,
               serializable: bool = False) -> 'ReaderDispatcher':
        connection = None
        try:
            connection = connection_provider.get_connection()
            product_name = connection_provider.get_database_product_name(connection)
            dialect = Dialect.from_product_name(product_name)
            if serializable:
                set_serializable(connection, dialect)
        except Exception as e:
            if connection is not None:
                connection.close()
            raise ReaderCreationError(query_spec.table_name, f"cannot open connection: {e}") from e

        logger.info("Detected %s dialect from product name '%s' for table %s",
                    dialect.name, product_name, query_spec.table_name)
        return cls(connection, dialect, query_spec, fetch_size, owns_connection=True)

    def create_reader(self, split: DBInputSplit, on_close: Optional[Callable[[], None]] = None) -> RangeRecordReader:
        if self._closed:
            raise ReaderCreationError(self.query_spec.table_name, "dispatcher is closed", split, self.dialect)
        try:
            reader = RangeRecordReader(self.connection,
                                       self.query_spec,
                                       split,
                                       self.dialect,
                                       window_clause_builder(self.dialect),
                                       self.fetch_size,
                                       on_close)
        except Exception as e:
            raise ReaderCreationError(self.query_spec.table_name, str(e), split, self.dialect) from e
        logger.debug("Created %s reader for split %s", self.dialect.name, split)
        return reader

    def close(self):
        if self._closed:
            return
        self._closed = True
        if self._owns_connection:
            self.connection.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def set_serializable(connection, dialect: Dialect):
    """Switches the session to serializable reads so rows cannot shift between split queries."""
    statement = dialect.isolation_statement()
    if statement is None:
        return
    cursor = connection.cursor()
    try:
        cursor.execute(statement)
    finally:
        cursor.close()
