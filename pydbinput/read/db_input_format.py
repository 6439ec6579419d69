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
from typing import List, Optional, Union

from pydbinput.common.db_input_exception import ReaderCreationError, SplitPlanningError
from pydbinput.common.options import Options
from pydbinput.common.options.db_options import DBOptions
from pydbinput.connection.connection_provider import ConnectionProvider, DbApiConnectionProvider
from pydbinput.read.dialect import Dialect
from pydbinput.read.query_spec import QuerySpec
from pydbinput.read.reader.range_record_reader import RangeRecordReader
from pydbinput.read.reader_dispatcher import ReaderDispatcher, set_serializable
from pydbinput.read.split import DBInputSplit
from pydbinput.read.split_planner import SplitPlanner

logger = logging.getLogger(__name__)


class DBInputFormat:
    """
    Reads a database table in parallel: get_splits() once per job, then
    get_record_reader() once per split, possibly in another process.

    Every call opens its own connection. A reader closes its connection when it is closed;
    close() releases the connections of readers still open.
    """

    def __init__(self,
                 options: Union[dict, Options],
                 connection_provider: Optional[ConnectionProvider] = None):
        self.options = Options.of(options)
        self.query_spec = QuerySpec.from_options(self.options)
        self.connection_provider = connection_provider or DbApiConnectionProvider.from_options(self.options)
        self.table_location = self.options.get(DBOptions.INPUT_TABLE_LOCATION)
        self.fetch_size = self.options.get(DBOptions.READ_FETCH_SIZE)
        self.serializable = self.options.get(DBOptions.READ_SERIALIZABLE)
        self._dispatchers: List[ReaderDispatcher] = []

    def get_splits(self, num_splits: Optional[int] = None) -> List[DBInputSplit]:
        num_splits = self.options.get(DBOptions.SPLIT_NUM) if num_splits is None else num_splits
        if num_splits < 1:
            raise ValueError(f"Number of splits must be at least 1, got {num_splits}.")

        connection = self._open_planning_connection()
        try:
            plan = SplitPlanner(connection, self.query_spec).plan(num_splits, self.table_location)
        finally:
            connection.close()
        return plan.splits()

    def get_record_reader(self, split: DBInputSplit) -> RangeRecordReader:
        dispatcher = ReaderDispatcher.create(self.connection_provider,
                                             self.query_spec,
                                             self.fetch_size,
                                             self.serializable)
        self._dispatchers.append(dispatcher)
        try:
            return dispatcher.create_reader(split, on_close=lambda: self._release(dispatcher))
        except ReaderCreationError:
            self._release(dispatcher)
            raise

    def new_read(self) -> 'DBTableRead':
        from pydbinput.read.table_read import DBTableRead

        return DBTableRead(self)

    def close(self):
        dispatchers, self._dispatchers = self._dispatchers, []
        for dispatcher in dispatchers:
            dispatcher.close()

    def _release(self, dispatcher: ReaderDispatcher):
        if dispatcher in self._dispatchers:
            self._dispatchers.remove(dispatcher)
        dispatcher.close()

    def _open_planning_connection(self):
        connection = None
        try:
            connection = self.connection_provider.get_connection()
            if self.serializable:
                dialect = Dialect.from_product_name(
                    self.connection_provider.get_database_product_name(connection))
                set_serializable(connection, dialect)
        except Exception as e:
            if connection is not None:
                connection.close()
            raise SplitPlanningError(self.query_spec.table_name, self._count_query(), f"cannot open connection: {e}") \
                from e
        return connection

    def _count_query(self) -> str:
        return SplitPlanner(None, self.query_spec).count_query()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
