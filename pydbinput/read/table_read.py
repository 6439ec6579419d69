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

from typing import Iterator, List, Optional

import pandas
import pyarrow

from pydbinput.read.reader_dispatcher import ReaderDispatcher
from pydbinput.read.split import DBInputSplit
from pydbinput.schema.data_types import PyarrowFieldParser
from pydbinput.table.row.result_set_row import ResultSetRow


class DBTableRead:
    """Reads whole lists of splits in this process, one connection for all of them."""

    def __init__(self, input_format):
        from pydbinput.read.db_input_format import DBInputFormat

        self.input_format: DBInputFormat = input_format
        self.query_spec = input_format.query_spec

    def to_iterator(self, splits: List[DBInputSplit]) -> Iterator[ResultSetRow]:
        def _record_generator():
            with self._new_dispatcher() as dispatcher:
                for split in splits:
                    reader = dispatcher.create_reader(split)
                    try:
                        for batch in iter(reader.read_batch, None):
                            yield from iter(batch.next, None)
                    finally:
                        reader.close()

        return _record_generator()

    def to_arrow_batch_reader(self, splits: List[DBInputSplit]) -> pyarrow.ipc.RecordBatchReader:
        if not self.query_spec.is_typed():
            table = self.to_arrow(splits)
            return pyarrow.ipc.RecordBatchReader.from_batches(table.schema, table.to_batches())
        schema = PyarrowFieldParser.from_db_schema(self.query_spec.fields)
        return pyarrow.ipc.RecordBatchReader.from_batches(schema, self._arrow_batch_generator(splits, schema))

    def to_arrow(self, splits: List[DBInputSplit]) -> pyarrow.Table:
        if not self.query_spec.is_typed():
            # column types are inferred over all rows at once so that every batch agrees
            rows = [row.to_tuple() for row in self.to_iterator(splits)]
            batch = self.convert_rows_to_arrow_batch(rows, self.query_spec.field_names, None)
            return pyarrow.Table.from_batches([batch])
        return self.to_arrow_batch_reader(splits).read_all()

    def to_pandas(self, splits: List[DBInputSplit]) -> pandas.DataFrame:
        return self.to_arrow(splits).to_pandas()

    def _arrow_batch_generator(self, splits: List[DBInputSplit],
                               schema: Optional[pyarrow.Schema]) -> Iterator[pyarrow.RecordBatch]:
        field_names = self.query_spec.field_names
        with self._new_dispatcher() as dispatcher:
            for split in splits:
                reader = dispatcher.create_reader(split)
                try:
                    for batch in iter(reader.read_batch, None):
                        rows = [row.to_tuple() for row in iter(batch.next, None)]
                        yield self.convert_rows_to_arrow_batch(rows, field_names, schema)
                finally:
                    reader.close()

    def _new_dispatcher(self) -> ReaderDispatcher:
        return ReaderDispatcher.create(self.input_format.connection_provider,
                                       self.query_spec,
                                       self.input_format.fetch_size,
                                       self.input_format.serializable)

    @staticmethod
    def convert_rows_to_arrow_batch(row_tuples: List[tuple], field_names: List[str],
                                    schema: Optional[pyarrow.Schema]) -> pyarrow.RecordBatch:
        columns_data = list(zip(*row_tuples)) or [[] for _ in field_names]
        pydict = {name: list(column) for name, column in zip(field_names, columns_data)}
        if schema is None:
            return pyarrow.RecordBatch.from_pydict(pydict)
        return pyarrow.RecordBatch.from_pydict(pydict, schema=schema)
