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
from typing import List, Optional

from pydbinput.common.db_input_exception import SplitPlanningError
from pydbinput.read.plan import Plan
from pydbinput.read.query_spec import QuerySpec
from pydbinput.read.split import DBInputSplit

logger = logging.getLogger(__name__)


class SplitPlanner:
    """Plans row range splits of one table from its row count."""

    def __init__(self, connection, query_spec: QuerySpec):
        self.connection = connection
        self.query_spec = query_spec

    def plan(self, num_partitions: int, table_location: Optional[str] = None) -> Plan:
        if num_partitions < 1:
            raise ValueError(f"Number of partitions must be at least 1, got {num_partitions}.")
        total_row_count = self.count_rows()
        splits = SplitPlanner.compute_splits(total_row_count, num_partitions, table_location)
        logger.info("Planned %d splits over %d rows of table %s",
                    len(splits), total_row_count, self.query_spec.table_name)
        return Plan(splits, total_row_count)

    def count_query(self) -> str:
        """The override when one is configured, else a COUNT(*) over the filtered table."""
        if self.query_spec.count_query:
            return self.query_spec.count_query

        query = f"SELECT COUNT(*) FROM {self.query_spec.table_name}"
        if self.query_spec.conditions:
            query += f" WHERE {self.query_spec.conditions}"
        return query

    def count_rows(self) -> int:
        query = self.count_query()
        logger.debug("Counting rows of table %s: %s", self.query_spec.table_name, query)
        cursor = None
        try:
            cursor = self.connection.cursor()
            cursor.execute(query)
            row = cursor.fetchone()
        except Exception as e:
            raise SplitPlanningError(self.query_spec.table_name, query, str(e)) from e
        finally:
            if cursor is not None:
                cursor.close()

        if row is None or len(row) == 0 or row[0] is None:
            raise SplitPlanningError(self.query_spec.table_name, query, "count query returned no row")
        try:
            count = int(row[0])
        except (TypeError, ValueError) as e:
            raise SplitPlanningError(self.query_spec.table_name, query, f"row count {row[0]!r} is not a number") from e
        if count < 0:
            raise SplitPlanningError(self.query_spec.table_name, query, f"negative row count {count}")
        return count

    @staticmethod
    def compute_splits(total_row_count: int,
                       num_partitions: int,
                       table_location: Optional[str] = None) -> List[DBInputSplit]:
        """
        Cuts [0, total_row_count) into num_partitions contiguous splits of total // n rows.
        The last split also takes the remainder, so it may be up to n - 1 rows longer.
        """
        if num_partitions < 1:
            raise ValueError(f"Number of partitions must be at least 1, got {num_partitions}.")
        if total_row_count < 0:
            raise ValueError(f"Row count must not be negative, got {total_row_count}.")

        chunk_size = total_row_count // num_partitions
        if chunk_size == 0 and num_partitions > 1:
            logger.warning("Only %d rows for %d splits, all but the last split will be empty",
                           total_row_count, num_partitions)

        splits = []
        for i in range(num_partitions):
            start = i * chunk_size
            end = total_row_count if i + 1 == num_partitions else start + chunk_size
            splits.append(DBInputSplit(start, end, table_location))
        return splits
