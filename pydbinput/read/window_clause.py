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

"""
Builders of the range-scoped SELECT for each dialect.

Each builder is a pure function of the query spec and the split; they differ only in
how the row window [start, end) is expressed.
"""

from typing import Callable, Dict

from pydbinput.read.dialect import Dialect
from pydbinput.read.query_spec import QuerySpec
from pydbinput.read.split import DBInputSplit

ROW_NUMBER_COLUMN = "dbif_rno"
COLUMN_ALIAS_PREFIX = "dbif_c"

WindowClauseBuilder = Callable[[QuerySpec, DBInputSplit], str]


def _where(query_spec: QuerySpec) -> str:
    return f" WHERE {query_spec.conditions}" if query_spec.conditions else ""


def _order_by(query_spec: QuerySpec) -> str:
    return f" ORDER BY {query_spec.order_by}" if query_spec.order_by else ""


def _base_query(query_spec: QuerySpec) -> str:
    return (f"SELECT {', '.join(query_spec.field_names)} FROM {query_spec.table_name}"
            f"{_where(query_spec)}{_order_by(query_spec)}")


def mysql_select_query(query_spec: QuerySpec, split: DBInputSplit) -> str:
    return f"{_base_query(query_spec)} LIMIT {split.length} OFFSET {split.start}"


def oracle_select_query(query_spec: QuerySpec, split: DBInputSplit) -> str:
    return f"{_base_query(query_spec)} OFFSET {split.start} ROWS FETCH NEXT {split.length} ROWS ONLY"


def generic_select_query(query_spec: QuerySpec, split: DBInputSplit) -> str:
    # inner columns are aliased so qualified names and expressions stay addressable outside
    aliases = [f"{COLUMN_ALIAS_PREFIX}{pos}" for pos in range(len(query_spec.field_names))]
    inner = ', '.join(f"{name} AS {alias}" for name, alias in zip(query_spec.field_names, aliases))
    over = f"ORDER BY {query_spec.order_by}" if query_spec.order_by else ""
    return (f"SELECT {', '.join(aliases)} FROM ("
            f"SELECT {inner}, ROW_NUMBER() OVER ({over}) AS {ROW_NUMBER_COLUMN} "
            f"FROM {query_spec.table_name}{_where(query_spec)}) dbif_window "
            f"WHERE {ROW_NUMBER_COLUMN} > {split.start} AND {ROW_NUMBER_COLUMN} <= {split.end} "
            f"ORDER BY {ROW_NUMBER_COLUMN}")


WINDOW_CLAUSE_BUILDERS: Dict[Dialect, WindowClauseBuilder] = {
    Dialect.GENERIC: generic_select_query,
    Dialect.ORACLE: oracle_select_query,
    Dialect.MYSQL: mysql_select_query,
}


def window_clause_builder(dialect: Dialect) -> WindowClauseBuilder:
    return WINDOW_CLAUSE_BUILDERS.get(dialect, generic_select_query)
