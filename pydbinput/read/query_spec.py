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

from dataclasses import dataclass
from typing import List, Optional, Union

from pydbinput.common.options import Options
from pydbinput.common.options.db_options import DBOptions
from pydbinput.common.options.options_utils import OptionsUtils
from pydbinput.schema.columns_mapping import parse_columns_mapping, project_fields
from pydbinput.schema.data_types import DataField


@dataclass(frozen=True)
class QuerySpec:
    """What to read from the table, shared by the planner and every reader of one job."""
    table_name: str
    fields: List[DataField]
    conditions: Optional[str] = None
    count_query: Optional[str] = None
    order_by: Optional[str] = None

    def __post_init__(self):
        for name in self.field_names:
            if name == '*' or name.endswith('.*'):
                raise ValueError(
                    f"Field '{name}' of table {self.table_name} must name a single column or expression.")

    @property
    def field_names(self) -> List[str]:
        return [field.name for field in self.fields]

    def is_typed(self) -> bool:
        return all(field.is_typed() for field in self.fields)

    @staticmethod
    def from_options(options: Union[dict, Options]) -> 'QuerySpec':
        options = Options.of(options)
        table_name = options.get(DBOptions.INPUT_TABLE_NAME)
        if not table_name:
            raise ValueError(f"Option '{DBOptions.INPUT_TABLE_NAME.key()}' must be set.")

        return QuerySpec(
            table_name=table_name,
            fields=QuerySpec._resolve_fields(options),
            conditions=options.get(DBOptions.INPUT_CONDITIONS) or None,
            count_query=options.get(DBOptions.INPUT_COUNT_QUERY) or None,
            order_by=options.get(DBOptions.INPUT_ORDER_BY) or None,
        )

    @staticmethod
    def _resolve_fields(options: Options) -> List[DataField]:
        field_names = OptionsUtils.split_list(options.get(DBOptions.INPUT_FIELD_NAMES))
        if field_names:
            return [DataField(idx, name) for idx, name in enumerate(field_names)]

        mapping = options.get(DBOptions.COLUMNS_MAPPING)
        if not mapping:
            raise ValueError(
                f"Either '{DBOptions.INPUT_FIELD_NAMES.key()}' or '{DBOptions.COLUMNS_MAPPING.key()}' must be set.")
        column_ids = [int(column_id) for column_id in OptionsUtils.split_list(options.get(DBOptions.READ_COLUMN_IDS))]
        return project_fields(parse_columns_mapping(mapping), column_ids)
