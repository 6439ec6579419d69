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

import re
from typing import List, Optional

from pydbinput.schema.data_types import DataField, DataTypeParser

# commas inside a type's parentheses, as in DECIMAL(10, 2), do not separate columns
_COLUMN_SEPARATOR = re.compile(r',(?![^()]*\))')


def parse_columns_mapping(mapping: Optional[str]) -> List[DataField]:
    """
    Parses a columns mapping such as "id:BIGINT,name:VARCHAR(32),score" into fields.

    Every entry names one table column, optionally followed by ':' and its SQL type.
    """
    if mapping is None or not mapping.strip():
        raise ValueError("Columns mapping must not be empty.")

    fields = []
    for idx, entry in enumerate(_COLUMN_SEPARATOR.split(mapping)):
        entry = entry.strip()
        if not entry:
            raise ValueError(f"Empty column at position {idx} in columns mapping '{mapping}'.")
        name, sep, type_string = entry.partition(':')
        name = name.strip()
        if not name:
            raise ValueError(f"Missing column name at position {idx} in columns mapping '{mapping}'.")
        data_type = DataTypeParser.parse_atomic_type_sql_string(type_string) if sep else None
        fields.append(DataField(idx, name, data_type))
    return fields


def project_fields(fields: List[DataField], column_ids: List[int]) -> List[DataField]:
    """Selects the fields at the given column ids, in the order given. No ids selects every field."""
    if len(fields) < len(column_ids):
        raise ValueError("Cannot read more columns than the given table contains.")
    if not column_ids:
        return list(fields)

    projected = []
    for column_id in column_ids:
        if column_id < 0 or column_id >= len(fields):
            raise ValueError(f"Column id {column_id} is out of range for {len(fields)} mapped columns.")
        projected.append(fields[column_id])
    return projected
