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
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, List, Optional

import pyarrow


@dataclass
class AtomicType:
    type: str
    nullable: bool = True

    def __str__(self) -> str:
        null_suffix = "" if self.nullable else " NOT NULL"
        return "{}{}".format(self.type, null_suffix)


@dataclass
class DataField:
    """One projected column. A field without a type is read as whatever the driver returns."""

    id: int
    name: str
    type: Optional[AtomicType] = None

    def is_typed(self) -> bool:
        return self.type is not None


class Keyword(Enum):
    CHAR = "CHAR"
    VARCHAR = "VARCHAR"
    VARCHAR2 = "VARCHAR2"
    TEXT = "TEXT"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"
    BINARY = "BINARY"
    VARBINARY = "VARBINARY"
    BYTES = "BYTES"
    BLOB = "BLOB"
    DECIMAL = "DECIMAL"
    NUMERIC = "NUMERIC"
    NUMBER = "NUMBER"
    TINYINT = "TINYINT"
    SMALLINT = "SMALLINT"
    INT = "INT"
    INTEGER = "INTEGER"
    BIGINT = "BIGINT"
    FLOAT = "FLOAT"
    REAL = "REAL"
    DOUBLE = "DOUBLE"
    DATE = "DATE"
    TIME = "TIME"
    TIMESTAMP = "TIMESTAMP"


class DataTypeParser:

    @staticmethod
    def parse_nullability(type_string: str) -> bool:
        return "NOT NULL" not in type_string.upper()

    @staticmethod
    def parse_atomic_type_sql_string(type_string: str) -> AtomicType:
        type_upper = type_string.upper().strip()
        nullable = DataTypeParser.parse_nullability(type_upper)
        if type_upper.endswith("NOT NULL"):
            type_upper = type_upper[:-len("NOT NULL")].strip()

        if "(" in type_upper:
            base_type = type_upper.split("(")[0].strip()
        elif " " in type_upper:
            base_type = type_upper.split(" ")[0]
            type_upper = base_type
        else:
            base_type = type_upper

        try:
            Keyword(base_type)
        except ValueError:
            raise ValueError("Unknown type: {}".format(base_type))
        return AtomicType(type_upper, nullable)


class PyarrowFieldParser:

    @staticmethod
    def from_db_type(data_type: AtomicType) -> pyarrow.DataType:
        type_name = data_type.type.upper()
        if type_name == 'TINYINT':
            return pyarrow.int8()
        elif type_name == 'SMALLINT':
            return pyarrow.int16()
        elif type_name in ('INT', 'INTEGER'):
            return pyarrow.int32()
        elif type_name == 'BIGINT':
            return pyarrow.int64()
        elif type_name in ('FLOAT', 'REAL'):
            return pyarrow.float32()
        elif type_name == 'DOUBLE':
            return pyarrow.float64()
        elif type_name == 'BOOLEAN':
            return pyarrow.bool_()
        elif type_name in ('STRING', 'TEXT') or type_name.startswith(('CHAR', 'VARCHAR')):
            return pyarrow.string()
        elif type_name in ('BYTES', 'BLOB') or type_name.startswith(('VARBINARY', 'BINARY')):
            return pyarrow.binary()
        elif type_name.startswith(('DECIMAL', 'NUMERIC', 'NUMBER')):
            match_ps = re.fullmatch(r'\w+\((\d+),\s*(\d+)\)', type_name)
            if match_ps:
                precision, scale = map(int, match_ps.groups())
                return pyarrow.decimal128(precision, scale)
            match_p = re.fullmatch(r'\w+\((\d+)\)', type_name)
            if match_p:
                return pyarrow.decimal128(int(match_p.group(1)), 0)
            return pyarrow.decimal128(38, 10)
        elif type_name == 'DATE':
            return pyarrow.date32()
        elif type_name.startswith('TIMESTAMP'):
            return pyarrow.timestamp('us', tz=None)
        elif type_name.startswith('TIME'):
            return pyarrow.time64('us')
        raise ValueError("Unsupported data type: {}".format(data_type))

    @staticmethod
    def from_db_field(data_field: DataField) -> pyarrow.Field:
        if data_field.type is None:
            return pyarrow.field(data_field.name, pyarrow.null())
        return pyarrow.field(data_field.name, PyarrowFieldParser.from_db_type(data_field.type),
                             nullable=data_field.type.nullable)

    @staticmethod
    def from_db_schema(data_fields: List[DataField]) -> pyarrow.Schema:
        return pyarrow.schema([PyarrowFieldParser.from_db_field(field) for field in data_fields])

    @staticmethod
    def coerce_value(value: Any, pa_type: pyarrow.DataType) -> Any:
        """
        Converts a value as a DB-API driver returns it into the Python value of the given
        pyarrow type, raising if it cannot be represented.

        Drivers hand out BOOLEAN columns as 0/1 integers (MySQL stores them as TINYINT(1)) and,
        depending on the database, DECIMAL columns as floats or strings.
        """
        if value is None:
            return None
        if pyarrow.types.is_boolean(pa_type) and isinstance(value, int) and not isinstance(value, bool):
            if value not in (0, 1):
                raise ValueError(f"{value} is not a boolean flag")
            value = bool(value)
        elif pyarrow.types.is_decimal(pa_type) and isinstance(value, (int, float, str)) \
                and not isinstance(value, bool):
            try:
                value = Decimal(str(value))
            except InvalidOperation as e:
                raise ValueError(f"{value!r} is not a decimal number") from e
        pyarrow.scalar(value, type=pa_type)
        return value
