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

from typing import Optional


class DBInputException(Exception):
    """Base exception of the database input format"""


class SplitPlanningError(DBInputException):
    """The row count needed to plan splits could not be obtained"""

    def __init__(self, table_name: str, query: str, reason: str):
        self.table_name = table_name
        self.query = query
        super().__init__(f"Failed to plan splits for table {table_name} with count query '{query}': {reason}")


class ReaderCreationError(DBInputException):
    """A reader for one split could not be created or could not start reading"""

    def __init__(self, table_name: str, reason: str, split=None, dialect=None):
        self.table_name = table_name
        self.split = split
        self.dialect = dialect
        super().__init__(
            f"Failed to create reader for table {table_name}{_describe(split, dialect)}: {reason}")


class InvalidStateError(DBInputException):
    """A reader was used in a way its state does not allow"""


class RowReadError(DBInputException):
    """Fetching the next rows of a split failed after its query started"""

    def __init__(self, table_name: str, reason: str, split=None, dialect=None):
        self.table_name = table_name
        self.split = split
        self.dialect = dialect
        super().__init__(f"Failed to fetch rows of table {table_name}{_describe(split, dialect)}: {reason}")


class RowDecodeError(DBInputException):
    """A fetched row does not match the projected fields"""

    def __init__(self, table_name: str, reason: str, split=None, dialect=None, row_pos: Optional[int] = None):
        self.table_name = table_name
        self.split = split
        self.dialect = dialect
        self.row_pos = row_pos
        super().__init__(
            f"Failed to decode row {row_pos} of table {table_name}{_describe(split, dialect)}: {reason}")


def _describe(split, dialect) -> str:
    parts = []
    if split is not None:
        parts.append(f"range [{split.start}, {split.end})")
    if dialect is not None:
        parts.append(f"dialect {dialect.name}")
    return " (" + ", ".join(parts) + ")" if parts else ""
