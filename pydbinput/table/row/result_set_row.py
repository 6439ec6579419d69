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

from typing import Any, Dict, List

from pydbinput.table.row.internal_row import InternalRow


class ResultSetRow(InternalRow):
    """One fetched result set row, with values in projection order."""

    def __init__(self, values: tuple, field_names: List[str]):
        self.values = values
        self.field_names = field_names

    def get_field(self, pos: int) -> Any:
        if pos >= len(self.values):
            raise IndexError(f"Position {pos} is out of bounds for row arity {len(self.values)}")
        return self.values[pos]

    def is_null_at(self, pos: int) -> bool:
        return self.get_field(pos) is None

    def to_tuple(self) -> tuple:
        return self.values

    def to_dict(self) -> Dict[str, Any]:
        return dict(zip(self.field_names, self.values))

    def __len__(self) -> int:
        return len(self.values)

    def __eq__(self, other):
        if not isinstance(other, ResultSetRow):
            return False
        return self.values == other.values and self.field_names == other.field_names

    def __repr__(self):
        return f"ResultSetRow({self.to_dict()})"
