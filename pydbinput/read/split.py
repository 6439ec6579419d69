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

import struct
from dataclasses import dataclass
from typing import List, Optional

_LENGTH = struct.Struct('>I')
_LONGS = struct.Struct('>qqqq')
_MAX_ROW = 2 ** 63 - 1


@dataclass(frozen=True)
class DBInputSplit:
    """
    A split that spans the rows [start, end) of a table, in the table's row order.

    Splits travel to the workers that read them, so they carry everything a reader
    needs besides the query itself: the row window and the opaque table location.
    """
    start: int
    end: int
    table_location: Optional[str] = None

    def __post_init__(self):
        if self.start < 0 or self.start > self.end:
            raise ValueError(f"Invalid split range [{self.start}, {self.end}): expected 0 <= start <= end.")
        if self.end > _MAX_ROW:
            raise ValueError(f"Invalid split range [{self.start}, {self.end}): end exceeds {_MAX_ROW}.")
        if not self.table_location:
            object.__setattr__(self, 'table_location', None)

    @property
    def length(self) -> int:
        return self.end - self.start

    def is_empty(self) -> bool:
        return self.start == self.end

    def get_locations(self) -> List[str]:
        # no locality information is available for database rows
        return []

    def serialize(self) -> bytes:
        """
        Layout, big-endian: u32 location byte length, location bytes, i64 file offset,
        i64 file length, i64 start, i64 end. File offset and length are always zero.
        """
        location = (self.table_location or "").encode('utf-8')
        return _LENGTH.pack(len(location)) + location + _LONGS.pack(0, 0, self.start, self.end)

    @classmethod
    def deserialize(cls, data: bytes) -> 'DBInputSplit':
        if len(data) < _LENGTH.size:
            raise ValueError(f"Malformed split: expected at least {_LENGTH.size} bytes, got {len(data)}.")
        offset = 0
        location_length = _LENGTH.unpack_from(data, offset)[0]
        offset += _LENGTH.size
        if len(data) - offset != location_length + _LONGS.size:
            raise ValueError(f"Malformed split: expected {location_length + _LONGS.size} bytes after the "
                             f"location length, got {len(data) - offset}.")
        location = data[offset:offset + location_length].decode('utf-8')
        offset += location_length
        _, _, start, end = _LONGS.unpack_from(data, offset)
        return cls(start, end, location or None)

    def __repr__(self):
        return f"DBInputSplit([{self.start}, {self.end}), location={self.table_location})"
