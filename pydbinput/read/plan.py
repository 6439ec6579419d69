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
from typing import List

import portion

from pydbinput.read.split import DBInputSplit


@dataclass
class Plan:
    """The splits planned for one table, together with the row count they were planned from."""
    _splits: List[DBInputSplit]
    _total_row_count: int

    def splits(self) -> List[DBInputSplit]:
        return self._splits

    def total_row_count(self) -> int:
        return self._total_row_count

    def covers_exactly(self) -> bool:
        """
        Checks that the splits are sorted, pairwise disjoint and together span [0, total).
        Empty splits are allowed anywhere.
        """
        covered = portion.empty()
        last_end = 0
        for split in self._splits:
            if split.is_empty():
                continue
            interval = portion.closedopen(split.start, split.end)
            if split.start < last_end or covered.overlaps(interval):
                return False
            covered = covered | interval
            last_end = split.end

        if self._total_row_count == 0:
            return covered.empty
        return covered == portion.closedopen(0, self._total_row_count)
