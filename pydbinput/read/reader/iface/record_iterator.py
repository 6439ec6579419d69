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

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

T = TypeVar('T')


class RecordIterator(Generic[T], ABC):
    """
    An internal iterator interface which presents a more restrictive API than Iterator
    """

    @abstractmethod
    def next(self) -> Optional[T]:
        """
        Gets the next record from the iterator. Returns None if this iterator has no more elements.
        """


class ListRecordIterator(RecordIterator[T]):
    """Iterates over one batch of records already fetched into memory."""

    def __init__(self, records: List[T]):
        self._records = records
        self._pos = 0

    def next(self) -> Optional[T]:
        if self._pos >= len(self._records):
            return None
        record = self._records[self._pos]
        self._pos += 1
        return record
