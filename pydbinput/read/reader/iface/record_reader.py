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
from typing import Generic, Optional, TypeVar

from pydbinput.read.reader.iface.record_iterator import RecordIterator

T = TypeVar('T')


class RecordReader(Generic[T], ABC):
    """
    The reader that reads the records of one split, either row by row or in batches.
    """

    @abstractmethod
    def next(self) -> bool:
        """
        Advances to the next record. Returns False once the split is exhausted.
        """

    @abstractmethod
    def get_current_row(self) -> T:
        """
        Returns the record the last successful next() advanced to.
        """

    @abstractmethod
    def read_batch(self) -> Optional[RecordIterator[T]]:
        """
        Reads one batch as a RecordIterator. The method should return None when reaching the end of the input.
        """

    @abstractmethod
    def get_pos(self) -> int:
        """
        Returns the number of records consumed so far.
        """

    @abstractmethod
    def close(self):
        """
        Closes the reader and should release all resources.
        """

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
