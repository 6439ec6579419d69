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

from pydbinput.common.db_input_exception import (DBInputException, InvalidStateError,
                                                 ReaderCreationError, RowDecodeError,
                                                 RowReadError, SplitPlanningError)
from pydbinput.connection.connection_provider import ConnectionProvider, DbApiConnectionProvider
from pydbinput.read.db_input_format import DBInputFormat
from pydbinput.read.dialect import Dialect
from pydbinput.read.query_spec import QuerySpec
from pydbinput.read.reader_dispatcher import ReaderDispatcher
from pydbinput.read.split import DBInputSplit
from pydbinput.read.split_planner import SplitPlanner

__all__ = [
    'ConnectionProvider',
    'DBInputException',
    'DBInputFormat',
    'DBInputSplit',
    'DbApiConnectionProvider',
    'Dialect',
    'InvalidStateError',
    'QuerySpec',
    'ReaderCreationError',
    'ReaderDispatcher',
    'RowDecodeError',
    'RowReadError',
    'SplitPlanner',
    'SplitPlanningError',
]
