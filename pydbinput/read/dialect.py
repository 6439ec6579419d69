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

from enum import Enum
from typing import Optional


class Dialect(str, Enum):
    """
    The vendor specific SQL behaviour profile of the target database.
    """
    GENERIC = "generic"
    ORACLE = "oracle"
    MYSQL = "mysql"

    @staticmethod
    def from_product_name(product_name: Optional[str]) -> 'Dialect':
        """Matches the upper-cased product name by prefix; anything unknown is GENERIC."""
        name = (product_name or "").strip().upper()
        if name.startswith("ORACLE"):
            return Dialect.ORACLE
        if name.startswith("MYSQL"):
            return Dialect.MYSQL
        return Dialect.GENERIC

    def isolation_statement(self) -> Optional[str]:
        """Statement switching a session to serializable reads, if the dialect has one."""
        if self == Dialect.MYSQL:
            return "SET SESSION TRANSACTION ISOLATION LEVEL SERIALIZABLE"
        if self == Dialect.ORACLE:
            return "SET TRANSACTION ISOLATION LEVEL SERIALIZABLE"
        return None
