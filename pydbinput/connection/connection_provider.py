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

import importlib
import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional, Union

from pydbinput.common.options import Options
from pydbinput.common.options.db_options import DBOptions

logger = logging.getLogger(__name__)

# DB-API modules do not expose the server product, so it is inferred from the driver
DRIVER_PRODUCT_NAMES = {
    "oracledb": "Oracle",
    "cx_Oracle": "Oracle",
    "pymysql": "MySQL",
    "MySQLdb": "MySQL",
    "mysql": "MySQL",
    "sqlite3": "SQLite",
    "psycopg2": "PostgreSQL",
    "psycopg": "PostgreSQL",
}


class ConnectionProvider(ABC):
    """Opens DB-API 2.0 connections to the database being read and names its product."""

    @abstractmethod
    def get_connection(self):
        """
        Opens a new connection. The caller owns it and must close it.
        """

    @abstractmethod
    def get_database_product_name(self, connection) -> str:
        """
        Returns the product name of the database behind the given connection, e.g. "MySQL".
        """


class DbApiConnectionProvider(ConnectionProvider):

    def __init__(self, connect: Callable[[], object], product_name: Optional[str] = None):
        self._connect = connect
        self._product_name = product_name

    @classmethod
    def from_options(cls, options: Union[dict, Options]) -> 'DbApiConnectionProvider':
        options = Options.of(options)
        driver = options.get(DBOptions.DRIVER)
        if not driver:
            raise ValueError(f"Option '{DBOptions.DRIVER.key()}' must be set to open connections.")
        module = importlib.import_module(driver)
        url = options.get(DBOptions.URL)
        properties = options.get(DBOptions.CONNECTION_PROPERTIES)

        def connect():
            if url is not None:
                return module.connect(url, **properties)
            return module.connect(**properties)

        return cls(connect, options.get(DBOptions.DATABASE_PRODUCT_NAME))

    def get_connection(self):
        connection = self._connect()
        logger.debug("Opened connection %s", type(connection).__module__)
        return connection

    def get_database_product_name(self, connection) -> str:
        if self._product_name:
            return self._product_name
        root_module = type(connection).__module__.split(".")[0]
        return DRIVER_PRODUCT_NAMES.get(root_module, root_module)
