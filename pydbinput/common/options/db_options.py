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

from typing import Dict

from pydbinput.common.options.config_option import ConfigOption
from pydbinput.common.options.config_options import ConfigOptions


class DBOptions:
    """Options understood by the database input format."""

    # Connection options
    DRIVER: ConfigOption[str] = (
        ConfigOptions.key("driver")
        .string_type()
        .no_default_value()
        .with_description("Name of the DB-API 2.0 module whose connect() opens connections, e.g. 'sqlite3'.")
    )

    URL: ConfigOption[str] = (
        ConfigOptions.key("url")
        .string_type()
        .no_default_value()
        .with_description("First positional argument handed to the driver's connect().")
    )

    CONNECTION_PROPERTIES: ConfigOption[Dict[str, str]] = (
        ConfigOptions.key("connection")
        .map_type()
        .default_value({})
        .with_description("Keyword arguments handed to the driver's connect(), as 'connection.<name>'.")
    )

    DATABASE_PRODUCT_NAME: ConfigOption[str] = (
        ConfigOptions.key("database.product-name")
        .string_type()
        .no_default_value()
        .with_description(
            "Product name of the target database. When absent it is inferred from the driver module "
            "of the opened connection."
        )
    )

    # Input options
    INPUT_TABLE_NAME: ConfigOption[str] = (
        ConfigOptions.key("input.table-name")
        .string_type()
        .no_default_value()
        .with_description("The table to read.")
    )

    INPUT_FIELD_NAMES: ConfigOption[str] = (
        ConfigOptions.key("input.field-names")
        .string_type()
        .no_default_value()
        .with_description("Comma separated columns to project. Overrides 'columns.mapping'.")
    )

    INPUT_CONDITIONS: ConfigOption[str] = (
        ConfigOptions.key("input.conditions")
        .string_type()
        .no_default_value()
        .with_description("Filter predicate appended as a WHERE clause, passed through as is.")
    )

    INPUT_ORDER_BY: ConfigOption[str] = (
        ConfigOptions.key("input.order-by")
        .string_type()
        .no_default_value()
        .with_description("Columns that fix the row order used to window the table.")
    )

    INPUT_COUNT_QUERY: ConfigOption[str] = (
        ConfigOptions.key("input.count-query")
        .string_type()
        .no_default_value()
        .with_description("Query returning the row count, used verbatim instead of SELECT COUNT(*).")
    )

    INPUT_TABLE_LOCATION: ConfigOption[str] = (
        ConfigOptions.key("input.table-location")
        .string_type()
        .no_default_value()
        .with_description("Opaque location of the table, carried by every split.")
    )

    COLUMNS_MAPPING: ConfigOption[str] = (
        ConfigOptions.key("columns.mapping")
        .string_type()
        .no_default_value()
        .with_description(
            "Comma separated table columns in the form 'name' or 'name:TYPE', "
            "e.g. 'id:BIGINT,name:VARCHAR(32),score'."
        )
    )

    READ_COLUMN_IDS: ConfigOption[str] = (
        ConfigOptions.key("read.column-ids")
        .string_type()
        .no_default_value()
        .with_description("Comma separated indices into 'columns.mapping' to project. Empty reads all.")
    )

    # Split and read options
    SPLIT_NUM: ConfigOption[int] = (
        ConfigOptions.key("split.num")
        .int_type()
        .default_value(1)
        .with_description("Number of splits to plan when the caller does not ask for a specific count.")
    )

    READ_FETCH_SIZE: ConfigOption[int] = (
        ConfigOptions.key("read.fetch-size")
        .int_type()
        .default_value(1000)
        .with_description("Rows fetched from the cursor per batch.")
    )

    READ_SERIALIZABLE: ConfigOption[bool] = (
        ConfigOptions.key("read.serializable")
        .boolean_type()
        .default_value(True)
        .with_description("Whether to switch new connections to serializable isolation before reading.")
    )
