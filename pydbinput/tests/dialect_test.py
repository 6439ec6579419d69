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

import unittest

from parameterized import parameterized

from pydbinput.read.dialect import Dialect
from pydbinput.read.split import DBInputSplit
from pydbinput.read.window_clause import (generic_select_query, mysql_select_query,
                                          oracle_select_query, window_clause_builder)
from pydbinput.tests.sqlite_fixture import people_spec


class DialectTest(unittest.TestCase):

    @parameterized.expand([
        ("Oracle Database 19c", Dialect.ORACLE),
        ("ORACLE", Dialect.ORACLE),
        ("oracle", Dialect.ORACLE),
        ("MySQL 8.0", Dialect.MYSQL),
        ("mysql", Dialect.MYSQL),
        ("PostgreSQL 14", Dialect.GENERIC),
        ("SQLite", Dialect.GENERIC),
        ("MariaDB", Dialect.GENERIC),
        ("My SQL", Dialect.GENERIC),
        ("", Dialect.GENERIC),
        (None, Dialect.GENERIC),
    ])
    def test_from_product_name(self, product_name, expected):
        self.assertEqual(Dialect.from_product_name(product_name), expected)

    def test_isolation_statement(self):
        self.assertEqual(Dialect.MYSQL.isolation_statement(),
                         "SET SESSION TRANSACTION ISOLATION LEVEL SERIALIZABLE")
        self.assertEqual(Dialect.ORACLE.isolation_statement(), "SET TRANSACTION ISOLATION LEVEL SERIALIZABLE")
        self.assertIsNone(Dialect.GENERIC.isolation_statement())


class WindowClauseTest(unittest.TestCase):

    def test_builder_per_dialect(self):
        self.assertIs(window_clause_builder(Dialect.MYSQL), mysql_select_query)
        self.assertIs(window_clause_builder(Dialect.ORACLE), oracle_select_query)
        self.assertIs(window_clause_builder(Dialect.GENERIC), generic_select_query)

    def test_mysql_query(self):
        split = DBInputSplit(33, 66)
        self.assertEqual(mysql_select_query(people_spec(order_by=None), split),
                         "SELECT id, name, score FROM people LIMIT 33 OFFSET 33")
        self.assertEqual(mysql_select_query(people_spec(conditions="dept = 'a'"), split),
                         "SELECT id, name, score FROM people WHERE dept = 'a' ORDER BY id LIMIT 33 OFFSET 33")

    def test_oracle_query(self):
        self.assertEqual(oracle_select_query(people_spec(conditions="dept = 'a'"), DBInputSplit(66, 100)),
                         "SELECT id, name, score FROM people WHERE dept = 'a' ORDER BY id "
                         "OFFSET 66 ROWS FETCH NEXT 34 ROWS ONLY")

    def test_generic_query(self):
        self.assertEqual(generic_select_query(people_spec(conditions="dept = 'a'"), DBInputSplit(0, 33)),
                         "SELECT dbif_c0, dbif_c1, dbif_c2 FROM ("
                         "SELECT id AS dbif_c0, name AS dbif_c1, score AS dbif_c2, "
                         "ROW_NUMBER() OVER (ORDER BY id) AS dbif_rno "
                         "FROM people WHERE dept = 'a') dbif_window "
                         "WHERE dbif_rno > 0 AND dbif_rno <= 33 ORDER BY dbif_rno")
        self.assertIn("ROW_NUMBER() OVER () AS dbif_rno FROM people)",
                      generic_select_query(people_spec(order_by=None), DBInputSplit(0, 33)))

    def test_builders_are_pure(self):
        spec = people_spec()
        split = DBInputSplit(3, 9)
        for dialect in Dialect:
            builder = window_clause_builder(dialect)
            self.assertEqual(builder(spec, split), builder(spec, split))


if __name__ == '__main__':
    unittest.main()
