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

import os
import shutil
import sqlite3
import tempfile
import unittest

from parameterized import parameterized

from pydbinput.common.db_input_exception import SplitPlanningError
from pydbinput.read.plan import Plan
from pydbinput.read.split import DBInputSplit
from pydbinput.read.split_planner import SplitPlanner
from pydbinput.tests.sqlite_fixture import create_people_db, people_rows, people_spec


class SplitPlannerTest(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.tempdir = tempfile.mkdtemp()
        cls.db_path = os.path.join(cls.tempdir, 'people.db')
        create_people_db(cls.db_path, people_rows(10))

    @classmethod
    def tearDownClass(cls):
        shutil.rmtree(cls.tempdir, ignore_errors=True)

    def setUp(self):
        self.connection = sqlite3.connect(self.db_path)

    def tearDown(self):
        self.connection.close()

    def test_last_split_absorbs_remainder(self):
        splits = SplitPlanner.compute_splits(100, 3, 'db://people')
        self.assertEqual([(s.start, s.end) for s in splits], [(0, 33), (33, 66), (66, 100)])
        self.assertEqual([s.length for s in splits], [33, 33, 34])
        self.assertTrue(all(s.table_location == 'db://people' for s in splits))

    def test_fewer_rows_than_splits(self):
        splits = SplitPlanner.compute_splits(5, 10)
        self.assertEqual(len(splits), 10)
        self.assertEqual([(s.start, s.end) for s in splits[:9]], [(0, 0)] * 9)
        self.assertTrue(all(s.is_empty() for s in splits[:9]))
        self.assertEqual((splits[9].start, splits[9].end), (0, 5))

    def test_zero_rows(self):
        splits = SplitPlanner.compute_splits(0, 4)
        self.assertEqual([(s.start, s.end) for s in splits], [(0, 0)] * 4)
        self.assertTrue(Plan(splits, 0).covers_exactly())

    @parameterized.expand([
        (0, 1),
        (1, 1),
        (7, 7),
        (10, 3),
        (99, 100),
        (1000, 7),
        (2 ** 40 + 3, 16),
    ])
    def test_splits_cover_rows_exactly(self, total_row_count, num_partitions):
        splits = SplitPlanner.compute_splits(total_row_count, num_partitions)

        self.assertEqual(len(splits), num_partitions)
        self.assertEqual(sum(split.length for split in splits), total_row_count)
        self.assertTrue(Plan(splits, total_row_count).covers_exactly())
        for previous, current in zip(splits, splits[1:]):
            self.assertLessEqual(previous.end, current.start)
        self.assertEqual(splits, SplitPlanner.compute_splits(total_row_count, num_partitions))

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            SplitPlanner.compute_splits(10, 0)
        with self.assertRaises(ValueError):
            SplitPlanner.compute_splits(-1, 2)

    def test_plan_detects_bad_coverage(self):
        overlapping = [DBInputSplit(0, 6), DBInputSplit(5, 10)]
        gap = [DBInputSplit(0, 4), DBInputSplit(5, 10)]
        unsorted = [DBInputSplit(5, 10), DBInputSplit(0, 5)]
        short = [DBInputSplit(0, 5)]
        self.assertFalse(Plan(overlapping, 10).covers_exactly())
        self.assertFalse(Plan(gap, 10).covers_exactly())
        self.assertFalse(Plan(unsorted, 10).covers_exactly())
        self.assertFalse(Plan(short, 10).covers_exactly())
        self.assertTrue(Plan([DBInputSplit(0, 5), DBInputSplit(5, 10)], 10).covers_exactly())

    def test_count_query(self):
        self.assertEqual(SplitPlanner(None, people_spec()).count_query(), "SELECT COUNT(*) FROM people")
        self.assertEqual(SplitPlanner(None, people_spec(conditions="dept = 'a'")).count_query(),
                         "SELECT COUNT(*) FROM people WHERE dept = 'a'")
        self.assertEqual(SplitPlanner(None, people_spec(conditions="dept = 'a'",
                                                        count_query="SELECT 42")).count_query(),
                         "SELECT 42")

    def test_count_rows(self):
        self.assertEqual(SplitPlanner(self.connection, people_spec()).count_rows(), 10)
        self.assertEqual(SplitPlanner(self.connection, people_spec(conditions="dept = 'a'")).count_rows(), 5)
        self.assertEqual(SplitPlanner(self.connection, people_spec(count_query="SELECT 42")).count_rows(), 42)

    def test_plan(self):
        plan = SplitPlanner(self.connection, people_spec()).plan(3, 'db://people')
        self.assertEqual(plan.total_row_count(), 10)
        self.assertEqual([(s.start, s.end) for s in plan.splits()], [(0, 3), (3, 6), (6, 10)])
        self.assertTrue(plan.covers_exactly())

        with self.assertRaises(ValueError):
            SplitPlanner(self.connection, people_spec()).plan(0)

    def test_count_failure_is_fatal(self):
        spec = people_spec(count_query="SELECT COUNT(*) FROM missing_table")
        with self.assertRaises(SplitPlanningError) as context:
            SplitPlanner(self.connection, spec).plan(2)
        self.assertEqual(context.exception.table_name, 'people')
        self.assertEqual(context.exception.query, "SELECT COUNT(*) FROM missing_table")
        self.assertIsInstance(context.exception.__cause__, sqlite3.Error)

    def test_count_without_row_is_fatal(self):
        spec = people_spec(count_query="SELECT 1 WHERE 1 = 0")
        with self.assertRaises(SplitPlanningError):
            SplitPlanner(self.connection, spec).count_rows()


if __name__ == '__main__':
    unittest.main()
