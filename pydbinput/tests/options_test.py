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

from pydbinput.common.options import Options
from pydbinput.common.options.db_options import DBOptions
from pydbinput.common.options.options_utils import OptionsUtils
from pydbinput.read.query_spec import QuerySpec
from pydbinput.schema.columns_mapping import parse_columns_mapping, project_fields
from pydbinput.schema.data_types import AtomicType, DataField


class OptionsTest(unittest.TestCase):

    def test_typed_get(self):
        options = Options({
            'split.num': '8',
            'read.serializable': 'off',
            'connection.timeout': '5',
            'connection.check_same_thread': 'false',
        })
        self.assertEqual(options.get(DBOptions.SPLIT_NUM), 8)
        self.assertFalse(options.get(DBOptions.READ_SERIALIZABLE))
        self.assertEqual(options.get(DBOptions.READ_FETCH_SIZE), 1000)
        self.assertIsNone(options.get(DBOptions.INPUT_CONDITIONS))
        self.assertEqual(options.get(DBOptions.CONNECTION_PROPERTIES),
                         {'timeout': '5', 'check_same_thread': 'false'})
        self.assertTrue(options.contains(DBOptions.CONNECTION_PROPERTIES))
        self.assertEqual(Options.from_none().get(DBOptions.CONNECTION_PROPERTIES), {})

    def test_set_and_copy(self):
        options = Options.from_none()
        options.set(DBOptions.SPLIT_NUM, 3)
        copied = options.copy()
        copied.set(DBOptions.SPLIT_NUM, 5)
        self.assertEqual(options.get(DBOptions.SPLIT_NUM), 3)
        self.assertEqual(copied.get(DBOptions.SPLIT_NUM), 5)
        self.assertIs(Options.of(options), options)

    def test_conversion_errors(self):
        with self.assertRaises(ValueError):
            OptionsUtils.convert_to_boolean('maybe')
        with self.assertRaises(ValueError):
            Options({'split.num': 'many'}).get(DBOptions.SPLIT_NUM)
        self.assertEqual(OptionsUtils.split_list(' a, b ,,c '), ['a', 'b', 'c'])
        self.assertEqual(OptionsUtils.split_list(None), [])


class QuerySpecTest(unittest.TestCase):

    def test_field_names_win_over_mapping(self):
        spec = QuerySpec.from_options({
            'input.table-name': 'people',
            'input.field-names': 'id,name',
            'columns.mapping': 'a,b,c',
            'input.conditions': "dept = 'a'",
            'input.count-query': '',
        })
        self.assertEqual(spec.field_names, ['id', 'name'])
        self.assertFalse(spec.is_typed())
        self.assertEqual(spec.conditions, "dept = 'a'")
        self.assertIsNone(spec.count_query)
        self.assertIsNone(spec.order_by)

    def test_mapping_with_column_ids(self):
        spec = QuerySpec.from_options({
            'input.table-name': 'people',
            'columns.mapping': 'id:BIGINT, amount:DECIMAL(10, 2), name',
            'read.column-ids': '1,0',
        })
        self.assertEqual(spec.field_names, ['amount', 'id'])
        self.assertEqual(spec.fields[0].type, AtomicType('DECIMAL(10, 2)'))
        self.assertTrue(spec.is_typed())

    def test_invalid_column_ids(self):
        with self.assertRaises(ValueError):
            QuerySpec.from_options({'input.table-name': 't', 'columns.mapping': 'a,b', 'read.column-ids': '0,1,1'})
        with self.assertRaises(ValueError):
            QuerySpec.from_options({'input.table-name': 't', 'columns.mapping': 'a,b', 'read.column-ids': '2'})

    @parameterized.expand([
        ('*',),
        ('id, people.*',),
    ])
    def test_star_projection_rejected(self, field_names):
        with self.assertRaises(ValueError):
            QuerySpec.from_options({'input.table-name': 'people', 'input.field-names': field_names})

    def test_missing_table(self):
        with self.assertRaises(ValueError):
            QuerySpec.from_options({'input.field-names': 'a'})

    def test_parse_columns_mapping(self):
        fields = parse_columns_mapping('id:bigint not null,label')
        self.assertEqual(fields, [DataField(0, 'id', AtomicType('BIGINT', False)), DataField(1, 'label')])
        self.assertEqual(project_fields(fields, []), fields)
        for bad in ['', 'a,,b', ':INT', 'a:NOPE']:
            with self.assertRaises(ValueError):
                parse_columns_mapping(bad)


if __name__ == '__main__':
    unittest.main()
