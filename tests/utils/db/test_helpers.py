"""
Unit tests for database helper functions.
"""

import unittest
import uuid
from unittest.mock import MagicMock

from utils.db.helpers import (
    to_db_id,
    batch_delete_items,
    batch_write_items,
    paginated_query,
    paginated_scan,
    build_update_expression,
)


class TestToDbId(unittest.TestCase):

    def test_uuid(self):
        test_uuid = uuid.UUID('12345678-1234-5678-1234-567812345678')
        self.assertEqual(to_db_id(test_uuid), '12345678-1234-5678-1234-567812345678')

    def test_string_is_normalised(self):
        """Upper-case ids map to the same key as lower-case ones."""
        result = to_db_id('12345678-1234-5678-1234-56781234ABCD')
        self.assertEqual(result, '12345678-1234-5678-1234-56781234abcd')

    def test_none(self):
        self.assertIsNone(to_db_id(None))

    def test_invalid_string(self):
        with self.assertRaises(ValueError):
            to_db_id('not-a-uuid')


class TestBatchOperations(unittest.TestCase):

    def _mock_table(self):
        mock_table = MagicMock()
        mock_table.table_name = 'test-table'
        mock_writer = MagicMock()
        mock_table.batch_writer.return_value.__enter__.return_value = mock_writer
        return mock_table, mock_writer

    def test_batch_delete_items_uses_one_writer(self):
        """batch_writer does its own 25-item chunking."""
        mock_table, mock_writer = self._mock_table()
        items = [str(i) for i in range(30)]

        result = batch_delete_items(mock_table, items, lambda x: {'personId': x})

        self.assertEqual(result, 30)
        mock_table.batch_writer.assert_called_once()
        self.assertEqual(mock_writer.delete_item.call_count, 30)
        mock_writer.delete_item.assert_any_call(Key={'personId': '0'})

    def test_batch_delete_items_empty(self):
        mock_table, mock_writer = self._mock_table()

        self.assertEqual(batch_delete_items(mock_table, [], lambda x: {'personId': x}), 0)
        mock_writer.delete_item.assert_not_called()

    def test_batch_write_items_empty_list(self):
        mock_table = MagicMock()
        self.assertEqual(batch_write_items(mock_table, []), 0)
        mock_table.batch_writer.assert_not_called()

    def test_batch_write_items(self):
        mock_table, mock_writer = self._mock_table()
        items = [{'personId': '1', 'name': 'A'}, {'personId': '2', 'name': 'B'}]

        result = batch_write_items(mock_table, items)

        self.assertEqual(result, 2)
        mock_table.batch_writer.assert_called_once()
        self.assertEqual(
            [c.kwargs['Item'] for c in mock_writer.put_item.call_args_list],
            items
        )


class TestPagination(unittest.TestCase):

    def test_paginated_query_follows_last_evaluated_key(self):
        mock_table = MagicMock()
        mock_table.query.side_effect = [
            {'Items': [{'n': 1}], 'LastEvaluatedKey': {'personId': 'a'}},
            {'Items': [{'n': 2}]},
        ]

        items = paginated_query(mock_table, {'IndexName': 'NameIndex'})

        self.assertEqual(items, [{'n': 1}, {'n': 2}])
        second_call = mock_table.query.call_args_list[1]
        self.assertEqual(second_call.kwargs['ExclusiveStartKey'], {'personId': 'a'})
        self.assertEqual(second_call.kwargs['IndexName'], 'NameIndex')

    def test_caller_params_are_not_mutated(self):
        mock_table = MagicMock()
        mock_table.query.side_effect = [
            {'Items': [], 'LastEvaluatedKey': {'personId': 'a'}},
            {'Items': []},
        ]
        params = {'IndexName': 'NameIndex'}

        paginated_query(mock_table, params)

        self.assertEqual(params, {'IndexName': 'NameIndex'})

    def test_paginated_query_respects_max_items(self):
        mock_table = MagicMock()
        mock_table.query.return_value = {
            'Items': [{'n': 1}, {'n': 2}, {'n': 3}],
            'LastEvaluatedKey': {'personId': 'c'},
        }

        items = paginated_query(mock_table, {}, max_items=2)

        self.assertEqual(items, [{'n': 1}, {'n': 2}])
        mock_table.query.assert_called_once()

    def test_paginated_scan_skips_empty_filtered_pages(self):
        """Filtered scans can return empty pages before a match."""
        mock_table = MagicMock()
        mock_table.scan.side_effect = [
            {'Items': [], 'LastEvaluatedKey': {'personId': 'a'}},
            {'Items': [{'n': 7}], 'LastEvaluatedKey': {'personId': 'b'}},
        ]

        items = paginated_scan(mock_table, {}, max_items=1)

        self.assertEqual(items, [{'n': 7}])
        self.assertEqual(mock_table.scan.call_count, 2)

    def test_paginated_scan_transform(self):
        mock_table = MagicMock()
        mock_table.scan.return_value = {'Items': [{'n': 1}, {'n': 2}]}

        items = paginated_scan(mock_table, {}, transform=lambda item: item['n'] * 10)

        self.assertEqual(items, [10, 20])


class TestBuildUpdateExpression(unittest.TestCase):

    def test_set_single_field(self):
        expr, names, values = build_update_expression({'age': 20})

        self.assertEqual(expr, "SET #age = :age")
        self.assertEqual(names, {'#age': 'age'})
        self.assertEqual(values, {':age': 20})

    def test_reserved_word_goes_through_placeholder(self):
        expr, names, values = build_update_expression({'name': 'Mary', 'age': 20})

        self.assertEqual(expr, "SET #name = :name, #age = :age")
        self.assertEqual(names, {'#name': 'name', '#age': 'age'})
        self.assertEqual(values, {':name': 'Mary', ':age': 20})

    def test_requires_something_to_do(self):
        with self.assertRaises(ValueError):
            build_update_expression({})


if __name__ == '__main__':
    unittest.main()
