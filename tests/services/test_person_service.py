"""
Tests for the callback-style person operations.
"""
import os
import unittest
import uuid
from unittest.mock import MagicMock, patch

from botocore.exceptions import ClientError
from moto import mock_aws
from pydantic import ValidationError

from services import person_service
from utils.db.base import tables
from tests.fixtures.people_fixtures import PEOPLE_TABLE_NAME, create_people_table


class TestCallbackContract(unittest.TestCase):
    """Each wrapper reports (error, value) through its callback."""

    @patch('utils.db.people.find_people_by_name')
    def test_success_passes_none_and_value(self, mock_find):
        mock_find.return_value = ['person']
        done = MagicMock(return_value='callback-result')

        result = person_service.find_people_by_name('Mary', done)

        mock_find.assert_called_once_with('Mary')
        done.assert_called_once_with(None, ['person'])
        self.assertEqual(result, 'callback-result')

    @patch('utils.db.people.find_person_by_id')
    def test_error_is_passed_unchanged(self, mock_find):
        error = ClientError(
            {'Error': {'Code': 'InternalServerError', 'Message': 'boom'}},
            'GetItem'
        )
        mock_find.side_effect = error
        done = MagicMock()

        person_service.find_person_by_id('12345678-1234-5678-1234-567812345678', done)

        done.assert_called_once()
        self.assertIs(done.call_args.args[0], error)
        self.assertEqual(len(done.call_args.args), 1)

    @patch('utils.db.people.find_and_update')
    def test_none_result_is_still_success(self, mock_update):
        mock_update.return_value = None
        done = MagicMock()

        person_service.find_and_update('Nobody', done)

        done.assert_called_once_with(None, None)

    @patch('utils.db.people.create_and_save_person')
    def test_callback_errors_propagate(self, mock_create):
        """An exception raised by the callback itself is not fed back into it."""
        mock_create.return_value = 'person'
        done = MagicMock(side_effect=RuntimeError('callback failed'))

        with self.assertRaises(RuntimeError):
            person_service.create_and_save_person(done)

        done.assert_called_once_with(None, 'person')

    def test_argument_forwarding(self):
        cases = [
            ('create_many_people', (['a'],), (['a'],)),
            ('find_one_by_food', ('Sushi',), ('Sushi',)),
            ('find_edit_then_save', ('id-1',), ('id-1',)),
            ('remove_by_id', ('id-2',), ('id-2',)),
            ('remove_many_people', (), ()),
            ('query_chain', (), ()),
        ]
        for name, args, expected in cases:
            with self.subTest(operation=name):
                with patch(f'utils.db.people.{name}') as mock_op:
                    mock_op.return_value = 'value'
                    done = MagicMock()

                    getattr(person_service, name)(*args, done)

                    mock_op.assert_called_once_with(*expected)
                    done.assert_called_once_with(None, 'value')


class TestCallbackIntegration(unittest.TestCase):
    """End-to-end callbacks against a mocked people table."""

    def setUp(self):
        self.mock_aws = mock_aws()
        self.mock_aws.start()
        self.env_patcher = patch.dict(os.environ, {'PEOPLE_TABLE': PEOPLE_TABLE_NAME})
        self.env_patcher.start()
        create_people_table()
        tables.reinitialize()

    def tearDown(self):
        tables.close()
        self.env_patcher.stop()
        self.mock_aws.stop()

    def test_create_find_remove(self):
        results = {}

        def collect(key):
            def done(err, value=None):
                results[key] = (err, value)
            return done

        person_service.create_and_save_person(collect('created'))
        err, person = results['created']
        self.assertIsNone(err)

        person_service.find_person_by_id(str(person.person_id), collect('found'))
        self.assertEqual(results['found'], (None, person))

        person_service.remove_by_id(str(person.person_id), collect('removed'))
        self.assertEqual(results['removed'], (None, person))

        person_service.find_person_by_id(str(person.person_id), collect('gone'))
        self.assertEqual(results['gone'], (None, None))

    def test_schema_violation_reaches_callback_as_validation_error(self):
        done = MagicMock()

        person_service.create_many_people([{'age': 12}], done)

        done.assert_called_once()
        self.assertEqual(len(done.call_args.args), 1)
        err = done.call_args.args[0]
        self.assertIsInstance(err, ValidationError)
        self.assertEqual(err.errors()[0]['loc'], ('name',))

    def test_edit_missing_person_reports_error(self):
        done = MagicMock()

        person_service.find_edit_then_save(str(uuid.uuid4()), done)

        err = done.call_args.args[0]
        self.assertEqual(type(err).__name__, 'NotFound')


if __name__ == '__main__':
    unittest.main()
