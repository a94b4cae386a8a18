"""
Callback-style person operations.

Each function runs one operation from utils.db.people and reports the
outcome through a completion callback with the (error, value) convention:

    done(None, value)   on success
    done(error)         on failure, with the exception object unchanged

The callback's return value is returned to the caller.
"""
import logging
from typing import Any, Callable, Dict, Sequence, Union

from models.person import Person
from utils.db import people

# Configure logging
logger = logging.getLogger(__name__)

Done = Callable[..., Any]


def _complete(done: Done, operation: Callable[..., Any], *args: Any) -> Any:
    try:
        result = operation(*args)
    except Exception as e:
        logger.error(f"Error in {getattr(operation, '__name__', 'person operation')}: {str(e)}")
        return done(e)
    return done(None, result)


def create_and_save_person(done: Done) -> Any:
    return _complete(done, people.create_and_save_person)


def create_many_people(array_of_people: Sequence[Union[Person, Dict[str, Any]]], done: Done) -> Any:
    return _complete(done, people.create_many_people, array_of_people)


def find_people_by_name(person_name: str, done: Done) -> Any:
    return _complete(done, people.find_people_by_name, person_name)


def find_one_by_food(food: str, done: Done) -> Any:
    return _complete(done, people.find_one_by_food, food)


def find_person_by_id(person_id: str, done: Done) -> Any:
    return _complete(done, people.find_person_by_id, person_id)


def find_edit_then_save(person_id: str, done: Done) -> Any:
    return _complete(done, people.find_edit_then_save, person_id)


def find_and_update(person_name: str, done: Done) -> Any:
    return _complete(done, people.find_and_update, person_name)


def remove_by_id(person_id: str, done: Done) -> Any:
    return _complete(done, people.remove_by_id, person_id)


def remove_many_people(done: Done) -> Any:
    return _complete(done, people.remove_many_people)


def query_chain(done: Done) -> Any:
    return _complete(done, people.query_chain)
