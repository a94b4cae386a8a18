"""
Person database operations.

This module provides the one-shot CRUD and query operations on the people
table. Each function performs a single store operation and either returns
its result or raises; store errors are never retried or wrapped.
"""

import logging
import uuid
from typing import List, Dict, Any, Optional, Sequence, Union
from boto3.dynamodb.conditions import Key, Attr

from models.person import Person
from .base import (
    tables,
    dynamodb_operation,
    monitor_performance,
    validate_params,
    is_valid_uuid,
    is_valid_limit,
    NotFound,
)
from .helpers import (
    to_db_id,
    batch_write_items,
    batch_delete_items,
    paginated_query,
    paginated_scan,
    build_update_expression,
)

logger = logging.getLogger(__name__)

NAME_INDEX = 'NameIndex'

SAMPLE_PERSON: Dict[str, Any] = {
    'name': 'Juan Pérez',
    'age': 30,
    'favoriteFoods': ['Pizza', 'Tacos'],
}

SAMPLE_PEOPLE: List[Dict[str, Any]] = [
    {'name': 'Carlos Pérez', 'age': 35, 'favoriteFoods': ['Pasta', 'Ensalada']},
    {'name': 'Ana Gómez', 'age': 28, 'favoriteFoods': ['Sushi', 'Pizza']},
    {'name': 'Luis Martínez', 'age': 40, 'favoriteFoods': ['Hamburguesa', 'Papitas']},
]

FOOD_TO_ADD = 'hamburger'
AGE_TO_SET = 20
NAME_TO_REMOVE = 'Mary'
FOOD_TO_SEARCH = 'burrito'
QUERY_CHAIN_LIMIT = 2


# ============================================================================
# Helper Functions
# ============================================================================

def _people_table() -> Any:
    table = tables.people
    if not table:
        logger.error("DB: People table not initialized")
        raise ConnectionError("Database table not initialized")
    return table


def _get_person(table: Any, person_id: Union[str, uuid.UUID]) -> Optional[Person]:
    response = table.get_item(Key={'personId': to_db_id(person_id)})
    item = response.get('Item')
    if not item:
        return None
    return Person.from_dynamodb_item(item)


def _query_by_name(table: Any, person_name: str, max_items: Optional[int] = None) -> List[Person]:
    people = paginated_query(
        table=table,
        query_params={
            'IndexName': NAME_INDEX,
            'KeyConditionExpression': Key('name').eq(person_name),
        },
        max_items=max_items,
        transform=Person.from_dynamodb_item,
    )
    return people


# ============================================================================
# Create Operations
# ============================================================================

@monitor_performance(warn_threshold_ms=200)
@dynamodb_operation("create_and_save_person")
def create_and_save_person() -> Person:
    """
    Persist a new person built from the fixed sample values.

    Returns:
        The saved Person, including its generated personId
    """
    table = _people_table()
    person = Person.model_validate(SAMPLE_PERSON)
    table.put_item(Item=person.to_dynamodb_item())
    logger.info(f"DB: Person {str(person.person_id)} created successfully.")
    return person


@monitor_performance(operation_type="batch_write", warn_threshold_ms=1000)
@dynamodb_operation("create_many_people")
def create_many_people(people: Sequence[Union[Person, Dict[str, Any]]]) -> List[Person]:
    """
    Persist a sequence of people in one batch.

    Every record is validated before anything is written, so an invalid
    entry leaves the table untouched.

    Args:
        people: Person objects or plain dicts using the wire field names

    Returns:
        The saved Person objects, in input order
    """
    table = _people_table()
    records = [
        p if isinstance(p, Person) else Person.model_validate(p)
        for p in people
    ]
    batch_write_items(table, [p.to_dynamodb_item() for p in records])
    logger.info(f"DB: Created {len(records)} people.")
    return records


# ============================================================================
# Read Operations
# ============================================================================

@monitor_performance(operation_type="query", warn_threshold_ms=500)
@dynamodb_operation("find_people_by_name")
def find_people_by_name(person_name: str) -> List[Person]:
    """
    Find every person whose name matches exactly.

    Args:
        person_name: The name to match

    Returns:
        List of matching Person objects, possibly empty
    """
    table = _people_table()
    logger.debug(f"DB: Finding people named {person_name}")
    return _query_by_name(table, person_name)


@monitor_performance(operation_type="scan", warn_threshold_ms=500)
@dynamodb_operation("find_one_by_food")
def find_one_by_food(food: str) -> Optional[Person]:
    """
    Find the first person whose favoriteFoods contains the given food.

    Args:
        food: The food to look for

    Returns:
        A matching Person, or None when nobody likes that food
    """
    table = _people_table()
    logger.debug(f"DB: Finding a person whose favorite foods include {food}")
    people = paginated_scan(
        table=table,
        scan_params={'FilterExpression': Attr('favoriteFoods').contains(food)},
        max_items=1,
        transform=Person.from_dynamodb_item,
    )
    return people[0] if people else None


@validate_params(person_id=is_valid_uuid)
@monitor_performance(warn_threshold_ms=200)
@dynamodb_operation("find_person_by_id")
def find_person_by_id(person_id: Union[str, uuid.UUID]) -> Optional[Person]:
    """
    Retrieve a person by ID.

    Args:
        person_id: The person ID

    Returns:
        Person object if found, None otherwise
    """
    table = _people_table()
    logger.debug(f"DB: Getting person {str(person_id)}")
    return _get_person(table, person_id)


# ============================================================================
# Update Operations
# ============================================================================

@validate_params(person_id=is_valid_uuid)
@monitor_performance(warn_threshold_ms=400)
@dynamodb_operation("find_edit_then_save")
def find_edit_then_save(person_id: Union[str, uuid.UUID], food_to_add: str = FOOD_TO_ADD) -> Person:
    """
    Load a person, append a food to favoriteFoods and save the whole record.

    Args:
        person_id: The person ID
        food_to_add: Food appended to the end of favoriteFoods

    Returns:
        The saved Person

    Raises:
        NotFound: If no person has that ID
    """
    table = _people_table()
    person = _get_person(table, person_id)
    if not person:
        raise NotFound("Person not found")

    person.add_favorite_food(food_to_add)
    table.put_item(Item=person.to_dynamodb_item())
    logger.info(f"DB: Added {food_to_add} to person {str(person.person_id)}.")
    return person


@monitor_performance(warn_threshold_ms=400)
@dynamodb_operation("find_and_update")
def find_and_update(person_name: str, age_to_set: int = AGE_TO_SET) -> Optional[Person]:
    """
    Set the age of the first person with the given name.

    Args:
        person_name: The name to match
        age_to_set: New age value

    Returns:
        The Person as stored after the update, or None when nobody matched
    """
    table = _people_table()
    matches = _query_by_name(table, person_name, max_items=1)
    if not matches:
        logger.info(f"DB: No person named {person_name} to update.")
        return None

    person_id = to_db_id(matches[0].person_id)
    update_expression, names, values = build_update_expression({'age': age_to_set})
    response = table.update_item(
        Key={'personId': person_id},
        UpdateExpression=update_expression,
        ConditionExpression='attribute_exists(personId)',
        ExpressionAttributeNames=names,
        ExpressionAttributeValues=values,
        ReturnValues='ALL_NEW',
    )
    logger.info(f"DB: Person {person_id} age set to {age_to_set}.")
    return Person.from_dynamodb_item(response['Attributes'])


# ============================================================================
# Delete Operations
# ============================================================================

@validate_params(person_id=is_valid_uuid)
@monitor_performance(warn_threshold_ms=200)
@dynamodb_operation("remove_by_id")
def remove_by_id(person_id: Union[str, uuid.UUID]) -> Optional[Person]:
    """
    Delete a person by ID.

    Args:
        person_id: The person ID

    Returns:
        The deleted Person, or None if there was nothing to delete
    """
    table = _people_table()
    response = table.delete_item(
        Key={'personId': to_db_id(person_id)},
        ReturnValues='ALL_OLD',
    )
    attributes = response.get('Attributes')
    if not attributes:
        logger.info(f"DB: Person {str(person_id)} not found, nothing deleted.")
        return None
    logger.info(f"DB: Person {str(person_id)} deleted successfully.")
    return Person.from_dynamodb_item(attributes)


@monitor_performance(operation_type="batch_delete", warn_threshold_ms=1000)
@dynamodb_operation("remove_many_people")
def remove_many_people(name_to_remove: str = NAME_TO_REMOVE) -> Dict[str, int]:
    """
    Delete every person with the given name.

    Args:
        name_to_remove: The name to match

    Returns:
        Operation summary: {"n": <number deleted>, "ok": 1}
    """
    table = _people_table()
    matches = _query_by_name(table, name_to_remove)
    deleted = batch_delete_items(
        table=table,
        items=matches,
        key_extractor=lambda p: {'personId': to_db_id(p.person_id)},
    )
    return {'n': deleted, 'ok': 1}


# ============================================================================
# Query Chain
# ============================================================================

@validate_params(limit=is_valid_limit)
@monitor_performance(operation_type="scan", warn_threshold_ms=500)
@dynamodb_operation("query_chain")
def query_chain(food_to_search: str = FOOD_TO_SEARCH, limit: int = QUERY_CHAIN_LIMIT) -> List[Person]:
    """
    Find people who like a food, sorted by name, capped, without their age.

    The age attribute is never read from the table: the scan projects
    personId, name and favoriteFoods only.

    Args:
        food_to_search: Food that must appear in favoriteFoods
        limit: Maximum number of people returned

    Returns:
        At most `limit` Person objects in ascending name order, age unset
    """
    table = _people_table()
    people = paginated_scan(
        table=table,
        scan_params={
            'FilterExpression': Attr('favoriteFoods').contains(food_to_search),
            'ProjectionExpression': '#personId, #name, #favoriteFoods',
            'ExpressionAttributeNames': {
                '#personId': 'personId',
                '#name': 'name',
                '#favoriteFoods': 'favoriteFoods',
            },
        },
        transform=Person.from_dynamodb_item,
    )

    people = sorted(people, key=lambda p: p.name)[:limit]
    if not people:
        logger.info(f"DB: No people found who like {food_to_search}")
    else:
        logger.info(f"DB: Found {len(people)} people who like {food_to_search}")
    return people
