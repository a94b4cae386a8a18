"""
Small building blocks shared by the people operations: key conversion,
batched writes and deletes, page-following reads and update expressions.
"""

import logging
import uuid
from typing import List, Dict, Any, Optional, Union, Tuple, Callable, Iterable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


def to_db_id(id_value: Union[str, uuid.UUID, None]) -> Optional[str]:
    """
    Canonical string form of a person id, as stored in `personId`.

    Strings go through uuid.UUID, so upper-case or brace-wrapped ids map to
    the same key and anything that is not a UUID raises ValueError.
    """
    if id_value is None:
        return None
    if isinstance(id_value, uuid.UUID):
        return str(id_value)
    return str(uuid.UUID(str(id_value)))


# ============================================================================
# Batch writes
# ============================================================================

def batch_write_items(table: Any, items: List[Dict[str, Any]]) -> int:
    """Put every item through one batch_writer; returns how many were sent."""
    if not items:
        return 0
    with table.batch_writer() as writer:
        for item in items:
            writer.put_item(Item=item)
    logger.info(f"Batch wrote {len(items)} items to {table.table_name}")
    return len(items)


def batch_delete_items(
    table: Any,
    items: Iterable[Any],
    key_extractor: Callable[[Any], Dict[str, str]]
) -> int:
    """
    Delete the given items through one batch_writer.

    key_extractor turns each item (model or dict) into its primary key,
    e.g. `lambda p: {'personId': to_db_id(p.person_id)}`.
    """
    count = 0
    with table.batch_writer() as writer:
        for item in items:
            writer.delete_item(Key=key_extractor(item))
            count += 1
    logger.info(f"Batch deleted {count} items from {table.table_name}")
    return count


# ============================================================================
# Reads that follow LastEvaluatedKey
# ============================================================================

def _read_pages(
    read: Callable[..., Dict[str, Any]],
    params: Dict[str, Any],
    max_items: Optional[int],
    transform: Optional[Callable[[Dict[str, Any]], T]]
) -> List[T]:
    # Filtered reads may return empty pages that still carry a LastEvaluatedKey
    found: List[T] = []
    params = dict(params)
    while True:
        page = read(**params)
        for item in page.get('Items', []):
            found.append(transform(item) if transform else item)
            if max_items and len(found) >= max_items:
                return found
        next_key = page.get('LastEvaluatedKey')
        if not next_key:
            return found
        params['ExclusiveStartKey'] = next_key


def paginated_query(
    table: Any,
    query_params: Dict[str, Any],
    max_items: Optional[int] = None,
    transform: Optional[Callable[[Dict[str, Any]], T]] = None
) -> List[T]:
    """
    Run a query to the end (or until max_items) and return what it found.

    Args:
        table: DynamoDB table resource
        query_params: keyword arguments for table.query
        max_items: stop once this many items are collected
        transform: applied to each raw item, e.g. Person.from_dynamodb_item
    """
    items = _read_pages(table.query, query_params, max_items, transform)
    logger.debug(f"Query on {table.table_name} returned {len(items)} items")
    return items


def paginated_scan(
    table: Any,
    scan_params: Dict[str, Any],
    max_items: Optional[int] = None,
    transform: Optional[Callable[[Dict[str, Any]], T]] = None
) -> List[T]:
    """Scan counterpart of paginated_query."""
    items = _read_pages(table.scan, scan_params, max_items, transform)
    logger.debug(f"Scan on {table.table_name} returned {len(items)} items")
    return items


def build_update_expression(updates: Dict[str, Any]) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
    """
    Turn {'age': 20} into ("SET #age = :age", {'#age': 'age'}, {':age': 20}).

    Every attribute goes through a name placeholder, so reserved words such
    as `name` can be updated.
    """
    if not updates:
        raise ValueError("Nothing to update")

    names = {f"#{field}": field for field in updates}
    values = {f":{field}": value for field, value in updates.items()}
    assignments = ", ".join(f"#{field} = :{field}" for field in updates)
    return f"SET {assignments}", names, values
