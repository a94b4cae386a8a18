"""
Shared plumbing for the people store.

Holds the table connection, the NotFound error, the decorators every
store operation is wrapped in and the argument validators they use.
"""

import os
import inspect
import logging
import boto3
import uuid
import time
from typing import Dict, Any, Optional, Callable, TypeVar
from functools import wraps
from botocore.exceptions import ClientError
from pydantic import ValidationError

logger = logging.getLogger(__name__)

T = TypeVar('T')


class NotFound(Exception):
    """Raised when an operation needs a person that is not in the table."""
    pass


# ============================================================================
# Decorators
# ============================================================================

def dynamodb_operation(operation_name: Optional[str] = None):
    """
    Log the start, end and failure of a store operation.

    Whatever the operation raises is logged and re-raised as the same
    object, so callers see DynamoDB and schema errors exactly as thrown.

        @dynamodb_operation("find_person_by_id")
        def find_person_by_id(person_id): ...
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        op_name = operation_name or func.__name__

        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            logger.debug(f"DB: {op_name} started")
            try:
                result = func(*args, **kwargs)
            except ClientError as e:
                error = e.response.get('Error', {})
                logger.error(
                    f"DB: {op_name} failed with {error.get('Code', 'Unknown')}: "
                    f"{error.get('Message', str(e))}",
                    exc_info=True,
                    extra={'operation': op_name, 'error_code': error.get('Code')}
                )
                raise
            except ValidationError as e:
                logger.error(
                    f"DB: {op_name} rejected a record: {e.error_count()} validation error(s)",
                    extra={'operation': op_name}
                )
                raise
            except NotFound as e:
                logger.warning(f"DB: {op_name}: {e}")
                raise
            except Exception as e:
                logger.error(f"DB: {op_name} failed: {e}", exc_info=True, extra={'operation': op_name})
                raise
            logger.info(f"DB: {op_name} done")
            return result
        return wrapper
    return decorator


def monitor_performance(
    operation_type: str = "db_operation",
    warn_threshold_ms: float = 1000,
    error_threshold_ms: float = 5000
):
    """
    Time the wrapped call and log it at DEBUG, WARNING or ERROR depending
    on which threshold it crossed. Exceptions still get timed.
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            started = time.time()
            try:
                return func(*args, **kwargs)
            finally:
                elapsed_ms = (time.time() - started) * 1000
                context = {'operation': func.__name__, 'operation_type': operation_type,
                           'elapsed_ms': elapsed_ms}
                message = f"{operation_type} {func.__name__} took {elapsed_ms:.2f}ms"
                if elapsed_ms > error_threshold_ms:
                    logger.error(f"{message}, over {error_threshold_ms}ms", extra=context)
                elif elapsed_ms > warn_threshold_ms:
                    logger.warning(f"{message}, over {warn_threshold_ms}ms", extra=context)
                else:
                    logger.debug(message, extra=context)
        return wrapper
    return decorator


def validate_params(**validators: Callable[[Any], bool]):
    """
    Check named arguments (defaults included) before the call.

    A failing check raises ValueError naming the argument; the wrapped
    function is not entered.
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        signature = inspect.signature(func)

        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            bound = signature.bind(*args, **kwargs)
            bound.apply_defaults()
            for name, check in validators.items():
                if name in bound.arguments and not check(bound.arguments[name]):
                    raise ValueError(f"Invalid value for parameter '{name}': {bound.arguments[name]}")
            return func(*args, **kwargs)
        return wrapper
    return decorator


def is_valid_uuid(value: Any) -> bool:
    if value is None:
        return False
    try:
        uuid.UUID(str(value))
    except (ValueError, AttributeError):
        return False
    return True


def is_valid_limit(value: int) -> bool:
    """Result limits are plain ints from 1 to 1000."""
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 1000


# ============================================================================
# Table Management
# ============================================================================

class DynamoDBTables:
    """
    Process-wide handle on the people table.

    The boto3 resource and the Table object are created on first use; the
    table name comes from PEOPLE_TABLE. Tests and scripts call
    reinitialize() after switching environment and close() when done.
    """
    _instance: Optional['DynamoDBTables'] = None

    TABLE_CONFIGS = {
        'people': 'PEOPLE_TABLE',
    }

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._dynamodb: Optional[Any] = None
            self._tables: Dict[str, Any] = {}
            self._initialized = True

    @property
    def resource(self) -> Any:
        if self._dynamodb is None:
            self._dynamodb = boto3.resource('dynamodb')
            logger.info("Connected to DynamoDB")
        return self._dynamodb

    def _get_table(self, table_key: str) -> Optional[Any]:
        if table_key in self._tables:
            return self._tables[table_key]

        env_var_name = self.TABLE_CONFIGS.get(table_key)
        table_name = os.environ.get(env_var_name) if env_var_name else None
        if not table_name:
            logger.warning(f"No table configured for '{table_key}' ({env_var_name} unset)")
            return None

        self._tables[table_key] = self.resource.Table(table_name)
        logger.info(f"Using table {table_name} for {table_key}")
        return self._tables[table_key]

    @property
    def people(self) -> Any:
        return self._get_table('people')

    def reinitialize(self):
        """Open a fresh resource and forget cached tables."""
        self._dynamodb = boto3.resource('dynamodb')
        self._tables.clear()
        logger.info("Reinitialized DynamoDB tables")

    def close(self):
        self._tables.clear()
        self._dynamodb = None
        logger.info("Closed DynamoDB tables")


tables = DynamoDBTables()
