"""
People store on DynamoDB: table handle, decorators, helpers and the
person operations themselves.
"""

# ============================================================================
# Core Infrastructure
# ============================================================================

from .base import (
    # Table management
    tables,
    DynamoDBTables,

    # Exceptions
    NotFound,

    # Decorators
    dynamodb_operation,
    monitor_performance,
    validate_params,

    # Validators
    is_valid_uuid,
    is_valid_limit,
)

from .helpers import (
    # UUID conversion
    to_db_id,

    # Batch operations
    batch_delete_items,
    batch_write_items,

    # Pagination
    paginated_query,
    paginated_scan,

    # Update expressions
    build_update_expression,
)

# ============================================================================
# People
# ============================================================================

from .people import (
    create_and_save_person,
    create_many_people,
    find_people_by_name,
    find_one_by_food,
    find_person_by_id,
    find_edit_then_save,
    find_and_update,
    remove_by_id,
    remove_many_people,
    query_chain,
    SAMPLE_PERSON,
    SAMPLE_PEOPLE,
)
