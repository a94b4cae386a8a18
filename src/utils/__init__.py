"""
Shared utilities for the handlers and the people store.

Persisted models (see models.person) convert themselves with
`to_dynamodb_item()` and `from_dynamodb_item()`; ids are UUIDs stored as
strings.
"""
