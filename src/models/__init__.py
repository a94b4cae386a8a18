"""
Models package for the person document store.
"""

from .person import (
    Person,
)

__all__ = [
    'Person',
]
