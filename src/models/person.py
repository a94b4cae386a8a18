"""
Person model for the document store.
"""
import logging
from decimal import Decimal
from typing import Dict, Any, List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing_extensions import Self

# Configure logging
logger = logging.getLogger(__name__)


class Person(BaseModel):
    """
    Represents a person record in the people table using Pydantic.

    Only `name` is required. `favoriteFoods` keeps insertion order and may
    hold duplicates.
    """
    person_id: UUID = Field(default_factory=uuid4, alias="personId")
    name: str = Field(min_length=1)
    age: Optional[int] = None
    favorite_foods: List[str] = Field(default_factory=list, alias="favoriteFoods")

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True
    )

    @field_validator('age', mode='before')
    @classmethod
    def coerce_decimal_age(cls, v):
        # DynamoDB hands numbers back as Decimal
        if isinstance(v, Decimal):
            if v % 1:
                raise ValueError('Age must be a whole number')
            return int(v)
        return v

    def add_favorite_food(self, food: str) -> None:
        """Append a food to the end of favoriteFoods."""
        self.favorite_foods.append(food)

    def to_dynamodb_item(self) -> Dict[str, Any]:
        """
        Serializes the Person to a dictionary suitable for DynamoDB.
        Optional fields that are unset are left out instead of stored as null.
        """
        item = self.model_dump(mode='python', by_alias=True, exclude_none=True)
        item['personId'] = str(self.person_id)
        return item

    @classmethod
    def from_dynamodb_item(cls, data: Dict[str, Any]) -> Self:
        """
        Deserializes a dictionary (from DynamoDB item) into a Person instance.
        """
        return cls.model_validate(data, context={'from_database': True})

