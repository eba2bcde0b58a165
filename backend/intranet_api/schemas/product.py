"""Product Schemas — create/update payload and public response.

Invariants:
    - price is non-negative with at most 2 decimal places on input
    - price is emitted as a JSON number
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductWrite(BaseModel):
    """Create/update payload — shared by POST and PUT."""
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    price: Decimal = Field(ge=0, max_digits=18, decimal_places=2)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    price: float
