"""Employee Schemas — create/update payload and public response.

Invariants:
    - full_name is computed as "first_name last_name", never stored
"""

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class EmployeeWrite(BaseModel):
    """Create/update payload — shared by POST and PUT."""
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=255)
    department_id: int | None = Field(None, ge=1)

    @field_validator("first_name", "last_name", "email")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("value cannot be empty or whitespace")
        return v


class EmployeeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    department_id: int | None = None

    @computed_field
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
