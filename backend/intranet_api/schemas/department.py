"""Department Schemas — create/update payload and public response."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DepartmentWrite(BaseModel):
    """Create/update payload — shared by POST and PUT."""
    name: str = Field(min_length=1, max_length=100)
    location: str | None = Field(None, max_length=200)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class DepartmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    location: str | None = None
