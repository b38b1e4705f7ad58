"""
Pydantic schemas for pet records.

``PetCreate`` describes a full set of values for a new pet,
``PetUpdate`` a partial set for an existing one and ``PetRead`` a
stored row.  The record store validates raw column/value mappings
through the first two, so the rules below apply to every write no
matter where it comes from.  Text values are stored exactly as given;
trimming is up to the caller.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pet_catalog.app.core.contract import Gender, PetEntry


# Largest value SQLite can hold in an INTEGER column.
MAX_WEIGHT = 2**63 - 1


def _check_gender(value):
    # Runs before coercion: True or "1" must not turn into MALE.
    if not PetEntry.is_valid_gender(value):
        raise ValueError("Gender must be 0 (unknown), 1 (male) or 2 (female)")
    return value


def _check_name(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError("Name must not be blank")
    return value


class PetCreate(BaseModel):
    """Schema for creating a new pet."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, description="Name of the pet")
    breed: Optional[str] = Field("", description="Breed of the pet; may be empty")
    gender: int = Field(int(Gender.UNKNOWN), description="0 = unknown, 1 = male, 2 = female")
    weight: int = Field(0, ge=0, le=MAX_WEIGHT, description="Weight of the pet in whole units")

    @field_validator("gender", mode="before")
    @classmethod
    def validate_gender(cls, v):
        return _check_gender(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _check_name(v)


class PetUpdate(BaseModel):
    """Schema for updating an existing pet.

    All fields are optional; only provided values will be updated.
    An explicit ``None`` passes here and is refused by the store for
    every column except ``breed``.
    """

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1)
    breed: Optional[str] = None
    gender: Optional[int] = None
    weight: Optional[int] = Field(None, ge=0, le=MAX_WEIGHT)

    @field_validator("gender", mode="before")
    @classmethod
    def validate_gender(cls, v):
        if v is None:
            return None
        return _check_gender(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _check_name(v)


class PetRead(BaseModel):
    """Schema for reading a stored pet."""

    id: int
    name: str
    breed: Optional[str] = None
    gender: int
    weight: int
