"""
Pet endpoints for API v1.

These routes expose the pets collection over HTTP.  Every handler goes
through the shared :data:`pet_provider` gateway, so writes made here
notify the same observers as writes made by the presenters.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from pet_catalog.app.core.contract import PetEntry, with_appended_id
from pet_catalog.app.core.errors import ValidationError
from pet_catalog.app.schemas.pet import PetCreate, PetRead, PetUpdate
from pet_catalog.app.services.pet_provider import pet_provider

router = APIRouter()

SORTABLE_COLUMNS = {PetEntry.COLUMN_ID, PetEntry.COLUMN_PET_NAME, PetEntry.COLUMN_PET_WEIGHT}


def _row_to_pet_read(row: dict) -> PetRead:
    return PetRead(
        id=row[PetEntry.COLUMN_ID],
        name=row[PetEntry.COLUMN_PET_NAME],
        breed=row[PetEntry.COLUMN_PET_BREED],
        gender=row[PetEntry.COLUMN_PET_GENDER],
        weight=row[PetEntry.COLUMN_PET_WEIGHT],
    )


def _fetch(pet_id: int) -> PetRead:
    cursor = pet_provider.query(with_appended_id(PetEntry.CONTENT_URI, pet_id))
    try:
        row = cursor.first()
    finally:
        cursor.close()
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pet not found")
    return _row_to_pet_read(row)


@router.get("/", response_model=List[PetRead])
def list_pets(
    sort_by: str = Query(PetEntry.COLUMN_ID),
    order: str = Query("asc"),
) -> List[PetRead]:
    """Return every pet.

    - **sort_by**: `_id`, `name` or `weight`; anything else falls back to `_id`.
    - **order**: `asc` or `desc`.
    """
    column = sort_by if sort_by in SORTABLE_COLUMNS else PetEntry.COLUMN_ID
    direction = "DESC" if order.lower() == "desc" else "ASC"
    cursor = pet_provider.query(PetEntry.CONTENT_URI, sort_order=f"{column} {direction}")
    try:
        return [_row_to_pet_read(row) for row in cursor]
    finally:
        cursor.close()


@router.get("/{pet_id}", response_model=PetRead)
def get_pet(pet_id: int) -> PetRead:
    """Retrieve a single pet by its ID; 404 if it does not exist."""
    return _fetch(pet_id)


@router.post("/", response_model=PetRead, status_code=status.HTTP_201_CREATED)
def create_pet(pet_in: PetCreate) -> PetRead:
    """Create a new pet."""
    try:
        address = pet_provider.insert(PetEntry.CONTENT_URI, pet_in.model_dump())
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e
    return _fetch(address.id)


@router.put("/{pet_id}", response_model=PetRead)
def update_pet(pet_id: int, pet_in: PetUpdate) -> PetRead:
    """Update the given fields of a pet; 404 if it does not exist."""
    changes = pet_in.model_dump(exclude_unset=True)
    address = with_appended_id(PetEntry.CONTENT_URI, pet_id)
    try:
        affected = pet_provider.update(address, changes)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e
    if not affected and changes:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pet not found")
    return _fetch(pet_id)


@router.delete("/{pet_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_pet(pet_id: int) -> None:
    """Delete a pet; 404 if it does not exist."""
    deleted = pet_provider.delete(with_appended_id(PetEntry.CONTENT_URI, pet_id))
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pet not found")
    return None
