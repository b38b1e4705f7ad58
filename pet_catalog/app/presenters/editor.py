"""
Editor presenter: create a new pet or edit an existing one.

The mode is chosen once, from the launch parameters: without an
address the presenter creates a pet, with an item address it loads
that pet and updates it on save.  Form state is explicit: the view
hands a :class:`PetForm` to ``save`` instead of the presenter reading
widgets or remembering the last spinner choice.
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Protocol, Union

from pet_catalog.app.core.contract import Address, Gender, ItemAddress, PetEntry
from pet_catalog.app.core.errors import InvalidAddressError, PetCatalogError, ValidationError
from pet_catalog.app.services.pet_provider import PetProvider, pet_provider


logger = logging.getLogger(__name__)

TITLE_ADD = "Add a Pet"
TITLE_EDIT = "Edit Pet"

INSERT_SUCCESSFUL = "Pet saved"
INSERT_FAILED = "Error with saving pet"
UPDATE_SUCCESSFUL = "Pet updated"
UPDATE_FAILED = "Error with updating pet"
PET_NOT_FOUND = "Pet not found"
INVALID_WEIGHT = "Weight must be a whole number"


class EditorMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


def gender_from_selection(selection: Optional[str]) -> Gender:
    """Map a spinner label to a gender; no or unknown selection means UNKNOWN."""
    if not selection:
        return Gender.UNKNOWN
    label = selection.strip().lower()
    for gender in Gender:
        if gender.label.lower() == label:
            return gender
    return Gender.UNKNOWN


@dataclass
class PetForm:
    """Values as typed into the editor; weight stays text until saved."""

    name: str = ""
    breed: str = ""
    weight: str = ""
    gender: Gender = Gender.UNKNOWN

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "PetForm":
        gender = row.get(PetEntry.COLUMN_PET_GENDER)
        return cls(
            name=row.get(PetEntry.COLUMN_PET_NAME) or "",
            breed=row.get(PetEntry.COLUMN_PET_BREED) or "",
            weight=str(row.get(PetEntry.COLUMN_PET_WEIGHT) or 0),
            gender=Gender(gender) if PetEntry.is_valid_gender(gender) else Gender.UNKNOWN,
        )

    def to_values(self) -> Dict[str, Any]:
        """Build the column values to write.

        Raises :class:`ValidationError` if the weight is not a whole,
        non-negative number.  A blank weight is stored as 0.
        """
        weight_text = str(self.weight if self.weight is not None else "").strip()
        if not weight_text:
            weight = 0
        elif weight_text.isascii() and weight_text.isdigit():
            weight = int(weight_text)
        else:
            raise ValidationError(f"Invalid weight: {weight_text!r}")
        return {
            PetEntry.COLUMN_PET_NAME: (self.name or "").strip(),
            PetEntry.COLUMN_PET_BREED: (self.breed or "").strip(),
            PetEntry.COLUMN_PET_GENDER: int(self.gender),
            PetEntry.COLUMN_PET_WEIGHT: weight,
        }


class EditorView(Protocol):
    def set_title(self, title: str) -> None: ...

    def show_form(self, form: PetForm) -> None: ...

    def show_message(self, message: str) -> None: ...

    def close(self) -> None: ...


class EditorPresenter:
    """Drives the pet editor in create or edit mode."""

    def __init__(
        self,
        view: EditorView,
        address: Union[str, Address, None] = None,
        provider: Optional[PetProvider] = None,
    ) -> None:
        self.view = view
        self.provider = provider if provider is not None else pet_provider
        self.address: Optional[ItemAddress] = None
        if address is not None:
            resolved = self.provider.resolve(address)
            if not isinstance(resolved, ItemAddress):
                raise InvalidAddressError(f"Editor needs a single pet address, got {resolved}")
            self.address = resolved
        self.form = PetForm()

    @property
    def mode(self) -> EditorMode:
        return EditorMode.CREATE if self.address is None else EditorMode.EDIT

    def start(self) -> None:
        logger.info("Editor opened for %s", self.address)
        if self.mode is EditorMode.CREATE:
            self.view.set_title(TITLE_ADD)
            self.form = PetForm()
            self.view.show_form(self.form)
            return
        self.view.set_title(TITLE_EDIT)
        self._load()

    def _load(self) -> None:
        row = None
        try:
            cursor = self.provider.query(self.address, projection=PetEntry.ALL_COLUMNS)
            try:
                row = cursor.first()
            finally:
                cursor.close()
        except (PetCatalogError, sqlite3.Error) as exc:
            logger.warning("Loading %s failed: %s", self.address, exc)
        if row is None:
            self.view.show_message(PET_NOT_FOUND)
            self.form = PetForm()
        else:
            self.form = PetForm.from_row(row)
        self.view.show_form(self.form)

    def save(self, form: PetForm) -> bool:
        """Write ``form`` to the store and report the outcome on the view."""
        self.form = form
        failed = INSERT_FAILED if self.mode is EditorMode.CREATE else UPDATE_FAILED
        try:
            values = form.to_values()
        except ValidationError as exc:
            logger.warning("Rejected pet form: %s", exc)
            self.view.show_message(INVALID_WEIGHT)
            return False

        try:
            if self.mode is EditorMode.CREATE:
                new_address = self.provider.insert(PetEntry.CONTENT_URI, values)
                logger.info("Created %s", new_address)
                self.view.show_message(INSERT_SUCCESSFUL)
                return True
            affected = self.provider.update(self.address, values)
        except (PetCatalogError, sqlite3.Error) as exc:
            logger.warning("Saving pet failed: %s", exc)
            self.view.show_message(failed)
            return False

        if affected == 1:
            self.view.show_message(UPDATE_SUCCESSFUL)
            return True
        self.view.show_message(UPDATE_FAILED)
        return False

    def on_save_selected(self, form: PetForm) -> bool:
        """Save, then close the editor whatever the outcome."""
        saved = self.save(form)
        self.view.close()
        return saved

    def on_delete_selected(self) -> None:
        # Recognized menu action, intentionally not implemented.
        logger.info("Delete requested for %s; not supported", self.address)

    def reset(self) -> None:
        self.form = PetForm()
        self.view.show_form(self.form)
