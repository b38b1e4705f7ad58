"""
Contract for the pets content provider.

Defines the content authority, the ``pets`` table and its columns, the
gender values and the addressing scheme used by callers instead of
direct table access.  An address is either a collection address
(``content://pet_catalog/pets``) or an item address
(``content://pet_catalog/pets/<id>``); ``parse_address`` turns a URI
into one of the two address types.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Union

from .errors import InvalidAddressError


CONTENT_SCHEME = "content://"

# Name for the entire content provider, similar to the relationship
# between a domain name and its website.
CONTENT_AUTHORITY = "pet_catalog"

BASE_CONTENT_URI = f"{CONTENT_SCHEME}{CONTENT_AUTHORITY}"

# Path appended to the base URI.  ``content://pet_catalog/staff`` is
# not a valid address since the provider only knows about ``pets``.
PATH_PETS = "pets"

CURSOR_DIR_BASE_TYPE = "vnd.cursor.dir"
CURSOR_ITEM_BASE_TYPE = "vnd.cursor.item"


class Gender(IntEnum):
    """Gender of a pet as stored in the ``gender`` column."""

    UNKNOWN = 0
    MALE = 1
    FEMALE = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()


# Spinner options; the position of each label equals its gender value.
GENDER_LABELS = tuple(g.label for g in Gender)


class PetEntry:
    """Constant values for the pets database table.

    Each row in the table represents a single pet.
    """

    TABLE_NAME = "pets"

    COLUMN_ID = "_id"
    COLUMN_PET_NAME = "name"
    COLUMN_PET_BREED = "breed"
    COLUMN_PET_GENDER = "gender"
    COLUMN_PET_WEIGHT = "weight"

    ALL_COLUMNS = (
        COLUMN_ID,
        COLUMN_PET_NAME,
        COLUMN_PET_BREED,
        COLUMN_PET_GENDER,
        COLUMN_PET_WEIGHT,
    )

    GENDER_UNKNOWN = Gender.UNKNOWN
    GENDER_MALE = Gender.MALE
    GENDER_FEMALE = Gender.FEMALE

    CONTENT_URI = f"{BASE_CONTENT_URI}/{PATH_PETS}"

    # Content type for a list of pets.
    CONTENT_LIST_TYPE = f"{CURSOR_DIR_BASE_TYPE}/{CONTENT_AUTHORITY}/{PATH_PETS}"

    # Content type for a single pet.
    CONTENT_ITEM_TYPE = f"{CURSOR_ITEM_BASE_TYPE}/{CONTENT_AUTHORITY}/{PATH_PETS}"

    @staticmethod
    def is_valid_gender(gender) -> bool:
        # bool is an int subclass but never a gender
        if isinstance(gender, bool) or not isinstance(gender, int):
            return False
        return gender in (Gender.UNKNOWN, Gender.MALE, Gender.FEMALE)


class AddressKind(str, Enum):
    COLLECTION = "collection"
    ITEM = "item"


@dataclass(frozen=True)
class CollectionAddress:
    """Address of every row in a collection."""

    collection: str = PATH_PETS

    @property
    def kind(self) -> AddressKind:
        return AddressKind.COLLECTION

    @property
    def uri(self) -> str:
        return f"{BASE_CONTENT_URI}/{self.collection}"

    def __str__(self) -> str:
        return self.uri


@dataclass(frozen=True)
class ItemAddress:
    """Address of a single row, identified by its ``_id``."""

    collection: str
    id: int

    @property
    def kind(self) -> AddressKind:
        return AddressKind.ITEM

    @property
    def uri(self) -> str:
        return f"{BASE_CONTENT_URI}/{self.collection}/{self.id}"

    @property
    def parent(self) -> CollectionAddress:
        return CollectionAddress(self.collection)

    def __str__(self) -> str:
        return self.uri


Address = Union[CollectionAddress, ItemAddress]

KNOWN_COLLECTIONS = frozenset({PATH_PETS})


def parse_address(uri: Union[str, CollectionAddress, ItemAddress]) -> Address:
    """Parse ``uri`` into a :class:`CollectionAddress` or :class:`ItemAddress`.

    The ``content://`` scheme is optional.  Address objects are
    returned unchanged.  Raises :class:`InvalidAddressError` for an
    unknown authority or collection, a non-numeric id or extra path
    segments.
    """
    if isinstance(uri, (CollectionAddress, ItemAddress)):
        return uri
    if not isinstance(uri, str):
        raise InvalidAddressError(f"Unsupported address type: {type(uri).__name__}")

    raw = uri.strip()
    if raw.startswith(CONTENT_SCHEME):
        raw = raw[len(CONTENT_SCHEME):]
    elif "://" in raw:
        raise InvalidAddressError(f"Unsupported scheme in address: {uri}")

    parts = raw.strip("/").split("/")
    authority, segments = parts[0], parts[1:]
    if authority != CONTENT_AUTHORITY:
        raise InvalidAddressError(f"Unknown authority in address: {uri}")
    if not segments or segments[0] not in KNOWN_COLLECTIONS:
        raise InvalidAddressError(f"Unknown collection in address: {uri}")

    collection = segments[0]
    if len(segments) == 1:
        return CollectionAddress(collection)
    if len(segments) == 2 and segments[1].isascii() and segments[1].isdigit():
        return ItemAddress(collection, int(segments[1]))
    raise InvalidAddressError(f"Malformed address: {uri}")


def with_appended_id(address: Union[str, Address], row_id: int) -> ItemAddress:
    """Return the item address for ``row_id`` inside ``address``'s collection."""
    parsed = parse_address(address)
    return ItemAddress(parsed.collection, int(row_id))
