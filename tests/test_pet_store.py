import pytest

from pet_catalog.app.core.errors import CursorClosedError, ValidationError
from pet_catalog.app.services.pet_store import PetStore


def _count():
    return PetStore.query().get_count()


def test_insert_then_query_round_trip(toto):
    pet_id = PetStore.insert(toto)
    assert pet_id == 1
    row = PetStore.query(pet_id=pet_id).first()
    assert row == {"_id": 1, "name": "Toto", "breed": "Terrier", "gender": 1, "weight": 7}


@pytest.mark.parametrize("gender", [-1, 3, 4, 100, "female", None, True, False, "1", 1.0])
def test_insert_rejects_invalid_gender(toto, gender):
    with pytest.raises(ValidationError):
        PetStore.insert({**toto, "gender": gender})
    assert _count() == 0


@pytest.mark.parametrize(
    "values",
    [
        {"breed": "Terrier", "gender": 1, "weight": 7},
        {"name": "   ", "gender": 1},
        {"name": "Rex", "weight": -3},
        {"name": "Rex", "weight": "heavy"},
        {"name": "Rex", "weight": 2**63},
        {"name": "Rex", "colour": "brown"},
    ],
)
def test_insert_rejects_structurally_invalid_values(values):
    with pytest.raises(ValidationError):
        PetStore.insert(values)
    assert _count() == 0


def test_insert_applies_defaults():
    pet_id = PetStore.insert({"name": "Rex"})
    row = PetStore.query(pet_id=pet_id).first()
    assert row["breed"] == ""
    assert row["gender"] == 0
    assert row["weight"] == 0


def test_query_all_returns_rows_in_insertion_order():
    names = ["Toto", "Binx", "Sheba", "Kiki"]
    for name in names:
        PetStore.insert({"name": name})
    rows = list(PetStore.query())
    assert [r["name"] for r in rows] == names
    assert len({r["_id"] for r in rows}) == len(names)


def test_query_with_projection_and_sort(toto):
    PetStore.insert(toto)
    PetStore.insert({"name": "Anna", "weight": 3})
    cursor = PetStore.query(projection=("_id", "name"), sort_order="name ASC")
    assert cursor.columns == ("_id", "name")
    assert list(cursor) == [{"_id": 2, "name": "Anna"}, {"_id": 1, "name": "Toto"}]


def test_query_with_selection(toto):
    PetStore.insert(toto)
    PetStore.insert({"name": "Tiny", "weight": 2})
    rows = list(PetStore.query(selection="weight > ?", selection_args=(5,)))
    assert [r["name"] for r in rows] == ["Toto"]


@pytest.mark.parametrize("kwargs", [{"projection": ("_id", "owner")}, {"projection": ()}, {"sort_order": "name; DROP TABLE pets"}])
def test_query_rejects_unknown_columns(kwargs):
    with pytest.raises(ValidationError):
        PetStore.query(**kwargs)


def test_cursor_is_lazy_and_restartable(toto):
    cursor = PetStore.query()
    # nothing inserted yet, but the statement has not run either
    PetStore.insert(toto)
    assert len(cursor) == 1
    assert list(cursor) == list(cursor)

    PetStore.insert({"name": "Binx"})
    assert len(cursor) == 1
    cursor.requery()
    assert len(cursor) == 2


def test_closed_cursor_cannot_be_used(toto):
    PetStore.insert(toto)
    cursor = PetStore.query()
    cursor.close()
    assert cursor.closed
    with pytest.raises(CursorClosedError):
        list(cursor)


def test_update_existing_pet(toto):
    pet_id = PetStore.insert(toto)
    assert PetStore.update(pet_id, {"weight": 9}) == 1
    row = PetStore.query(pet_id=pet_id).first()
    assert row["weight"] == 9
    assert row["name"] == "Toto"


def test_update_missing_pet_leaves_store_unchanged(toto):
    PetStore.insert(toto)
    before = list(PetStore.query())
    assert PetStore.update(999, {"weight": 9}) == 0
    assert list(PetStore.query()) == before


@pytest.mark.parametrize("values", [{"gender": 5}, {"gender": True}, {"name": "  "}, {"weight": 2**63}, {"name": ""}, {"name": None}, {"weight": -1}, {"age": 3}])
def test_update_validation_writes_nothing(toto, values):
    pet_id = PetStore.insert(toto)
    with pytest.raises(ValidationError):
        PetStore.update(pet_id, values)
    assert PetStore.query(pet_id=pet_id).first()["name"] == "Toto"


def test_update_with_no_values_is_a_no_op(toto):
    pet_id = PetStore.insert(toto)
    assert PetStore.update(pet_id, {}) == 0


def test_update_where_and_delete_where(toto):
    PetStore.insert(toto)
    PetStore.insert({"name": "Tiny", "weight": 2})
    PetStore.insert({"name": "Rex", "weight": 30})
    assert PetStore.update_where({"breed": "Mixed"}, "weight < ?", (10,)) == 2
    assert [r["breed"] for r in PetStore.query()] == ["Mixed", "Mixed", ""]
    assert PetStore.delete_where("breed = ?", ("Mixed",)) == 2
    assert _count() == 1
    assert PetStore.delete_where() == 1
    assert _count() == 0


def test_delete_one(toto):
    pet_id = PetStore.insert(toto)
    assert PetStore.delete(pet_id) == 1
    assert PetStore.delete(pet_id) == 0
    assert PetStore.query(pet_id=pet_id).first() is None


def test_ids_are_not_reused_after_delete(toto):
    first = PetStore.insert(toto)
    PetStore.delete(first)
    assert PetStore.insert(toto) == first + 1


def test_insert_keeps_text_exactly_as_given():
    values = {"name": " Toto ", "breed": "Terrier ", "gender": 1, "weight": 7}
    pet_id = PetStore.insert(values)
    row = PetStore.query(pet_id=pet_id).first()
    assert {k: row[k] for k in values} == values


def test_largest_storable_weight_round_trips():
    pet_id = PetStore.insert({"name": "Heavy", "weight": 2**63 - 1})
    assert PetStore.query(pet_id=pet_id).first()["weight"] == 2**63 - 1
