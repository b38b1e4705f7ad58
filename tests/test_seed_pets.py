import seed_pets
from pet_catalog.app.services.pet_store import PetStore


def test_seed_inserts_sample_pet(capsys):
    assert seed_pets.main([]) == 0
    assert PetStore.query(pet_id=1).first() == {
        "_id": 1, "name": "Toto", "breed": "Terrier", "gender": 1, "weight": 7,
    }
    assert "New row ID 1" in capsys.readouterr().out


def test_seed_custom_pet_into_given_database(tmp_path):
    db = tmp_path / "other.db"
    assert seed_pets.main(["--db", str(db), "--name", "Rex", "--breed", "Boxer", "--gender", "2", "--weight", "30"]) == 0
    assert db.exists()
    row = PetStore.query().first()
    assert (row["name"], row["gender"], row["weight"]) == ("Rex", 2, 30)


def test_seed_rejects_invalid_gender(capsys):
    assert seed_pets.main(["--gender", "5"]) == 1
    assert "Pet rejected" in capsys.readouterr().err
    assert PetStore.query().get_count() == 0
