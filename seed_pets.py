#!/usr/bin/env python3
"""
Insert a pet into a Pet Catalog SQLite database.

Without options this inserts the sample pet (Toto, a male terrier
weighing 7).  The table is created if the database is new.

Usage:
    python seed_pets.py --db ./pet_catalog/pets.db
    python seed_pets.py --db ./pets.db --name Rex --breed Boxer --gender 1 --weight 30
"""

import argparse
import sys

from pet_catalog.app.core.config import settings
from pet_catalog.app.core.contract import PetEntry
from pet_catalog.app.core.db import init_db
from pet_catalog.app.core.errors import ValidationError
from pet_catalog.app.presenters.catalog import DUMMY_PET
from pet_catalog.app.services.pet_provider import pet_provider


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Insert a pet into the Pet Catalog database (SQLite).")
    ap.add_argument("--db", help="Path to SQLite DB file; defaults to DATABASE_URL")
    ap.add_argument("--name", default=DUMMY_PET[PetEntry.COLUMN_PET_NAME])
    ap.add_argument("--breed", default=DUMMY_PET[PetEntry.COLUMN_PET_BREED])
    ap.add_argument("--gender", type=int, default=DUMMY_PET[PetEntry.COLUMN_PET_GENDER],
                    help="0 = unknown, 1 = male, 2 = female")
    ap.add_argument("--weight", type=int, default=DUMMY_PET[PetEntry.COLUMN_PET_WEIGHT])
    args = ap.parse_args(argv)

    if args.db:
        settings.database_url = args.db
    init_db()

    values = {
        PetEntry.COLUMN_PET_NAME: args.name,
        PetEntry.COLUMN_PET_BREED: args.breed,
        PetEntry.COLUMN_PET_GENDER: args.gender,
        PetEntry.COLUMN_PET_WEIGHT: args.weight,
    }
    try:
        address = pet_provider.insert(PetEntry.CONTENT_URI, values)
    except ValidationError as exc:
        print(f"[!] Pet rejected: {exc}", file=sys.stderr)
        return 1
    print(f"[+] New row ID {address.id} ({address})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
