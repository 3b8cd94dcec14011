#!/usr/bin/env python3
"""Initialise la base -- cree les tables et le compte administrateur."""

import sys
from pathlib import Path

# Racine du projet dans sys.path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app import create_app  # noqa: E402
from app.extensions import db  # noqa: E402
from app.models import *  # noqa: E402, F401, F403

app = create_app()

with app.app_context():
    db.create_all()
    print("Tables creees :")
    for table in db.metadata.sorted_tables:
        print(f"  - {table.name}")
    print(f"Administrateur : {app.config['ADMIN_EMAIL']}")
