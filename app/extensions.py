"""Extensions Flask -- instanciees ici, initialisees dans create_app()."""

import sqlite3

from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_login import LoginManager
from flask_session import Session
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine

db = SQLAlchemy()
login_manager = LoginManager()
cors = CORS()
# Sessions cote serveur : remplace le cookie signe de Flask
sess = Session()
limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_conn, _connection_record):
    """SQLite n'applique les cles etrangeres (reservation -> chat/utilisateur)
    que si le pragma est active sur chaque connexion."""
    if isinstance(dbapi_conn, sqlite3.Connection):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
