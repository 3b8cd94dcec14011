"""DBHandler -- persiste les WARNING/ERROR dans la table app_logs."""

import logging
import sys
from datetime import datetime, timezone

from flask import has_app_context
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from app.models.log import AppLog

# Attributs d'un LogRecord vierge : tout le reste vient de ``extra=``
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({})).keys()) | {"message", "taskName"}

# Loggers jamais persistes (recursion, bruit du driver)
_SKIPPED_PREFIXES = ("app.logging_db", "sqlalchemy")


class DBHandler(logging.Handler):
    """Handler qui ecrit les records WARNING+ dans AppLog.

    Ecrit sur sa propre connexion : la transaction de la requete en cours n'est
    jamais validee ni annulee par un log. Sans contexte Flask, il en ouvre un sur
    l'application fournie. Un echec d'ecriture est signale sur stderr.
    """

    def __init__(self, app=None, level=logging.WARNING):
        super().__init__(level)
        self._app = app

    def emit(self, record: logging.LogRecord) -> None:
        if record.name.startswith(_SKIPPED_PREFIXES):
            return
        if not has_app_context() and self._app is None:
            return

        try:
            if has_app_context():
                self._write(record)
            else:
                with self._app.app_context():
                    self._write(record)
        except (OSError, ValueError, TypeError, RuntimeError, SQLAlchemyError) as exc:
            print(f"DBHandler.emit failed: {exc}", file=sys.stderr)

    def _write(self, record: logging.LogRecord) -> None:
        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        } or None

        with db.engine.begin() as conn:
            conn.execute(
                AppLog.__table__.insert().values(
                    level=record.levelname,
                    module=record.name,
                    message=self.format(record) if self.formatter else record.getMessage(),
                    extra=extra,
                    created_at=datetime.fromtimestamp(record.created, tz=timezone.utc),
                )
            )
