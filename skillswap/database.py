"""Thin gateway over the SQLAlchemy session: parameterized statements in, plain rows out.

Every workflow receives the session explicitly, so tests can hand in any
session bound to any engine.
"""
import logging
from contextlib import contextmanager
from datetime import datetime

from sqlalchemy import bindparam, text

logger = logging.getLogger(__name__)


@contextmanager
def atomic(session):
    """Commit everything issued inside the block, or roll all of it back and re-raise."""
    try:
        yield session
        session.commit()
    except Exception as exc:
        session.rollback()
        logger.warning("Transaction rolled back: %s", exc)
        raise


def _statement(sql, types=None):
    statement = text(sql)
    if types:
        statement = statement.bindparams(*[bindparam(name, type_=type_) for name, type_ in types.items()])
    return statement


def execute(session, sql, params=None, types=None):
    """Run a write statement and return the number of affected rows."""
    result = session.execute(_statement(sql, types), params or {})
    return result.rowcount


def insert_returning_id(session, sql, params=None, types=None):
    """Run an INSERT ... RETURNING id and return the generated key."""
    return session.execute(_statement(sql, types), params or {}).scalar_one()


def fetch_one(session, sql, params=None):
    row = session.execute(text(sql), params or {}).fetchone()
    return dict(row._mapping) if row is not None else None


def fetch_all(session, sql, params=None):
    rows = session.execute(text(sql), params or {}).fetchall()
    return [dict(row._mapping) for row in rows]


def timestamp(value):
    """
    Render a DATE or TIMESTAMP column as ISO-8601.

    PostgreSQL drivers return date and datetime objects; SQLite returns text
    such as '2030-01-01 07:00:00.000000', which is parsed so both render alike.
    """
    if value is None:
        return None
    if isinstance(value, str):
        # Plain DATE text is already ISO-8601
        if len(value) == 10:
            return value
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    return value.isoformat()
