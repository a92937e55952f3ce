"""Query helpers for asserting on raw table state."""

import json

from sqlalchemy import text


def count(session, table, where='1 = 1', **params):
    return session.execute(text(f"SELECT COUNT(*) FROM {table} WHERE {where}"), params).scalar_one()


def audit_rows(session, action):
    rows = session.execute(text(
        "SELECT actor_account_id, entity_type, entity_id, details, result FROM audit_log "
        "WHERE action = :action ORDER BY id"
    ), {'action': action}).fetchall()
    return [
        {
            'actor_account_id': row[0],
            'entity_type': row[1],
            'entity_id': row[2],
            'details': json.loads(row[3]) if row[3] else None,
            'result': row[4],
        } for row in rows
    ]
