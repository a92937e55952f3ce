"""Append-only audit trail for sensitive state changes.

Rows are written inside the caller's transaction and never read back by the
workflows, so an audit row exists exactly when the change it describes does.
"""
import json

from skillswap.database import execute

USER_REGISTERED = 'UserRegistered'
ACCOUNT_DELETED = 'AccountDeleted'
SKILL_ADDED = 'SkillAdded'
PROOF_VERIFIED = 'ProofVerified'
POST_VIEWED = 'PostViewed'

RESULT_SUCCESS = 'Success'


def record(session, action, entity_type, entity_id, actor_id=None, details=None, result=RESULT_SUCCESS):
    execute(session, """
        INSERT INTO audit_log (actor_account_id, action, entity_type, entity_id, details, result, created_at)
        VALUES (:actor_id, :action, :entity_type, :entity_id, :details, :result, CURRENT_TIMESTAMP)
    """, {
        'actor_id': actor_id,
        'action': action,
        'entity_type': entity_type,
        'entity_id': entity_id,
        'details': json.dumps(details, default=str) if details is not None else None,
        'result': result,
    })
