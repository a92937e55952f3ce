"""Proof verification workflow.

A proof and its verification request are created together as Pending and
leave Pending together, exactly once:

    Pending -> Approved | Rejected

Approving a skill proof marks the owner's matching skill as verified.
"""
import logging

from skillswap import audit
from skillswap.accounts import get_account
from skillswap.catalog import get_skill
from skillswap.database import atomic, execute, fetch_all, fetch_one, insert_returning_id, timestamp
from skillswap.errors import NotFound, ValidationFailure
from skillswap.models import ProofStatus, RequestType
from skillswap.profiles import get_education
from skillswap.utils import parse_enum

logger = logging.getLogger(__name__)

_PROOF_COLUMNS = """
    id, account_id, skill_id, education_id, file_url, file_name, file_size, mime_type,
    status, verified_by, verified_at, rejection_reason, expires_at, created_at
"""


def _proof_to_dict(row):
    return {
        'id': row['id'],
        'account_id': row['account_id'],
        'skill_id': row['skill_id'],
        'education_id': row['education_id'],
        'file_url': row['file_url'],
        'file_name': row['file_name'],
        'file_size': row['file_size'],
        'mime_type': row['mime_type'],
        'status': row['status'],
        'verified_by': row['verified_by'],
        'verified_at': timestamp(row['verified_at']),
        'rejection_reason': row['rejection_reason'],
        'expires_at': timestamp(row['expires_at']),
        'created_at': timestamp(row['created_at']),
    }


def _request_to_dict(row):
    return {
        'id': row['id'],
        'account_id': row['account_id'],
        'proof_id': row['proof_id'],
        'request_type': row['request_type'],
        'status': row['status'],
        'reviewed_by': row['reviewed_by'],
        'reviewed_at': timestamp(row['reviewed_at']),
        'review_notes': row['review_notes'],
        'created_at': timestamp(row['created_at']),
    }


def submit(session, account_id, file_url, skill_id=None, education_id=None,
           file_name=None, file_size=None, mime_type=None):
    """Create a Pending proof and its Pending verification request; returns the proof id."""
    if (skill_id is None) == (education_id is None):
        raise ValidationFailure('Exactly one of skill_id or education_id must be given', 'skill_id')

    get_account(session, account_id)
    if skill_id is not None:
        get_skill(session, skill_id)
    else:
        get_education(session, account_id, education_id)
    request_type = RequestType.SKILL_VERIFICATION if skill_id is not None else RequestType.EDUCATION_VERIFICATION

    with atomic(session):
        proof_id = insert_returning_id(session, """
            INSERT INTO proofs (account_id, skill_id, education_id, file_url, file_name, file_size,
                                mime_type, status, created_at)
            VALUES (:account_id, :skill_id, :education_id, :file_url, :file_name, :file_size,
                    :mime_type, :pending, CURRENT_TIMESTAMP)
            RETURNING id
        """, {
            'account_id': account_id,
            'skill_id': skill_id,
            'education_id': education_id,
            'file_url': file_url,
            'file_name': file_name,
            'file_size': file_size,
            'mime_type': mime_type,
            'pending': ProofStatus.PENDING.value,
        })

        execute(session, """
            INSERT INTO verification_requests (account_id, proof_id, request_type, status, created_at)
            VALUES (:account_id, :proof_id, :request_type, :pending, CURRENT_TIMESTAMP)
        """, {
            'account_id': account_id,
            'proof_id': proof_id,
            'request_type': request_type.value,
            'pending': ProofStatus.PENDING.value,
        })

    logger.info("Proof %s submitted by account %s (%s)", proof_id, account_id, request_type.value)
    return proof_id


def decide(session, proof_id, admin_id, decision, rejection_reason=None, review_notes=None):
    """
    Record an admin decision on a Pending proof.

    Returns (proof, applied). A proof that already left Pending is returned
    unchanged with applied=False; nothing is written and no audit row is added.
    """
    decision = parse_enum(ProofStatus, decision, 'status')
    if decision == ProofStatus.PENDING:
        raise ValidationFailure('decision must be Approved or Rejected', 'status')

    proof = fetch_one(session, "SELECT id, account_id, skill_id FROM proofs WHERE id = :proof_id",
                      {'proof_id': proof_id})
    if proof is None:
        raise NotFound('Proof', proof_id)

    with atomic(session):
        updated = execute(session, """
            UPDATE proofs
            SET status = :decision,
                verified_by = :admin_id,
                verified_at = CURRENT_TIMESTAMP,
                rejection_reason = :rejection_reason,
                updated_at = CURRENT_TIMESTAMP
            WHERE id = :proof_id AND status = :pending
        """, {
            'proof_id': proof_id,
            'decision': decision.value,
            'admin_id': admin_id,
            'rejection_reason': rejection_reason,
            'pending': ProofStatus.PENDING.value,
        })

        if updated:
            if decision == ProofStatus.APPROVED and proof['skill_id'] is not None:
                # No row means the skill was removed after submission; nothing to verify
                execute(session, """
                    UPDATE user_skills
                    SET is_verified = TRUE, verified_at = CURRENT_TIMESTAMP, updated_at = CURRENT_TIMESTAMP
                    WHERE account_id = :account_id AND skill_id = :skill_id
                """, {'account_id': proof['account_id'], 'skill_id': proof['skill_id']})

            execute(session, """
                UPDATE verification_requests
                SET status = :decision,
                    reviewed_by = :admin_id,
                    reviewed_at = CURRENT_TIMESTAMP,
                    review_notes = :review_notes,
                    updated_at = CURRENT_TIMESTAMP
                WHERE proof_id = :proof_id AND status = :pending
            """, {
                'proof_id': proof_id,
                'decision': decision.value,
                'admin_id': admin_id,
                'review_notes': review_notes,
                'pending': ProofStatus.PENDING.value,
            })

            audit.record(session, audit.PROOF_VERIFIED, 'Proof', proof_id, actor_id=admin_id,
                         details={'proof_id': proof_id, 'decision': decision.value})

    if updated:
        logger.info("Proof %s %s by admin %s", proof_id, decision.value, admin_id)
    else:
        logger.info("Proof %s already decided; decision %s by admin %s ignored",
                    proof_id, decision.value, admin_id)
    return get_proof(session, proof_id), bool(updated)


def get_proof(session, proof_id):
    row = fetch_one(session, f"SELECT {_PROOF_COLUMNS} FROM proofs WHERE id = :proof_id",
                    {'proof_id': proof_id})
    if row is None:
        raise NotFound('Proof', proof_id)
    return _proof_to_dict(row)


def list_user_proofs(session, account_id):
    rows = fetch_all(session, f"""
        SELECT {_PROOF_COLUMNS}
        FROM proofs
        WHERE account_id = :account_id
        ORDER BY created_at DESC, id DESC
    """, {'account_id': account_id})
    return [_proof_to_dict(row) for row in rows]


def get_verification_request(session, proof_id):
    row = fetch_one(session, """
        SELECT id, account_id, proof_id, request_type, status, reviewed_by, reviewed_at, review_notes, created_at
        FROM verification_requests
        WHERE proof_id = :proof_id
    """, {'proof_id': proof_id})
    if row is None:
        raise NotFound('Verification request for proof', proof_id)
    return _request_to_dict(row)


def list_verification_requests(session, status=ProofStatus.PENDING):
    """Moderation queue, oldest first so admins work through it in order."""
    rows = fetch_all(session, """
        SELECT id, account_id, proof_id, request_type, status, reviewed_by, reviewed_at, review_notes, created_at
        FROM verification_requests
        WHERE status = :status
        ORDER BY created_at, id
    """, {'status': parse_enum(ProofStatus, status, 'status').value})
    return [_request_to_dict(row) for row in rows]
