from flask import Blueprint, g, jsonify, request

from skillswap import db, proofs
from skillswap.auth import admin_required
from skillswap.models import ProofStatus
from skillswap.utils import get_json_body, optional_int, optional_str, require_str

proof_bp = Blueprint('proofs', __name__)


@proof_bp.route('/users/<int:account_id>/proofs', methods=['POST'])
def submit_proof(account_id):
    data = get_json_body()
    proof_id = proofs.submit(
        db.session,
        account_id,
        file_url=require_str(data, 'file_url'),
        skill_id=optional_int(data, 'skill_id'),
        education_id=optional_int(data, 'education_id'),
        file_name=optional_str(data, 'file_name', max_length=255),
        file_size=optional_int(data, 'file_size'),
        mime_type=optional_str(data, 'mime_type', max_length=100),
    )
    return jsonify({'message': 'Proof submitted for verification', 'proof_id': proof_id}), 201


@proof_bp.route('/users/<int:account_id>/proofs', methods=['GET'])
def view_user_proofs(account_id):
    return jsonify(proofs.list_user_proofs(db.session, account_id)), 200


@proof_bp.route('/proofs/<int:proof_id>', methods=['GET'])
def view_proof(proof_id):
    proof = proofs.get_proof(db.session, proof_id)
    proof['verification_request'] = proofs.get_verification_request(db.session, proof_id)
    return jsonify(proof), 200


@proof_bp.route('/proofs/<int:proof_id>/verify', methods=['POST'])
@admin_required
def verify_proof(proof_id):
    data = get_json_body()
    proof, applied = proofs.decide(
        db.session,
        proof_id,
        g.admin_id,
        decision=require_str(data, 'status'),
        rejection_reason=optional_str(data, 'rejection_reason'),
        review_notes=optional_str(data, 'review_notes'),
    )
    message = 'Decision recorded' if applied else 'Proof was already decided; nothing changed'
    return jsonify({'message': message, 'applied': applied, 'proof': proof}), 200


@proof_bp.route('/verification-requests', methods=['GET'])
@admin_required
def view_verification_queue():
    status = request.args.get('status') or ProofStatus.PENDING.value
    return jsonify(proofs.list_verification_requests(db.session, status)), 200
