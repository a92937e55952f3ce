from flask import Blueprint, jsonify, request

from skillswap import db, profiles
from skillswap.utils import (
    get_json_body, optional_bool, optional_date, optional_int, optional_str, require_str,
)

profile_bp = Blueprint('profile', __name__)


@profile_bp.route('/<int:account_id>/profile', methods=['GET'])
def view_profile(account_id):
    return jsonify(profiles.get_profile(db.session, account_id)), 200


@profile_bp.route('/<int:account_id>/profile', methods=['PUT'])
def update_profile(account_id):
    data = get_json_body()
    profiles.update_profile(
        db.session,
        account_id,
        full_name=optional_str(data, 'full_name', max_length=255),
        date_of_birth=optional_date(data, 'date_of_birth'),
        photo_url=optional_str(data, 'photo_url'),
        description=optional_str(data, 'description'),
    )
    return jsonify({'message': 'Profile updated successfully'}), 200


@profile_bp.route('/<int:account_id>/contacts', methods=['POST'])
def create_contact(account_id):
    data = get_json_body()
    contact_id = profiles.create_contact(
        db.session,
        account_id,
        contact_type=require_str(data, 'contact_type', max_length=50),
        contact_value=require_str(data, 'contact_value', max_length=255),
        is_public=optional_bool(data, 'is_public'),
        display_order=optional_int(data, 'display_order') or 0,
    )
    return jsonify({'message': 'Contact added', 'contact_id': contact_id}), 201


@profile_bp.route('/<int:account_id>/contacts', methods=['GET'])
def view_contacts(account_id):
    public_only = optional_bool(request.args, 'public_only')
    return jsonify(profiles.list_contacts(db.session, account_id, public_only=public_only)), 200


@profile_bp.route('/<int:account_id>/education', methods=['POST'])
def create_education(account_id):
    data = get_json_body()
    education_id = profiles.create_education(
        db.session,
        account_id,
        institution_name=require_str(data, 'institution_name', max_length=255),
        degree_field=require_str(data, 'degree_field', max_length=255),
        year_started=optional_int(data, 'year_started'),
        year_completed=optional_int(data, 'year_completed'),
        degree_level=optional_str(data, 'degree_level', max_length=100),
        is_current=optional_bool(data, 'is_current'),
    )
    return jsonify({'message': 'Education added', 'education_id': education_id}), 201


@profile_bp.route('/<int:account_id>/education', methods=['GET'])
def view_education(account_id):
    return jsonify(profiles.list_education(db.session, account_id)), 200
