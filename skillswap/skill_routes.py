from flask import Blueprint, jsonify, request

from skillswap import catalog, db
from skillswap.utils import get_json_body, optional_int, optional_number, require_int

skill_bp = Blueprint('skills', __name__)


@skill_bp.route('/skills/categories', methods=['GET'])
def view_categories():
    return jsonify(catalog.list_categories(db.session)), 200


@skill_bp.route('/skills/levels', methods=['GET'])
def view_levels():
    return jsonify(catalog.list_levels(db.session)), 200


@skill_bp.route('/skills', methods=['GET'])
def view_skills():
    category_id = optional_int(request.args, 'category_id')
    return jsonify(catalog.list_skills(db.session, category_id=category_id)), 200


@skill_bp.route('/skills/<string:skill_name>/users', methods=['GET'])
def search_users(skill_name):
    min_level_rank = optional_int(request.args, 'min_level_rank')
    return jsonify(catalog.search_users_by_skill(db.session, skill_name, min_level_rank)), 200


@skill_bp.route('/users/<int:account_id>/skills', methods=['POST'])
def add_user_skill(account_id):
    data = get_json_body()
    created = catalog.add_user_skill(
        db.session,
        account_id,
        skill_id=require_int(data, 'skill_id'),
        skill_level_id=require_int(data, 'skill_level_id'),
        experience_years=optional_number(data, 'experience_years'),
    )
    if created:
        return jsonify({'message': 'Skill added'}), 201
    return jsonify({'message': 'Skill updated'}), 200


@skill_bp.route('/users/<int:account_id>/skills', methods=['GET'])
def view_user_skills(account_id):
    return jsonify(catalog.list_user_skills(db.session, account_id)), 200
