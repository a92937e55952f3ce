from flask import Blueprint, jsonify

from skillswap import accounts, db
from skillswap.utils import get_json_body, require_str

account_bp = Blueprint('accounts', __name__)


@account_bp.route('/register', methods=['POST'])
def register_account():
    data = get_json_body()
    login = require_str(data, 'login', max_length=255)
    password = require_str(data, 'password')

    account_id = accounts.register(db.session, login, password)
    return jsonify({'message': 'Account registered successfully', 'account_id': account_id}), 201


@account_bp.route('/login', methods=['POST'])
def login_account():
    data = get_json_body()
    login = require_str(data, 'login')
    password = require_str(data, 'password')

    return jsonify(accounts.authenticate(db.session, login, password)), 200


@account_bp.route('/<int:account_id>', methods=['DELETE'])
def delete_account(account_id):
    closed_posts = accounts.soft_delete(db.session, account_id)
    return jsonify({'message': 'Account deleted', 'closed_posts': closed_posts}), 200
