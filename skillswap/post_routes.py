from flask import Blueprint, jsonify, request

from skillswap import db, posts
from skillswap.models import PostStatus
from skillswap.utils import get_json_body, optional_datetime, optional_int, optional_str, require_int, require_str

post_bp = Blueprint('posts', __name__)


@post_bp.route('/users/<int:account_id>/posts', methods=['POST'])
def create_post(account_id):
    data = get_json_body()
    post_id = posts.create_post(
        db.session,
        account_id,
        skill_id=require_int(data, 'skill_id'),
        post_type=require_str(data, 'post_type'),
        title=require_str(data, 'title', max_length=255),
        details=require_str(data, 'details'),
        contact_preference=optional_str(data, 'contact_preference', max_length=255),
        expires_at=optional_datetime(data, 'expires_at'),
    )
    return jsonify({'message': 'Post created', 'post_id': post_id}), 201


@post_bp.route('/posts', methods=['GET'])
def view_posts():
    """
    Browse posts. Query: skill_id, post_type, status (Active when omitted,
    'all' for every status).
    """
    return jsonify(posts.list_posts(
        db.session,
        skill_id=optional_int(request.args, 'skill_id'),
        post_type=request.args.get('post_type') or None,
        status=request.args.get('status') or PostStatus.ACTIVE.value,
    )), 200


@post_bp.route('/posts/<int:post_id>', methods=['GET'])
def view_post(post_id):
    return jsonify(posts.view_post(db.session, post_id)), 200


@post_bp.route('/posts/<int:post_id>/status', methods=['PUT'])
def update_post_status(post_id):
    data = get_json_body()
    posts.update_status(db.session, post_id, require_str(data, 'status'))
    return jsonify({'message': 'Post status updated'}), 200
