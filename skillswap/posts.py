import logging

from sqlalchemy import DateTime

from skillswap import audit
from skillswap.accounts import get_account
from skillswap.catalog import get_skill
from skillswap.database import atomic, execute, fetch_all, fetch_one, insert_returning_id, timestamp
from skillswap.errors import NotFound
from skillswap.models import PostStatus, PostType
from skillswap.utils import parse_enum

logger = logging.getLogger(__name__)

# Passing this as the status filter lists posts in every status
ALL_STATUSES = 'all'

_POST_SELECT = """
    SELECT
        sp.id,
        sp.account_id,
        up.full_name AS author_name,
        sp.skill_id,
        sc.skill_name,
        sp.post_type,
        sp.title,
        sp.details,
        sp.status,
        sp.contact_preference,
        sp.expires_at,
        sp.views_count,
        sp.created_at
    FROM skill_posts sp
    JOIN accounts a ON sp.account_id = a.id
    JOIN user_profiles up ON a.id = up.account_id
    JOIN skills_catalog sc ON sp.skill_id = sc.id
    WHERE sp.deleted_at IS NULL
"""


def _post_to_dict(row):
    return {
        'id': row['id'],
        'account_id': row['account_id'],
        'author_name': row['author_name'] or 'Unknown',
        'skill_id': row['skill_id'],
        'skill_name': row['skill_name'],
        'post_type': row['post_type'],
        'title': row['title'],
        'details': row['details'],
        'status': row['status'],
        'contact_preference': row['contact_preference'],
        'expires_at': timestamp(row['expires_at']),
        'views_count': row['views_count'],
        'created_at': timestamp(row['created_at']),
    }


def create_post(session, account_id, skill_id, post_type, title, details,
                contact_preference=None, expires_at=None):
    """Insert a new post; its status always starts as Active."""
    post_type = parse_enum(PostType, post_type, 'post_type')
    get_account(session, account_id)
    get_skill(session, skill_id)

    post_id = insert_returning_id(session, """
        INSERT INTO skill_posts (account_id, skill_id, post_type, title, details, status,
                                 contact_preference, expires_at, views_count, created_at)
        VALUES (:account_id, :skill_id, :post_type, :title, :details, :active,
                :contact_preference, :expires_at, 0, CURRENT_TIMESTAMP)
        RETURNING id
    """, {
        'account_id': account_id,
        'skill_id': skill_id,
        'post_type': post_type.value,
        'title': title,
        'details': details,
        'active': PostStatus.ACTIVE.value,
        'contact_preference': contact_preference,
        'expires_at': expires_at,
    }, types={'expires_at': DateTime()})
    session.commit()

    logger.info("Post %s (%s) created by account %s", post_id, post_type.value, account_id)
    return post_id


def list_posts(session, skill_id=None, post_type=None, status=PostStatus.ACTIVE.value):
    """
    List live posts, newest first.

    Filters left as None are not applied. Status defaults to Active; pass
    ALL_STATUSES to see posts in every status.
    """
    query = _POST_SELECT
    params = {}

    if skill_id is not None:
        query += " AND sp.skill_id = :skill_id"
        params['skill_id'] = skill_id

    if post_type is not None:
        query += " AND sp.post_type = :post_type"
        params['post_type'] = parse_enum(PostType, post_type, 'post_type').value

    if status is not None and status != ALL_STATUSES:
        query += " AND sp.status = :status"
        params['status'] = parse_enum(PostStatus, status, 'status').value

    query += " ORDER BY sp.created_at DESC, sp.id DESC"

    return [_post_to_dict(row) for row in fetch_all(session, query, params)]


def get_post(session, post_id):
    row = fetch_one(session, _POST_SELECT + " AND sp.id = :post_id", {'post_id': post_id})
    if row is None:
        raise NotFound('Post', post_id)
    return _post_to_dict(row)


def increment_views(session, post_id):
    """Add one view to a live post and audit it as an anonymous PostViewed event."""
    with atomic(session):
        updated = execute(session, """
            UPDATE skill_posts
            SET views_count = views_count + 1, updated_at = CURRENT_TIMESTAMP
            WHERE id = :post_id AND deleted_at IS NULL
        """, {'post_id': post_id})
        if not updated:
            raise NotFound('Post', post_id)

        audit.record(session, audit.POST_VIEWED, 'SkillPost', post_id)


def view_post(session, post_id):
    """Fetch a post for display, counting the view."""
    post = get_post(session, post_id)
    increment_views(session, post_id)
    post['views_count'] += 1
    return post


def update_status(session, post_id, status):
    """Move a post to any known status; transitions are not restricted."""
    status = parse_enum(PostStatus, status, 'status')
    updated = execute(session, """
        UPDATE skill_posts
        SET status = :status, updated_at = CURRENT_TIMESTAMP
        WHERE id = :post_id AND deleted_at IS NULL
    """, {'post_id': post_id, 'status': status.value})
    if not updated:
        raise NotFound('Post', post_id)
    session.commit()

    logger.info("Post %s moved to %s", post_id, status.value)
