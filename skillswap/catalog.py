import logging

from skillswap import audit
from skillswap.accounts import get_account
from skillswap.database import atomic, execute, fetch_all, fetch_one, timestamp
from skillswap.errors import NotFound

logger = logging.getLogger(__name__)

DEFAULT_SKILL_LEVELS = [
    ('Beginner', 1, 'Knows the basics and is still learning'),
    ('Intermediate', 2, 'Works independently on common tasks'),
    ('Advanced', 3, 'Handles complex work and can teach others'),
    ('Expert', 4, 'Recognised authority in the skill'),
]


def seed_skill_levels(session):
    """Insert the default skill levels that are missing; returns how many were added."""
    added = 0
    for name, rank, description in DEFAULT_SKILL_LEVELS:
        exists = fetch_one(session, "SELECT id FROM skill_levels WHERE name = :name", {'name': name})
        if exists:
            continue
        execute(session, """
            INSERT INTO skill_levels (name, rank, description)
            VALUES (:name, :rank, :description)
        """, {'name': name, 'rank': rank, 'description': description})
        added += 1
    session.commit()
    if added:
        logger.info("Seeded %s skill level(s)", added)
    return added


def list_categories(session):
    rows = fetch_all(session, """
        SELECT id, name, description, icon_url, display_order, is_active
        FROM skill_categories
        WHERE is_active = TRUE
        ORDER BY display_order, id
    """)
    return [
        {
            'id': row['id'],
            'name': row['name'],
            'description': row['description'],
            'icon_url': row['icon_url'],
            'display_order': row['display_order'],
            'is_active': bool(row['is_active']),
        } for row in rows
    ]


def list_levels(session):
    return fetch_all(session, "SELECT id, name, rank, description FROM skill_levels ORDER BY rank")


def list_skills(session, category_id=None):
    query = """
        SELECT id, skill_name, category_id, description, is_active
        FROM skills_catalog
        WHERE is_active = TRUE
    """
    params = {}
    if category_id is not None:
        query += " AND category_id = :category_id"
        params['category_id'] = category_id
    query += " ORDER BY skill_name"

    return [
        {
            'id': row['id'],
            'skill_name': row['skill_name'],
            'category_id': row['category_id'],
            'description': row['description'],
            'is_active': bool(row['is_active']),
        } for row in fetch_all(session, query, params)
    ]


def get_skill(session, skill_id):
    skill = fetch_one(session, "SELECT id, skill_name, category_id FROM skills_catalog WHERE id = :skill_id",
                      {'skill_id': skill_id})
    if skill is None:
        raise NotFound('Skill', skill_id)
    return skill


def get_skill_level(session, skill_level_id):
    level = fetch_one(session, "SELECT id, name, rank FROM skill_levels WHERE id = :skill_level_id",
                      {'skill_level_id': skill_level_id})
    if level is None:
        raise NotFound('Skill level', skill_level_id)
    return level


def add_user_skill(session, account_id, skill_id, skill_level_id, experience_years=None):
    """
    Insert or update: declare a skill, or change the level and experience of
    one already declared. Verification status of an existing row is kept.

    Returns True when a new row was created.
    """
    get_account(session, account_id)
    get_skill(session, skill_id)
    get_skill_level(session, skill_level_id)

    with atomic(session):
        existing = fetch_one(session, """
            SELECT account_id FROM user_skills WHERE account_id = :account_id AND skill_id = :skill_id
        """, {'account_id': account_id, 'skill_id': skill_id})

        params = {
            'account_id': account_id,
            'skill_id': skill_id,
            'skill_level_id': skill_level_id,
            'experience_years': experience_years,
        }
        if existing:
            execute(session, """
                UPDATE user_skills
                SET skill_level_id = :skill_level_id,
                    experience_years = :experience_years,
                    updated_at = CURRENT_TIMESTAMP
                WHERE account_id = :account_id AND skill_id = :skill_id
            """, params)
        else:
            execute(session, """
                INSERT INTO user_skills (account_id, skill_id, skill_level_id, is_verified, experience_years, created_at)
                VALUES (:account_id, :skill_id, :skill_level_id, FALSE, :experience_years, CURRENT_TIMESTAMP)
            """, params)

        audit.record(session, audit.SKILL_ADDED, 'UserSkill', skill_id, actor_id=account_id, details={
            'skill_id': skill_id,
            'skill_level_id': skill_level_id,
            'experience_years': experience_years,
        })

    logger.info("Account %s %s skill %s", account_id, 'updated' if existing else 'added', skill_id)
    return existing is None


def list_user_skills(session, account_id):
    rows = fetch_all(session, """
        SELECT
            us.account_id,
            us.skill_id,
            sc.skill_name,
            cat.name AS category_name,
            sl.name AS level_name,
            sl.rank AS level_rank,
            us.is_verified,
            us.experience_years,
            us.created_at
        FROM user_skills us
        JOIN skills_catalog sc ON us.skill_id = sc.id
        JOIN skill_categories cat ON sc.category_id = cat.id
        JOIN skill_levels sl ON us.skill_level_id = sl.id
        WHERE us.account_id = :account_id
        ORDER BY cat.display_order, sc.skill_name
    """, {'account_id': account_id})
    return [
        {
            'account_id': row['account_id'],
            'skill_id': row['skill_id'],
            'skill_name': row['skill_name'],
            'category_name': row['category_name'],
            'level_name': row['level_name'],
            'level_rank': row['level_rank'],
            'is_verified': bool(row['is_verified']),
            'experience_years': float(row['experience_years']) if row['experience_years'] is not None else None,
            'created_at': timestamp(row['created_at']),
        } for row in rows
    ]


def search_users_by_skill(session, skill_name, min_level_rank=None):
    """Live, active users holding the named skill, strongest first."""
    query = """
        SELECT
            up.account_id,
            up.full_name,
            up.photo_url,
            up.description,
            up.last_seen_online,
            sl.name AS level_name,
            sl.rank AS level_rank,
            us.is_verified
        FROM accounts a
        JOIN user_profiles up ON a.id = up.account_id
        JOIN user_skills us ON a.id = us.account_id
        JOIN skills_catalog sc ON us.skill_id = sc.id
        JOIN skill_levels sl ON us.skill_level_id = sl.id
        WHERE sc.skill_name = :skill_name
          AND a.deleted_at IS NULL
          AND up.is_active = TRUE
    """
    params = {'skill_name': skill_name}
    if min_level_rank is not None:
        query += " AND sl.rank >= :min_level_rank"
        params['min_level_rank'] = min_level_rank
    # Never-seen users go last on every backend
    query += """
        ORDER BY sl.rank DESC,
                 CASE WHEN up.last_seen_online IS NULL THEN 1 ELSE 0 END,
                 up.last_seen_online DESC,
                 up.account_id
    """

    return [
        {
            'account_id': row['account_id'],
            'full_name': row['full_name'],
            'photo_url': row['photo_url'],
            'description': row['description'],
            'last_seen_online': timestamp(row['last_seen_online']),
            'level_name': row['level_name'],
            'level_rank': row['level_rank'],
            'is_verified': bool(row['is_verified']),
        } for row in fetch_all(session, query, params)
    ]
