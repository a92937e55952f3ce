from sqlalchemy import Date

from skillswap.accounts import get_account
from skillswap.database import execute, fetch_all, fetch_one, insert_returning_id, timestamp
from skillswap.errors import NotFound


def get_profile(session, account_id):
    row = fetch_one(session, """
        SELECT account_id, full_name, date_of_birth, photo_url, description,
               last_seen_online, is_active, created_at
        FROM user_profiles
        WHERE account_id = :account_id
    """, {'account_id': account_id})
    if row is None:
        raise NotFound('Profile', account_id)

    return {
        'account_id': row['account_id'],
        'full_name': row['full_name'],
        'date_of_birth': timestamp(row['date_of_birth']),
        'photo_url': row['photo_url'],
        'description': row['description'],
        'last_seen_online': timestamp(row['last_seen_online']),
        'is_active': bool(row['is_active']),
        'created_at': timestamp(row['created_at']),
    }


def update_profile(session, account_id, full_name=None, date_of_birth=None, photo_url=None, description=None):
    """Overwrite the editable profile fields and mark the user as seen now."""
    updated = execute(session, """
        UPDATE user_profiles
        SET full_name = :full_name,
            date_of_birth = :date_of_birth,
            photo_url = :photo_url,
            description = :description,
            last_seen_online = CURRENT_TIMESTAMP,
            updated_at = CURRENT_TIMESTAMP
        WHERE account_id = :account_id
    """, {
        'account_id': account_id,
        'full_name': full_name,
        'date_of_birth': date_of_birth,
        'photo_url': photo_url,
        'description': description,
    }, types={'date_of_birth': Date()})
    if not updated:
        raise NotFound('Profile', account_id)
    session.commit()


def create_contact(session, account_id, contact_type, contact_value, is_public=False, display_order=0):
    get_account(session, account_id)
    contact_id = insert_returning_id(session, """
        INSERT INTO user_contacts (account_id, contact_type, contact_value, is_public, display_order, created_at)
        VALUES (:account_id, :contact_type, :contact_value, :is_public, :display_order, CURRENT_TIMESTAMP)
        RETURNING id
    """, {
        'account_id': account_id,
        'contact_type': contact_type,
        'contact_value': contact_value,
        'is_public': is_public,
        'display_order': display_order,
    })
    session.commit()
    return contact_id


def list_contacts(session, account_id, public_only=False):
    query = """
        SELECT id, account_id, contact_type, contact_value, is_public, display_order
        FROM user_contacts
        WHERE account_id = :account_id
    """
    if public_only:
        query += " AND is_public = TRUE"
    query += " ORDER BY display_order, id"

    return [
        {
            'id': row['id'],
            'account_id': row['account_id'],
            'contact_type': row['contact_type'],
            'contact_value': row['contact_value'],
            'is_public': bool(row['is_public']),
            'display_order': row['display_order'],
        } for row in fetch_all(session, query, {'account_id': account_id})
    ]


def create_education(session, account_id, institution_name, degree_field, year_started=None,
                     year_completed=None, degree_level=None, is_current=False):
    get_account(session, account_id)
    education_id = insert_returning_id(session, """
        INSERT INTO education (account_id, institution_name, degree_field, year_started, year_completed,
                               degree_level, is_current, created_at)
        VALUES (:account_id, :institution_name, :degree_field, :year_started, :year_completed,
                :degree_level, :is_current, CURRENT_TIMESTAMP)
        RETURNING id
    """, {
        'account_id': account_id,
        'institution_name': institution_name,
        'degree_field': degree_field,
        'year_started': year_started,
        'year_completed': year_completed,
        'degree_level': degree_level,
        'is_current': is_current,
    })
    session.commit()
    return education_id


def get_education(session, account_id, education_id):
    """An education record owned by the given account."""
    row = fetch_one(session, """
        SELECT id, account_id, institution_name, degree_field
        FROM education
        WHERE id = :education_id AND account_id = :account_id
    """, {'education_id': education_id, 'account_id': account_id})
    if row is None:
        raise NotFound('Education', education_id)
    return row


def list_education(session, account_id):
    rows = fetch_all(session, """
        SELECT id, account_id, institution_name, degree_field, year_started, year_completed,
               degree_level, is_current, created_at
        FROM education
        WHERE account_id = :account_id
        ORDER BY year_completed DESC, year_started DESC, id DESC
    """, {'account_id': account_id})
    return [
        {
            'id': row['id'],
            'account_id': row['account_id'],
            'institution_name': row['institution_name'],
            'degree_field': row['degree_field'],
            'year_started': row['year_started'],
            'year_completed': row['year_completed'],
            'degree_level': row['degree_level'],
            'is_current': bool(row['is_current']),
            'created_at': timestamp(row['created_at']),
        } for row in rows
    ]
