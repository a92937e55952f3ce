import logging

from sqlalchemy.exc import IntegrityError

from skillswap import audit
from skillswap.auth import burn_password_check, check_password, hash_password
from skillswap.database import atomic, execute, fetch_one, insert_returning_id
from skillswap.errors import Conflict, NotFound, Unauthorized
from skillswap.models import PostStatus

logger = logging.getLogger(__name__)


def register(session, login, password):
    """
    Create an account together with its profile and a UserRegistered audit row.

    All three rows are written in one transaction. Raises Conflict when a live
    account already holds the login.
    """
    # Check if the login is already taken
    existing = fetch_one(session, """
        SELECT id FROM accounts WHERE login = :login AND deleted_at IS NULL
    """, {'login': login})
    if existing:
        raise Conflict(f"Login '{login}' is already taken")

    password_hash = hash_password(password)

    try:
        with atomic(session):
            account_id = insert_returning_id(session, """
                INSERT INTO accounts (login, password_hash, is_admin, email_confirmed, created_at)
                VALUES (:login, :password_hash, FALSE, FALSE, CURRENT_TIMESTAMP)
                RETURNING id
            """, {'login': login, 'password_hash': password_hash})

            execute(session, """
                INSERT INTO user_profiles (account_id, is_active, created_at)
                VALUES (:account_id, TRUE, CURRENT_TIMESTAMP)
            """, {'account_id': account_id})

            audit.record(session, audit.USER_REGISTERED, 'Account', account_id, actor_id=account_id)
    except IntegrityError:
        # Lost a race with a concurrent registration of the same login
        raise Conflict(f"Login '{login}' is already taken")

    logger.info("Registered account %s", account_id)
    return account_id


def authenticate(session, login, password):
    """
    Verify credentials with a single lookup.

    Unknown login, deleted account and wrong password all raise the same
    Unauthorized error.
    """
    account = fetch_one(session, """
        SELECT id, login, is_admin, password_hash
        FROM accounts
        WHERE login = :login AND deleted_at IS NULL
    """, {'login': login})

    if account is None:
        burn_password_check(password)
        raise Unauthorized('Invalid login or password')
    if not check_password(account['password_hash'], password):
        raise Unauthorized('Invalid login or password')

    execute(session, "UPDATE accounts SET last_login_at = CURRENT_TIMESTAMP WHERE id = :account_id",
            {'account_id': account['id']})
    session.commit()

    return {
        'account_id': account['id'],
        'login': account['login'],
        'is_admin': bool(account['is_admin']),
    }


def get_account(session, account_id):
    account = fetch_one(session, """
        SELECT id, login, is_admin, email_confirmed, last_login_at, created_at
        FROM accounts
        WHERE id = :account_id AND deleted_at IS NULL
    """, {'account_id': account_id})
    if account is None:
        raise NotFound('Account', account_id)
    return account


def soft_delete(session, account_id):
    """
    Soft-delete an account: stamp deleted_at, deactivate the profile, close
    every Active post it owns and audit the deletion, all or nothing.

    Returns the number of posts that were closed.
    """
    with atomic(session):
        deleted = execute(session, """
            UPDATE accounts
            SET deleted_at = CURRENT_TIMESTAMP, updated_at = CURRENT_TIMESTAMP
            WHERE id = :account_id AND deleted_at IS NULL
        """, {'account_id': account_id})
        if not deleted:
            raise NotFound('Account', account_id)

        execute(session, """
            UPDATE user_profiles
            SET is_active = FALSE, updated_at = CURRENT_TIMESTAMP
            WHERE account_id = :account_id
        """, {'account_id': account_id})

        closed_posts = execute(session, """
            UPDATE skill_posts
            SET status = :closed, deleted_at = CURRENT_TIMESTAMP, updated_at = CURRENT_TIMESTAMP
            WHERE account_id = :account_id AND status = :active AND deleted_at IS NULL
        """, {
            'account_id': account_id,
            'closed': PostStatus.CLOSED.value,
            'active': PostStatus.ACTIVE.value,
        })

        audit.record(session, audit.ACCOUNT_DELETED, 'Account', account_id, actor_id=account_id)

    logger.info("Soft-deleted account %s, closed %s post(s)", account_id, closed_posts)
    return closed_posts


def promote_to_admin(session, login):
    updated = execute(session, """
        UPDATE accounts
        SET is_admin = TRUE, updated_at = CURRENT_TIMESTAMP
        WHERE login = :login AND deleted_at IS NULL
    """, {'login': login})
    if not updated:
        raise NotFound('Account', login)
    session.commit()
    logger.info("Granted admin rights to %s", login)
