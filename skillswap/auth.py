from functools import wraps

from flask import current_app, g, request

from skillswap import bcrypt
from skillswap.errors import Unauthorized


def hash_password(password):
    """Salted bcrypt hash; cost comes from BCRYPT_LOG_ROUNDS."""
    return bcrypt.generate_password_hash(password).decode('utf-8')


def check_password(password_hash, password):
    return bcrypt.check_password_hash(password_hash, password)


def init_dummy_hash(app):
    """Hash a throwaway password once per app, at the configured bcrypt cost."""
    with app.app_context():
        app.extensions['skillswap_dummy_hash'] = hash_password('not-a-real-password')


def burn_password_check(password):
    """
    Spend one bcrypt verification against the throwaway hash.

    Used when the login does not exist, so that path costs the same as a
    wrong password and response timing does not reveal which logins exist.
    """
    check_password(current_app.extensions['skillswap_dummy_hash'], password)


def admin_required(f):
    """
    Decorator for moderation endpoints.

    The caller's admin account id is trusted from the configured header
    (X-Admin-ID by default); it is exposed to the view as g.admin_id.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        header = current_app.config['ADMIN_HEADER']
        raw_admin_id = request.headers.get(header)
        if not raw_admin_id:
            raise Unauthorized(f'{header} header is missing')

        try:
            admin_id = int(raw_admin_id)
        except ValueError:
            raise Unauthorized(f'{header} header is not a valid account id')
        if admin_id <= 0:
            raise Unauthorized(f'{header} header is not a valid account id')

        g.admin_id = admin_id
        return f(*args, **kwargs)
    return decorated_function
