"""Account lifecycle: registration, login, soft deletion."""

import pytest
from sqlalchemy import text

from helpers import audit_rows, count
from skillswap import accounts, audit, auth
from skillswap.errors import Conflict, NotFound, Unauthorized


def test_register_creates_account_profile_and_audit_row(client, session):
    res = client.post('/accounts/register', json={'login': 'alice', 'password': 'pw123'})

    assert res.status_code == 201
    account_id = res.get_json()['account_id']
    assert account_id == 1
    assert count(session, 'accounts') == 1
    assert count(session, 'user_profiles', 'account_id = :id AND is_active = TRUE', id=account_id) == 1
    assert audit_rows(session, audit.USER_REGISTERED) == [{
        'actor_account_id': account_id,
        'entity_type': 'Account',
        'entity_id': account_id,
        'details': None,
        'result': 'Success',
    }]


def test_register_never_stores_plaintext_password(client, session, register):
    register('alice', 'pw123')

    stored = session.execute(text("SELECT password_hash FROM accounts")).scalar_one()
    assert stored != 'pw123'
    assert stored.startswith('$2')


def test_register_duplicate_login_conflicts(client, session, register):
    register('alice')

    res = client.post('/accounts/register', json={'login': 'alice', 'password': 'other'})

    assert res.status_code == 409
    assert res.get_json()['code'] == 'CONFLICT'
    assert count(session, 'accounts') == 1


def test_register_requires_login_and_password(client):
    res = client.post('/accounts/register', json={'login': 'alice'})

    assert res.status_code == 400
    assert res.get_json()['field'] == 'password'


def test_register_rolls_back_when_a_later_insert_fails(session, monkeypatch):
    def broken_audit(*args, **kwargs):
        raise RuntimeError('audit table unavailable')

    monkeypatch.setattr(audit, 'record', broken_audit)

    with pytest.raises(RuntimeError):
        accounts.register(session, 'alice', 'pw123')

    assert count(session, 'accounts') == 0
    assert count(session, 'user_profiles') == 0


def test_login_returns_identity_and_stamps_last_login(client, session, register):
    account_id = register('alice', 'pw123')

    res = client.post('/accounts/login', json={'login': 'alice', 'password': 'pw123'})

    assert res.status_code == 200
    assert res.get_json() == {'account_id': account_id, 'login': 'alice', 'is_admin': False}
    last_login = session.execute(text("SELECT last_login_at FROM accounts WHERE id = :id"),
                                 {'id': account_id}).scalar_one()
    assert last_login is not None


def test_login_failures_are_indistinguishable(client, register):
    register('alice', 'pw123')

    wrong_password = client.post('/accounts/login', json={'login': 'alice', 'password': 'nope'})
    unknown_login = client.post('/accounts/login', json={'login': 'bob', 'password': 'pw123'})

    assert wrong_password.status_code == unknown_login.status_code == 401
    assert wrong_password.get_json() == unknown_login.get_json()


def test_authenticate_rejects_deleted_account(session, register):
    account_id = register('alice', 'pw123')
    accounts.soft_delete(session, account_id)

    with pytest.raises(Unauthorized):
        accounts.authenticate(session, 'alice', 'pw123')


def test_soft_delete_cascades_to_profile_and_active_posts(client, session, register, catalog):
    alice = register('alice')
    bob = register('bob')
    for title in ('one', 'two', 'three'):
        client.post(f'/users/{alice}/posts', json={
            'skill_id': catalog['Guitar'], 'post_type': 'Offer', 'title': title, 'details': 'd',
        })
    client.post(f'/users/{bob}/posts', json={
        'skill_id': catalog['Guitar'], 'post_type': 'Request', 'title': 'bob', 'details': 'd',
    })
    # Already cancelled posts keep their status
    client.post(f'/users/{alice}/posts', json={
        'skill_id': catalog['Spanish'], 'post_type': 'Offer', 'title': 'old', 'details': 'd',
    })
    client.put('/posts/5/status', json={'status': 'Cancelled'})

    res = client.delete(f'/accounts/{alice}')

    assert res.status_code == 200
    assert res.get_json()['closed_posts'] == 3
    assert count(session, 'skill_posts', "account_id = :id AND status = 'Closed' AND deleted_at IS NOT NULL",
                 id=alice) == 3
    assert count(session, 'skill_posts', "status = 'Cancelled'") == 1
    assert count(session, 'user_profiles', 'account_id = :id AND is_active = FALSE', id=alice) == 1
    assert count(session, 'accounts', 'id = :id AND deleted_at IS NOT NULL', id=alice) == 1

    # Bob is untouched
    assert count(session, 'skill_posts', "account_id = :id AND status = 'Active' AND deleted_at IS NULL",
                 id=bob) == 1
    assert count(session, 'user_profiles', 'account_id = :id AND is_active = TRUE', id=bob) == 1
    assert [row['entity_id'] for row in audit_rows(session, audit.ACCOUNT_DELETED)] == [alice]


def test_soft_delete_unknown_account_is_not_found(client, session):
    res = client.delete('/accounts/42')

    assert res.status_code == 404
    assert audit_rows(session, audit.ACCOUNT_DELETED) == []


def test_soft_delete_twice_is_not_found(session, register):
    account_id = register('alice')
    accounts.soft_delete(session, account_id)

    with pytest.raises(NotFound):
        accounts.soft_delete(session, account_id)


def test_login_can_be_reused_after_soft_delete(session, register):
    first = register('alice')
    accounts.soft_delete(session, first)

    second = accounts.register(session, 'alice', 'new-password')

    assert second != first
    assert accounts.authenticate(session, 'alice', 'new-password')['account_id'] == second


def test_register_conflict_raised_from_workflow(session, register):
    register('alice')

    with pytest.raises(Conflict):
        accounts.register(session, 'alice', 'pw123')


def test_soft_delete_rolls_back_everything_when_audit_fails(client, session, register, catalog, monkeypatch):
    alice = register('alice')
    for title in ('one', 'two'):
        client.post(f'/users/{alice}/posts', json={
            'skill_id': catalog['Guitar'], 'post_type': 'Offer', 'title': title, 'details': 'd',
        })

    def broken_audit(*args, **kwargs):
        raise RuntimeError('audit table unavailable')

    monkeypatch.setattr(audit, 'record', broken_audit)

    with pytest.raises(RuntimeError):
        accounts.soft_delete(session, alice)

    assert count(session, 'accounts', 'id = :id AND deleted_at IS NULL', id=alice) == 1
    assert count(session, 'user_profiles', 'account_id = :id AND is_active = TRUE', id=alice) == 1
    assert count(session, 'skill_posts', "account_id = :id AND status = 'Active' AND deleted_at IS NULL",
                 id=alice) == 2


def test_dummy_hash_is_ready_before_the_first_login(app, client, monkeypatch):
    assert app.extensions['skillswap_dummy_hash'].startswith('$2')

    def no_hashing(password):
        raise AssertionError('unknown logins must not hash at request time')

    monkeypatch.setattr(auth, 'hash_password', no_hashing)

    res = client.post('/accounts/login', json={'login': 'nobody', 'password': 'pw123'})

    assert res.status_code == 401
