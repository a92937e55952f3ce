"""Shared fixtures: a fresh in-memory database per test."""

import pytest
from sqlalchemy import text

from skillswap import create_app, db
from skillswap.config import TestConfig
from skillswap.models import Skill, SkillCategory


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    return db.session


@pytest.fixture
def catalog(session):
    """Two categories and three skills; returns ids by name."""
    languages = SkillCategory(name='Languages', display_order=2)
    music = SkillCategory(name='Music', display_order=1)
    session.add_all([languages, music])
    session.flush()

    spanish = Skill(skill_name='Spanish', category_id=languages.id)
    german = Skill(skill_name='German', category_id=languages.id)
    guitar = Skill(skill_name='Guitar', category_id=music.id)
    session.add_all([spanish, german, guitar])
    session.commit()

    return {
        'Languages': languages.id,
        'Music': music.id,
        'Spanish': spanish.id,
        'German': german.id,
        'Guitar': guitar.id,
    }


@pytest.fixture
def levels(session):
    rows = session.execute(text("SELECT name, id FROM skill_levels")).fetchall()
    return {name: level_id for name, level_id in rows}


@pytest.fixture
def register(client):
    """Register an account over HTTP and return its id."""
    def _register(login, password='pw123'):
        res = client.post('/accounts/register', json={'login': login, 'password': password})
        assert res.status_code == 201, res.get_json()
        return res.get_json()['account_id']
    return _register
