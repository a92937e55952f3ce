"""Profiles, contacts and education records."""


def test_new_profile_is_active_and_empty(client, register):
    alice = register('alice')

    profile = client.get(f'/users/{alice}/profile').get_json()

    assert profile['account_id'] == alice
    assert profile['is_active'] is True
    assert profile['full_name'] is None
    assert profile['last_seen_online'] is None


def test_update_profile_stamps_last_seen(client, register):
    alice = register('alice')

    res = client.put(f'/users/{alice}/profile', json={
        'full_name': 'Alice Liddell',
        'date_of_birth': '1990-05-04',
        'description': 'Guitar teacher',
    })

    assert res.status_code == 200
    profile = client.get(f'/users/{alice}/profile').get_json()
    assert profile['full_name'] == 'Alice Liddell'
    assert profile['date_of_birth'].startswith('1990-05-04')
    assert profile['description'] == 'Guitar teacher'
    assert profile['last_seen_online'] is not None


def test_update_profile_rejects_bad_dates(client, register):
    alice = register('alice')

    res = client.put(f'/users/{alice}/profile', json={'date_of_birth': '04/05/1990'})

    assert res.status_code == 400
    assert res.get_json()['field'] == 'date_of_birth'


def test_missing_profile_is_not_found(client):
    assert client.get('/users/3/profile').status_code == 404
    assert client.put('/users/3/profile', json={'full_name': 'Nobody'}).status_code == 404


def test_contacts_can_be_limited_to_public_ones(client, register):
    alice = register('alice')
    client.post(f'/users/{alice}/contacts', json={
        'contact_type': 'phone', 'contact_value': '+100', 'is_public': False, 'display_order': 1,
    })
    client.post(f'/users/{alice}/contacts', json={
        'contact_type': 'email', 'contact_value': 'alice@example.com', 'is_public': True, 'display_order': 0,
    })

    everything = client.get(f'/users/{alice}/contacts').get_json()
    public = client.get(f'/users/{alice}/contacts?public_only=true').get_json()

    assert [contact['contact_type'] for contact in everything] == ['email', 'phone']
    assert [contact['contact_type'] for contact in public] == ['email']
    assert public[0]['is_public'] is True


def test_contact_requires_type_and_value(client, register):
    alice = register('alice')

    res = client.post(f'/users/{alice}/contacts', json={'contact_type': 'email'})

    assert res.status_code == 400
    assert res.get_json()['field'] == 'contact_value'


def test_education_is_listed_most_recent_first(client, register):
    alice = register('alice')
    client.post(f'/users/{alice}/education', json={
        'institution_name': 'Oxford', 'degree_field': 'Maths', 'year_started': 2008, 'year_completed': 2011,
    })
    client.post(f'/users/{alice}/education', json={
        'institution_name': 'MIT', 'degree_field': 'Physics', 'year_started': 2012, 'year_completed': 2014,
        'degree_level': 'MSc',
    })

    education = client.get(f'/users/{alice}/education').get_json()

    assert [entry['institution_name'] for entry in education] == ['MIT', 'Oxford']
    assert education[0]['degree_level'] == 'MSc'
    assert education[0]['is_current'] is False


def test_education_for_unknown_account_is_not_found(client):
    res = client.post('/users/8/education', json={'institution_name': 'MIT', 'degree_field': 'Physics'})

    assert res.status_code == 404
