import pytest

from petshop import db
from petshop.models import Appointment, Service, appointment_dog, appointment_service
from tests.conftest import auth, future_date


@pytest.fixture
def owner(register, create_dog, create_service):
    user, token = register()
    dog = create_dog(token, nome='Bidu')
    other_dog = create_dog(token, nome='Thor', raca='beagle')
    bath = create_service(token, name='Banho', price=50.0)
    grooming = create_service(token, name='Tosa', price=80.0)
    return {'user': user, 'token': token, 'dog': dog, 'other_dog': other_dog,
            'bath': bath, 'grooming': grooming}


@pytest.fixture
def stranger(register, create_dog):
    user, token = register()
    dog = create_dog(token, nome='Alien')
    return {'user': user, 'token': token, 'dog': dog}


def _dog_link_rows(appointment_id):
    return db.session.query(appointment_dog).filter_by(appointment_id=appointment_id).all()


def test_create_appointment_with_one_dog_and_two_services(client, owner):
    response = client.post('/appointments', json={
        'date': future_date(days=2),
        'dogIds': [owner['dog']['id']],
        'serviceIds': [owner['bath']['id'], owner['grooming']['id']],
    }, headers=auth(owner['token']))

    assert response.status_code == 201
    appointment = response.get_json()['appointment']
    assert appointment['status'] == 'AGENDADO'
    assert appointment['userId'] == owner['user']['id']
    assert [d['id'] for d in appointment['dogs']] == [owner['dog']['id']]
    assert {s['id'] for s in appointment['services']} == {owner['bath']['id'], owner['grooming']['id']}
    # full entities, not just ids
    assert appointment['dogs'][0]['porte'] == 'MEDIO'
    assert appointment['services'][0]['price'] in (50.0, 80.0)


def test_create_with_foreign_dog_is_rejected_and_nothing_written(app, client, owner, stranger):
    response = client.post('/appointments', json={
        'date': future_date(),
        'dogIds': [stranger['dog']['id']],
        'serviceIds': [owner['bath']['id']],
    }, headers=auth(owner['token']))

    assert response.status_code == 400
    assert response.get_json()['invalidIds'] == [stranger['dog']['id']]
    with app.app_context():
        assert Appointment.query.count() == 0
        assert db.session.query(appointment_dog).count() == 0
        assert db.session.query(appointment_service).count() == 0


def test_one_foreign_dog_among_owned_ones_fails_the_whole_request(app, client, owner, stranger):
    response = client.post('/appointments', json={
        'date': future_date(),
        'dogIds': [owner['dog']['id'], owner['other_dog']['id'], stranger['dog']['id']],
        'serviceIds': [owner['bath']['id']],
    }, headers=auth(owner['token']))

    assert response.status_code == 400
    assert response.get_json()['invalidIds'] == [stranger['dog']['id']]
    with app.app_context():
        assert Appointment.query.count() == 0


def test_unknown_service_is_rejected(client, owner):
    missing = '00000000-0000-4000-8000-000000000000'
    response = client.post('/appointments', json={
        'date': future_date(),
        'dogIds': [owner['dog']['id']],
        'serviceIds': [owner['bath']['id'], missing],
    }, headers=auth(owner['token']))

    assert response.status_code == 400
    assert response.get_json()['invalidIds'] == [missing]


def test_duplicate_ids_are_tolerated(client, owner):
    response = client.post('/appointments', json={
        'date': future_date(),
        'dogIds': [owner['dog']['id'], owner['dog']['id']],
        'serviceIds': [owner['bath']['id'], owner['bath']['id']],
    }, headers=auth(owner['token']))

    assert response.status_code == 201
    appointment = response.get_json()['appointment']
    assert len(appointment['dogs']) == 1
    assert len(appointment['services']) == 1


def test_date_too_close_is_rejected_before_reference_checks(app, client, owner, stranger):
    response = client.post('/appointments', json={
        'date': future_date(seconds=10),
        'dogIds': [stranger['dog']['id']],
        'serviceIds': [owner['bath']['id']],
    }, headers=auth(owner['token']))

    assert response.status_code == 400
    body = response.get_json()
    assert 'invalidIds' not in body
    assert [e['path'] for e in body['errors']] == [['date']]
    with app.app_context():
        assert Appointment.query.count() == 0


def test_empty_id_lists_are_rejected(client, owner):
    response = client.post('/appointments', json={
        'date': future_date(), 'dogIds': [], 'serviceIds': []
    }, headers=auth(owner['token']))

    assert response.status_code == 400
    paths = [e['path'] for e in response.get_json()['errors']]
    assert ['dogIds'] in paths
    assert ['serviceIds'] in paths


def test_get_after_create_returns_the_same_sets(client, owner, create_appointment):
    created = create_appointment(owner['token'],
                                 [owner['dog']['id'], owner['other_dog']['id']],
                                 [owner['grooming']['id']])

    response = client.get(f"/appointments/{created['id']}", headers=auth(owner['token']))

    assert response.status_code == 200
    appointment = response.get_json()
    assert {d['id'] for d in appointment['dogs']} == {owner['dog']['id'], owner['other_dog']['id']}
    assert {s['id'] for s in appointment['services']} == {owner['grooming']['id']}
    assert appointment['dogs'] == created['dogs']
    assert 'telefone' in appointment['user']


def test_foreign_appointment_looks_exactly_like_a_missing_one(client, owner, stranger, create_appointment):
    created = create_appointment(owner['token'], [owner['dog']['id']], [owner['bath']['id']])

    foreign = client.get(f"/appointments/{created['id']}", headers=auth(stranger['token']))
    missing = client.get('/appointments/00000000-0000-4000-8000-000000000000',
                         headers=auth(stranger['token']))

    assert foreign.status_code == missing.status_code == 404
    assert foreign.get_json() == missing.get_json()


def test_list_is_ordered_by_date_with_light_projection(client, owner, stranger, create_appointment):
    later = create_appointment(owner['token'], [owner['dog']['id']], [owner['bath']['id']],
                               date=future_date(days=10))
    sooner = create_appointment(owner['token'], [owner['other_dog']['id']], [owner['grooming']['id']],
                                date=future_date(days=3))

    response = client.get('/appointments', headers=auth(owner['token']))

    assert response.status_code == 200
    appointments = response.get_json()
    assert [a['id'] for a in appointments] == [sooner['id'], later['id']]
    assert appointments[0]['dogs'] == [{'nome': 'Thor', 'raca': 'beagle'}]
    assert appointments[0]['services'] == [{'name': 'Tosa', 'price': 80.0}]

    other = client.get('/appointments', headers=auth(stranger['token']))
    assert other.get_json() == []


def test_update_replaces_dog_set(app, client, owner, create_appointment):
    created = create_appointment(owner['token'], [owner['dog']['id']], [owner['bath']['id']])

    response = client.put(f"/appointments/{created['id']}",
                          json={'dogIds': [owner['other_dog']['id']]},
                          headers=auth(owner['token']))

    assert response.status_code == 200
    appointment = response.get_json()['appointment']
    assert [d['id'] for d in appointment['dogs']] == [owner['other_dog']['id']]
    assert [s['id'] for s in appointment['services']] == [owner['bath']['id']]
    with app.app_context():
        rows = _dog_link_rows(created['id'])
        assert [row.dog_id for row in rows] == [owner['other_dog']['id']]


def test_status_only_update_leaves_sets_untouched(client, owner, create_appointment):
    created = create_appointment(owner['token'],
                                 [owner['dog']['id'], owner['other_dog']['id']],
                                 [owner['bath']['id'], owner['grooming']['id']])

    response = client.put(f"/appointments/{created['id']}", json={'status': 'CONCLUIDO'},
                          headers=auth(owner['token']))

    assert response.status_code == 200
    appointment = response.get_json()['appointment']
    assert appointment['status'] == 'CONCLUIDO'
    assert appointment['dogs'] == created['dogs']
    assert appointment['services'] == created['services']


def test_update_with_bad_services_changes_nothing(client, owner, create_appointment):
    created = create_appointment(owner['token'], [owner['dog']['id']], [owner['bath']['id']])

    response = client.put(f"/appointments/{created['id']}", json={
        'status': 'CANCELADO',
        'dogIds': [owner['other_dog']['id']],
        'serviceIds': ['00000000-0000-4000-8000-000000000000'],
    }, headers=auth(owner['token']))

    assert response.status_code == 400
    current = client.get(f"/appointments/{created['id']}", headers=auth(owner['token'])).get_json()
    assert current['status'] == 'AGENDADO'
    assert [d['id'] for d in current['dogs']] == [owner['dog']['id']]


def test_update_with_foreign_dog_is_rejected(client, owner, stranger, create_appointment):
    created = create_appointment(owner['token'], [owner['dog']['id']], [owner['bath']['id']])

    response = client.put(f"/appointments/{created['id']}", json={'dogIds': [stranger['dog']['id']]},
                          headers=auth(owner['token']))

    assert response.status_code == 400
    assert response.get_json()['invalidIds'] == [stranger['dog']['id']]


def test_update_and_delete_of_foreign_appointment_answer_404(client, owner, stranger, create_appointment):
    created = create_appointment(owner['token'], [owner['dog']['id']], [owner['bath']['id']])

    update = client.put(f"/appointments/{created['id']}", json={'status': 'CANCELADO'},
                        headers=auth(stranger['token']))
    delete = client.delete(f"/appointments/{created['id']}", headers=auth(stranger['token']))

    assert update.status_code == 404
    assert delete.status_code == 404
    still_there = client.get(f"/appointments/{created['id']}", headers=auth(owner['token']))
    assert still_there.get_json()['status'] == 'AGENDADO'


def test_update_rejects_invalid_status_and_past_date(client, owner, create_appointment):
    created = create_appointment(owner['token'], [owner['dog']['id']], [owner['bath']['id']])

    response = client.put(f"/appointments/{created['id']}",
                          json={'status': 'PERDIDO', 'date': '2001-01-01T10:00:00Z'},
                          headers=auth(owner['token']))

    assert response.status_code == 400
    paths = sorted(e['path'][0] for e in response.get_json()['errors'])
    assert paths == ['date', 'status']


def test_delete_removes_appointment_and_links(app, client, owner, create_appointment):
    created = create_appointment(owner['token'], [owner['dog']['id']], [owner['bath']['id']])

    response = client.delete(f"/appointments/{created['id']}", headers=auth(owner['token']))

    assert response.status_code == 204
    assert client.get(f"/appointments/{created['id']}", headers=auth(owner['token'])).status_code == 404
    with app.app_context():
        assert _dog_link_rows(created['id']) == []
        assert db.session.query(appointment_service).count() == 0


def test_linked_service_cannot_be_deleted(app, client, owner, create_appointment):
    create_appointment(owner['token'], [owner['dog']['id']], [owner['bath']['id']])

    response = client.delete(f"/services/{owner['bath']['id']}", headers=auth(owner['token']))

    assert response.status_code == 409
    with app.app_context():
        assert db.session.get(Service, owner['bath']['id']) is not None
        rows = db.session.query(appointment_service).filter_by(service_id=owner['bath']['id']).all()
        assert len(rows) == 1


def test_appointments_require_a_token(client):
    assert client.get('/appointments').status_code == 401
    assert client.get('/appointments', headers=auth('not-a-jwt')).status_code == 403
