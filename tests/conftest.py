import itertools
from datetime import timedelta

import pytest

from petshop import create_app, db
from petshop.config import TestConfig
from petshop.utils.breeds import BreedValidator
from petshop.utils.util import utcnow

KNOWN_BREEDS = {'labrador', 'poodle', 'beagle', 'bulldog', 'husky'}

_sequence = itertools.count(1)


class StaticBreedValidator(BreedValidator):
    """Registry stand-in with a fixed breed list."""

    def __init__(self, breeds=KNOWN_BREEDS):
        self.breeds = set(breeds)
        self.calls = []

    def is_known_breed(self, name):
        self.calls.append(name)
        return name in self.breeds


def future_date(**delta):
    delta = delta or {'days': 1}
    return (utcnow() + timedelta(**delta)).isoformat() + 'Z'


def auth(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def breed_validator():
    return StaticBreedValidator()


@pytest.fixture
def app(breed_validator):
    app = create_app(TestConfig, breed_validator=breed_validator)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def register(client):
    """Register a user through the API; returns ``(user, token)``."""
    def _register(**overrides):
        n = next(_sequence)
        payload = {
            'nome': f'Tutor {n}',
            'email': f'tutor{n}@example.com',
            'cpf': f'{n:011d}',
            'idade': 30,
            'password': 'senha-forte-123'
        }
        payload.update(overrides)
        response = client.post('/auth/register', json=payload)
        assert response.status_code == 201, response.get_json()
        body = response.get_json()
        return body['user'], body['token']
    return _register


@pytest.fixture
def create_dog(client):
    def _create_dog(token, **overrides):
        payload = {'nome': 'Rex', 'idade': 3, 'raca': 'labrador', 'porte': 'MEDIO'}
        payload.update(overrides)
        response = client.post('/dogs', json=payload, headers=auth(token))
        assert response.status_code == 201, response.get_json()
        return response.get_json()['dog']
    return _create_dog


@pytest.fixture
def create_service(client):
    def _create_service(token, name=None, price=50.0):
        name = name or f'Banho {next(_sequence)}'
        response = client.post('/services', json={'name': name, 'price': price}, headers=auth(token))
        assert response.status_code == 201, response.get_json()
        return response.get_json()['service']
    return _create_service


@pytest.fixture
def create_appointment(client):
    def _create_appointment(token, dog_ids, service_ids, date=None):
        payload = {'date': date or future_date(), 'dogIds': dog_ids, 'serviceIds': service_ids}
        response = client.post('/appointments', json=payload, headers=auth(token))
        assert response.status_code == 201, response.get_json()
        return response.get_json()['appointment']
    return _create_appointment
