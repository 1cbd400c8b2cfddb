import pytest
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.request import Request
from rest_framework.test import APIRequestFactory

from common.exceptions import Conflict, DomainError, _first_message, custom_exception_handler
from common.query_params import choice_param, int_param

pytestmark = pytest.mark.django_db


def _request(query=''):
    return Request(APIRequestFactory().get(f'/anything/{query}'))


def test_domain_error_envelope():
    response = custom_exception_handler(DomainError('Nope.', code='nope'), {})

    assert response.status_code == 400
    assert response.data == {'success': False, 'error': {'code': 'nope', 'message': 'Nope.'}}


def test_conflict_defaults():
    response = custom_exception_handler(Conflict(), {})

    assert response.status_code == 409
    assert response.data['error']['code'] == 'conflict'


def test_not_found_envelope():
    response = custom_exception_handler(NotFound('Group not found.'), {})

    assert response.status_code == 404
    assert response.data['error'] == {'code': 'not_found', 'message': 'Group not found.'}


def test_django_validation_error_is_converted():
    response = custom_exception_handler(DjangoValidationError({'name': ['Too short.']}), {})

    assert response.status_code == 400
    assert response.data['error']['code'] == 'validation_error'
    assert response.data['error']['message'] == 'Too short.'
    assert response.data['error']['details'] == {'name': ['Too short.']}


def test_unhandled_exception_is_a_500():
    response = custom_exception_handler(RuntimeError('boom'), {'view': None})

    assert response.status_code == 500
    assert response.data['success'] is False
    assert response.data['error']['code'] == 'internal_error'


def test_first_message():
    assert _first_message({'a': {'b': ['deep']}}) == 'deep'
    assert _first_message([]) is None


def test_int_param():
    assert int_param(_request(), 'limit', 20) == 20
    assert int_param(_request('?limit=500'), 'limit', 20, minimum=1, maximum=100) == 100
    with pytest.raises(ValidationError):
        int_param(_request('?limit=0'), 'limit', 20, minimum=1)
    with pytest.raises(ValidationError):
        int_param(_request('?limit=ten'), 'limit', 20)


def test_choice_param():
    assert choice_param(_request('?sort=top'), 'sort', ('recent', 'top'), 'recent') == 'top'
    assert choice_param(_request('?sort=worst'), 'sort', ('recent', 'top'), 'recent') == 'recent'


def test_health_check(api_client):
    response = api_client.get('/api/v1/health/')

    assert response.status_code == 200
    assert response.json() == {'status': 'ok', 'service': 'movienight-api'}
