import pytest
from django.urls import reverse
from rest_framework import status

from apps.core.responses import APIResponse, envelope


class TestEnvelope:

    def test_envelope_without_data(self):
        assert envelope(409) == {'message': 'Conflict', 'status': 409}

    def test_envelope_with_data(self):
        assert envelope(200, {'email': 'a@example.com'}) == {
            'data': {'email': 'a@example.com'},
            'message': 'OK',
            'status': 200,
        }

    def test_empty_data_is_kept(self):
        """Only None drops the data key."""
        assert envelope(200, {})['data'] == {}

    def test_api_response_status(self):
        response = APIResponse.forbidden()

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data == {'message': 'Forbidden', 'status': 403}


@pytest.mark.django_db
class TestConfigViews:

    def test_health_check(self, client):
        response = client.get(reverse('health-check'))

        assert response.status_code == 200
        assert response.json() == {'message': 'OK', 'status': 200}

    def test_unknown_url_uses_envelope(self, client):
        response = client.get('/api/does-not-exist/')

        assert response.status_code == 404
        assert response.json() == {'message': 'Not Found', 'status': 404}
