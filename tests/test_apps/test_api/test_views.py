"""Tests for the HTTP surface: envelopes, status codes and downloads."""

import json
from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone

from server.apps.circles.logic.share_operations import create_share_link
from server.apps.circles.models import Circle, FileShareLink


def _rpc_url(procedure):
    return reverse('api:rpc', kwargs={'procedure': procedure})


def _post(client, procedure, payload=None):
    return client.post(
        _rpc_url(procedure),
        data=json.dumps(payload) if payload is not None else '',
        content_type='application/json',
    )


@pytest.mark.django_db
class TestRpcEnvelope:
    """Tests for success and error envelopes."""

    def test_mutation_success(self, client, user):
        """Test result is wrapped in result.data."""
        client.force_login(user)

        response = _post(client, 'circles.create', {'name': 'Hiking'})

        assert response.status_code == 200
        circle_id = response.json()['result']['data']['circleId']
        assert Circle.objects.get(id=circle_id).name == 'Hiking'

    def test_query_with_input_parameter(self, client, user, circle):
        """Test GET carries JSON in the input query parameter."""
        client.force_login(user)

        response = client.get(
            _rpc_url('circles.get'),
            {'input': json.dumps({'circleId': circle.id})},
        )

        data = response.json()['result']['data']
        assert response.status_code == 200
        assert data['userRole'] == 'owner'
        assert data['invitationCode'] is None
        assert data['createdAt'].startswith(str(circle.created_at.year))

    def test_query_without_input(self, client):
        """Test public queries need no input."""
        response = client.get(_rpc_url('auth.me'))

        assert response.status_code == 200
        assert response.json() == {'result': {'data': None}}

    def test_me_when_logged_in(self, client, user):
        """Test camelCase user serialization."""
        client.force_login(user)

        data = client.get(_rpc_url('auth.me')).json()['result']['data']

        assert data['id'] == user.id
        assert data['role'] == 'user'
        assert 'openId' in data

    def test_decimal_rendering(self, client, user):
        """Test amounts are rendered as decimal strings."""
        client.force_login(user)

        data = client.get(_rpc_url('payment.getUserEarnings')).json()

        assert data['result']['data']['totalEarnings'] == '0.00'

    def test_unauthorized(self, client):
        """Test anonymous call of a protected procedure."""
        response = _post(client, 'circles.create', {'name': 'Hiking'})

        assert response.status_code == 401
        assert response.json() == {
            'error': {'code': 'UNAUTHORIZED', 'message': 'Please login'},
        }

    def test_validation_error(self, client, user):
        """Test invalid input maps to BAD_REQUEST."""
        client.force_login(user)

        response = _post(client, 'circles.create', {'name': ''})

        error = response.json()['error']
        assert response.status_code == 400
        assert error['code'] == 'BAD_REQUEST'
        assert error['message'].startswith('name')

    def test_invalid_json(self, client, user):
        """Test undecodable input."""
        client.force_login(user)

        response = client.post(
            _rpc_url('circles.create'),
            data='{not json',
            content_type='application/json',
        )

        assert response.status_code == 400
        assert response.json()['error']['message'] == 'Invalid JSON input'

    def test_forbidden(self, client, other_user, private_circle):
        """Test non-owners cannot delete a circle."""
        client.force_login(other_user)

        response = _post(client, 'circles.delete', {'circleId': private_circle.id})

        assert response.status_code == 403
        assert response.json()['error']['code'] == 'FORBIDDEN'

    def test_not_found(self, client, user):
        """Test missing rows."""
        client.force_login(user)

        response = _post(client, 'circles.join', {'circleId': 99999})

        assert response.status_code == 404
        assert response.json()['error']['message'] == 'Circle not found'

    def test_unknown_procedure(self, client):
        """Test names that are not registered."""
        response = client.get(_rpc_url('circles.explode'))

        assert response.status_code == 404
        assert response.json()['error']['code'] == 'NOT_FOUND'

    def test_mutation_over_get(self, client, user):
        """Test mutations require POST."""
        client.force_login(user)

        response = client.get(
            _rpc_url('circles.create'),
            {'input': json.dumps({'name': 'Hiking'})},
        )

        assert response.status_code == 405
        assert response.json()['error']['code'] == 'METHOD_NOT_SUPPORTED'
        assert not Circle.objects.exists()

    def test_other_http_method(self, client):
        """Test verbs other than GET and POST."""
        response = client.put(_rpc_url('auth.me'))

        assert response.status_code == 405

    def test_not_implemented(self, client, user, circle):
        """Test adding members by email."""
        client.force_login(user)

        response = _post(client, 'circles.addMember', {
            'circleId': circle.id,
            'userEmail': 'friend@example.com',
        })

        assert response.status_code == 501
        assert response.json()['error']['code'] == 'NOT_IMPLEMENTED'

    def test_upload_over_http(self, client, user, circle, png_data, mock_s3):
        """Test upload returns the stored file reference."""
        client.force_login(user)

        response = _post(client, 'files.upload', {
            'circleId': circle.id,
            'filename': 'beach.png',
            'fileData': png_data,
            'mimeType': 'image/png',
            'fileSize': 29,
        })

        data = response.json()['result']['data']
        assert response.status_code == 200
        assert data['fileType'] == 'image'
        assert data['fileUrl']

    def test_logout(self, client, user):
        """Test logout ends the session."""
        client.force_login(user)

        _post(client, 'auth.logout')

        assert client.get(_rpc_url('auth.me')).json()['result']['data'] is None


@pytest.mark.django_db
class TestDownloads:
    """Tests for download redirects."""

    def test_download_redirect(self, client, stored_file):
        """Test redirect carries attachment headers."""
        response = client.get(
            reverse('api:download', kwargs={'file_id': stored_file.id}),
        )

        assert response.status_code == 302
        assert response['Location'] == stored_file.file_url
        assert response['Content-Type'] == 'image/png'
        assert 'holiday%20photo.png' in response['Content-Disposition']
        assert response['Content-Disposition'].startswith('attachment')

    def test_download_missing(self, client, db):
        """Test unknown file ID."""
        response = client.get(reverse('api:download', kwargs={'file_id': 99999}))

        assert response.status_code == 404
        assert response.json() == {'error': 'File not found'}

    def test_share_download_counts(self, client, repos, user, stored_file):
        """Test each shared download is counted."""
        link = create_share_link(repos.circles, user, stored_file.id)
        url = reverse('api:share-download', kwargs={'token': link.token})

        first = client.get(url)
        client.get(url)

        assert first.status_code == 302
        assert first['Location'] == stored_file.file_url
        link.refresh_from_db()
        assert link.download_count == 2

    def test_share_download_expired(self, client, repos, user, stored_file):
        """Test expired links are refused and not counted."""
        link = create_share_link(
            repos.circles,
            user,
            stored_file.id,
            timezone.now() - timedelta(hours=1),
        )

        response = client.get(
            reverse('api:share-download', kwargs={'token': link.token}),
        )

        assert response.status_code == 400
        assert response.json()['error']['message'] == 'Share link has expired'
        assert FileShareLink.objects.get(id=link.id).download_count == 0
