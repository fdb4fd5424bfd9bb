import uuid

import pytest

from gallery_api.services.access_code_store import AccessCodeStore


def create(client, headers, **payload):
    return client.post('/api/access-codes', json=payload, headers=headers)


@pytest.mark.parametrize('method, path', [
    ('get', '/api/access-codes'),
    ('post', '/api/access-codes'),
    ('put', f'/api/access-codes/{uuid.uuid4()}'),
    ('delete', f'/api/access-codes/{uuid.uuid4()}'),
])
def test_admin_endpoints_require_a_token(client, method, path):
    response = getattr(client, method)(path, json={})

    assert response.status_code == 401
    assert response.get_json() == {'message': 'No token provided'}


def test_garbage_token_is_rejected(client):
    response = client.get('/api/access-codes', headers={'Authorization': 'Bearer nonsense'})

    assert response.status_code == 401
    assert response.get_json() == {'message': 'Invalid token'}


class TestCreate:
    def test_created_code_is_canonical_and_unused(self, client, auth_headers):
        response = create(client, auth_headers, code=' spring24 ', description='Spring', maxUses=5)

        assert response.status_code == 201
        body = response.get_json()
        assert body['toast'] == {'message': 'Access code created successfully', 'type': 'success', 'show': True}
        assert body['data']['code'] == 'SPRING24'
        assert body['data']['maxUses'] == 5
        assert body['data']['currentUses'] == 0
        assert body['data']['isActive'] is True

    def test_client_cannot_seed_usage(self, client, auth_headers):
        response = create(client, auth_headers, code='SEEDED', currentUses=7)

        assert response.get_json()['data']['currentUses'] == 0

    def test_duplicate_code_is_rejected(self, client, auth_headers):
        create(client, auth_headers, code='TWIN')

        response = create(client, auth_headers, code='twin ')

        assert response.status_code == 400
        assert response.get_json()['toast']['message'] == 'Access code already exists'
        assert response.get_json()['toast']['type'] == 'error'

    def test_missing_code_is_rejected(self, client, auth_headers):
        response = create(client, auth_headers, description='no code')

        assert response.status_code == 400
        assert response.get_json()['toast']['message'] == 'Access code is required'

    def test_non_text_description_is_400(self, client, auth_headers):
        response = create(client, auth_headers, code='NUMERIC', description=5)

        assert response.status_code == 400
        assert response.get_json()['toast']['message'] == 'Description must be text'


def test_list_is_newest_first(client, auth_headers):
    for code in ('ALPHA', 'BRAVO', 'CHARLIE'):
        create(client, auth_headers, code=code)

    response = client.get('/api/access-codes', headers=auth_headers)

    assert response.status_code == 200
    assert [c['code'] for c in response.get_json()] == ['CHARLIE', 'BRAVO', 'ALPHA']


class TestUpdate:
    def test_update_edits_fields(self, client, auth_headers):
        code_id = create(client, auth_headers, code='EDITME', maxUses=2).get_json()['data']['id']

        response = client.put(f'/api/access-codes/{code_id}', headers=auth_headers, json={
            'code': 'edited', 'description': 'changed', 'maxUses': 9, 'isActive': False
        })

        assert response.status_code == 200
        data = response.get_json()['data']
        assert response.get_json()['toast']['message'] == 'Access code updated successfully'
        assert (data['code'], data['description'], data['maxUses'], data['isActive']) == \
            ('EDITED', 'changed', 9, False)

    def test_update_requires_code(self, client, auth_headers):
        code_id = create(client, auth_headers, code='KEEP').get_json()['data']['id']

        response = client.put(f'/api/access-codes/{code_id}', headers=auth_headers, json={'code': '  '})

        assert response.status_code == 400

    def test_update_to_existing_code_is_rejected(self, client, auth_headers):
        create(client, auth_headers, code='FIRST')
        code_id = create(client, auth_headers, code='SECOND').get_json()['data']['id']

        response = client.put(f'/api/access-codes/{code_id}', headers=auth_headers, json={'code': 'first'})

        assert response.status_code == 400
        assert response.get_json()['toast']['message'] == 'Access code already exists'

    @pytest.mark.parametrize('code_id', [str(uuid.uuid4()), 'not-an-id'])
    def test_update_unknown_code_is_404(self, client, auth_headers, code_id):
        response = client.put(f'/api/access-codes/{code_id}', headers=auth_headers, json={'code': 'X'})

        assert response.status_code == 404
        assert response.get_json()['toast']['message'] == 'Access code not found'


class TestDelete:
    def test_delete_then_code_is_unknown(self, client, auth_headers):
        code_id = create(client, auth_headers, code='TEMP').get_json()['data']['id']

        response = client.delete(f'/api/access-codes/{code_id}', headers=auth_headers)

        assert response.status_code == 200
        assert response.get_json()['toast']['message'] == 'Access code deleted successfully'
        assert client.get('/api/access-codes/validate/TEMP').status_code == 404

    def test_delete_unknown_code_is_404(self, client, auth_headers):
        response = client.delete(f'/api/access-codes/{uuid.uuid4()}', headers=auth_headers)

        assert response.status_code == 404


class TestPublicEndpoints:
    def test_validate_previews_without_consuming(self, app, client, auth_headers):
        create(client, auth_headers, code='PREVIEW', description='Look', maxUses=1)

        for _ in range(3):
            response = client.get('/api/access-codes/validate/preview')
            assert response.status_code == 200
            assert response.get_json() == {
                'valid': True,
                'message': 'Access code is valid',
                'code': 'PREVIEW',
                'description': 'Look',
                'remainingUses': 1,
            }

        with app.app_context():
            assert AccessCodeStore().lookup('PREVIEW').record.current_uses == 0

    def test_validate_unknown_code_is_404(self, client):
        response = client.get('/api/access-codes/validate/NOPE')

        assert response.status_code == 404
        assert response.get_json() == {'valid': False, 'reason': 'not_found', 'message': 'Invalid access code'}

    def test_use_consumes_until_exhausted(self, client, auth_headers):
        create(client, auth_headers, code='SINGLE', maxUses=1)

        first = client.post('/api/access-codes/use/single')
        assert first.status_code == 200
        assert first.get_json()['success'] is True
        assert first.get_json()['remainingUses'] == 0

        second = client.post('/api/access-codes/use/SINGLE')
        assert second.status_code == 400
        assert second.get_json() == {
            'success': False,
            'reason': 'exhausted',
            'message': 'This access code has reached its maximum usage limit',
        }

        listed = client.get('/api/access-codes', headers=auth_headers).get_json()
        assert listed[0]['currentUses'] == 1
        assert listed[0]['isActive'] is False

    def test_use_inactive_code_is_400(self, client, auth_headers):
        create(client, auth_headers, code='PAUSED', isActive=False)

        response = client.post('/api/access-codes/use/PAUSED')

        assert response.status_code == 400
        assert response.get_json()['reason'] == 'inactive'
