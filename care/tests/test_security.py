import base64
import json
from datetime import timedelta

import pytest
from django.urls import reverse
from rest_framework.test import APIClient, APIRequestFactory
from rest_framework_simplejwt.tokens import AccessToken

from care.authentication import BearerTokenAuthentication, Identity
from care.models import Account
from care.permissions import IsAdminRole
from care.services.tokens import issue_access_token

pytestmark = pytest.mark.django_db


def register(client, **body):
    return client.post(reverse('register_view'), body, format='json')


def login(client, email, password):
    return client.post(reverse('login_view'), {'email': email, 'password': password}, format='json')


def test_register_returns_increasing_ids():
    client = APIClient()
    ids = []
    for i in range(3):
        r = register(client, name=f'User {i}', email=f'u{i}@x.com', password='pw')
        assert r.status_code == 201
        ids.append(r.data['id'])
    assert len(set(ids)) == 3
    assert ids == sorted(ids)


def test_register_stores_hash_not_password():
    client = APIClient()
    r = register(client, name='Alice', email='alice@x.com', password='pw123')
    account = Account.objects.get(id=r.data['id'])
    assert account.password != 'pw123'
    assert account.check_password('pw123')
    assert account.role == 'patient'


def test_register_accepts_role_as_given():
    client = APIClient()
    r = register(client, name='Doc', email='doc@x.com', password='pw', role='doctor')
    assert r.status_code == 201
    assert Account.objects.get(id=r.data['id']).role == 'doctor'


def test_register_keeps_long_role_verbatim():
    role = 'clinical-research-coordinator-' + 'x' * 30
    r = register(APIClient(), name='Res', email='res@x.com', password='pw', role=role)
    assert r.status_code == 201
    assert Account.objects.get(id=r.data['id']).role == role


def test_register_stores_punctuation_verbatim():
    client = APIClient()
    r = register(client, name="  Tom & Jerry <O'Brien>  ", email='tom@x.com', password='pw')
    assert r.status_code == 201
    assert Account.objects.get(id=r.data['id']).name == "Tom & Jerry <O'Brien>"
    r = login(client, 'tom@x.com', 'pw')
    assert r.data['user']['name'] == "Tom & Jerry <O'Brien>"
    assert AccessToken(r.data['token'])['name'] == "Tom & Jerry <O'Brien>"


def test_duplicate_email_is_rejected_regardless_of_other_fields():
    client = APIClient()
    assert register(client, name='Alice', email='alice@x.com', password='pw1').status_code == 201
    r = register(client, name='Other', email='alice@x.com', password='pw2', role='admin')
    assert r.status_code == 400
    assert 'UNIQUE' in r.data['error']
    assert Account.objects.filter(email='alice@x.com').count() == 1


def test_register_requires_email_and_password():
    client = APIClient()
    r = register(client, name='NoPassword', email='np@x.com')
    assert r.status_code == 400
    assert r.data['error'].startswith('password:')
    r = register(client, name='NoEmail', email='', password='pw')
    assert r.status_code == 400
    assert 'email' in r.data['fields']
    assert not Account.objects.exists()


def test_login_failures_are_indistinguishable():
    Account.objects.create_user(email='alice@x.com', password='pw123', name='Alice')
    client = APIClient()
    wrong_password = login(client, 'alice@x.com', 'nope')
    no_account = login(client, 'ghost@x.com', 'pw123')
    assert wrong_password.status_code == no_account.status_code == 401
    assert wrong_password.data == no_account.data == {'error': 'Invalid credentials'}


def test_login_returns_token_and_public_user():
    account = Account.objects.create_user(email='alice@x.com', password='pw123', name='Alice')
    r = login(APIClient(), 'alice@x.com', 'pw123')
    assert r.status_code == 200
    assert r.data['user'] == {'id': account.id, 'name': 'Alice', 'email': 'alice@x.com', 'role': 'patient'}
    assert 'password' not in r.data['user']

    token = AccessToken(r.data['token'])
    assert token['id'] == account.id
    assert isinstance(token['id'], int)
    assert token['email'] == 'alice@x.com'
    assert token['role'] == 'patient'
    assert token['name'] == 'Alice'
    account.refresh_from_db()
    assert account.last_login is not None


def test_login_ignores_role_in_body():
    Account.objects.create_user(email='u1@x.com', password='pw', name='U1')
    r = APIClient().post(reverse('login_view'), {'email': 'u1@x.com', 'password': 'pw', 'role': 'admin'},
                         format='json')
    assert r.status_code == 200
    assert r.data['user']['role'] == 'patient'
    assert AccessToken(r.data['token'])['role'] == 'patient'


def test_login_ignores_stale_authorization_header():
    Account.objects.create_user(email='u1@x.com', password='pw', name='U1')
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')
    assert login(client, 'u1@x.com', 'pw').status_code == 200


# ---------------------------------------------------------------------
# Bearer token state machine
# ---------------------------------------------------------------------
def test_missing_header_is_401_with_challenge():
    r = APIClient().get('/api/appointments')
    assert r.status_code == 401
    assert r.data == {'error': 'Unauthorized'}
    assert r['WWW-Authenticate'].startswith('Bearer')


@pytest.mark.parametrize('header', ['Bearer', 'Token abc', 'Bearer a b', 'Basic dXNlcjpwdw=='])
def test_malformed_header_is_401(header):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=header)
    r = client.get('/api/appointments')
    assert r.status_code == 401
    assert r.data == {'error': 'Unauthorized'}


def test_garbage_token_is_403():
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION='Bearer abc.def.ghi')
    r = client.get('/api/appointments')
    assert r.status_code == 403
    assert r.data == {'error': 'Forbidden'}


def test_forged_role_claim_is_403():
    account = Account.objects.create_user(email='p@x.com', password='pw', name='P')
    header, payload, signature = issue_access_token(account).split('.')
    claims = json.loads(base64.urlsafe_b64decode(payload + '=' * (-len(payload) % 4)))
    claims['role'] = 'admin'
    forged = base64.urlsafe_b64encode(json.dumps(claims).encode()).rstrip(b'=').decode()
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {header}.{forged}.{signature}')
    assert client.get('/api/admin/stats').status_code == 403


def test_expired_token_is_403():
    account = Account.objects.create_user(email='p@x.com', password='pw', name='P')
    token = AccessToken.for_user(account)
    token.set_exp(lifetime=-timedelta(minutes=1))
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    assert client.get('/api/appointments').status_code == 403


def test_valid_token_attaches_identity_from_claims():
    account = Account.objects.create_user(email='doc@x.com', password='pw', name='Doc', role='doctor')
    request = APIRequestFactory().get('/api/appointments', HTTP_AUTHORIZATION=f'bearer {issue_access_token(account)}')
    identity, token = BearerTokenAuthentication().authenticate(request)
    assert isinstance(identity, Identity)
    assert identity.id == account.id
    assert isinstance(identity.id, int)
    assert (identity.email, identity.name, identity.role) == ('doc@x.com', 'Doc', 'doctor')
    assert identity.is_authenticated
    assert not identity.is_admin


def test_token_claims_are_trusted_without_store_lookup():
    account = Account.objects.create_user(email='a@x.com', password='pw', name='A', role='admin')
    token = issue_access_token(account)
    Account.objects.filter(id=account.id).update(role='patient')
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    assert client.get('/api/admin/stats').status_code == 200


def test_admin_role_is_read_from_identity():
    admin = Account.objects.create_user(email='a@x.com', password='pw', name='A', role='admin')
    doctor = Account.objects.create_user(email='d@x.com', password='pw', name='D', role='doctor')
    auth = BearerTokenAuthentication()
    factory = APIRequestFactory()
    for account, expected in ((admin, True), (doctor, False)):
        request = factory.get('/api/admin/stats', HTTP_AUTHORIZATION=f'Bearer {issue_access_token(account)}')
        identity, _ = auth.authenticate(request)
        assert identity.is_admin is expected
        request.user = identity
        assert IsAdminRole().has_permission(request, None) is expected
