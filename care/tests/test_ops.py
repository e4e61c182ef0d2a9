import logging
import runpy
from io import StringIO

import dotenv
import pytest
from django.core.exceptions import ImproperlyConfigured
from django.core.management import CommandError, call_command
from rest_framework.exceptions import NotAuthenticated, PermissionDenied, ValidationError
from rest_framework.test import APIClient

from care import bootstrap
from care.exceptions import api_exception_handler
from care.models import Account
from care.services.audit import log_action


# ---------------------------------------------------------------------
# Management command
# ---------------------------------------------------------------------
@pytest.mark.django_db
def test_ensure_demo_accounts_is_idempotent():
    out = StringIO()
    call_command('ensure_demo_accounts', password='demo-pass', stdout=out)
    assert Account.objects.count() == 3
    assert 'created: admin@mediguard.local (admin)' in out.getvalue()

    Account.objects.filter(email='doctor@mediguard.local').update(role='patient')
    out = StringIO()
    call_command('ensure_demo_accounts', password='other-pass', stdout=out)
    assert Account.objects.count() == 3
    assert 'reset: doctor@mediguard.local (doctor)' in out.getvalue()
    doctor = Account.objects.get(email='doctor@mediguard.local')
    assert doctor.role == 'doctor'
    assert doctor.check_password('other-pass')


@pytest.mark.django_db
def test_ensure_demo_accounts_reads_env_password(monkeypatch):
    monkeypatch.setenv('DEMO_PASSWORD', 'from-env')
    call_command('ensure_demo_accounts', stdout=StringIO())
    assert Account.objects.get(email='admin@mediguard.local').check_password('from-env')


@pytest.mark.django_db
def test_ensure_demo_accounts_requires_password(monkeypatch):
    monkeypatch.delenv('DEMO_PASSWORD', raising=False)
    with pytest.raises(CommandError):
        call_command('ensure_demo_accounts', stdout=StringIO())
    assert not Account.objects.exists()


@pytest.mark.django_db
def test_demo_admin_can_log_in_and_read_stats():
    call_command('ensure_demo_accounts', password='demo-pass', stdout=StringIO())
    client = APIClient()
    r = client.post('/api/auth/login', {'email': 'admin@mediguard.local', 'password': 'demo-pass'}, format='json')
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {r.data['token']}")
    r = client.get('/api/admin/stats')
    assert r.status_code == 200
    assert r.data['users']['count'] == 3


# ---------------------------------------------------------------------
# Configuration & startup
# ---------------------------------------------------------------------
def test_settings_refuse_to_start_without_jwt_secret(monkeypatch):
    monkeypatch.delenv('JWT_SECRET', raising=False)
    monkeypatch.setattr(dotenv, 'load_dotenv', lambda *a, **kw: False)
    with pytest.raises(ImproperlyConfigured):
        runpy.run_module('mediguard.settings', run_name='settings_check')


def test_ensure_schema_skipped_when_disabled(settings, monkeypatch):
    settings.AUTO_MIGRATE = False
    monkeypatch.setattr(bootstrap, 'call_command', lambda *a, **kw: pytest.fail('migrate should not run'))
    assert bootstrap.ensure_schema() is False


def test_ensure_schema_runs_migrate(settings, monkeypatch):
    settings.AUTO_MIGRATE = True
    calls = []
    monkeypatch.setattr(bootstrap, 'call_command', lambda *a, **kw: calls.append((a, kw)))
    assert bootstrap.ensure_schema() is True
    assert calls == [(('migrate',), {'interactive': False, 'verbosity': 0})]


# ---------------------------------------------------------------------
# Error envelope & audit log
# ---------------------------------------------------------------------
def test_unhandled_error_becomes_generic_500(caplog):
    with caplog.at_level(logging.ERROR, logger='care'):
        resp = api_exception_handler(RuntimeError('secret internals'), {'view': None})
    assert resp.status_code == 500
    assert resp.data == {'error': 'Internal server error'}
    assert 'secret internals' not in str(resp.data)
    assert any(r.levelno == logging.ERROR for r in caplog.records)


def test_validation_error_envelope():
    resp = api_exception_handler(ValidationError({'email': ['This field is required.']}), {'view': None})
    assert resp.status_code == 400
    assert resp.data['error'] == 'email: This field is required.'
    assert resp.data['fields'] == {'email': ['This field is required.']}


@pytest.mark.parametrize('exc, code, message', [
    (NotAuthenticated(), 401, 'Unauthorized'),
    (PermissionDenied('you are not the admin'), 403, 'Forbidden'),
])
def test_auth_errors_carry_no_detail(exc, code, message):
    resp = api_exception_handler(exc, {'view': None})
    assert resp.status_code == code
    assert resp.data == {'error': message}


def test_log_action_format(caplog):
    class U:
        id = 7

    with caplog.at_level(logging.INFO, logger='care.audit'):
        line = log_action(user=U(), action='login', object_type='account', object_id=7,
                          detail={'result': 'ok', 'ip': '127.0.0.1'})
    assert line == 'action=login user=7 object=account:7 ip=127.0.0.1 result=ok'
    assert line in caplog.text


@pytest.mark.django_db
def test_failed_login_is_audited_without_password(caplog):
    with caplog.at_level(logging.INFO, logger='care.audit'):
        APIClient().post('/api/auth/login', {'email': 'ghost@x.com', 'password': 'hunter2'}, format='json')
    assert 'action=login' in caplog.text
    assert 'result=fail' in caplog.text
    assert 'hunter2' not in caplog.text
