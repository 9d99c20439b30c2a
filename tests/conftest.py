import itertools
import time
import uuid

import pytest

from vitrine import create_app
from vitrine.config import TestConfig
from vitrine.services.remote import (
    AuthService, AuthSession, ObjectStore, RecordsStore, RemoteBackend, RemoteServiceError,
)

SUPABASE_URL = 'https://demo.supabase.co'
BUCKET = 'property-images'


class FakeRecords(RecordsStore):
    """In-memory tables that honour eq/in filters, ordering and limit."""

    def __init__(self):
        self.tables = {'properties': [], 'leads': []}
        self.calls = []
        self.failures = {}
        self._clock = itertools.count(1)

    def seed(self, table, **row):
        row.setdefault('id', str(uuid.uuid4()))
        row.setdefault('created_at', f'2025-01-01T00:00:{next(self._clock):02d}')
        self.tables[table].append(row)
        return row

    def _maybe_fail(self, op):
        if op in self.failures:
            raise RemoteServiceError(self.failures[op])

    def fetch(self, query):
        self.calls.append(('fetch', query))
        self._maybe_fail('fetch')
        rows = list(self.tables[query.table])
        for column, op, value in query.filters:
            if op == 'eq':
                rows = [r for r in rows if r.get(column) == value]
            elif op == 'in':
                rows = [r for r in rows if r.get(column) in value]
        if query.order_by:
            column, descending = query.order_by
            rows.sort(key=lambda r: r.get(column) or '', reverse=descending)
        if query.max_rows is not None:
            rows = rows[:query.max_rows]
        return [dict(r) for r in rows]

    def fetch_one(self, query):
        rows = self.fetch(query.limit(1))
        return rows[0] if rows else None

    def insert(self, table, payload):
        self.calls.append(('insert', table, payload))
        self._maybe_fail('insert')
        self.seed(table, **payload)

    def update(self, table, record_id, payload):
        self.calls.append(('update', table, record_id, payload))
        self._maybe_fail('update')
        for row in self.tables[table]:
            if row['id'] == record_id:
                row.update(payload)

    def delete(self, table, record_id):
        self.calls.append(('delete', table, record_id))
        self._maybe_fail('delete')
        self.tables[table] = [r for r in self.tables[table] if r['id'] != record_id]

    def mutations(self):
        return [c for c in self.calls if c[0] != 'fetch']


class FakeAuth(AuthService):

    def __init__(self, users=None):
        super().__init__()
        self.users = users or {'admin@example.com': 'secret123'}
        self.calls = []
        self.refresh_fails = False

    def _new_session(self, email, ttl=3600):
        return AuthSession(access_token=f'token-{uuid.uuid4()}', refresh_token='refresh',
                           user_id='user-1', email=email, expires_at=time.time() + ttl)

    def get_session(self, stored):
        self.calls.append(('get_session',))
        session = stored if isinstance(stored, AuthSession) else AuthSession.from_dict(stored)
        if session is None:
            return None
        if not session.is_expired():
            return session
        if self.refresh_fails:
            return None
        refreshed = self._new_session(session.email)
        self._notify('TOKEN_REFRESHED', refreshed)
        return refreshed

    def sign_in_with_password(self, email, password):
        self.calls.append(('sign_in', email))
        if self.users.get(email) != password:
            raise RemoteServiceError('Invalid login credentials', 400)
        session = self._new_session(email)
        self._notify('SIGNED_IN', session)
        return session

    def sign_out(self, session):
        self.calls.append(('sign_out', session.email))
        self._notify('SIGNED_OUT', None)


class FakeStorage(ObjectStore):

    def __init__(self, bucket=BUCKET):
        self.bucket = bucket
        self.objects = {}
        self.uploads = []
        self.removals = []
        self.fail_uploads_for = set()
        self.fail_removal = False

    def upload(self, path, data, content_type=None, cache_control='3600', upsert=False):
        self.uploads.append(path)
        if any(path.endswith(name) for name in self.fail_uploads_for):
            raise RemoteServiceError('The object exceeded the maximum allowed size', 413)
        self.objects[path] = data
        return path

    def get_public_url(self, path):
        return f'{SUPABASE_URL}/storage/v1/object/public/{self.bucket}/{path}'

    def remove(self, paths):
        self.removals.append(list(paths))
        if self.fail_removal:
            raise RemoteServiceError('Bucket not found', 404)
        for path in paths:
            self.objects.pop(path, None)


@pytest.fixture()
def records():
    return FakeRecords()


@pytest.fixture()
def auth():
    return FakeAuth()


@pytest.fixture()
def storage():
    return FakeStorage()


@pytest.fixture()
def backend(records, auth, storage):
    return RemoteBackend(
        auth=auth,
        records_factory=lambda access_token=None: records,
        storage_factory=lambda access_token=None: storage,
        bucket=BUCKET,
    )


@pytest.fixture()
def app(backend):
    return create_app(TestConfig, backend=backend)


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def unconfigured_client():
    return create_app(TestConfig).test_client()


@pytest.fixture()
def admin_client(client):
    r = client.post('/admin/login', data={'email': 'admin@example.com', 'password': 'secret123'})
    assert r.status_code == 302
    return client


def property_row(**overrides):
    row = {
        'title': 'Cobertura Vista Mar',
        'property_type': 'cobertura',
        'description': 'Cobertura com vista para o mar e varanda gourmet.',
        'price': 2850000,
        'city': 'Maceió',
        'neighborhood': 'Ponta Verde',
        'specs': {'beds': 4, 'baths': 5, 'size': 320, 'parking': 3},
        'images': [f'{SUPABASE_URL}/storage/v1/object/public/{BUCKET}/properties/abc-capa.jpg'],
        'status': 'active',
    }
    row.update(overrides)
    return row


def property_form(**overrides):
    form = {
        'title': 'Apartamento Garden',
        'property_type': 'apartamento',
        'description': 'Apartamento garden com area externa privativa.',
        'price': '1980000',
        'city': 'Maceió',
        'neighborhood': 'Jatiúca',
        'beds': '3',
        'baths': '4',
        'size': '210',
        'parking': '2',
        'status': 'active',
    }
    form.update(overrides)
    return form


def lead_form(**overrides):
    form = {
        'name': 'Maria Souza',
        'phone': '82999990000',
        'email': 'maria@example.com',
        'source': 'whatsapp',
        'interested_property': 'Cobertura Vista Mar',
        'notes': 'Prefere contato a tarde',
        'status': 'new',
    }
    form.update(overrides)
    return form
