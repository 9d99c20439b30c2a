"""
Supabase Client

HTTP implementation of the remote backend interfaces: PostgREST for rows,
GoTrue for password auth and Storage for property images.
"""

import logging
import time
from urllib.parse import quote

import requests

from vitrine.services.remote import (
    AuthService, AuthSession, ObjectStore, RecordsStore, RemoteBackend, RemoteServiceError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


def _error_message(resp):
    """Pull the human-readable message out of an error response."""
    try:
        body = resp.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ('message', 'msg', 'error_description', 'error'):
            if body.get(key):
                return str(body[key])
    return resp.text or f'HTTP {resp.status_code}'


def _json_body(resp):
    """Decode a successful response, treating a non-JSON body as a service failure."""
    try:
        return resp.json()
    except ValueError:
        logger.warning('Supabase returned a non-JSON body (HTTP %s)', resp.status_code)
        raise RemoteServiceError(f'Unexpected response from service (HTTP {resp.status_code})', resp.status_code)


def _quote_value(value):
    text = str(value).replace('\\', '\\\\').replace('"', '\\"')
    return f'"{text}"'


def build_query_params(query):
    """Translate a Query into PostgREST query-string parameters."""
    params = [('select', query.columns)]
    for column, op, value in query.filters:
        if op == 'in':
            params.append((column, 'in.(' + ','.join(_quote_value(v) for v in value) + ')'))
        else:
            params.append((column, f'{op}.{value}'))
    if query.order_by:
        column, descending = query.order_by
        params.append(('order', f'{column}.{"desc" if descending else "asc"}'))
    if query.max_rows is not None:
        params.append(('limit', str(query.max_rows)))
    return params


class SupabaseClient:
    """Shared HTTP plumbing: base URL, API key headers, timeouts, error mapping."""

    def __init__(self, url, api_key, timeout=DEFAULT_TIMEOUT, http=None):
        self.url = url.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout
        self.http = http or requests.Session()

    def headers(self, access_token=None, extra=None):
        headers = {
            'apikey': self.api_key,
            'Authorization': f'Bearer {access_token or self.api_key}',
        }
        if extra:
            headers.update(extra)
        return headers

    def request(self, method, path, access_token=None, headers=None, **kwargs):
        url = f'{self.url}{path}'
        try:
            resp = self.http.request(method, url, headers=self.headers(access_token, headers),
                                     timeout=self.timeout, **kwargs)
        except requests.exceptions.Timeout:
            logger.warning('Supabase request timed out: %s %s', method, path)
            raise RemoteServiceError('Request timed out')
        except requests.exceptions.RequestException as e:
            logger.warning('Supabase request failed: %s %s: %s', method, path, e)
            raise RemoteServiceError(str(e))

        if resp.status_code >= 400:
            message = _error_message(resp)
            logger.info('Supabase %s %s -> %s: %s', method, path, resp.status_code, message)
            raise RemoteServiceError(message, resp.status_code)
        return resp


class SupabaseRecords(RecordsStore):
    """Row access through the PostgREST endpoint."""

    def __init__(self, client, access_token=None):
        self.client = client
        self.access_token = access_token

    def fetch(self, query):
        resp = self.client.request('GET', f'/rest/v1/{query.table}',
                                   access_token=self.access_token,
                                   params=build_query_params(query))
        return _json_body(resp) or []

    def fetch_one(self, query):
        rows = self.fetch(query.limit(1))
        return rows[0] if rows else None

    def insert(self, table, payload):
        self.client.request('POST', f'/rest/v1/{table}', access_token=self.access_token,
                            headers={'Prefer': 'return=minimal'}, json=payload)

    def update(self, table, record_id, payload):
        self.client.request('PATCH', f'/rest/v1/{table}', access_token=self.access_token,
                            headers={'Prefer': 'return=minimal'},
                            params={'id': f'eq.{record_id}'}, json=payload)

    def delete(self, table, record_id):
        self.client.request('DELETE', f'/rest/v1/{table}', access_token=self.access_token,
                            params={'id': f'eq.{record_id}'})


class SupabaseAuth(AuthService):
    """Password sign-in, refresh and sign-out against the GoTrue endpoint."""

    def __init__(self, client):
        super().__init__()
        self.client = client

    def _session_from_response(self, data):
        user = data.get('user') or {}
        expires_at = data.get('expires_at')
        if expires_at is None and data.get('expires_in') is not None:
            expires_at = time.time() + float(data['expires_in'])
        return AuthSession(
            access_token=data['access_token'],
            refresh_token=data.get('refresh_token') or '',
            user_id=str(user.get('id') or ''),
            email=user.get('email'),
            expires_at=expires_at,
        )

    def sign_in_with_password(self, email, password):
        resp = self.client.request('POST', '/auth/v1/token',
                                   params={'grant_type': 'password'},
                                   json={'email': email, 'password': password})
        session = self._session_from_response(_json_body(resp))
        self._notify('SIGNED_IN', session)
        return session

    def refresh(self, session):
        resp = self.client.request('POST', '/auth/v1/token',
                                   params={'grant_type': 'refresh_token'},
                                   json={'refresh_token': session.refresh_token})
        refreshed = self._session_from_response(_json_body(resp))
        self._notify('TOKEN_REFRESHED', refreshed)
        return refreshed

    def get_session(self, stored):
        session = stored if isinstance(stored, AuthSession) else AuthSession.from_dict(stored)
        if session is None:
            return None
        if not session.is_expired():
            return session
        if not session.refresh_token:
            return None
        try:
            return self.refresh(session)
        except RemoteServiceError as e:
            logger.info('Session refresh failed for %s: %s', session.email, e.message)
            return None

    def sign_out(self, session):
        try:
            self.client.request('POST', '/auth/v1/logout', access_token=session.access_token)
        except RemoteServiceError as e:
            # The local session is discarded regardless.
            logger.warning('Remote sign-out failed for %s: %s', session.email, e.message)
        self._notify('SIGNED_OUT', None)


class SupabaseStorage(ObjectStore):
    """Object access for one storage bucket."""

    def __init__(self, client, bucket, access_token=None):
        self.client = client
        self.bucket = bucket
        self.access_token = access_token

    def upload(self, path, data, content_type=None, cache_control='3600', upsert=False):
        headers = {
            'Content-Type': content_type or 'application/octet-stream',
            'Cache-Control': f'max-age={cache_control}',
            'x-upsert': 'true' if upsert else 'false',
        }
        self.client.request('POST', f'/storage/v1/object/{self.bucket}/{quote(path)}',
                            access_token=self.access_token, headers=headers, data=data)
        return path

    def get_public_url(self, path):
        return f'{self.client.url}/storage/v1/object/public/{self.bucket}/{quote(path)}'

    def remove(self, paths):
        self.client.request('DELETE', f'/storage/v1/object/{self.bucket}',
                            access_token=self.access_token, json={'prefixes': list(paths)})


def create_supabase_backend(url, api_key, bucket, timeout=DEFAULT_TIMEOUT, http=None):
    """Wire the three Supabase capabilities around one shared HTTP client."""
    client = SupabaseClient(url, api_key, timeout=timeout, http=http)
    return RemoteBackend(
        auth=SupabaseAuth(client),
        records_factory=lambda access_token=None: SupabaseRecords(client, access_token),
        storage_factory=lambda access_token=None: SupabaseStorage(client, bucket, access_token),
        bucket=bucket,
    )
