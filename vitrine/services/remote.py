"""
Remote Backend Interfaces

The hosted service is reached through three narrow capabilities: a records
store, an auth service and an object store. Everything else in the
application is written against these, never against a concrete client.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Optional


class RemoteServiceError(Exception):
    """Any failure reported by the hosted service, carrying its message verbatim."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass(frozen=True)
class Query:
    """Table-scoped select: projection, eq/in filters, ordering and limit.

    Every builder method returns a new Query.
    """
    table: str
    columns: str = '*'
    filters: tuple = ()
    order_by: Optional[tuple] = None
    max_rows: Optional[int] = None

    def select(self, columns):
        return replace(self, columns=columns)

    def eq(self, column, value):
        return replace(self, filters=self.filters + ((column, 'eq', value),))

    def in_(self, column, values):
        return replace(self, filters=self.filters + ((column, 'in', tuple(values)),))

    def order(self, column, descending=False):
        return replace(self, order_by=(column, descending))

    def limit(self, count):
        return replace(self, max_rows=count)


@dataclass
class AuthSession:
    """Tokens and identity returned by a password sign-in."""
    access_token: str
    refresh_token: str
    user_id: str
    email: Optional[str] = None
    expires_at: Optional[float] = None

    # Tokens are refreshed this many seconds before they actually expire.
    EXPIRY_MARGIN = 10

    def is_expired(self, now=None):
        if self.expires_at is None:
            return False
        now = time.time() if now is None else now
        return now >= self.expires_at - self.EXPIRY_MARGIN

    def to_dict(self):
        return {
            'access_token': self.access_token,
            'refresh_token': self.refresh_token,
            'user_id': self.user_id,
            'email': self.email,
            'expires_at': self.expires_at,
        }

    @classmethod
    def from_dict(cls, data):
        if not data or not data.get('access_token'):
            return None
        return cls(
            access_token=data['access_token'],
            refresh_token=data.get('refresh_token') or '',
            user_id=data.get('user_id') or '',
            email=data.get('email'),
            expires_at=data.get('expires_at'),
        )


@dataclass
class StagedFile:
    """An uploaded file waiting to be sent to the object store."""
    filename: str
    data: bytes
    content_type: Optional[str] = None


class RecordsStore(ABC):

    @abstractmethod
    def fetch(self, query):
        """Return the list of rows matching `query`."""

    @abstractmethod
    def fetch_one(self, query):
        """Return the single matching row, or None."""

    @abstractmethod
    def insert(self, table, payload):
        pass

    @abstractmethod
    def update(self, table, record_id, payload):
        pass

    @abstractmethod
    def delete(self, table, record_id):
        pass


class AuthService(ABC):
    """Password auth with session-change notification.

    Listeners are called as `listener(event, session)` where event is one of
    SIGNED_IN, SIGNED_OUT or TOKEN_REFRESHED.
    """

    def __init__(self):
        self._listeners = []

    def on_auth_state_change(self, listener):
        self._listeners.append(listener)
        return listener

    def _notify(self, event, session):
        for listener in list(self._listeners):
            listener(event, session)

    @abstractmethod
    def get_session(self, stored):
        """Turn a stored session dict into a live AuthSession, or None."""

    @abstractmethod
    def sign_in_with_password(self, email, password):
        pass

    @abstractmethod
    def sign_out(self, session):
        pass


class ObjectStore(ABC):

    @abstractmethod
    def upload(self, path, data, content_type=None, cache_control='3600', upsert=False):
        pass

    @abstractmethod
    def get_public_url(self, path):
        pass

    @abstractmethod
    def remove(self, paths):
        pass


@dataclass
class RemoteBackend:
    """Bundle of the three capabilities bound to one hosted project.

    `records` and `storage` are factories taking an optional access token so
    that signed-in writes run as the admin user.
    """
    auth: AuthService
    records_factory: object
    storage_factory: object
    bucket: str = 'property-images'

    def records(self, access_token=None):
        return self.records_factory(access_token)

    def storage(self, access_token=None):
        return self.storage_factory(access_token)
