"""
Flask Extensions

The hosted backend plays the role a database extension would: it is bound to
the app in the factory and looked up per request.
"""

import logging

from flask import current_app
from flask_login import LoginManager

from vitrine.services.supabase import create_supabase_backend

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'remote_backend'


class Remote:
    """Holds the app's RemoteBackend, or None when the service is unconfigured."""

    def __init__(self, app=None, backend=None):
        if app is not None:
            self.init_app(app, backend)

    def init_app(self, app, backend=None):
        if backend is None:
            url = app.config.get('SUPABASE_URL')
            key = app.config.get('SUPABASE_ANON_KEY')
            if url and key:
                backend = create_supabase_backend(
                    url, key,
                    bucket=app.config.get('SUPABASE_PROPERTY_BUCKET', 'property-images'),
                    timeout=app.config.get('SUPABASE_TIMEOUT', 10),
                )
            else:
                logger.warning('SUPABASE_URL / SUPABASE_ANON_KEY not set; running unconfigured')

        if backend is not None:
            backend.auth.on_auth_state_change(_log_auth_event)
        app.extensions[EXTENSION_KEY] = backend

    @property
    def backend(self):
        return current_app.extensions.get(EXTENSION_KEY)

    @property
    def configured(self):
        return self.backend is not None


def _log_auth_event(event, session):
    logger.info('Auth state change: %s (%s)', event, session.email if session else '-')


# Hosted rows/auth/storage backend
remote = Remote()

# Login manager for the admin console
login_manager = LoginManager()
