"""
Admin Decorators

The console has three terminal views: setup notice (service unconfigured),
login form (no session) and the console itself.
"""

from functools import wraps

from flask import g, redirect, render_template, session, url_for
from flask_login import logout_user

from vitrine.admin.console import Console, ConsoleState
from vitrine.extensions import remote

STATE_KEY = 'console'


def load_state():
    return ConsoleState.from_dict(session.get(STATE_KEY))


def save_state(state):
    session[STATE_KEY] = state.to_dict()


def service_required(f):
    """Render the setup notice instead of the view when the backend is unconfigured."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not remote.configured:
            return render_template('admin/setup.html')
        g.console = Console(remote.backend)
        return f(*args, **kwargs)
    return wrapper


def admin_required(f):
    """Ensure a live session before running an admin action.

    The stored session is restored (and refreshed if expired) through the
    auth service; the restored state is left on `g.state`.
    """
    @wraps(f)
    @service_required
    def wrapper(*args, **kwargs):
        state = g.console.gate.restore(load_state())
        if not state.is_authenticated:
            logout_user()
            save_state(state)
            return redirect(url_for('admin.console'))
        g.state = state
        return f(*args, **kwargs)
    return wrapper
