"""
Admin User

Flask-Login identity backed by a remote auth session rather than a local
table.
"""

from flask_login import UserMixin


class AdminUser(UserMixin):

    def __init__(self, user_id, email=None):
        self.id = user_id
        self.email = email

    @classmethod
    def from_session(cls, auth_session):
        return cls(auth_session.user_id, auth_session.email)

    def __repr__(self):
        return f'<AdminUser {self.email}>'
