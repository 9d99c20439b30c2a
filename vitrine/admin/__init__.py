"""
Admin Blueprint

Console for property listings and leads, gated by a password session held
by the hosted auth service.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from vitrine.admin import routes  # noqa: E402, F401
