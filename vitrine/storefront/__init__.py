"""
Storefront Blueprint

Public home and property detail pages.
"""

from flask import Blueprint

storefront_bp = Blueprint('storefront', __name__)

from vitrine.storefront import routes  # noqa: E402, F401
