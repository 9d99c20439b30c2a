"""
Configuration settings for the Vitrine listings site
"""
import os


def _env(*names):
    """First non-blank value among the given environment variables."""
    for name in names:
        value = (os.environ.get(name) or '').strip()
        if value:
            return value
    return None


class Config:
    """Flask application configuration"""

    # Flask secret key for sessions
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    # Hosted backend (rows, auth, storage). Missing URL or key leaves the
    # site in its unconfigured mode: static listings and a setup notice.
    SUPABASE_URL = _env('SUPABASE_URL')
    SUPABASE_ANON_KEY = _env('SUPABASE_ANON_KEY', 'SUPABASE_PUBLISHABLE_DEFAULT_KEY')
    SUPABASE_PROPERTY_BUCKET = _env('SUPABASE_PROPERTY_BUCKET') or 'property-images'
    SUPABASE_TIMEOUT = float(os.environ.get('SUPABASE_TIMEOUT') or 10)

    # Storefront page sizes
    FEATURED_LIMIT = 12
    SOLD_LIMIT = 4

    # Uploaded images
    MAX_CONTENT_LENGTH = 32 * 1024 * 1024


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SUPABASE_URL = None
    SUPABASE_ANON_KEY = None
