"""
Services Package

Exports all services for easy importing.
"""

from vitrine.services.remote import (
    AuthService, AuthSession, ObjectStore, Query, RecordsStore, RemoteBackend,
    RemoteServiceError, StagedFile,
)
from vitrine.services.supabase import create_supabase_backend
from vitrine.services.images import (
    build_storage_path, parse_storage_path_from_public_url, sanitize_file_name, storage_paths_for,
)

__all__ = [
    'AuthService',
    'AuthSession',
    'ObjectStore',
    'Query',
    'RecordsStore',
    'RemoteBackend',
    'RemoteServiceError',
    'StagedFile',
    'create_supabase_backend',
    'build_storage_path',
    'parse_storage_path_from_public_url',
    'sanitize_file_name',
    'storage_paths_for',
]
