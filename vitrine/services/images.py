"""
Property Image Paths

Naming of uploaded images and recovery of their storage keys from public URLs.
"""

import re
import unicodedata
import uuid
from urllib.parse import unquote

STORAGE_PREFIX = 'properties/'

_UNSAFE_CHARS = re.compile(r'[^a-zA-Z0-9._-]')


def sanitize_file_name(name):
    """Strip diacritics, replace anything outside [A-Za-z0-9._-] with '-', lowercase."""
    decomposed = unicodedata.normalize('NFD', name)
    stripped = ''.join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _UNSAFE_CHARS.sub('-', stripped).lower()


def build_storage_path(file_name, token=None):
    """Collision-resistant key: properties/<random token>-<sanitized name>."""
    token = token or str(uuid.uuid4())
    return f'{STORAGE_PREFIX}{token}-{sanitize_file_name(file_name)}'


def public_url_marker(bucket):
    return f'/storage/v1/object/public/{bucket}/'


def parse_storage_path_from_public_url(url, bucket):
    """Return the storage key embedded in a public URL, or None if it isn't one of ours."""
    marker = public_url_marker(bucket)
    index = url.find(marker)
    if index == -1:
        return None
    return unquote(url[index + len(marker):])


def storage_paths_for(urls, bucket):
    """Keys for every URL that points into `bucket`; other URLs are skipped."""
    paths = []
    for url in urls:
        path = parse_storage_path_from_public_url(url, bucket)
        if path:
            paths.append(path)
    return paths
