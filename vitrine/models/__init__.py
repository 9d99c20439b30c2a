"""
Models Package

Exports all models for easy importing.
"""

from vitrine.models.property import (
    Property, PropertySpecs, PROPERTY_TABLE, PROPERTY_STATUSES, PROPERTY_COLUMNS,
)
from vitrine.models.admin_user import AdminUser
from vitrine.models.lead import Lead, LEAD_TABLE, LEAD_STATUSES, LEAD_COLUMNS, blank_to_none

__all__ = [
    'AdminUser',
    'Property',
    'PropertySpecs',
    'PROPERTY_TABLE',
    'PROPERTY_STATUSES',
    'PROPERTY_COLUMNS',
    'Lead',
    'LEAD_TABLE',
    'LEAD_STATUSES',
    'LEAD_COLUMNS',
    'blank_to_none',
]
