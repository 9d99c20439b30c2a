"""
Lead Model
"""

from dataclasses import dataclass
from typing import Optional

LEAD_TABLE = 'leads'
LEAD_STATUSES = ('new', 'contacted', 'qualified', 'closed')
LEAD_COLUMNS = 'id, name, phone, email, source, interested_property, notes, status, created_at'


def blank_to_none(value):
    """Trim text and turn an empty result into None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass
class Lead:
    """A CRM contact.

    `interested_property` is free text typed by the broker, not a reference
    to a property id.
    """
    id: Optional[str]
    name: str
    phone: str
    source: str
    status: str = 'new'
    email: Optional[str] = None
    interested_property: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row):
        return cls(
            id=row.get('id'),
            name=row.get('name') or '',
            phone=row.get('phone') or '',
            source=row.get('source') or '',
            status=row.get('status') or 'new',
            email=blank_to_none(row.get('email')),
            interested_property=blank_to_none(row.get('interested_property')),
            notes=blank_to_none(row.get('notes')),
            created_at=row.get('created_at'),
        )

    def to_payload(self):
        return {
            'name': self.name,
            'phone': self.phone,
            'email': blank_to_none(self.email),
            'source': self.source,
            'interested_property': blank_to_none(self.interested_property),
            'notes': blank_to_none(self.notes),
            'status': self.status,
        }
