"""
Property Model

Rows of the remote `properties` table. The store owns these records; the
application only keeps the latest fetch in memory.
"""

from dataclasses import dataclass, field
from typing import List, Optional

PROPERTY_TABLE = 'properties'
PROPERTY_STATUSES = ('active', 'reserved', 'sold')
PROPERTY_COLUMNS = ('id, title, property_type, description, price, city, '
                    'neighborhood, specs, images, status, created_at')


def _number(value, default=0):
    if value is None or value == '':
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return int(number) if number.is_integer() else number


@dataclass
class PropertySpecs:
    """Beds, baths, size (m2) and parking spots. Missing values read as 0."""
    beds: int = 0
    baths: int = 0
    size: float = 0
    parking: int = 0

    @classmethod
    def from_row(cls, raw):
        raw = raw or {}
        return cls(
            beds=_number(raw.get('beds')),
            baths=_number(raw.get('baths')),
            size=_number(raw.get('size')),
            parking=_number(raw.get('parking')),
        )

    def to_payload(self):
        return {'beds': self.beds, 'baths': self.baths, 'size': self.size, 'parking': self.parking}


@dataclass
class Property:
    """A listing as stored remotely.

    `images` keeps insertion order, which is also display order.
    `specs` is None when the row carries no specs at all.
    """
    id: Optional[str]
    title: str
    property_type: Optional[str]
    description: str
    price: float
    city: str
    neighborhood: str
    status: str = 'active'
    images: List[str] = field(default_factory=list)
    specs: Optional[PropertySpecs] = None
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row):
        specs = row.get('specs')
        return cls(
            id=row.get('id'),
            title=row.get('title') or '',
            property_type=row.get('property_type'),
            description=row.get('description') or '',
            price=_number(row.get('price')),
            city=row.get('city') or '',
            neighborhood=row.get('neighborhood') or '',
            status=row.get('status') or 'active',
            images=list(row.get('images') or []),
            specs=PropertySpecs.from_row(specs) if specs is not None else None,
            created_at=row.get('created_at'),
        )

    @property
    def specs_or_default(self):
        return self.specs if self.specs is not None else PropertySpecs()

    def to_payload(self):
        """Full-record body for insert and update (no id, no timestamp)."""
        return {
            'title': self.title,
            'property_type': self.property_type,
            'description': self.description,
            'price': self.price,
            'city': self.city,
            'neighborhood': self.neighborhood,
            'specs': self.specs_or_default.to_payload(),
            'images': list(self.images),
            'status': self.status,
        }
