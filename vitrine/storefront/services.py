"""
Storefront Services

Read-only queries behind the public home and detail pages, and the mapping
of rows to the dicts the templates render.
"""

import copy
import logging

from flask import current_app

from vitrine.extensions import remote
from vitrine.models import Property, PROPERTY_STATUSES, PROPERTY_TABLE
from vitrine.services.remote import Query, RemoteServiceError
from vitrine.site import PLACEHOLDER_IMAGE, SOLD_PLACEHOLDER_IMAGE, format_price
from vitrine.storefront.fallback import FALLBACK_DESCRIPTION, FEATURED_PROPERTIES, SOLD_PROPERTIES

logger = logging.getLogger(__name__)

CARD_COLUMNS = 'id, title, property_type, price, city, neighborhood, specs, images, status'
DETAIL_COLUMNS = 'id, title, property_type, description, price, city, neighborhood, specs, images, status'


def home_card(prop):
    specs = prop.specs_or_default
    return {
        'id': prop.id,
        'title': prop.title,
        'property_type': prop.property_type,
        'neighborhood': prop.neighborhood,
        'city': prop.city,
        'price': format_price(prop.price),
        'image': prop.images[0] if prop.images else PLACEHOLDER_IMAGE,
        'specs': {'beds': specs.beds, 'baths': specs.baths, 'size': specs.size, 'parking': specs.parking},
        'status': prop.status,
    }


def sold_card(prop):
    return {
        'id': prop.id,
        'title': prop.title,
        'neighborhood': prop.neighborhood,
        'price': 'Vendido',
        'image': prop.images[0] if prop.images else SOLD_PLACEHOLDER_IMAGE,
    }


def property_details(prop):
    card = home_card(prop)
    card.update({
        'description': prop.description,
        'images': list(prop.images) or [PLACEHOLDER_IMAGE],
    })
    return card


def _distinct(values):
    return sorted({value for value in values if value})


def get_fallback_home_data():
    """The bundled dataset with its own filter options."""
    featured = copy.deepcopy(FEATURED_PROPERTIES)
    return {
        'featured': featured,
        'sold': copy.deepcopy(SOLD_PROPERTIES),
        'cities': _distinct(item['city'] for item in featured),
        'property_types': _distinct(item.get('property_type') for item in featured),
        'is_fallback': True,
    }


def _query_home_data(records, city, property_type):
    config = current_app.config
    featured_query = (Query(PROPERTY_TABLE).select(CARD_COLUMNS)
                      .eq('status', 'active')
                      .order('created_at', descending=True)
                      .limit(config.get('FEATURED_LIMIT', 12)))
    if city:
        featured_query = featured_query.eq('city', city)
    if property_type:
        featured_query = featured_query.eq('property_type', property_type)

    sold_query = (Query(PROPERTY_TABLE).select(CARD_COLUMNS)
                  .eq('status', 'sold')
                  .order('created_at', descending=True)
                  .limit(config.get('SOLD_LIMIT', 4)))
    options_query = Query(PROPERTY_TABLE).select('city, property_type').eq('status', 'active')

    try:
        active_rows = records.fetch(featured_query)
        sold_rows = records.fetch(sold_query)
        option_rows = records.fetch(options_query)
    except RemoteServiceError as e:
        logger.error('Could not load home listings: %s', e.message)
        return None

    return {
        'featured': [home_card(Property.from_row(row)) for row in active_rows],
        'sold': [sold_card(Property.from_row(row)) for row in sold_rows],
        'cities': _distinct(row.get('city') for row in option_rows),
        'property_types': _distinct(row.get('property_type') for row in option_rows),
        'is_fallback': False,
    }


def get_home_data(city='', property_type=''):
    """Active and sold listings plus filter options for the home page.

    Falls back to the bundled dataset when the backend is unconfigured, a
    query fails, or both live lists come back empty.
    """
    backend = remote.backend
    if backend is None:
        return get_fallback_home_data()

    data = _query_home_data(backend.records(), city, property_type)
    if data is None or (not data['featured'] and not data['sold']):
        logger.info('Home page using bundled listings (city=%r, type=%r)', city, property_type)
        return get_fallback_home_data()
    return data


def _fallback_details(property_id):
    for item in FEATURED_PROPERTIES:
        if item['id'] == property_id:
            details = copy.deepcopy(item)
            details.update({
                'description': FALLBACK_DESCRIPTION,
                'images': [item['image']],
                'status': 'active',
            })
            return details
    return None


def get_property_details(property_id):
    """One listing restricted to the public statuses, or None when not found."""
    backend = remote.backend
    if backend is None:
        return _fallback_details(property_id)

    query = (Query(PROPERTY_TABLE).select(DETAIL_COLUMNS)
             .eq('id', property_id)
             .in_('status', PROPERTY_STATUSES))
    try:
        row = backend.records().fetch_one(query)
    except RemoteServiceError as e:
        logger.warning('Could not load property %s: %s', property_id, e.message)
        return None

    if row is None:
        return None
    return property_details(Property.from_row(row))
