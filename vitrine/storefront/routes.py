"""
Storefront Routes
"""

from flask import abort, render_template, request

from vitrine.site import (
    BROKER_NAME, CARD_STATUS_LABELS, DETAIL_STATUS_LABELS, WHATSAPP_BASE_MESSAGE, build_whatsapp_url,
)
from vitrine.storefront import storefront_bp
from vitrine.storefront.services import get_home_data, get_property_details


@storefront_bp.route('/')
def home():
    """Home page with the city/type search form.

    Query Parameters:
        city: only active listings in this city
        type: only active listings of this property type
    """
    selected_city = (request.args.get('city') or '').strip()
    selected_type = (request.args.get('type') or '').strip()

    data = get_home_data(selected_city, selected_type)

    return render_template('storefront/home.html',
                           featured=data['featured'],
                           sold=data['sold'],
                           cities=data['cities'],
                           property_types=data['property_types'],
                           is_fallback=data['is_fallback'],
                           selected_city=selected_city,
                           selected_type=selected_type,
                           status_labels=CARD_STATUS_LABELS,
                           broker_name=BROKER_NAME,
                           whatsapp_url=build_whatsapp_url(WHATSAPP_BASE_MESSAGE))


@storefront_bp.route('/imoveis/<property_id>')
def property_detail(property_id):
    prop = get_property_details(property_id)
    if prop is None:
        abort(404)

    whatsapp_url = build_whatsapp_url(
        f'Ola, vi o imovel {prop["title"]} em {prop["neighborhood"]}, {prop["city"]} e tenho interesse.'
    )
    return render_template('storefront/detail.html',
                           property=prop,
                           status_label=DETAIL_STATUS_LABELS.get(prop['status'], 'Disponivel'),
                           broker_name=BROKER_NAME,
                           whatsapp_url=whatsapp_url)
