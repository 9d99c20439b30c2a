"""
Broker details and display helpers shared by the storefront and admin pages.
"""

from urllib.parse import quote

BROKER_NAME = 'Ezequias Alves Imóveis'
BROKER_CRED = 'CRECI - AL 9384'
BROKER_PHONE_HUMAN = '+55 82 99198-1454'
BROKER_PHONE_WA = '5582991981454'

WHATSAPP_BASE_MESSAGE = 'Ola, vi os imoveis em destaque e quero mais informacoes.'
ADMIN_SUPPORT_WHATSAPP_URL = (
    'https://wa.me/5582996304742?text=Ola%2C%20preciso%20de%20suporte%20no%20painel%20administrativo.'
)

PLACEHOLDER_IMAGE = ('https://images.unsplash.com/photo-1499951360447-b19be8fe80f5'
                     '?q=80&w=1600&auto=format&fit=crop')
SOLD_PLACEHOLDER_IMAGE = ('https://images.unsplash.com/photo-1505691938895-1758d7feb511'
                          '?q=80&w=1600&auto=format&fit=crop')

CARD_STATUS_LABELS = {'active': 'Destaque', 'reserved': 'Reservado', 'sold': 'Vendido'}
DETAIL_STATUS_LABELS = {'active': 'Disponivel', 'reserved': 'Reservado', 'sold': 'Vendido'}
LEAD_STATUS_LABELS = {
    'new': 'Novo',
    'contacted': 'Contatado',
    'qualified': 'Qualificado',
    'closed': 'Fechado',
}


def build_whatsapp_url(message):
    return f'https://wa.me/{BROKER_PHONE_WA}?text={quote(message, safe="")}'


def format_price(value):
    """Brazilian currency without cents, e.g. 2850000 -> 'R$ 2.850.000'."""
    amount = int(round(float(value or 0)))
    return 'R$ ' + f'{amount:,}'.replace(',', '.')
