"""
Admin Form Validation

Client-side style checks run before anything reaches the hosted service.
Each validator returns `(values, errors)`: typed values ready for a write,
and a field -> message dict that is empty when the form is valid.
"""

import math
import re

from vitrine.models import LEAD_STATUSES, PROPERTY_STATUSES, blank_to_none

EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')

DEFAULT_PROPERTY_VALUES = {
    'title': '',
    'property_type': 'apartamento',
    'description': '',
    'price': 0,
    'city': '',
    'neighborhood': '',
    'beds': 1,
    'baths': 1,
    'size': 0,
    'parking': 1,
    'status': 'active',
}

DEFAULT_LEAD_VALUES = {
    'name': '',
    'phone': '',
    'email': '',
    'source': 'whatsapp',
    'interested_property': '',
    'notes': '',
    'status': 'new',
}

PROPERTY_TYPES = ['apartamento', 'casa', 'cobertura', 'terreno', 'comercial']


def is_valid_email(value):
    return bool(EMAIL_RE.match(value or ''))


def _text(form, name):
    value = form.get(name)
    return '' if value is None else str(value)


def _min_length(values, errors, name, length, message):
    if len(values[name]) < length:
        errors[name] = message


def _to_number(raw):
    """Parse form text as a finite number; None when it isn't one."""
    if isinstance(raw, (int, float)):
        number = raw
    else:
        text = str(raw).strip().replace(',', '.')
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    # nan, inf and overflowing literals like 1e400
    if not math.isfinite(number):
        return None
    return number


def _positive(values, errors, form, name, message):
    number = _to_number(form.get(name, ''))
    if number is None or number <= 0:
        errors[name] = message
        return
    values[name] = int(number) if float(number).is_integer() else number


def _count(values, errors, form, name, message):
    number = _to_number(form.get(name, ''))
    if number is None or not float(number).is_integer() or number < 0:
        errors[name] = message
        return
    values[name] = int(number)


def validate_login_form(form):
    values = {'email': _text(form, 'email').strip(), 'password': _text(form, 'password')}
    errors = {}

    if not is_valid_email(values['email']):
        errors['email'] = 'Digite um e-mail valido'
    if len(values['password']) < 6:
        errors['password'] = 'A senha deve ter no minimo 6 caracteres'

    return values, errors


def validate_property_form(form):
    values = {name: _text(form, name) for name in
              ('title', 'property_type', 'description', 'city', 'neighborhood', 'status')}
    errors = {}

    _min_length(values, errors, 'title', 3, 'Titulo obrigatorio')
    _min_length(values, errors, 'property_type', 2, 'Tipo obrigatorio')
    _min_length(values, errors, 'description', 20, 'Descricao muito curta')
    _positive(values, errors, form, 'price', 'Informe um preco valido')
    _min_length(values, errors, 'city', 2, 'Cidade obrigatoria')
    _min_length(values, errors, 'neighborhood', 2, 'Bairro obrigatorio')
    _count(values, errors, form, 'beds', 'Informe um numero inteiro')
    _count(values, errors, form, 'baths', 'Informe um numero inteiro')
    _positive(values, errors, form, 'size', 'Informe a area em m2')
    _count(values, errors, form, 'parking', 'Informe um numero inteiro')

    if values['status'] not in PROPERTY_STATUSES:
        errors['status'] = 'Status invalido'

    return values, errors


def validate_lead_form(form):
    values = {name: _text(form, name) for name in ('name', 'phone', 'source', 'status')}
    errors = {}

    _min_length(values, errors, 'name', 2, 'Nome obrigatorio')
    _min_length(values, errors, 'phone', 8, 'Telefone/WhatsApp obrigatorio')
    _min_length(values, errors, 'source', 2, 'Origem obrigatoria')

    values['email'] = blank_to_none(form.get('email'))
    if values['email'] is not None and not is_valid_email(values['email']):
        errors['email'] = 'E-mail invalido'
    values['interested_property'] = blank_to_none(form.get('interested_property'))
    values['notes'] = blank_to_none(form.get('notes'))

    if values['status'] not in LEAD_STATUSES:
        errors['status'] = 'Status invalido'

    return values, errors
