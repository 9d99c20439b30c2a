from urllib.parse import quote

from vitrine.site import format_price

from conftest import property_row


def _fetches(records):
    return [call[1] for call in records.calls if call[0] == 'fetch']


def test_home_with_listings(client, records):
    records.seed('properties', **property_row(id='p1'))
    records.seed('properties', **property_row(id='s1', title='Casa Vendida', status='sold'))

    r = client.get('/')
    html = r.get_data(as_text=True)

    assert r.status_code == 200
    assert 'Cobertura Vista Mar' in html
    assert 'R$ 2.850.000' in html
    assert 'Casa Vendida' in html
    assert 'Apartamento Garden Exclusivo' not in html


def test_home_passes_filters_to_active_query(client, records):
    records.seed('properties', **property_row(id='p1'))

    client.get('/', query_string={'city': 'Maceió', 'type': 'cobertura'})

    featured, sold, options = _fetches(records)
    assert ('status', 'eq', 'active') in featured.filters
    assert ('city', 'eq', 'Maceió') in featured.filters
    assert ('property_type', 'eq', 'cobertura') in featured.filters
    assert featured.max_rows == 12
    assert featured.order_by == ('created_at', True)
    assert sold.filters == (('status', 'eq', 'sold'),)
    assert sold.max_rows == 4
    assert options.filters == (('status', 'eq', 'active'),)


def test_home_without_filters_queries_active_only(client, records):
    records.seed('properties', **property_row(id='p1'))

    client.get('/', query_string={'city': '  ', 'type': ''})

    featured = _fetches(records)[0]
    assert featured.filters == (('status', 'eq', 'active'),)
    assert featured.max_rows == 12


def test_home_filter_options_come_from_active_rows(client, records):
    records.seed('properties', **property_row(id='p1', city='Maceió', property_type='cobertura'))
    records.seed('properties', **property_row(id='p2', city='Barra de Sao Miguel', property_type='casa'))
    records.seed('properties', **property_row(id='p3', city='Recife', status='sold'))

    html = client.get('/').get_data(as_text=True)

    assert '<option value="Barra de Sao Miguel"' in html
    assert '<option value="Recife"' not in html


def test_home_uses_fallback_when_unconfigured(unconfigured_client):
    html = unconfigured_client.get('/').get_data(as_text=True)
    assert 'Cobertura Duplex com Vista Mar' in html


def test_home_uses_fallback_when_everything_is_empty(client, records):
    html = client.get('/', query_string={'city': 'Recife'}).get_data(as_text=True)
    assert 'Cobertura Duplex com Vista Mar' in html


def test_home_uses_fallback_on_query_error(client, records):
    records.failures['fetch'] = 'permission denied for table properties'
    r = client.get('/')
    assert r.status_code == 200
    assert 'Cobertura Duplex com Vista Mar' in r.get_data(as_text=True)


def test_home_keeps_live_sold_when_filter_matches_nothing(client, records):
    records.seed('properties', **property_row(id='p1'))
    records.seed('properties', **property_row(id='s1', title='Casa Vendida', status='sold'))

    html = client.get('/', query_string={'city': 'Recife'}).get_data(as_text=True)

    assert 'Casa Vendida' in html
    assert 'Cobertura Duplex com Vista Mar' not in html


def test_detail_page(client, records):
    records.seed('properties', **property_row(id='p1', status='reserved'))

    r = client.get('/imoveis/p1')
    html = r.get_data(as_text=True)

    assert r.status_code == 200
    assert 'Cobertura Vista Mar' in html
    assert 'Reservado' in html
    assert quote('Ola, vi o imovel Cobertura Vista Mar em Ponta Verde, Maceió e tenho interesse.', safe='') in html


def test_detail_without_images_shows_placeholder(client, records):
    records.seed('properties', **property_row(id='p1', images=[]))
    html = client.get('/imoveis/p1').get_data(as_text=True)
    assert 'imagem 1' in html


def test_detail_restricts_statuses(client, records):
    records.seed('properties', **property_row(id='p1'))
    client.get('/imoveis/p1')
    query = _fetches(records)[0]
    assert ('id', 'eq', 'p1') in query.filters
    assert ('status', 'in', ('active', 'reserved', 'sold')) in query.filters


def test_detail_hidden_status_is_not_found(client, records):
    records.seed('properties', **property_row(id='p1', status='draft'))
    r = client.get('/imoveis/p1')
    assert r.status_code == 404
    assert 'Imovel nao encontrado' in r.get_data(as_text=True)


def test_detail_missing_is_not_found(client):
    assert client.get('/imoveis/does-not-exist').status_code == 404


def test_detail_query_error_is_not_found(client, records):
    records.failures['fetch'] = 'invalid input syntax for type uuid'
    assert client.get('/imoveis/abc').status_code == 404


def test_fallback_detail_when_unconfigured(unconfigured_client):
    r = unconfigured_client.get('/imoveis/1')
    assert r.status_code == 200
    assert 'Cobertura Duplex com Vista Mar' in r.get_data(as_text=True)
    assert unconfigured_client.get('/imoveis/99').status_code == 404


def test_format_price():
    assert format_price(2850000) == 'R$ 2.850.000'
    assert format_price(950) == 'R$ 950'
    assert format_price(1234567.8) == 'R$ 1.234.568'
