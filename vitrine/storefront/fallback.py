"""
Bundled listings shown when the hosted backend is unconfigured or empty.
"""

FALLBACK_DESCRIPTION = (
    'Imovel de alto padrao com curadoria exclusiva. Entre em contato para '
    'informacoes completas e agendamento de visita.'
)

FEATURED_PROPERTIES = [
    {
        'id': '1',
        'title': 'Cobertura Duplex com Vista Mar',
        'property_type': 'cobertura',
        'neighborhood': 'Ponta Verde',
        'city': 'Maceió',
        'price': 'R$ 2.850.000',
        'specs': {'beds': 4, 'baths': 5, 'size': 320, 'parking': 3},
        'image': 'https://images.unsplash.com/photo-1502005229762-cf1b2da7c5d6?q=80&w=1600&auto=format&fit=crop',
        'status': 'active',
    },
    {
        'id': '2',
        'title': 'Apartamento Garden Exclusivo',
        'property_type': 'apartamento',
        'neighborhood': 'Jatiúca',
        'city': 'Maceió',
        'price': 'R$ 1.980.000',
        'specs': {'beds': 3, 'baths': 4, 'size': 210, 'parking': 2},
        'image': 'https://images.unsplash.com/photo-1484154218962-a197022b5858?q=80&w=1600&auto=format&fit=crop',
        'status': 'active',
    },
    {
        'id': '3',
        'title': 'Casa Contemporânea em Condomínio',
        'property_type': 'casa',
        'neighborhood': 'Guaxuma',
        'city': 'Maceió',
        'price': 'R$ 3.600.000',
        'specs': {'beds': 5, 'baths': 6, 'size': 420, 'parking': 4},
        'image': 'https://images.unsplash.com/photo-1499951360447-b19be8fe80f5?q=80&w=1600&auto=format&fit=crop',
        'status': 'active',
    },
]

SOLD_PROPERTIES = [
    {
        'id': 's1',
        'title': 'Apartamento Vista Atlântica',
        'neighborhood': 'Pajuçara',
        'price': 'Vendido em 28 dias',
        'image': 'https://images.unsplash.com/photo-1505691938895-1758d7feb511?q=80&w=1600&auto=format&fit=crop',
    },
    {
        'id': 's2',
        'title': 'Casa de Praia com Pé na Areia',
        'neighborhood': 'Riacho Doce',
        'price': 'Vendido acima do valor',
        'image': 'https://images.unsplash.com/photo-1507089947368-19c1da9775ae?q=80&w=1600&auto=format&fit=crop',
    },
]
