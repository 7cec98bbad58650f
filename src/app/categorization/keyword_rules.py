"""Static keyword rules for Brazilian transaction descriptions.

Keys are category names from the registry; values are ordered keyword tuples.
Keywords are matched case-insensitively by the scorer. Keep each keyword in a
single category, otherwise both categories score on the same evidence.
"""

from types import MappingProxyType

KEYWORD_RULES = MappingProxyType(
    {
        "Moradia": (
            "aluguel",
            "condominio",
            "condomínio",
            "iptu",
            "imobiliaria",
            "reforma",
            "moveis",
        ),
        "Alimentação": (
            "mercado",
            "supermercado",
            "padaria",
            "restaurante",
            "ifood",
            "lanchonete",
            "acougue",
            "hortifruti",
            "pizzaria",
        ),
        "Transporte": (
            "uber",
            "taxi",
            "combustivel",
            "gasolina",
            "posto",
            "estacionamento",
            "pedagio",
            "metro",
            "onibus",
        ),
        "Contas": (
            "luz",
            "energia",
            "agua",
            "internet",
            "telefone",
            "celular",
            "comgas",
            "sabesp",
        ),
        "Lazer": (
            "cinema",
            "netflix",
            "spotify",
            "teatro",
            "viagem",
            "hotel",
            "ingresso",
        ),
        "Saúde": (
            "farmacia",
            "drogaria",
            "hospital",
            "clinica",
            "medico",
            "dentista",
            "laboratorio",
        ),
        "Educação": (
            "escola",
            "faculdade",
            "curso",
            "livraria",
            "mensalidade",
            "udemy",
        ),
    }
)
