import json
from pathlib import Path

import pytest

from catalog import load_catalog
from gemini_engine import ReportAssistant
from tests.fakes import make_client

DATA_DIR = Path(__file__).resolve().parent.parent / "backend" / "data"

BUG_DESCRIPTION = (
    "Comportamento atual:\n\nAo salvar uma venda com desconto acima de 10%, o SOFTSHOP exibe "
    "\"Sessão expirada\" e a venda é descartada.\n\n"
    "Comportamento esperado:\n\nA venda deve ser gravada com o desconto aplicado.\n\n"
    "Passos para reproduzir:\n  1. Acessar Vendas > Nova venda\n  2. Aplicar desconto de 15%\n"
    "  3. Clicar em Salvar"
)


@pytest.fixture
def catalog():
    return load_catalog(str(DATA_DIR / "products.json"), str(DATA_DIR / "users.json"))


@pytest.fixture
def products(catalog):
    return catalog[0]


@pytest.fixture
def users(catalog):
    return catalog[1]


@pytest.fixture
def good_reply():
    return {
        "title": "SOFTSHOP > Vendas > Nova venda: Erro de sessão expirada ao salvar com desconto",
        "category": "bug",
        "description": BUG_DESCRIPTION,
        "additionalInformation": "Vídeo: https://cdn.discordapp.com/attachments/1/2/erro.mp4",
        "productId": "37",
        "userIds": ["28", "999", "5"],
    }


@pytest.fixture
def assistant_factory(products, users):
    def factory(content):
        if not isinstance(content, str):
            content = json.dumps(content, ensure_ascii=False)
        return ReportAssistant("test-key", "gemini-test", products, users, client=make_client(content))
    return factory
