import json

import pytest

import normalizer
from errors import IncompleteResponseError, InsufficientContentError, UpstreamParseError
from normalizer import (
    extract_json,
    find_insufficiency,
    normalize_category,
    id_list,
    normalize_reply,
    resolve_product,
    resolve_users,
)


def test_extract_json_direct():
    assert extract_json('{"title": "x"}') == {"title": "x"}


def test_extract_json_from_prose():
    text = 'Claro! Segue o relatório:\n{"title": "A", "category": "BUG"}\nQualquer dúvida, estou à disposição.'
    assert extract_json(text) == {"title": "A", "category": "BUG"}


def test_extract_json_code_fence():
    assert extract_json('```json\n{"title": "A"}\n```') == {"title": "A"}


@pytest.mark.parametrize("text", ["", "sem json aqui", "{quebrado: }", "[1, 2]"])
def test_extract_json_rejects_unusable(text):
    with pytest.raises(UpstreamParseError):
        extract_json(text)


@pytest.mark.parametrize("value,expected", [
    ("bug", "BUG"),
    ("Melhoria", "MELHORIA"),
    ("REQUISITO", "REQUISITO"),
    ("FEATURE", "BUG"),
    ("", "BUG"),
    (None, "BUG"),
])
def test_normalize_category(value, expected):
    assert normalize_category(value) == expected


def test_short_description_rejected(good_reply):
    good_reply["description"] = "Erro ao salvar venda com desconto."
    assert find_insufficiency(good_reply) is not None


def test_informative_reply_accepted(good_reply):
    assert find_insufficiency(good_reply) is None


def test_too_many_not_informed(good_reply):
    good_reply["description"] += "\nNão informado"
    good_reply["additionalInformation"] = "Não informado. Ambiente não informado."
    assert "não informado" in find_insufficiency(good_reply)


def test_repeated_not_informed_in_description():
    raw = {
        "title": "SOFTSHOP > Vendas: erro",
        "description": "Não informado não informado " * 20,
        "additionalInformation": "",
    }
    assert find_insufficiency(raw) == "'não informado' appears 40 times"


def test_description_mostly_not_informed():
    # Only two occurrences, so the count rule stays quiet and the word-share rule decides
    raw = {
        "title": "SOFTSHOP > Vendas: erro",
        "description": "Não informado. Não informado.",
        "additionalInformation": "",
    }
    assert find_insufficiency(raw) == "description is mostly 'não informado'"


def test_generic_title_with_boilerplate(good_reply):
    good_reply["title"] = "SOFTSHOP > Tela Vendas: Corrigir problema"
    good_reply["description"] += "\nÉ preciso corrigir o problema."
    assert find_insufficiency(good_reply) == "generic title with boilerplate description"


def test_many_vague_phrases(good_reply):
    good_reply["description"] += (
        "\nO sistema apresenta problemas e não funciona corretamente. "
        "Precisamos realizar ajustes de forma adequada."
    )
    assert "vague" in find_insufficiency(good_reply)


def test_resolve_product(products):
    assert resolve_product("37", products).project_name == "SOFTSHOP"
    assert resolve_product(37, products).id == "37"
    assert resolve_product("404", products) is None
    assert resolve_product(None, products) is None


def test_resolve_users_catalog_order(users):
    resolved = resolve_users(["28", "nope", "5"], users)
    assert [u.id for u in resolved] == ["5", "28"]


def test_normalize_reply(good_reply, products, users):
    data = normalize_reply(json.dumps(good_reply), products, users)
    assert data.category == "BUG"
    assert data.product.id == "37"
    assert [u.id for u in data.users] == ["5", "28"]
    assert data.user_ids == ["28", "999", "5"]


def test_normalize_reply_unknown_product(good_reply, products, users):
    good_reply["productId"] = "404"
    good_reply["userIds"] = []
    data = normalize_reply(json.dumps(good_reply), products, users)
    dumped = data.model_dump(by_alias=True, exclude_none=True)
    assert "product" not in dumped
    assert "users" not in dumped
    assert dumped["productId"] == "404"


def test_incomplete_reply_skips_resolution(good_reply, products, users, monkeypatch):
    calls = []
    monkeypatch.setattr(normalizer, "resolve_product", lambda *a: calls.append(a))
    monkeypatch.setattr(normalizer, "resolve_users", lambda *a: calls.append(a))
    del good_reply["category"]
    with pytest.raises(IncompleteResponseError, match="incompleta"):
        normalize_reply(json.dumps(good_reply), products, users)
    assert calls == []


def test_insufficient_reply_raises(good_reply, products, users):
    good_reply["description"] = "Não funciona."
    with pytest.raises(InsufficientContentError):
        normalize_reply(json.dumps(good_reply), products, users)


@pytest.mark.parametrize("value,expected", [
    (["28", 5, None], ["28", "5"]),
    (28, ["28"]),
    ("28", ["28"]),
    ("  ", []),
    (None, []),
    (True, []),
    ({"id": "28"}, []),
])
def test_id_list(value, expected):
    assert id_list(value) == expected


def test_scalar_user_ids(good_reply, products, users):
    good_reply["userIds"] = 28
    data = normalize_reply(json.dumps(good_reply), products, users)
    assert data.user_ids == ["28"]
    assert [u.id for u in data.users] == ["28"]


def test_odd_product_id_shapes(good_reply, products, users):
    good_reply["productId"] = 37
    assert normalize_reply(json.dumps(good_reply), products, users).product.id == "37"
    good_reply["productId"] = ["37"]
    assert normalize_reply(json.dumps(good_reply), products, users).product is None
