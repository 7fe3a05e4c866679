# normalizer.py
import json
import logging
import re
from typing import List, Optional

from catalog import find_product, find_users
from errors import IncompleteResponseError, InsufficientContentError, UpstreamParseError
from schemas import AssistantData, Category, Product, User
from utils import strip_code_fences

logger = logging.getLogger(__name__)

ALLOWED_CATEGORIES = {c.value for c in Category}
MIN_DESCRIPTION_CHARS = 100
MAX_NOT_INFORMED = 2
MAX_VAGUE_PHRASES = 3

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")
_NOT_INFORMED = re.compile(r"n[ãa]o\s+informad[oa]", re.I)
_WORD = re.compile(r"\w+", re.UNICODE)

# "SOFTSHOP > Tela X: Ajustar ..." style titles the model falls back to when it has nothing to say
_GENERIC_TITLE = re.compile(r"^[^>]+>\s*tela\s+\S+\s*:\s*(ajustar|melhorar|corrigir)\b", re.I)

# Stock filler the model produces when the input carried no real information
VAGUE_PHRASES = (
    "ajustar a tela",
    "ajustar conforme necessário",
    "melhorar a funcionalidade",
    "melhorar a experiência do usuário",
    "corrigir o problema",
    "corrigir o erro",
    "não está funcionando corretamente",
    "não funciona corretamente",
    "comportamento inesperado",
    "deve funcionar corretamente",
    "funcionar conforme esperado",
    "verificar o funcionamento",
    "realizar ajustes",
    "de forma adequada",
    "apresenta problemas",
    "conforme necessário",
)

INSUFFICIENT_MESSAGE = (
    "A descrição fornecida não contém informações suficientes para gerar o relatório. "
    "Descreva o produto, a tela e o comportamento observado."
)


# ---------------------------
# JSON extraction
# ---------------------------
def extract_json(text: str) -> dict:
    raw = strip_code_fences(text or "")
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        m = _JSON_OBJECT.search(raw)
        if not m:
            raise UpstreamParseError("Resposta da IA não contém JSON válido")
        try:
            parsed = json.loads(m.group(0))
        except json.JSONDecodeError:
            raise UpstreamParseError("Resposta da IA não contém JSON válido")
    if not isinstance(parsed, dict):
        raise UpstreamParseError("Resposta da IA não contém JSON válido")
    return parsed


# ---------------------------
# Validation
# ---------------------------
def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def check_completeness(raw: dict) -> None:
    if not all(_text(raw.get(k)) for k in ("title", "description", "category")):
        raise IncompleteResponseError("Resposta da IA está incompleta")


def count_vague_phrases(text: str) -> int:
    t = (text or "").lower()
    return sum(1 for phrase in VAGUE_PHRASES if phrase in t)


def find_insufficiency(raw: dict) -> Optional[str]:
    """Return why the reply is too vague to use, or None when it looks informative."""
    title = _text(raw.get("title"))
    description = _text(raw.get("description"))
    additional = _text(raw.get("additionalInformation"))

    not_informed = len(_NOT_INFORMED.findall(" ".join([title, description, additional])))
    if not_informed > MAX_NOT_INFORMED:
        return f"'não informado' appears {not_informed} times"

    words = _WORD.findall(description)
    desc_not_informed = len(_NOT_INFORMED.findall(description))
    if words and desc_not_informed * 2 > len(words) / 2:
        return "description is mostly 'não informado'"

    if _GENERIC_TITLE.search(title) and count_vague_phrases(description) > 0:
        return "generic title with boilerplate description"

    if len(description) < MIN_DESCRIPTION_CHARS:
        return f"description has {len(description)} characters"

    vague = count_vague_phrases(f"{title} {description}")
    if vague > MAX_VAGUE_PHRASES:
        return f"{vague} vague phrases"

    return None


def normalize_category(value) -> str:
    v = str(value or "").strip().upper()
    return v if v in ALLOWED_CATEGORIES else Category.BUG.value


# ---------------------------
# Catalog resolution
# ---------------------------
def resolve_product(product_id, products: List[Product]) -> Optional[Product]:
    if product_id in (None, ""):
        return None
    return find_product(products, product_id)


def id_list(value) -> List[str]:
    """IDs from a reply field that should be a list but may come back as a lone string or number."""
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None and not isinstance(v, (dict, list))]
    if isinstance(value, (str, int)) and not isinstance(value, bool) and str(value).strip():
        return [str(value).strip()]
    return []


def resolve_users(user_ids, users: List[User]) -> List[User]:
    return find_users(users, id_list(user_ids))


def normalize_reply(text: str, products: List[Product], users: List[User]) -> AssistantData:
    raw = extract_json(text)
    check_completeness(raw)

    reason = find_insufficiency(raw)
    if reason:
        logger.warning("Rejected AI reply as insufficient: %s", reason)
        raise InsufficientContentError(INSUFFICIENT_MESSAGE)

    product_ids = [] if isinstance(raw.get("productId"), (list, tuple)) else id_list(raw.get("productId"))
    product_id = product_ids[0] if product_ids else None
    user_ids = id_list(raw.get("userIds"))
    additional = raw.get("additionalInformation")

    product = resolve_product(product_id, products)
    resolved_users = resolve_users(user_ids, users)

    return AssistantData(
        title=_text(raw["title"]),
        description=_text(raw["description"]),
        category=normalize_category(raw["category"]),
        additional_information=additional if isinstance(additional, str) else None,
        product_id=product_id,
        user_ids=user_ids if "userIds" in raw else None,
        product=product,
        users=resolved_users or None,
    )
