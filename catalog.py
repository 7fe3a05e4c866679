# catalog.py
import json
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from schemas import Product, User

logger = logging.getLogger(__name__)


def _read_records(path: str, kind: str) -> list:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        records = json.load(f)
    if not isinstance(records, list):
        raise ValueError(f"{kind} catalog at {p} must be a JSON array.")
    return records


def load_products(path: str) -> List[Product]:
    return [Product.model_validate(r) for r in _read_records(path, "Product")]


def load_users(path: str) -> List[User]:
    return [User.model_validate(r) for r in _read_records(path, "User")]


def load_catalog(products_path: str, users_path: str) -> Tuple[List[Product], List[User]]:
    """Read both catalog files. Called once at startup; the lists are never mutated afterwards."""
    products = load_products(products_path)
    users = load_users(users_path)
    logger.info("Catalog loaded: %d products, %d users", len(products), len(users))
    return products, users


def find_product(products: List[Product], product_id) -> Optional[Product]:
    if product_id is None:
        return None
    wanted = str(product_id)
    return next((p for p in products if p.id == wanted), None)


def find_users(users: List[User], user_ids) -> List[User]:
    wanted = {str(u) for u in user_ids if u is not None}
    return [u for u in users if u.id in wanted]
