"""
Product catalogue contract.

One eyewear product as exchanged between the products API, the catalog
client and the local backup. Records travel as plain dicts; ProductRecord
validates them (ids, prices, flags and status are coerced or rejected) and
completes them to the full field set so nothing is silently dropped when the
backup is rewritten.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict


class ProductStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DRAFT = "draft"


class ProductRecord(BaseModel):
    model_config = ConfigDict(extra="allow", use_enum_values=True)

    id: Optional[int] = None

    # commercial
    name: Optional[str] = None
    price: Optional[float] = None
    original_price: Optional[float] = None
    discount: Optional[float] = None

    # classification
    category: Optional[str] = None
    brand: Optional[str] = None
    material: Optional[str] = None
    shape: Optional[str] = None
    color: Optional[str] = None
    size: Optional[str] = None
    sizes: Any = None                    # list of sizes, or its JSON text
    framecolor: Optional[str] = None
    style: Optional[str] = None
    rim: Optional[str] = None
    gender: Optional[str] = None
    type: Optional[str] = None
    lenstypes: Any = None

    # media
    image: Optional[str] = None
    gallery: Any = None
    colorimages: Any = None              # color -> image reference

    # descriptive
    description: Optional[str] = None
    features: Any = None
    specifications: Any = None

    # flags
    status: Optional[ProductStatus] = None
    featured: Optional[bool] = None
    bestseller: Optional[bool] = None

    # set by the remote store only
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


PRODUCT_FIELDS: List[str] = list(ProductRecord.model_fields)

# Columns a client may write; id and timestamps belong to the store.
WRITABLE_FIELDS: List[str] = [f for f in PRODUCT_FIELDS if f not in {"id", "created_at", "updated_at"}]


def validate_product(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Check `raw` against ProductRecord and return it with declared fields
    coerced ("7" -> 7, "true" -> True). Keys and their order are kept;
    nothing is added. Raises pydantic.ValidationError on a bad record.
    """
    validated = ProductRecord.model_validate(raw).model_dump()
    return {key: validated.get(key, value) for key, value in raw.items()}


def complete_product(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Validated `raw` with every product field present (missing ones as None); extra keys are kept."""
    return ProductRecord.model_validate(raw).model_dump()


def complete_products(raws: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [complete_product(r) for r in raws]


def product_id_matches(record: Dict[str, Any], product_id: Any) -> bool:
    """Compare ids as integers ("7" matches 7); non-numeric ids never match."""
    try:
        return int(record.get("id")) == int(product_id)
    except (TypeError, ValueError):
        return False


def matches_text(record: Dict[str, Any], needle: str, fields: Iterable[str]) -> bool:
    """Case-insensitive partial match of `needle` against any of `fields`."""
    lowered = (needle or "").lower()
    for name in fields:
        value = record.get(name)
        if value is not None and lowered in str(value).lower():
            return True
    return False
