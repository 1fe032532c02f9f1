from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

from pydantic import ValidationError

from eyewear_catalog.error_handler import EnvelopeError
from eyewear_catalog.integrations.contracts.products import validate_product


class EnvelopeKind(str, Enum):
    PRODUCTS = "products"   # {"success": true, "products": [...]}
    PRODUCT = "product"     # {"success": true, "product": {...}}
    ARRAY = "array"         # [...]
    OBJECT = "object"       # any other object; payload is its "data" member if present


@dataclass(frozen=True)
class Envelope:
    kind: EnvelopeKind
    payload: Any
    raw: Any


def parse_envelope(body: Any) -> Envelope:
    if isinstance(body, list):
        return Envelope(EnvelopeKind.ARRAY, body, body)

    if isinstance(body, dict):
        if body.get("success") and isinstance(body.get("products"), list):
            return Envelope(EnvelopeKind.PRODUCTS, body["products"], body)
        if body.get("success") and isinstance(body.get("product"), dict):
            return Envelope(EnvelopeKind.PRODUCT, body["product"], body)
        if "data" in body:
            return Envelope(EnvelopeKind.OBJECT, body["data"], body)
        return Envelope(EnvelopeKind.OBJECT, body, body)

    raise EnvelopeError(f"Unrecognized response envelope: {type(body).__name__}", payload=body)


def _describe(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, list):
        return "a list"
    if isinstance(value, dict):
        return "an object"
    return type(value).__name__


def _validated(record: Dict[str, Any], raw: Any) -> Dict[str, Any]:
    try:
        return validate_product(record)
    except ValidationError as exc:
        raise EnvelopeError(f"Product record failed validation: {exc}", payload=raw) from exc


def unwrap_collection(envelope: Envelope) -> List[Dict[str, Any]]:
    kind = envelope.kind
    if kind is EnvelopeKind.PRODUCTS or kind is EnvelopeKind.ARRAY:
        items = envelope.payload
    elif kind is EnvelopeKind.OBJECT:
        if not isinstance(envelope.payload, list):
            raise EnvelopeError(
                f"Expected a product list, got {_describe(envelope.payload)}", payload=envelope.raw
            )
        items = envelope.payload
    elif kind is EnvelopeKind.PRODUCT:
        raise EnvelopeError("Expected a product list, got a single product", payload=envelope.raw)
    else:  # pragma: no cover - every EnvelopeKind is handled above
        raise EnvelopeError(f"Unhandled envelope kind {kind!r}", payload=envelope.raw)

    if not all(isinstance(item, dict) for item in items):
        raise EnvelopeError("Product list contains non-object entries", payload=envelope.raw)
    return [_validated(item, envelope.raw) for item in items]


def unwrap_item(envelope: Envelope) -> Dict[str, Any]:
    kind = envelope.kind
    if kind is EnvelopeKind.PRODUCT:
        return _validated(envelope.payload, envelope.raw)
    if kind is EnvelopeKind.OBJECT:
        if not isinstance(envelope.payload, dict):
            raise EnvelopeError(
                f"Expected a single product, got {_describe(envelope.payload)}", payload=envelope.raw
            )
        return _validated(envelope.payload, envelope.raw)
    if kind is EnvelopeKind.PRODUCTS or kind is EnvelopeKind.ARRAY:
        raise EnvelopeError("Expected a single product, got a list", payload=envelope.raw)
    raise EnvelopeError(f"Unhandled envelope kind {kind!r}", payload=envelope.raw)  # pragma: no cover
