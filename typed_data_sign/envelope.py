"""
TypedDataSign envelope construction.

The caller's message is nested as ``contents`` of a TypedDataSign struct
that also carries the verifier's own domain, so the smart account can check
both what was signed and which account it was signed for.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .config import TYPED_DATA_SIGN_TYPE, typed_data_sign_fields
from .types import TypedDataDefinition, TypeSchema, VerifierDomain


@dataclass(frozen=True)
class WrappedEnvelope:
    domain: Optional[Dict[str, Any]]
    types: TypeSchema
    primary_type: str
    message: Dict[str, Any]


def build_wrapped_types(types: TypeSchema, primary_type: str) -> TypeSchema:
    """Original schema plus the TypedDataSign wrapper type"""
    return {**types, TYPED_DATA_SIGN_TYPE: typed_data_sign_fields(primary_type)}


def build_wrapped_message(message: Dict[str, Any], verifier_domain: VerifierDomain) -> Dict[str, Any]:
    return {
        "contents": message,
        "fields": verifier_domain.fields,
        "extensions": list(verifier_domain.extensions),
        **verifier_domain.domain.to_message(),
    }


def build_envelope(definition: TypedDataDefinition, verifier_domain: VerifierDomain) -> WrappedEnvelope:
    # Signed under the application's domain; the verifier domain only
    # appears inside the message.
    return WrappedEnvelope(
        domain=definition.domain,
        types=build_wrapped_types(definition.types, definition.primary_type),
        primary_type=TYPED_DATA_SIGN_TYPE,
        message=build_wrapped_message(definition.message, verifier_domain),
    )
