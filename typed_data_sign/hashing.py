"""
EIP-712 hashing and wrapped signature packing.

Hashes are always computed from the original, unwrapped typed data. The
struct hashing itself is eth_account's EIP-712 implementation.
"""

import logging
from typing import Any, Dict, List, NamedTuple, Optional

from eth_abi.packed import encode_packed
from eth_account._utils.encode_typed_data.encoding_and_hashing import (
    encode_type as _encode_type,
    hash_struct,
)
from eth_account.messages import SignableMessage
from hexbytes import HexBytes

from .config import EIP712_DOMAIN_FIELDS
from .errors import InvalidWrappedSignatureError
from .types import TypeSchema

logger = logging.getLogger(__name__)

WRAPPED_SIGNATURE_LAYOUT = ["bytes", "bytes32", "bytes32", "bytes", "uint16"]


class WrappedSignature(NamedTuple):
    signature: HexBytes
    hashed_domain: HexBytes
    hashed_contents: HexBytes
    encoded_type: str


def get_types_for_eip712_domain(domain: Optional[Dict[str, Any]]) -> List[Dict[str, str]]:
    """EIP712Domain field list for the fields present in ``domain``, in canonical order"""
    if not domain:
        return []
    return [
        {"name": name, "type": type_}
        for name, type_ in EIP712_DOMAIN_FIELDS.items()
        if domain.get(name) is not None
    ]


def hash_domain(domain: Optional[Dict[str, Any]]) -> bytes:
    domain_types = {"EIP712Domain": get_types_for_eip712_domain(domain)}
    data = {field["name"]: domain[field["name"]] for field in domain_types["EIP712Domain"]}
    return hash_struct("EIP712Domain", domain_types, data)


def hash_contents(types: TypeSchema, primary_type: str, message: Dict[str, Any]) -> bytes:
    return hash_struct(primary_type, types, message)


def encode_type(types: TypeSchema, primary_type: str) -> str:
    """Canonical type string, e.g. ``Mail(Person from,...)Person(...)``"""
    return _encode_type(primary_type, types)


def typed_data_signable(
    domain: Optional[Dict[str, Any]],
    types: TypeSchema,
    primary_type: str,
    message: Dict[str, Any],
) -> SignableMessage:
    """EIP-191 version 0x01 message: domain separator and struct hash"""
    return SignableMessage(
        HexBytes(b"\x01"),
        HexBytes(hash_domain(domain)),
        HexBytes(hash_struct(primary_type, types, message)),
    )


def pack_wrapped_signature(
    signature: bytes,
    hashed_domain: bytes,
    hashed_contents: bytes,
    encoded_type: str,
) -> HexBytes:
    """signature ‖ hashedDomain ‖ hashedContents ‖ encodedType ‖ uint16(len(encodedType))"""
    encoded_type_bytes = encoded_type.encode("utf-8")
    return HexBytes(encode_packed(
        WRAPPED_SIGNATURE_LAYOUT,
        [bytes(signature), bytes(hashed_domain), bytes(hashed_contents), encoded_type_bytes, len(encoded_type_bytes)],
    ))


def unpack_wrapped_signature(data: bytes, signature_length: Optional[int] = None) -> WrappedSignature:
    """Split a packed wrapped signature back into its segments.

    The signature length is derived from the uint16 trailer; if
    ``signature_length`` is given it must match.
    """
    data = bytes(data)
    if len(data) < 66:
        raise InvalidWrappedSignatureError(f"Wrapped signature too short: {len(data)} bytes")
    type_length = int.from_bytes(data[-2:], "big")
    offset = len(data) - 66 - type_length
    if offset < 0:
        raise InvalidWrappedSignatureError(f"Encoded type length {type_length} exceeds wrapped signature size {len(data)}")
    if signature_length is not None and signature_length != offset:
        raise InvalidWrappedSignatureError(
            f"Expected a {signature_length} byte signature, trailer implies {offset} bytes"
        )
    try:
        encoded_type = data[offset + 64:-2].decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidWrappedSignatureError(f"Encoded type is not valid UTF-8: {e}") from e

    return WrappedSignature(
        signature=HexBytes(data[:offset]),
        hashed_domain=HexBytes(data[offset:offset + 32]),
        hashed_contents=HexBytes(data[offset + 32:offset + 64]),
        encoded_type=encoded_type,
    )


def wrap_signature(
    signature: bytes,
    domain: Optional[Dict[str, Any]],
    types: TypeSchema,
    primary_type: str,
    message: Dict[str, Any],
) -> HexBytes:
    """Compute the three hashes for the original typed data and pack them behind ``signature``"""
    hashed_domain = hash_domain(domain)
    hashed_contents = hash_contents(types, primary_type, message)
    encoded_type = encode_type(types, primary_type)
    logger.debug(
        "hashedDomain=%s hashedContents=%s encodedType=%s",
        hashed_domain.hex(), hashed_contents.hex(), encoded_type,
    )
    return pack_wrapped_signature(signature, hashed_domain, hashed_contents, encoded_type)
