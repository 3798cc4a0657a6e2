"""
Signing backends for the wrapped typed data.

The wrapping logic only needs "typed data in, signature bytes out"; these
classes adapt eth_account local keys and node-managed (JSON-RPC) accounts to
that shape.
"""

import logging
from typing import Any, Dict, Optional, Protocol, Union

from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address, to_hex
from hexbytes import HexBytes

from .errors import TypedDataSignError
from .hashing import get_types_for_eip712_domain, typed_data_signable
from .types import TypeSchema

logger = logging.getLogger(__name__)


class TypedDataSigner(Protocol):
    address: str

    def sign_typed_data(
        self,
        domain: Optional[Dict[str, Any]],
        types: TypeSchema,
        primary_type: str,
        message: Dict[str, Any],
    ) -> bytes:
        ...


class LocalAccountSigner:
    """Signs with a private key held in-process"""

    def __init__(self, account: LocalAccount):
        self.account = account
        self.address = account.address

    def sign_typed_data(self, domain, types, primary_type, message):
        signable = typed_data_signable(domain, types, primary_type, message)
        signed_message = self.account.sign_message(signable)
        return HexBytes(signed_message.signature)


def to_json_compatible(value: Any) -> Any:
    """Convert bytes values to 0x-hex so typed data can go over JSON-RPC"""
    if isinstance(value, (bytes, bytearray)):
        return to_hex(bytes(value))
    if isinstance(value, dict):
        return {k: to_json_compatible(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_compatible(v) for v in value]
    return value


class JsonRpcSigner:
    """Delegates signing to the node's wallet (eth_signTypedData_v4)"""

    def __init__(self, w3, address: str):
        self.w3 = w3
        self.address = to_checksum_address(address)

    def sign_typed_data(self, domain, types, primary_type, message):
        domain = domain or {}
        typed_data = {
            "types": {"EIP712Domain": get_types_for_eip712_domain(domain), **types},
            "primaryType": primary_type,
            "domain": {k: v for k, v in domain.items() if v is not None},
            "message": message,
        }
        logger.debug("eth_signTypedData_v4 for %s", self.address)
        result = self.w3.manager.request_blocking(
            "eth_signTypedData_v4", [self.address, to_json_compatible(typed_data)]
        )
        return HexBytes(result)


AccountLike = Union[str, LocalAccount, TypedDataSigner]


def parse_account(account: AccountLike, w3=None) -> TypedDataSigner:
    """Turn an address, LocalAccount or signer into a TypedDataSigner"""
    if isinstance(account, LocalAccount):
        return LocalAccountSigner(account)
    if isinstance(account, str):
        if w3 is None:
            raise TypedDataSignError(
                f"Account {account} is a JSON-RPC account; signing with it requires a Web3 connection"
            )
        return JsonRpcSigner(w3, account)
    return account
