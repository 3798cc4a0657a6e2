"""Errors raised by typed_data_sign.

Only conditions detected by this package get their own class. RPC, ABI
decoding, hashing and signer failures propagate from web3 / eth_abi /
eth_account unchanged.
"""

from typing import Optional


class TypedDataSignError(Exception):
    """Base class for typed_data_sign errors"""


class AccountNotFoundError(TypedDataSignError):
    def __init__(self, docs_path: Optional[str] = None):
        self.docs_path = docs_path
        message = (
            "Could not find an Account to execute with this Action.\n"
            "Please provide an Account with the `account` argument, "
            "or by supplying an `account` to the Client."
        )
        if docs_path:
            message += f"\nDocs: {docs_path}"
        super().__init__(message)


class Eip712DomainNotFoundError(TypedDataSignError):
    def __init__(self, address: str):
        self.address = address
        super().__init__(
            f"No EIP-712 domain found on contract \"{address}\".\n"
            "Ensure that the contract is deployed and implements "
            "`eip712Domain()` (ERC-5267), or pass `factory` and "
            "`factory_data` for a counterfactual account."
        )


class InvalidVerifierParametersError(TypedDataSignError):
    """Neither a complete verifier domain nor a verifier address was given"""


class InvalidWrappedSignatureError(TypedDataSignError, ValueError):
    """Packed wrapped signature bytes do not match the expected layout"""
