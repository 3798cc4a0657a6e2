"""
Verifier domain resolution.

Produces the (domain, fields, extensions) triple of the verifying smart
account, either from caller-supplied values or from one ERC-5267
``eip712Domain()`` call.
"""

import logging
from typing import Optional, Protocol

from eth_abi import decode
from eth_utils import to_checksum_address
from hexbytes import HexBytes

from .config import (
    EIP712_DOMAIN_ABI,
    EIP712_DOMAIN_RETURN_TYPES,
    MULTICALL3_ADDRESS,
    MULTICALL3_AGGREGATE3_ABI,
)
from .errors import Eip712DomainNotFoundError, TypedDataSignError
from .types import Eip712Domain, SuppliedVerifier, VerifierDomain, VerifierSource

logger = logging.getLogger(__name__)


class Eip712DomainLookup(Protocol):
    def get_eip712_domain(
        self,
        address: str,
        factory: Optional[str] = None,
        factory_data: Optional[bytes] = None,
    ) -> VerifierDomain:
        ...


def decode_eip712_domain(address: str, return_data: bytes) -> VerifierDomain:
    """Decode raw eip712Domain() return data"""
    if not return_data:
        raise Eip712DomainNotFoundError(address)
    fields, name, version, chain_id, verifying_contract, salt, extensions = decode(
        EIP712_DOMAIN_RETURN_TYPES, bytes(return_data)
    )
    return VerifierDomain(
        domain=Eip712Domain(
            name=name,
            version=version,
            chain_id=chain_id,
            verifying_contract=verifying_contract,
            salt=salt,
        ),
        fields=fields,
        extensions=list(extensions),
    )


class Web3Eip712DomainLookup:
    """Reads eip712Domain() from a contract through a web3.py connection.

    With ``factory``/``factory_data`` the read is batched behind the factory
    call in a single Multicall3 ``eth_call``, so accounts that are not
    deployed yet still resolve.
    """

    def __init__(self, w3, multicall_address: str = MULTICALL3_ADDRESS):
        self.w3 = w3
        self.multicall_address = to_checksum_address(multicall_address)

    def get_eip712_domain(self, address, factory=None, factory_data=None):
        address = to_checksum_address(address)
        contract = self.w3.eth.contract(address=address, abi=EIP712_DOMAIN_ABI)
        call_data = contract.encode_abi("eip712Domain", args=[])

        if factory is None or factory_data is None:
            logger.debug("eth_call eip712Domain() on %s", address)
            return_data = self.w3.eth.call({"to": address, "data": call_data})
            return decode_eip712_domain(address, return_data)

        logger.debug("eth_call eip712Domain() on %s via factory %s", address, factory)
        multicall = self.w3.eth.contract(address=self.multicall_address, abi=MULTICALL3_AGGREGATE3_ABI)
        results = multicall.functions.aggregate3([
            (to_checksum_address(factory), True, bytes(factory_data)),
            (address, False, HexBytes(call_data)),
        ]).call()
        _, return_data = results[1]
        return decode_eip712_domain(address, return_data)


def resolve_verifier_domain(source: VerifierSource, lookup: Optional[Eip712DomainLookup]) -> VerifierDomain:
    """Return the verifier triple, calling ``lookup`` at most once"""
    if isinstance(source, SuppliedVerifier):
        logger.debug("Using supplied verifier domain for %s", source.verifier_domain.domain.verifying_contract)
        return source.verifier_domain

    if lookup is None:
        raise TypedDataSignError("A verifier lookup requires a client with a Web3 connection or a domain lookup")
    return lookup.get_eip712_domain(source.address, source.factory, source.factory_data)
