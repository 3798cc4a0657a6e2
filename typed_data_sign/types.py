"""Value types passed between the resolver, envelope builder and assembler"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

from eth_utils import is_0x_prefixed, to_checksum_address, to_int
from hexbytes import HexBytes

from .errors import InvalidVerifierParametersError

logger = logging.getLogger(__name__)

TypeSchema = Dict[str, List[Dict[str, str]]]


def parse_chain_id(value: Union[int, str]) -> int:
    """Accept chainId as an int, a decimal string or 0x-hex"""
    if isinstance(value, str) and is_0x_prefixed(value):
        return to_int(hexstr=value)
    return int(value)


@dataclass(frozen=True)
class TypedDataDefinition:
    """An EIP-712 typed data triple plus its (optional) domain"""

    types: TypeSchema
    primary_type: str
    message: Dict[str, Any]
    domain: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TypedDataDefinition":
        # EIP712Domain typing is always derived from the domain values
        types = {k: v for k, v in data["types"].items() if k != "EIP712Domain"}
        return cls(
            types=types,
            primary_type=data["primaryType"],
            message=data["message"],
            domain=data.get("domain"),
        )


@dataclass(frozen=True)
class Eip712Domain:
    """A verifier's own, fully populated EIP-712 domain"""

    name: str
    version: str
    chain_id: int
    verifying_contract: str
    salt: bytes

    def __post_init__(self):
        object.__setattr__(self, "verifying_contract", to_checksum_address(self.verifying_contract))
        object.__setattr__(self, "salt", HexBytes(self.salt))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Eip712Domain":
        return cls(
            name=data["name"],
            version=data["version"],
            chain_id=parse_chain_id(data["chainId"]),
            verifying_contract=data["verifyingContract"],
            salt=data["salt"],
        )

    def to_message(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "chainId": self.chain_id,
            "verifyingContract": self.verifying_contract,
            "salt": self.salt,
        }


@dataclass(frozen=True)
class VerifierDomain:
    """Resolved verifier data: domain, ERC-5267 fields byte and extensions"""

    domain: Eip712Domain
    fields: bytes
    extensions: List[int] = field(default_factory=list)

    def __post_init__(self):
        object.__setattr__(self, "fields", HexBytes(self.fields))
        object.__setattr__(self, "extensions", [int(x) for x in self.extensions])


@dataclass(frozen=True)
class SuppliedVerifier:
    """Verifier data known up front; no lookup call is made"""

    verifier_domain: VerifierDomain


@dataclass(frozen=True)
class VerifierAddress:
    """Verifier to look up on chain (optionally counterfactual via a factory)"""

    address: str
    factory: Optional[str] = None
    factory_data: Optional[bytes] = None


VerifierSource = Union[SuppliedVerifier, VerifierAddress]


def coerce_verifier(
    verifier: Optional[str] = None,
    verifier_domain: Optional[Union[Eip712Domain, Dict[str, Any]]] = None,
    fields: Optional[Union[bytes, str]] = None,
    extensions: Optional[Sequence[int]] = None,
    factory: Optional[str] = None,
    factory_data: Optional[Union[bytes, str]] = None,
) -> VerifierSource:
    """Build the verifier source from keyword arguments.

    The fast path needs all of ``verifier_domain``, ``fields`` and
    ``extensions``. Anything less falls through to a lookup of ``verifier``.
    """
    if verifier_domain is not None and fields is not None and extensions is not None:
        if isinstance(verifier_domain, dict):
            verifier_domain = Eip712Domain.from_dict(verifier_domain)
        return SuppliedVerifier(VerifierDomain(verifier_domain, fields, list(extensions)))

    partial = [
        name
        for name, value in (("verifier_domain", verifier_domain), ("fields", fields), ("extensions", extensions))
        if value is not None
    ]
    if verifier is None:
        if partial:
            raise InvalidVerifierParametersError(
                f"Incomplete verifier data (got {', '.join(partial)}); pass all of "
                "`verifier_domain`, `fields` and `extensions`, or a `verifier` address."
            )
        raise InvalidVerifierParametersError(
            "Pass either `verifier_domain`, `fields` and `extensions`, or a `verifier` address."
        )
    if partial:
        logger.debug("Ignoring incomplete verifier data %s, looking up %s", partial, verifier)

    return VerifierAddress(
        address=verifier,
        factory=factory,
        factory_data=HexBytes(factory_data) if factory_data is not None else None,
    )
