"""
Sign EIP-712 typed data for Solady ERC1271 smart accounts.

The owner key signs the message wrapped in a ``TypedDataSign`` struct; the
result is packed with the hashes the account needs to rebuild that struct
on chain:

    signature ‖ hashedDomain ‖ hashedContents ‖ encodedType ‖ uint16(len(encodedType))

See https://github.com/Vectorized/solady/blob/main/src/accounts/ERC1271.sol
"""

import logging
from typing import Any, Dict, Optional, Sequence, Union

from hexbytes import HexBytes

from .client import Client
from .domain import resolve_verifier_domain
from .envelope import build_envelope
from .errors import AccountNotFoundError
from .hashing import wrap_signature
from .signers import AccountLike, parse_account
from .types import Eip712Domain, TypedDataDefinition, coerce_verifier

logger = logging.getLogger(__name__)

DOCS_PATH = "typed_data_sign.sign_typed_data"


def sign_typed_data(
    client: Client,
    definition: Union[TypedDataDefinition, Dict[str, Any]],
    *,
    account: Optional[AccountLike] = None,
    verifier: Optional[str] = None,
    verifier_domain: Optional[Union[Eip712Domain, Dict[str, Any]]] = None,
    fields: Optional[Union[bytes, str]] = None,
    extensions: Optional[Sequence[int]] = None,
    factory: Optional[str] = None,
    factory_data: Optional[Union[bytes, str]] = None,
) -> HexBytes:
    """Sign ``definition`` on behalf of an ERC1271 smart account.

    Either pass ``verifier_domain``, ``fields`` and ``extensions`` (no RPC
    call), or the ``verifier`` account address, optionally with
    ``factory``/``factory_data`` if it is not deployed yet.

    Example::

        signature = sign_typed_data(
            Client.from_web3(w3, account=owner),
            {
                "domain": {"name": "Ether Mail", "version": "1", "chainId": 1,
                           "verifyingContract": "0xCcCCccccCCCCcCCCCCCcCcCccCcCCCcCcccccccC"},
                "types": {"Person": [...], "Mail": [...]},
                "primaryType": "Mail",
                "message": {...},
            },
            verifier="0xA0Cf798816D4b9b9866b5330EEa46a18382f251e",
        )
    """
    if isinstance(definition, dict):
        definition = TypedDataDefinition.from_dict(definition)

    account = account if account is not None else client.account
    if account is None:
        raise AccountNotFoundError(docs_path=DOCS_PATH)
    signer = parse_account(account, client.w3)

    source = coerce_verifier(
        verifier=verifier,
        verifier_domain=verifier_domain,
        fields=fields,
        extensions=extensions,
        factory=factory,
        factory_data=factory_data,
    )

    # Retrieve the account's own EIP-712 domain.
    resolved = resolve_verifier_domain(source, client.domain_lookup)

    # Sign with the TypedDataSign wrapper.
    envelope = build_envelope(definition, resolved)
    signature = signer.sign_typed_data(envelope.domain, envelope.types, envelope.primary_type, envelope.message)
    logger.debug("Signed TypedDataSign envelope with %s", signer.address)

    return wrap_signature(
        signature,
        definition.domain,
        definition.types,
        definition.primary_type,
        definition.message,
    )
