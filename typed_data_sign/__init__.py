"""ERC1271 TypedDataSign signatures for smart accounts"""

from .client import Client
from .domain import Eip712DomainLookup, Web3Eip712DomainLookup, resolve_verifier_domain
from .envelope import WrappedEnvelope, build_envelope, build_wrapped_message, build_wrapped_types
from .errors import (
    AccountNotFoundError,
    Eip712DomainNotFoundError,
    InvalidVerifierParametersError,
    InvalidWrappedSignatureError,
    TypedDataSignError,
)
from .hashing import (
    encode_type,
    get_types_for_eip712_domain,
    hash_contents,
    hash_domain,
    pack_wrapped_signature,
    unpack_wrapped_signature,
    wrap_signature,
)
from .sign import sign_typed_data
from .signers import JsonRpcSigner, LocalAccountSigner, TypedDataSigner, parse_account
from .types import (
    Eip712Domain,
    SuppliedVerifier,
    TypedDataDefinition,
    VerifierAddress,
    VerifierDomain,
    coerce_verifier,
)

__version__ = "0.1.0"
