"""Pytest configuration and fixtures."""

from typing import Any, Dict, List

import pytest
from web3.providers.base import BaseProvider

from typed_data_sign import Eip712Domain, TypedDataDefinition, VerifierDomain

ETHER_MAIL_DOMAIN = {
    "name": "Ether Mail",
    "version": "1",
    "chainId": 1,
    "verifyingContract": "0xCcCCccccCCCCcCCCCCCcCcCccCcCCCcCcccccccC",
}

ETHER_MAIL_TYPES = {
    "Person": [
        {"name": "name", "type": "string"},
        {"name": "wallet", "type": "address"},
    ],
    "Mail": [
        {"name": "from", "type": "Person"},
        {"name": "to", "type": "Person"},
        {"name": "contents", "type": "string"},
    ],
}

ETHER_MAIL_MESSAGE = {
    "from": {"name": "Cow", "wallet": "0xCD2a3d9F938E13CD947Ec05AbC7FE734Df8DD826"},
    "to": {"name": "Bob", "wallet": "0xbBbBBBBbbBBBbbbBbbBbbbbBBbBbbbbBbBbbBBbB"},
    "contents": "Hello, Bob!",
}

VERIFIER_ADDRESS = "0xA0Cf798816D4b9b9866b5330EEa46a18382f251e"

STUB_SIGNATURE = bytes([0x11]) * 65

# Well-known private key #0 of the Hardhat / Anvil dev mnemonic
OWNER_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"


@pytest.fixture
def ether_mail() -> TypedDataDefinition:
    return TypedDataDefinition(
        types=ETHER_MAIL_TYPES,
        primary_type="Mail",
        message=ETHER_MAIL_MESSAGE,
        domain=dict(ETHER_MAIL_DOMAIN),
    )


@pytest.fixture
def ether_mail_json() -> Dict[str, Any]:
    return {
        "domain": dict(ETHER_MAIL_DOMAIN),
        "types": ETHER_MAIL_TYPES,
        "primaryType": "Mail",
        "message": ETHER_MAIL_MESSAGE,
    }


@pytest.fixture
def verifier_domain() -> VerifierDomain:
    return VerifierDomain(
        domain=Eip712Domain(
            name="SoladyAccount",
            version="1",
            chain_id=1,
            verifying_contract=VERIFIER_ADDRESS,
            salt=b"\x00" * 32,
        ),
        fields="0x0f",
        extensions=[],
    )


class StubSigner:
    """Deterministic signer recording what it was asked to sign"""

    address = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

    def __init__(self, signature: bytes = STUB_SIGNATURE):
        self.signature = signature
        self.calls: List[Dict[str, Any]] = []

    def sign_typed_data(self, domain, types, primary_type, message):
        self.calls.append({
            "domain": domain,
            "types": types,
            "primary_type": primary_type,
            "message": message,
        })
        return self.signature


class RecordingLookup:
    def __init__(self, result: VerifierDomain):
        self.result = result
        self.calls = []

    def get_eip712_domain(self, address, factory=None, factory_data=None):
        self.calls.append((address, factory, factory_data))
        return self.result


class FailingLookup:
    def get_eip712_domain(self, address, factory=None, factory_data=None):
        raise AssertionError(f"eip712Domain lookup must not be called (address={address})")


class FakeProvider(BaseProvider):
    """Answers JSON-RPC methods from a fixed table and records the requests"""

    def __init__(self, responses: Dict[str, Any]):
        super().__init__()
        self.responses = responses
        self.requests: List[Any] = []

    def make_request(self, method, params):
        self.requests.append((method, params))
        return {"jsonrpc": "2.0", "id": len(self.requests), "result": self.responses[method]}

    def is_connected(self, show_traceback: bool = False) -> bool:
        return True


@pytest.fixture
def stub_signer() -> StubSigner:
    return StubSigner()
