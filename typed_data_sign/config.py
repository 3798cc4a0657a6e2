# TypedDataSign protocol configuration
# This file contains the EIP-712 type definitions, contract ABIs and runtime
# settings used when wrapping signatures for ERC-1271 smart accounts

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

# Canonical EIP712Domain field order. Domain hashing uses whichever subset of
# these is present, always in this order.
EIP712_DOMAIN_FIELDS = {
    "name": "string",
    "version": "string",
    "chainId": "uint256",
    "verifyingContract": "address",
    "salt": "bytes32",
}

TYPED_DATA_SIGN_TYPE = "TypedDataSign"


def typed_data_sign_fields(primary_type: str) -> List[Dict[str, str]]:
    """Field list of the TypedDataSign wrapper struct (Solady ERC1271)"""
    return [
        {"name": "contents", "type": primary_type},
        {"name": "fields", "type": "bytes1"},
        {"name": "name", "type": "string"},
        {"name": "version", "type": "string"},
        {"name": "chainId", "type": "uint256"},
        {"name": "verifyingContract", "type": "address"},
        {"name": "salt", "type": "bytes32"},
        {"name": "extensions", "type": "uint256[]"},
    ]


# ERC-5267 eip712Domain() return layout
EIP712_DOMAIN_RETURN_TYPES = [
    "bytes1",     # fields
    "string",     # name
    "string",     # version
    "uint256",    # chainId
    "address",    # verifyingContract
    "bytes32",    # salt
    "uint256[]",  # extensions
]

EIP712_DOMAIN_ABI = [
    {
        "inputs": [],
        "name": "eip712Domain",
        "outputs": [
            {"internalType": "bytes1", "name": "fields", "type": "bytes1"},
            {"internalType": "string", "name": "name", "type": "string"},
            {"internalType": "string", "name": "version", "type": "string"},
            {"internalType": "uint256", "name": "chainId", "type": "uint256"},
            {"internalType": "address", "name": "verifyingContract", "type": "address"},
            {"internalType": "bytes32", "name": "salt", "type": "bytes32"},
            {"internalType": "uint256[]", "name": "extensions", "type": "uint256[]"},
        ],
        "stateMutability": "view",
        "type": "function",
    }
]

# Multicall3 is deployed at the same address on every major chain. Used to
# deploy a counterfactual account and read its domain in a single eth_call.
MULTICALL3_ADDRESS = "0xcA11bde05977b3631167028862bE2a173976CA11"

MULTICALL3_AGGREGATE3_ABI = [
    {
        "inputs": [
            {
                "components": [
                    {"internalType": "address", "name": "target", "type": "address"},
                    {"internalType": "bool", "name": "allowFailure", "type": "bool"},
                    {"internalType": "bytes", "name": "callData", "type": "bytes"},
                ],
                "internalType": "struct Multicall3.Call3[]",
                "name": "calls",
                "type": "tuple[]",
            }
        ],
        "name": "aggregate3",
        "outputs": [
            {
                "components": [
                    {"internalType": "bool", "name": "success", "type": "bool"},
                    {"internalType": "bytes", "name": "returnData", "type": "bytes"},
                ],
                "internalType": "struct Multicall3.Result[]",
                "name": "returnData",
                "type": "tuple[]",
            }
        ],
        "stateMutability": "payable",
        "type": "function",
    }
]

# Runtime settings
CONFIG_ENV_VAR = "TYPED_DATA_SIGN_CONFIG"
RPC_URL_ENV_VAR = "TYPED_DATA_SIGN_RPC_URL"
PRIVATE_KEY_ENV_VAR = "TYPED_DATA_SIGN_PRIVATE_KEY"
DEFAULT_CONFIG_PATH = "typed_data_sign_config.json"


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load runtime configuration.

    Reads a JSON file (``path``, then ``$TYPED_DATA_SIGN_CONFIG``, then
    ``typed_data_sign_config.json`` in the working directory) and applies
    environment overrides for ``rpc_url`` and ``private_key``. A missing
    file yields an empty config.
    """
    config_path = Path(path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)
    config: Dict[str, Any] = {}
    if config_path.exists():
        with open(config_path, "r") as f:
            config = json.load(f)

    if os.environ.get(RPC_URL_ENV_VAR):
        config["rpc_url"] = os.environ[RPC_URL_ENV_VAR]
    if os.environ.get(PRIVATE_KEY_ENV_VAR):
        config["private_key"] = os.environ[PRIVATE_KEY_ENV_VAR]
    return config
