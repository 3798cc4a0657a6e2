#!/usr/bin/env python3
"""
Command line interface for ERC1271 TypedDataSign signatures

  typed-data-sign sign --typed-data mail.json --verifier 0xA0Cf...251e --rpc http://localhost:8545
  typed-data-sign sign --typed-data mail.json --verifier-domain verifier.json --private-key 0x...
  typed-data-sign decode --signature 0x...
"""

import argparse
import json
import logging
import sys

from eth_account import Account
from eth_utils import to_hex
from web3 import Web3

from .client import Client
from .config import load_config
from .errors import InvalidVerifierParametersError, InvalidWrappedSignatureError, TypedDataSignError
from .hashing import unpack_wrapped_signature
from .sign import sign_typed_data


def load_json(path):
    with open(path, "r") as f:
        return json.load(f)


def cmd_sign(args) -> int:
    config = load_config(args.config)

    private_key = args.private_key or config.get("private_key")
    rpc_url = args.rpc or config.get("rpc_url")
    verifier = args.verifier or config.get("verifier")

    w3 = Web3(Web3.HTTPProvider(rpc_url)) if rpc_url else None
    account = Account.from_key(private_key) if private_key else config.get("account")
    client = Client(account=account, w3=w3)

    kwargs = {}
    if args.verifier_domain:
        verifier_data = load_json(args.verifier_domain)
        missing = [key for key in ("domain", "fields", "extensions") if key not in verifier_data]
        if missing:
            raise InvalidVerifierParametersError(
                f"Verifier domain file {args.verifier_domain} is missing: {', '.join(missing)}"
            )
        kwargs["verifier_domain"] = verifier_data["domain"]
        kwargs["fields"] = verifier_data["fields"]
        kwargs["extensions"] = verifier_data["extensions"]
    else:
        kwargs["verifier"] = verifier
        kwargs["factory"] = args.factory
        kwargs["factory_data"] = args.factory_data

    signature = sign_typed_data(client, load_json(args.typed_data), **kwargs)
    print(to_hex(signature))
    return 0


def cmd_decode(args) -> int:
    try:
        data = Web3.to_bytes(hexstr=args.signature)
    except ValueError as e:
        raise InvalidWrappedSignatureError(f"Signature is not valid hex: {e}") from e
    decoded = unpack_wrapped_signature(data, args.signature_length)
    print(json.dumps({
        "signature": to_hex(decoded.signature),
        "hashedDomain": to_hex(decoded.hashed_domain),
        "hashedContents": to_hex(decoded.hashed_contents),
        "encodedType": decoded.encoded_type,
    }, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sign EIP-712 typed data for ERC1271 (TypedDataSign) smart accounts")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sign_parser = subparsers.add_parser("sign", help="Create a wrapped signature")
    sign_parser.add_argument("--typed-data", required=True, help="JSON file with domain, types, primaryType and message")
    verifier_group = sign_parser.add_mutually_exclusive_group()
    verifier_group.add_argument("--verifier", help="Smart account address to read eip712Domain() from")
    verifier_group.add_argument("--verifier-domain", help="JSON file with the account's domain, fields and extensions")
    sign_parser.add_argument("--factory", help="Account factory address (undeployed accounts)")
    sign_parser.add_argument("--factory-data", help="Account factory calldata (undeployed accounts)")
    sign_parser.add_argument("--private-key", help="Owner private key")
    sign_parser.add_argument("--rpc", help="RPC URL")
    sign_parser.add_argument("--config", help="Config file path")
    sign_parser.set_defaults(func=cmd_sign)

    decode_parser = subparsers.add_parser("decode", help="Split a wrapped signature into its parts")
    decode_parser.add_argument("--signature", required=True, help="Wrapped signature hex")
    decode_parser.add_argument("--signature-length", type=int, help="Expected inner signature length in bytes")
    decode_parser.set_defaults(func=cmd_decode)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    try:
        return args.func(args)
    except TypedDataSignError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
