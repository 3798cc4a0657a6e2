import pytest
from eth_utils import keccak

from typed_data_sign.errors import InvalidWrappedSignatureError
from typed_data_sign.hashing import (
    encode_type,
    get_types_for_eip712_domain,
    hash_contents,
    hash_domain,
    pack_wrapped_signature,
    unpack_wrapped_signature,
    wrap_signature,
)

from conftest import ETHER_MAIL_DOMAIN, ETHER_MAIL_MESSAGE, ETHER_MAIL_TYPES, STUB_SIGNATURE

# Reference values of the Ether Mail example in EIP-712
ETHER_MAIL_DOMAIN_SEPARATOR = "f2cee375fa42b42143804025fc449deafd50cc031ca257e0b194a650a912090f"
ETHER_MAIL_STRUCT_HASH = "c52c0ee5d84264471806290a3f2c4cecfc5490626bf912d01f240d7a274b371e"
ETHER_MAIL_ENCODED_TYPE = "Mail(Person from,Person to,string contents)Person(string name,address wallet)"


def test_domain_types_follow_canonical_order():
    domain = {
        "salt": b"\x01" * 32,
        "verifyingContract": "0xCcCCccccCCCCcCCCCCCcCcCccCcCCCcCcccccccC",
        "name": "Ether Mail",
    }
    assert get_types_for_eip712_domain(domain) == [
        {"name": "name", "type": "string"},
        {"name": "verifyingContract", "type": "address"},
        {"name": "salt", "type": "bytes32"},
    ]


def test_domain_types_skip_none_values():
    domain = {"name": "Ether Mail", "version": None, "chainId": 1}
    assert [f["name"] for f in get_types_for_eip712_domain(domain)] == ["name", "chainId"]


def test_domain_types_empty_for_missing_domain():
    assert get_types_for_eip712_domain(None) == []
    assert get_types_for_eip712_domain({}) == []


def test_hash_domain_matches_reference():
    assert hash_domain(ETHER_MAIL_DOMAIN).hex() == ETHER_MAIL_DOMAIN_SEPARATOR


def test_hash_domain_ignores_insertion_order():
    reordered = dict(reversed(list(ETHER_MAIL_DOMAIN.items())))
    assert list(reordered) != list(ETHER_MAIL_DOMAIN)
    assert hash_domain(reordered) == hash_domain(ETHER_MAIL_DOMAIN)


def test_hash_domain_depends_only_on_populated_fields():
    with_none = {**ETHER_MAIL_DOMAIN, "salt": None}
    assert hash_domain(with_none) == hash_domain(ETHER_MAIL_DOMAIN)

    without_version = {k: v for k, v in ETHER_MAIL_DOMAIN.items() if k != "version"}
    assert hash_domain(without_version) != hash_domain(ETHER_MAIL_DOMAIN)


def test_hash_empty_domain():
    expected = keccak(keccak(text="EIP712Domain()"))
    assert hash_domain(None) == expected
    assert hash_domain({}) == expected


def test_hash_contents_matches_reference():
    assert hash_contents(ETHER_MAIL_TYPES, "Mail", ETHER_MAIL_MESSAGE).hex() == ETHER_MAIL_STRUCT_HASH


def test_encode_type_puts_primary_type_first():
    assert encode_type(ETHER_MAIL_TYPES, "Mail") == ETHER_MAIL_ENCODED_TYPE
    assert encode_type(ETHER_MAIL_TYPES, "Person") == "Person(string name,address wallet)"


def test_encode_type_unknown_primary_type_raises():
    with pytest.raises(Exception):
        encode_type(ETHER_MAIL_TYPES, "Parcel")


def test_pack_layout():
    hashed_domain = bytes.fromhex(ETHER_MAIL_DOMAIN_SEPARATOR)
    hashed_contents = bytes.fromhex(ETHER_MAIL_STRUCT_HASH)
    packed = pack_wrapped_signature(STUB_SIGNATURE, hashed_domain, hashed_contents, ETHER_MAIL_ENCODED_TYPE)

    encoded_type = ETHER_MAIL_ENCODED_TYPE.encode("utf-8")
    assert bytes(packed) == (
        STUB_SIGNATURE + hashed_domain + hashed_contents + encoded_type + len(encoded_type).to_bytes(2, "big")
    )


def test_length_trailer_counts_utf8_bytes():
    types = {"Nachricht": [{"name": "grüße", "type": "string"}]}
    encoded_type = encode_type(types, "Nachricht")
    packed = bytes(pack_wrapped_signature(STUB_SIGNATURE, b"\x00" * 32, b"\x00" * 32, encoded_type))

    type_length = int.from_bytes(packed[-2:], "big")
    assert type_length == len(encoded_type.encode("utf-8"))
    assert type_length > len(encoded_type)
    assert len(packed) - len(STUB_SIGNATURE) - 64 - 2 == type_length


def test_unpack_splits_segments():
    packed = wrap_signature(STUB_SIGNATURE, ETHER_MAIL_DOMAIN, ETHER_MAIL_TYPES, "Mail", ETHER_MAIL_MESSAGE)
    decoded = unpack_wrapped_signature(packed)

    assert bytes(decoded.signature) == STUB_SIGNATURE
    assert decoded.hashed_domain.hex().removeprefix("0x") == ETHER_MAIL_DOMAIN_SEPARATOR
    assert decoded.hashed_contents.hex().removeprefix("0x") == ETHER_MAIL_STRUCT_HASH
    assert decoded.encoded_type == ETHER_MAIL_ENCODED_TYPE


def test_unpack_rejects_truncated_data():
    with pytest.raises(InvalidWrappedSignatureError):
        unpack_wrapped_signature(b"\x00" * 10)

    # trailer claims more type bytes than there are
    with pytest.raises(InvalidWrappedSignatureError):
        unpack_wrapped_signature(b"\x00" * 64 + b"\x01\x00")


def test_unpack_checks_expected_signature_length():
    packed = wrap_signature(STUB_SIGNATURE, ETHER_MAIL_DOMAIN, ETHER_MAIL_TYPES, "Mail", ETHER_MAIL_MESSAGE)

    assert bytes(unpack_wrapped_signature(packed, signature_length=65).signature) == STUB_SIGNATURE
    with pytest.raises(InvalidWrappedSignatureError, match="trailer implies 65"):
        unpack_wrapped_signature(packed, signature_length=64)


def test_unpack_rejects_non_utf8_type():
    packed = STUB_SIGNATURE + b"\x00" * 64 + b"\xff\xfe" + b"\x00\x02"
    with pytest.raises(InvalidWrappedSignatureError, match="UTF-8"):
        unpack_wrapped_signature(packed)
