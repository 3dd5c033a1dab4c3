import pytest

from authrules.errors import RuleSetError, RuleSetException
from authrules.payload import Payload, ProofInfo, SeedsVec
from authrules.pubkey import PROGRAM_ID, SYSTEM_PROGRAM_ID


def _full_payload():
    return Payload(
        [
            ("Destination", PROGRAM_ID),
            ("DestinationSeeds", SeedsVec([b"rule_set", bytes(PROGRAM_ID), b"test rule_set"])),
            ("AuthorityProof", ProofInfo([bytes(32), bytes([1]) * 32])),
            ("Amount", 5),
        ]
    )


def test_empty_payload_encoding():
    assert Payload().to_bytes() == b"\x00\x00\x00\x00"


def test_number_entry_wire_format():
    payload = Payload([("Amount", 5)])
    expected = b"\x01\x00\x00\x00" + b"\x06\x00\x00\x00Amount" + b"\x03" + b"\x05" + b"\x00" * 7
    assert payload.to_bytes() == expected


def test_round_trip_all_variants():
    payload = _full_payload()
    decoded = Payload.from_bytes(payload.to_bytes())
    assert decoded == payload
    assert decoded.get_pubkey("Destination") == PROGRAM_ID
    assert decoded.get_amount("Amount") == 5


def test_encoding_independent_of_insertion_order():
    first = Payload([("b", 1), ("a", SYSTEM_PROGRAM_ID)])
    second = Payload([("a", SYSTEM_PROGRAM_ID), ("b", 1)])
    assert first.to_bytes() == second.to_bytes()


def test_insert_returns_previous_value():
    payload = Payload()
    assert payload.insert("Amount", 4) is None
    assert payload.insert("Amount", 5) == 4
    assert payload.get_amount("Amount") == 5
    assert len(payload) == 1


def test_try_insert_refuses_existing_key():
    payload = Payload([("Amount", 4)])
    with pytest.raises(RuleSetException) as info:
        payload.try_insert("Amount", 5)
    assert info.value.error is RuleSetError.VALUE_OCCUPIED
    assert payload.get_amount("Amount") == 4


def test_try_insert_adds_new_key():
    payload = Payload()
    payload.try_insert("Destination", PROGRAM_ID)
    assert "Destination" in payload
    assert payload.get("Destination") == PROGRAM_ID


def test_typed_getters_return_none_for_other_variants():
    payload = _full_payload()
    assert payload.get_amount("Destination") is None
    assert payload.get_pubkey("Amount") is None
    assert payload.get_seeds("AuthorityProof") is None
    assert payload.get_merkle_proof("DestinationSeeds") is None
    assert payload.get_pubkey("Missing") is None
    assert payload.get("Missing") is None


def test_typed_getters_return_matching_variants():
    payload = _full_payload()
    assert payload.get_seeds("DestinationSeeds").seeds[0] == b"rule_set"
    assert payload.get_merkle_proof("AuthorityProof").proof[1] == bytes([1]) * 32


def test_later_duplicate_overwrites_in_constructor():
    payload = Payload([("Amount", 1), ("Amount", 2)])
    assert payload.get_amount("Amount") == 2


def test_mapping_constructor():
    payload = Payload({"Amount": 9})
    assert payload == Payload([("Amount", 9)])


@pytest.mark.parametrize("value", [-1, 2**64])
def test_number_out_of_range_rejected(value):
    with pytest.raises(ValueError):
        Payload([("Amount", value)])


@pytest.mark.parametrize("value", [True, "text", 1.5])
def test_unsupported_value_rejected(value):
    with pytest.raises(TypeError):
        Payload().insert("Amount", value)


def test_bad_proof_node_length_rejected():
    with pytest.raises(ValueError):
        ProofInfo([b"short"])


def test_unknown_variant_tag_rejected():
    data = Payload([("Amount", 5)]).to_bytes()
    tag_index = 4 + 4 + len("Amount")
    corrupted = data[:tag_index] + b"\x09" + data[tag_index + 1:]
    with pytest.raises(RuleSetException) as info:
        Payload.from_bytes(corrupted)
    assert info.value.error is RuleSetError.BORSH_DESERIALIZATION_ERROR


def test_trailing_bytes_rejected():
    with pytest.raises(RuleSetException) as info:
        Payload.from_bytes(_full_payload().to_bytes() + b"\x00")
    assert info.value.error is RuleSetError.BORSH_DESERIALIZATION_ERROR


def test_truncated_payload_rejected():
    data = _full_payload().to_bytes()
    with pytest.raises(RuleSetException) as info:
        Payload.from_bytes(data[:-1])
    assert info.value.error is RuleSetError.BORSH_DESERIALIZATION_ERROR