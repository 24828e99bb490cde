import pytest

from inkextrinsics.calls import (
    Call,
    Instantiate,
    InstantiateWithCode,
    Payload,
    RemoveCode,
    Weight,
)


def test_weight_display():
    assert str(Weight(100, 200)) == "Weight(ref_time: 100, proof_size: 200)"


def test_weight_rejects_negative():
    with pytest.raises(ValueError):
        Weight(-1, 0)


def test_weight_rejects_overflow():
    with pytest.raises(ValueError):
        Weight(0, 2**64)


def test_weight_rejects_non_integer():
    with pytest.raises(TypeError):
        Weight(1.5, 0)


def test_remove_code_payload():
    payload = RemoveCode(b"\x01" * 32).build()
    assert payload == Payload("Contracts", "remove_code", {"code_hash": b"\x01" * 32})


def test_instantiate_with_code_payload():
    gas = Weight(5, 6)
    payload = InstantiateWithCode(7, gas, None, b"code", b"data", b"salt").build()
    assert payload.pallet == "Contracts"
    assert payload.call == "instantiate_with_code"
    assert list(payload.fields) == [
        "value",
        "gas_limit",
        "storage_deposit_limit",
        "code",
        "data",
        "salt",
    ]
    assert payload.fields["gas_limit"] == gas
    assert payload.fields["storage_deposit_limit"] is None
    assert payload.fields["code"] == b"code"


def test_instantiate_payload():
    gas = Weight(1, 2)
    payload = Instantiate(3, gas, 9, bytearray(b"\x02" * 32), b"d", b"").build()
    assert payload.call == "instantiate"
    assert payload.fields["code_hash"] == b"\x02" * 32
    assert payload.fields["storage_deposit_limit"] == 9
    assert payload.fields["salt"] == b""


def test_call_payload_wraps_destination():
    gas = Weight(10, 20)
    payload = Call(b"\x07" * 32, 0, gas, None, b"\xaa\xbb").build()
    assert payload.pallet == "Contracts"
    assert payload.call == "call"
    assert payload.fields["dest"] == {"Id": b"\x07" * 32}
    assert payload.fields["data"] == b"\xaa\xbb"
    assert list(payload.fields) == [
        "dest",
        "value",
        "gas_limit",
        "storage_deposit_limit",
        "data",
    ]


def test_call_rejects_negative_value():
    with pytest.raises(ValueError):
        Call(b"\x00" * 32, -1, Weight(0, 0), None, b"")


def test_call_rejects_oversized_deposit_limit():
    with pytest.raises(ValueError):
        Call(b"\x00" * 32, 0, Weight(0, 0), 2**128, b"")