import pytest
from hypothesis import given, strategies as st

from mailproof.domain import FR_MODULUS
from mailproof.transcript import Transcript


def test_initial_state_is_zero():
    t = Transcript()
    assert t.state_0 == bytes(32)
    assert t.state_1 == bytes(32)
    assert t.challenge_counter == 0


def test_update_changes_both_lanes_differently():
    t = Transcript()
    t.update_with_u256(bytes(32))
    assert t.state_0 != bytes(32)
    assert t.state_0 != t.state_1
    assert len(t.state_0) == 32 and len(t.state_1) == 32


@given(st.lists(st.binary(min_size=32, max_size=32), max_size=4))
def test_deterministic(values):
    a, b = Transcript(), Transcript()
    for v in values:
        a.update_with_u256(v)
        b.update_with_u256(v)
    assert a.generate_challenge() == b.generate_challenge()


@given(st.integers(min_value=0, max_value=FR_MODULUS - 1))
def test_fr_update_is_big_endian_word(value):
    a, b = Transcript(), Transcript()
    a.update_with_fr(value)
    b.update_with_u256(value.to_bytes(32, "big"))
    assert (a.state_0, a.state_1) == (b.state_0, b.state_1)


def test_fr_update_reduces_modulo_field():
    a, b = Transcript(), Transcript()
    a.update_with_fr(FR_MODULUS + 5)
    b.update_with_fr(5)
    assert a.state_0 == b.state_0


def test_g1_update_absorbs_x_then_y():
    a, b = Transcript(), Transcript()
    a.update_with_g1((3, 4))
    b.update_with_u256((3).to_bytes(32, "big"))
    b.update_with_u256((4).to_bytes(32, "big"))
    assert (a.state_0, a.state_1) == (b.state_0, b.state_1)


def test_g1_infinity_absorbs_zero_twice():
    a, b = Transcript(), Transcript()
    a.update_with_g1(None)
    b.update_with_u256(bytes(32))
    b.update_with_u256(bytes(32))
    assert (a.state_0, a.state_1) == (b.state_0, b.state_1)


def test_challenges_are_masked_and_counted():
    t = Transcript()
    t.update_with_u256(b"\x01" * 32)
    challenges = [t.generate_challenge() for _ in range(17)]
    assert t.challenge_counter == 17
    assert all(c < 2**253 for c in challenges)
    assert challenges[0] != challenges[1]


def test_counter_keeps_only_low_nibbles():
    t = Transcript()
    challenges = [t.generate_challenge() for _ in range(17)]
    # counter 16 encodes to the same bytes as counter 0
    assert challenges[16] == challenges[0]
    assert len(set(challenges[:16])) == 16


def test_generate_challenge_does_not_change_state():
    t = Transcript()
    t.update_with_fr(42)
    before = (t.state_0, t.state_1)
    t.generate_challenge()
    assert (t.state_0, t.state_1) == before


def test_order_of_updates_matters():
    a, b = Transcript(), Transcript()
    a.update_with_fr(1)
    a.update_with_fr(2)
    b.update_with_fr(2)
    b.update_with_fr(1)
    assert a.generate_challenge() != b.generate_challenge()


def test_rejects_oversized_g1_coordinate():
    with pytest.raises(OverflowError):
        Transcript().update_with_g1((2**256, 1))