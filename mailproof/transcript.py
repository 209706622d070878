"""Keccak-256 Fiat-Shamir transcript compatible with the on-chain verifier."""

from __future__ import annotations

from Crypto.Hash import keccak

from .domain import FR_MODULUS
from .encoding import G1Point, g1_words

FR_MASK = 0x1F
DST_0 = bytes(4)
DST_1 = b"\x00\x00\x00\x01"
DST_CHALLENGE = b"\x00\x00\x00\x02"


def _keccak(*parts: bytes) -> bytes:
    hasher = keccak.new(digest_bits=256)
    for part in parts:
        hasher.update(part)
    return hasher.digest()


def _counter_bytes(value: int) -> bytes:
    # Only the low nibble of each byte is kept, as the verifier contract expects.
    return bytes((value >> shift) & 0x0F for shift in (24, 16, 8, 0))


class Transcript:
    """Two-lane Keccak state that absorbs values and squeezes field challenges."""

    def __init__(self) -> None:
        self.state_0 = bytes(32)
        self.state_1 = bytes(32)
        self.challenge_counter = 0

    def update_with_u256(self, value) -> None:
        data = bytes(value)
        old_state_0 = self.state_0
        self.state_0 = _keccak(DST_0, old_state_0, self.state_1, data)
        self.state_1 = _keccak(DST_1, old_state_0, self.state_1, data)

    def update_with_fr(self, fr: int) -> None:
        self.update_with_u256((fr % FR_MODULUS).to_bytes(32, "big"))

    def update_with_g1(self, point: G1Point) -> None:
        for word in g1_words(point):
            self.update_with_u256(word)

    def generate_challenge(self) -> int:
        query = bytearray(
            _keccak(
                DST_CHALLENGE,
                self.state_0,
                self.state_1,
                _counter_bytes(self.challenge_counter),
            )
        )
        self.challenge_counter += 1
        query[0] &= FR_MASK
        return int.from_bytes(query, "big") % FR_MODULUS