"""Hex encodings, SHA-256 message padding and contract-ready data layouts."""

from __future__ import annotations

import binascii
from typing import Iterable, Optional, Sequence, Tuple

from .domain import FR_MODULUS

G1Point = Optional[Tuple[int, int]]
G2Point = Optional[Tuple[Tuple[int, int], Tuple[int, int]]]

_WORD = 32


def to_0x_hex(data) -> str:
    return "0x" + bytes(data).hex()


def from_0x_hex(text: str) -> bytes:
    """Decode hex text, dropping any leading "0x" prefixes; raises ValueError."""
    while text.startswith("0x"):
        text = text[2:]
    try:
        return binascii.unhexlify(text)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"invalid hex string: {exc}") from exc


def padding_bytes(input_bytes) -> bytes:
    """Apply SHA-256 message padding to a byte string."""
    data = bytes(input_bytes)
    remainder = (len(data) * 8) % 512
    if remainder < 448:
        padding_count = (448 - remainder) // 8
    else:
        padding_count = (448 + 512 - remainder) // 8
    return (
        data
        + b"\x80"
        + bytes(padding_count - 1)
        + (len(data) * 8).to_bytes(8, "big")
    )


def convert_public_inputs(public_input: Iterable[int]) -> list[str]:
    """Render field elements as 0x-prefixed hex without leading zeros."""
    return [f"0x{value % FR_MODULUS:x}" for value in public_input]


def _word(value: int) -> bytes:
    return value.to_bytes(_WORD, "big")


def g1_words(point: G1Point) -> tuple[bytes, bytes]:
    """Big-endian x and y words of a G1 point; infinity becomes two zero words."""
    if point is None:
        return bytes(_WORD), bytes(_WORD)
    x, y = point
    return _word(x), _word(y)


def g2_words(point: G2Point) -> tuple[bytes, bytes, bytes, bytes]:
    """Big-endian x.c0, x.c1, y.c0, y.c1 words of a G2 point."""
    if point is None:
        return bytes(_WORD), bytes(_WORD), _word(1), bytes(_WORD)
    (x_c0, x_c1), (y_c0, y_c1) = point
    return _word(x_c0), _word(x_c1), _word(y_c0), _word(y_c1)


def _fr_hex(value: int) -> str:
    return to_0x_hex(_word(value % FR_MODULUS))


def _g1_hex(points: Iterable[G1Point]) -> list[str]:
    return [to_0x_hex(word) for point in points for word in g1_words(point)]


def convert_vk_data(omega: int, verifier_comms: Sequence[G1Point], g2x: G2Point) -> list[str]:
    """Verifier key data: domain generator, commitments, then the G2 point."""
    return (
        [_fr_hex(omega)]
        + _g1_hex(verifier_comms)
        + [to_0x_hex(word) for word in g2_words(g2x)]
    )


def convert_proof(proof) -> list[str]:
    """Flatten a proof into hex words in the order the verifier contract reads them."""
    commitments = [
        *proof.commitments1,
        proof.commitment2,
        *proof.commitments3,
        *proof.commitments4,
    ]
    evaluations = [*proof.evaluations, *proof.evaluations_alt_point]
    return (
        _g1_hex(commitments)
        + [_fr_hex(e) for e in evaluations]
        + _g1_hex([proof.wz_pi, proof.wzw_pi])
    )