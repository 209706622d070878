"""Witness preparation for the e-mail header circuits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, NamedTuple

from .encoding import padding_bytes


@dataclass
class PrivateInputs:
    """Header bytes and the positions of the fields the circuit looks at."""

    email_header: bytes
    from_index: int
    from_left_index: int
    from_right_index: int
    subject_index: int
    subject_right_index: int
    dkim_header_index: int
    from_pepper: bytes = b""


class _PaddedInputs(NamedTuple):
    email_header: bytes
    email_addr_pepper: bytes
    email_header_pub_match: bytes
    header_data_len: int
    addr_pepper_data_len: int
    header_max_blocks: int
    addr_max_blocks: int


def _kept_start(index: int, name: str) -> int:
    # A field that does not open the header keeps its preceding CRLF as well.
    if index == 0:
        return 0
    if index < 2:
        raise ValueError(f"{name} must be 0 or at least 2, got {index}")
    return index - 2


def _pub_match(inputs: PrivateInputs) -> bytes:
    header = inputs.email_header
    from_start = _kept_start(inputs.from_index, "from_index")
    subject_start = _kept_start(inputs.subject_index, "subject_index")
    if inputs.dkim_header_index < 2:
        raise ValueError(
            f"dkim_header_index must be at least 2, got {inputs.dkim_header_index}"
        )
    stop = inputs.dkim_header_index - 2

    masked = bytearray(header)
    for i in range(len(masked)):
        if from_start <= i < inputs.from_left_index:
            continue
        if i == inputs.from_right_index + 1:
            continue
        if subject_start <= i < inputs.subject_right_index:
            continue
        if i == stop:
            break
        masked[i] = 0
    return bytes(masked)


def _fit(data: bytes, max_len: int, what: str) -> bytes:
    if len(data) > max_len:
        raise ValueError(f"padded {what} is {len(data)} bytes, limit is {max_len}")
    return data + bytes(max_len - len(data))


@dataclass
class EmailCircuitInput:
    """Inputs of the header circuit: header, address with pepper, and public match string."""

    HEADER_MAX_LEN: ClassVar[int] = 1024
    ADDR_MAX_LEN: ClassVar[int] = 192

    email_header_bytes: bytes
    email_addr_pepper_bytes: bytes
    email_header_pub_match: bytes
    from_left_index: int
    from_len: int

    @classmethod
    def parameters(cls) -> tuple[int, int]:
        """Maximum header length and maximum address-with-pepper length, in bytes."""
        return cls.HEADER_MAX_LEN, cls.ADDR_MAX_LEN

    @classmethod
    def from_private_inputs(cls, private_inputs: PrivateInputs):
        """Derive circuit inputs; only the From and Subject fields stay in the match string."""
        header = bytes(private_inputs.email_header)
        left = private_inputs.from_left_index
        right = private_inputs.from_right_index
        if not 0 <= left <= right < len(header):
            raise ValueError(
                f"address range [{left}, {right}] does not lie in a header of {len(header)} bytes"
            )
        return cls(
            email_header_bytes=header,
            email_addr_pepper_bytes=header[left : right + 1] + bytes(private_inputs.from_pepper),
            email_header_pub_match=_pub_match(private_inputs),
            from_left_index=left,
            from_len=right - left + 1,
        )

    def padded_inputs(self) -> _PaddedInputs:
        """SHA-256 padded byte strings widened to the circuit limits, with block counts."""
        header_max, addr_max = self.parameters()
        header = padding_bytes(self.email_header_bytes)
        addr = padding_bytes(self.email_addr_pepper_bytes)
        pub_match = padding_bytes(self.email_header_pub_match)
        return _PaddedInputs(
            email_header=_fit(header, header_max, "header"),
            email_addr_pepper=_fit(addr, addr_max, "address with pepper"),
            email_header_pub_match=_fit(pub_match, header_max, "match string"),
            header_data_len=len(header) // 64,
            addr_pepper_data_len=len(addr) // 64,
            header_max_blocks=header_max * 8 // 512,
            addr_max_blocks=addr_max * 8 // 512,
        )


@dataclass
class Email1024CircuitInput(EmailCircuitInput):
    """Circuit for headers of up to 1024 padded bytes."""

    HEADER_MAX_LEN: ClassVar[int] = 1024
    ADDR_MAX_LEN: ClassVar[int] = 192