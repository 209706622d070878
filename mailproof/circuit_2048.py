"""Header circuit sized for e-mail headers of up to 2048 padded bytes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .circuit import EmailCircuitInput


@dataclass
class Email2048CircuitInput(EmailCircuitInput):
    """Circuit for headers of up to 2048 padded bytes."""

    HEADER_MAX_LEN: ClassVar[int] = 2048
    ADDR_MAX_LEN: ClassVar[int] = 192

    @classmethod
    def parameters(cls) -> tuple[int, int]:
        """Maximum header length and maximum address-with-pepper length, in bytes."""
        return cls.HEADER_MAX_LEN, cls.ADDR_MAX_LEN