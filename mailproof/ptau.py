"""Reader for powers-of-tau and zkey binary parameter files."""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from typing import BinaryIO, Optional

from .encoding import G1Point, G2Point

logger = logging.getLogger(__name__)

Q_MODULUS = 21888242871839275222246405745257275088696311157297823662689037894645226208583
# Coordinates in the file are stored in Montgomery form.
_R_INV = pow(1 << 256, -1, Q_MODULUS)

G1_GENERATOR = (1, 2)
G2_GENERATOR = (
    (
        10857046999023057135944570762232829481370756359578518086990519993285655852781,
        11559732032986387107991004021392285783925812861821192530917403151452391805634,
    ),
    (
        8495653923123431417604973247489272438418190587263600148770280649306958101930,
        4082367875863433681332203403145435568316851327593401208105741076214120093531,
    ),
)


class ProverError(Exception):
    """Raised when parameter files cannot be read or decoded."""


@dataclass(frozen=True)
class Section:
    position: int
    size: int


@dataclass(frozen=True)
class PtauHeader:
    n8: int
    q: int
    power: int
    ceremony_power: int


@dataclass(frozen=True)
class VerifyingKey:
    alpha_g1: G1Point
    beta_g1: G1Point
    beta_g2: G2Point
    gamma_g2: G2Point
    delta_g1: G1Point
    delta_g2: G2Point


@dataclass(frozen=True)
class HeaderGroth:
    n8q: int
    q: int
    n8r: int
    r: int
    n_vars: int
    n_public: int
    domain_size: int
    power: int
    verifying_key: VerifyingKey


@dataclass(frozen=True)
class Ptau:
    ptau_header: PtauHeader
    groth_header: HeaderGroth
    tau_g1: list[G1Point]
    tau_g2: list[G2Point]
    alpha_tau_g1: list[G1Point]
    beta_tau_g1: list[G1Point]
    beta_g2: G2Point


@dataclass(frozen=True)
class PCKey:
    """KZG commitment key: powers of tau in G1 and the verifier's group elements."""

    powers: list[G1Point]
    max_degree: int
    g: G1Point
    h: G2Point
    beta_h: G2Point


def _read_exact(reader: BinaryIO, count: int) -> bytes:
    try:
        data = reader.read(count)
    except OSError as exc:
        raise ProverError(str(exc)) from exc
    if data is None or len(data) != count:
        raise ProverError(f"unexpected end of file: wanted {count} bytes")
    return data


def _read_u32(reader: BinaryIO) -> int:
    return struct.unpack("<I", _read_exact(reader, 4))[0]


def _read_u64(reader: BinaryIO) -> int:
    return struct.unpack("<Q", _read_exact(reader, 8))[0]


def _read_bigint(reader: BinaryIO) -> int:
    return int.from_bytes(_read_exact(reader, 32), "little")


def _read_fq(reader: BinaryIO) -> int:
    return _read_bigint(reader) * _R_INV % Q_MODULUS


def _read_g1(reader: BinaryIO) -> G1Point:
    x, y = _read_fq(reader), _read_fq(reader)
    return None if x == 0 and y == 0 else (x, y)


def _read_g2(reader: BinaryIO) -> G2Point:
    x = (_read_fq(reader), _read_fq(reader))
    y = (_read_fq(reader), _read_fq(reader))
    return None if not any(x + y) else (x, y)


def _ceil_log2(value: int) -> int:
    return 0 if value <= 1 else (value - 1).bit_length()


def _read_verifying_key(reader: BinaryIO) -> VerifyingKey:
    return VerifyingKey(
        alpha_g1=_read_g1(reader),
        beta_g1=_read_g1(reader),
        beta_g2=_read_g2(reader),
        gamma_g2=_read_g2(reader),
        delta_g1=_read_g1(reader),
        delta_g2=_read_g2(reader),
    )


def _read_groth_header(reader: BinaryIO) -> HeaderGroth:
    n8q = _read_u32(reader)
    q = _read_bigint(reader)
    n8r = _read_u32(reader)
    r = _read_bigint(reader)
    n_vars = _read_u32(reader)
    n_public = _read_u32(reader)
    domain_size = _read_u32(reader)
    return HeaderGroth(
        n8q=n8q,
        q=q,
        n8r=n8r,
        r=r,
        n_vars=n_vars,
        n_public=n_public,
        domain_size=domain_size,
        power=_ceil_log2(domain_size),
        verifying_key=_read_verifying_key(reader),
    )


class BinFile:
    """Sectioned binary file; sections are indexed on open and read on demand."""

    def __init__(self, reader: BinaryIO):
        self.reader = reader
        magic = _read_exact(reader, 4)
        try:
            self.ftype = magic.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ProverError("file type tag is not valid UTF-8") from exc
        self.version = _read_u32(reader)
        num_sections = _read_u32(reader)
        self.sections: dict[int, list[Section]] = {}
        for _ in range(num_sections):
            section_id = _read_u32(reader)
            length = _read_u64(reader)
            position = self._tell()
            self.sections.setdefault(section_id, []).append(Section(position, length))
            self._seek(position + length)

    def _tell(self) -> int:
        try:
            return self.reader.tell()
        except OSError as exc:
            raise ProverError(str(exc)) from exc

    def _seek(self, position: int) -> None:
        try:
            self.reader.seek(position)
        except OSError as exc:
            raise ProverError(str(exc)) from exc

    def _goto(self, section_id: int) -> None:
        self._seek(self.get_section(section_id).position)

    def get_section(self, section_id: int) -> Section:
        """First section with this id."""
        sections = self.sections.get(section_id)
        if not sections:
            raise ProverError(f"missing section {section_id}")
        return sections[0]

    def ptau_header(self) -> PtauHeader:
        self._goto(1)
        n8 = _read_u32(self.reader)
        q = _read_bigint(self.reader)
        power = _read_u32(self.reader)
        ceremony_power = _read_u32(self.reader)
        return PtauHeader(n8=n8, q=q, power=power, ceremony_power=ceremony_power)

    def groth_header(self) -> HeaderGroth:
        self._goto(2)
        return _read_groth_header(self.reader)

    def ptau(self) -> Ptau:
        header = self.ptau_header()
        groth_header = self.groth_header()
        size = 1 << header.power
        return Ptau(
            ptau_header=header,
            groth_header=groth_header,
            tau_g1=self.g1_section(size * 2 - 1, 2),
            tau_g2=self.g2_section(size, 3),
            alpha_tau_g1=self.g1_section(size, 4),
            beta_tau_g1=self.g1_section(size, 5),
            beta_g2=self.g2_section(1, 6)[0],
        )

    def pckey(self) -> PCKey:
        """Commitment key built from the tau powers of a powers-of-tau file."""
        header = self.ptau_header()
        logger.info("power: %d, ceremony_power: %d", header.power, header.ceremony_power)
        size = 1 << header.power
        tau_g1 = self.g1_section(size * 2 - 1, 2)
        tau_g2 = self.g2_section(size, 3)
        if len(tau_g2) < 2:
            raise ProverError("powers-of-tau file holds fewer than two G2 powers")
        return PCKey(
            powers=tau_g1,
            max_degree=len(tau_g1) - 1,
            g=G1_GENERATOR,
            h=G2_GENERATOR,
            beta_h=tau_g2[1],
        )

    def ic(self, n_public: int) -> list[G1Point]:
        return self.g1_section(n_public + 1, 3)

    def a_query(self, n_vars: int) -> list[G1Point]:
        return self.g1_section(n_vars, 5)

    def b_g1_query(self, n_vars: int) -> list[G1Point]:
        return self.g1_section(n_vars, 6)

    def b_g2_query(self, n_vars: int) -> list[G2Point]:
        return self.g2_section(n_vars, 7)

    def l_query(self, n_vars: int) -> list[G1Point]:
        return self.g1_section(n_vars, 8)

    def h_query(self, n_vars: int) -> list[G1Point]:
        return self.g1_section(n_vars, 9)

    def g1_section(self, num: int, section_id: int) -> list[G1Point]:
        self._goto(section_id)
        return [_read_g1(self.reader) for _ in range(num)]

    def g2_section(self, num: int, section_id: int) -> list[G2Point]:
        self._goto(section_id)
        return [_read_g2(self.reader) for _ in range(num)]


def read_ptau_to_pckey(path) -> PCKey:
    """Load a commitment key from a powers-of-tau file on disk."""
    try:
        handle = open(path, "rb")
    except OSError as exc:
        raise ProverError(str(exc)) from exc
    with handle:
        binfile = BinFile(handle)
        logger.debug(
            "binfile: type=%s version=%d sections=%s",
            binfile.ftype,
            binfile.version,
            binfile.sections,
        )
        return binfile.pckey()


__all__ = [
    "BinFile",
    "HeaderGroth",
    "PCKey",
    "Ptau",
    "PtauHeader",
    "ProverError",
    "Section",
    "VerifyingKey",
    "read_ptau_to_pckey",
]

_Optional = Optional