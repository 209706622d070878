import io
import struct

import pytest

from mailproof.domain import FR_MODULUS
from mailproof.ptau import (
    G1_GENERATOR,
    G2_GENERATOR,
    BinFile,
    ProverError,
    Q_MODULUS,
    Section,
    read_ptau_to_pckey,
)

_R = (1 << 256) % Q_MODULUS


def fq(value):
    return (value * _R % Q_MODULUS).to_bytes(32, "little")


def g1(point):
    return bytes(64) if point is None else fq(point[0]) + fq(point[1])


def g2(point):
    if point is None:
        return bytes(128)
    (x0, x1), (y0, y1) = point
    return fq(x0) + fq(x1) + fq(y0) + fq(y1)


def u32(value):
    return struct.pack("<I", value)


def build_file(sections, magic=b"ptau", version=1):
    out = magic + u32(version) + u32(len(sections))
    for section_id, body in sections:
        out += u32(section_id) + struct.pack("<Q", len(body)) + body
    return out


def ptau_header_body(power, ceremony_power):
    return u32(32) + Q_MODULUS.to_bytes(32, "little") + u32(power) + u32(ceremony_power)


TAU_G1 = [(5, 6), (7, 8), None]
TAU_G2 = [((1, 2), (3, 4)), ((9, 10), (11, 12))]


def groth_header_body(domain_size):
    return (
        u32(32)
        + Q_MODULUS.to_bytes(32, "little")
        + u32(32)
        + FR_MODULUS.to_bytes(32, "little")
        + u32(10)
        + u32(2)
        + u32(domain_size)
        + g1((21, 22))
        + g1((23, 24))
        + g2(((25, 26), (27, 28)))
        + g2(((29, 30), (31, 32)))
        + g1(None)
        + g2(((33, 34), (35, 36)))
    )


def ptau_bytes():
    return build_file(
        [
            (1, ptau_header_body(1, 4)),
            (2, b"".join(g1(p) for p in TAU_G1)),
            (3, b"".join(g2(p) for p in TAU_G2)),
        ]
    )


def test_file_tag_and_sections():
    binfile = BinFile(io.BytesIO(ptau_bytes()))
    assert binfile.ftype == "ptau"
    assert binfile.version == 1
    assert sorted(binfile.sections) == [1, 2, 3]
    assert binfile.get_section(1) == Section(position=12 + 12, size=44)
    assert binfile.get_section(2).size == 64 * len(TAU_G1)


def test_ptau_header():
    header = BinFile(io.BytesIO(ptau_bytes())).ptau_header()
    assert header.n8 == 32
    assert header.q == Q_MODULUS
    assert header.power == 1
    assert header.ceremony_power == 4


def test_pckey():
    key = BinFile(io.BytesIO(ptau_bytes())).pckey()
    assert key.powers == TAU_G1
    assert key.max_degree == len(TAU_G1) - 1
    assert key.beta_h == TAU_G2[1]
    assert key.g == G1_GENERATOR
    assert key.h == G2_GENERATOR


def test_infinity_points_decode_to_none():
    binfile = BinFile(io.BytesIO(ptau_bytes()))
    assert binfile.g1_section(3, 2)[2] is None
    assert binfile.g1_section(1, 2) == [(5, 6)]


def test_read_ptau_to_pckey(tmp_path):
    path = tmp_path / "params.ptau"
    path.write_bytes(ptau_bytes())
    key = read_ptau_to_pckey(path)
    assert key.powers == TAU_G1
    assert key.beta_h == TAU_G2[1]


def test_read_missing_file(tmp_path):
    with pytest.raises(ProverError):
        read_ptau_to_pckey(tmp_path / "absent.ptau")


def test_missing_section():
    binfile = BinFile(io.BytesIO(ptau_bytes()))
    with pytest.raises(ProverError):
        binfile.g1_section(1, 9)


def test_truncated_magic():
    with pytest.raises(ProverError):
        BinFile(io.BytesIO(b"pt"))


def test_section_past_end_of_file():
    binfile = BinFile(io.BytesIO(ptau_bytes()))
    with pytest.raises(ProverError):
        binfile.g2_section(5, 3)


def test_groth_header():
    data = build_file([(2, groth_header_body(8))], magic=b"zkey")
    header = BinFile(io.BytesIO(data)).groth_header()
    assert header.n8q == 32
    assert header.q == Q_MODULUS
    assert header.r == FR_MODULUS
    assert header.n_vars == 10
    assert header.n_public == 2
    assert header.domain_size == 8
    assert header.power == 3
    assert header.verifying_key.alpha_g1 == (21, 22)
    assert header.verifying_key.delta_g1 is None
    assert header.verifying_key.delta_g2 == ((33, 34), (35, 36))


def test_full_ptau():
    alpha = [(41, 42), (43, 44)]
    beta = [(45, 46), None]
    beta_g2 = ((47, 48), (49, 50))
    body2 = groth_header_body(4)
    data = build_file(
        [
            (1, ptau_header_body(1, 4)),
            (2, body2),
            (3, b"".join(g2(p) for p in TAU_G2)),
            (4, b"".join(g1(p) for p in alpha)),
            (5, b"".join(g1(p) for p in beta)),
            (6, g2(beta_g2)),
        ]
    )
    ptau = BinFile(io.BytesIO(data)).ptau()
    assert ptau.ptau_header.power == 1
    assert ptau.groth_header.n_vars == 10
    assert len(ptau.tau_g1) == 3
    assert ptau.tau_g2 == TAU_G2
    assert ptau.alpha_tau_g1 == alpha
    assert ptau.beta_tau_g1 == beta
    assert ptau.beta_g2 == beta_g2


POINTS_G1 = [(61, 62), (63, 64), (65, 66)]
POINTS_G2 = [((1, 1), (2, 2)), ((3, 3), (4, 4)), None]


@pytest.mark.parametrize(
    "method, section_id",
    [("a_query", 5), ("b_g1_query", 6), ("l_query", 8), ("h_query", 9)],
)
def test_g1_queries(method, section_id):
    data = build_file([(section_id, b"".join(g1(p) for p in POINTS_G1))], magic=b"zkey")
    binfile = BinFile(io.BytesIO(data))
    assert getattr(binfile, method)(3) == POINTS_G1


def test_ic_reads_one_extra_point():
    data = build_file([(3, b"".join(g1(p) for p in POINTS_G1))], magic=b"zkey")
    assert BinFile(io.BytesIO(data)).ic(2) == POINTS_G1


def test_b_g2_query():
    data = build_file([(7, b"".join(g2(p) for p in POINTS_G2))], magic=b"zkey")
    assert BinFile(io.BytesIO(data)).b_g2_query(3) == POINTS_G2