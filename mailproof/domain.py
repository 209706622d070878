"""Radix-2 evaluation domains over the BN254 scalar field, and proof label helpers."""

from __future__ import annotations

from functools import reduce
from itertools import accumulate, repeat, zip_longest
from typing import Iterable, Sequence

FR_MODULUS = 21888242871839275222246405745257275088548364400416034343698204186575808495617
TWO_ADICITY = 28
TWO_ADIC_ROOT_OF_UNITY = (
    19103219067921713944291392827692070036145651957329286315305642004821462161904
)


def gen_verify_comms_labels(
    program_width,
    contain_range,
    contain_lookup,
    contain_mimc,
    contain_substring,
    contain_pubmatch,
):
    """Labels of the verifier commitments, in the order the verifier key stores them."""
    labels = [f"q_{i}" for i in range(program_width)]
    labels += ["q_m", "q_c", "q0next", "q_arith"]
    if contain_lookup:
        labels += ["q_lookup", "q_table"]
    labels += [f"sigma_{i}" for i in range(program_width)]
    if contain_lookup:
        labels += [f"table_{i}" for i in range(program_width + 1)]
    if contain_range:
        labels.append("q_range")
    if contain_substring:
        labels += ["q_substring", "q_substring_r"]
    if contain_pubmatch:
        labels.append("q_pubmatch")
    if contain_mimc:
        labels.append("q_mimc")
    return labels


def gen_verify_open_zeta_labels(program_width, contain_lookup):
    """Labels of the polynomials opened at zeta."""
    labels = ["t4t", "r"]
    labels += [f"w_{i}" for i in range(program_width)]
    labels += [f"sigma_{i}" for i in range(program_width - 1)]
    labels.append("q_arith")
    if contain_lookup:
        labels += ["q_table", "q_lookup", "table"]
    return labels


def gen_verify_open_zeta_omega_labels(contain_lookup, contain_substring):
    """Labels of the polynomials opened at zeta * omega."""
    labels = ["w_0", "z"]
    if contain_lookup:
        labels += ["s", "z_lookup", "table"]
    if contain_substring:
        labels += ["w_1", "w_2", "w_3", "z_substring"]
    return labels


def coset_generator(index):
    """Generator of the index-th permutation coset."""
    return {1: 7, 2: 13, 3: 17, 4: 23}.get(index, 1)


def evaluate_polynomial(coeffs: Sequence[int], point: int) -> int:
    """Evaluate a polynomial given by low-to-high coefficients at a point."""
    return reduce(lambda acc, c: (acc * point + c) % FR_MODULUS, reversed(coeffs), 0)


def _trim(coeffs: Iterable[int]) -> list[int]:
    result = [c % FR_MODULUS for c in coeffs]
    while result and result[-1] == 0:
        result.pop()
    return result


def _add(left: Sequence[int], right: Sequence[int]) -> list[int]:
    return _trim(a + b for a, b in zip_longest(left, right, fillvalue=0))


def _powers(base: int, count: int) -> list[int]:
    return list(
        accumulate(repeat(base, count - 1), lambda a, b: a * b % FR_MODULUS, initial=1)
    )


def _fft(values: list[int], root: int) -> list[int]:
    if len(values) == 1:
        return list(values)
    square = root * root % FR_MODULUS
    even = _fft(values[0::2], square)
    odd = _fft(values[1::2], square)
    twiddled = [o * t % FR_MODULUS for o, t in zip(odd, _powers(root, len(odd)))]
    return [(e + t) % FR_MODULUS for e, t in zip(even, twiddled)] + [
        (e - t) % FR_MODULUS for e, t in zip(even, twiddled)
    ]


class EvaluationDomain:
    """Multiplicative subgroup of size 2^k used for FFTs over the scalar field."""

    __slots__ = ("size", "log_size_of_group", "group_gen", "group_gen_inv", "size_inv")

    def __init__(self, num_coeffs: int):
        if num_coeffs < 0:
            raise ValueError("domain size cannot be negative")
        size = 1 << (max(num_coeffs, 1) - 1).bit_length()
        log_size = size.bit_length() - 1
        if log_size > TWO_ADICITY:
            raise ValueError(f"domain of size {size} exceeds the field's two-adicity")
        self.size = size
        self.log_size_of_group = log_size
        self.group_gen = pow(TWO_ADIC_ROOT_OF_UNITY, 1 << (TWO_ADICITY - log_size), FR_MODULUS)
        self.group_gen_inv = pow(self.group_gen, -1, FR_MODULUS)
        self.size_inv = pow(size, -1, FR_MODULUS)

    def __repr__(self) -> str:
        return f"EvaluationDomain(size={self.size})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EvaluationDomain):
            return NotImplemented
        return self.size == other.size

    def __hash__(self) -> int:
        return hash(self.size)

    def element(self, index: int) -> int:
        return pow(self.group_gen, index, FR_MODULUS)

    def generator(self) -> int:
        return self.element(1)

    def _padded(self, values: Sequence[int]) -> list[int]:
        if len(values) > self.size:
            raise ValueError(f"{len(values)} values do not fit a domain of size {self.size}")
        return [v % FR_MODULUS for v in values] + [0] * (self.size - len(values))

    def fft(self, coeffs: Sequence[int]) -> list[int]:
        """Evaluate coefficients over the domain."""
        return _fft(self._padded(coeffs), self.group_gen)

    def ifft(self, evals: Sequence[int]) -> list[int]:
        """Coefficients (padded to the domain size) of the polynomial with these evaluations."""
        values = _fft(self._padded(evals), self.group_gen_inv)
        return [v * self.size_inv % FR_MODULUS for v in values]

    def interpolate(self, evals: Sequence[int]) -> list[int]:
        """Lowest-degree polynomial through the evaluations, trailing zeros removed."""
        return _trim(self.ifft(evals))

    def vanishing_polynomial(self) -> list[int]:
        return [FR_MODULUS - 1] + [0] * (self.size - 1) + [1]

    def evaluate_vanishing_polynomial(self, point: int) -> int:
        return (pow(point, self.size, FR_MODULUS) - 1) % FR_MODULUS

    def _check_index(self, index: int) -> None:
        if not 1 <= index <= self.size:
            raise ValueError(f"lagrange index {index} outside [1, {self.size}]")

    def lagrange_polynomial(self, index: int) -> list[int]:
        """Coefficients of the index-th Lagrange basis polynomial, index in [1, size]."""
        self._check_index(index)
        evals = [0] * self.size
        evals[index - 1] = 1
        return self.interpolate(evals)

    def _lagrange_denominator(self, index: int, point: int) -> int:
        n = self.size
        return n * (self.element(n - index + 1) * point - 1) % FR_MODULUS

    def evaluate_lagrange_polynomial(self, index: int, point: int) -> int:
        """Evaluate the index-th Lagrange basis polynomial at a point off the domain."""
        return self.batch_evaluate_lagrange_polynomial([index], point)[0]

    def batch_evaluate_lagrange_polynomial(self, indices: Sequence[int], point: int) -> list[int]:
        for index in indices:
            self._check_index(index)
        denominators = [self._lagrange_denominator(i, point) for i in indices]
        if any(d == 0 for d in denominators):
            raise ValueError("point lies on the evaluation domain")
        numerator = self.evaluate_vanishing_polynomial(point)
        return [numerator * pow(d, -1, FR_MODULUS) % FR_MODULUS for d in denominators]


def padding_and_interpolate(domain_values, domain):
    """Pad values with zeros to the domain size; return them with their polynomial."""
    padded = domain._padded(list(domain_values))
    return padded, domain.interpolate(padded)


def blind_t(polynomials, domain, rng):
    """Blind the split quotient polynomial pieces without changing their combination."""
    if len(polynomials) < 3:
        raise ValueError("at least three quotient pieces are required")
    count = len(polynomials)
    blinds = [rng.randrange(FR_MODULUS) for _ in range(count - 1)]
    shift = [0] * domain.size

    pieces = [list(p) for p in polynomials]
    result = [_add(pieces[0], shift + [blinds[0]])]
    for piece, previous, current in zip(pieces[1:-1], blinds, blinds[1:]):
        blind = [(-previous) % FR_MODULUS] + shift[1:] + [current]
        result.append(_add(piece, blind))
    result.append(_add(pieces[-1], [(-blinds[-1]) % FR_MODULUS]))
    return result