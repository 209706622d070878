"""Proof containers and the JSON input consumed by the verifier contract."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from .domain import EvaluationDomain
from .encoding import (
    G1Point,
    G2Point,
    convert_proof,
    convert_public_inputs,
    convert_vk_data,
    from_0x_hex,
    to_0x_hex,
)

_COUNTER_BYTES = 16


@dataclass
class Proof:
    """Commitments, evaluations and opening proofs produced by the prover."""

    commitments1: list[G1Point] = field(default_factory=list)
    commitment2: G1Point = None
    commitments3: list[G1Point] = field(default_factory=list)
    commitments4: list[G1Point] = field(default_factory=list)
    evaluations: list[int] = field(default_factory=list)
    evaluations_alt_point: list[int] = field(default_factory=list)
    wz_pi: G1Point = None
    wzw_pi: G1Point = None


_HEX_FIELDS = {
    "header_pub_match": "headerPubMatch",
    "public_inputs_num": "publicInputsNum",
    "domain_size": "domainSize",
    "srs_hash": "srsHash",
}
_INT_FIELDS = {"from_left_index": "fromLeftIndex", "from_len": "fromLen"}
_LIST_FIELDS = {"vk_data": "vkData", "public_inputs": "publicInputs", "proof": "proof"}


@dataclass
class ContractInput:
    """Everything the on-chain verifier needs to check one e-mail proof."""

    from_left_index: int
    from_len: int
    header_pub_match: bytes
    public_inputs_num: bytes
    domain_size: bytes
    vk_data: list[str]
    public_inputs: list[str]
    proof: list[str]
    srs_hash: bytes

    @classmethod
    def build(
        cls,
        from_left_index: int,
        from_len: int,
        header_pub_match,
        public_inputs: Sequence[int],
        domain: EvaluationDomain,
        verifier_comms: Sequence[G1Point],
        g2x: G2Point,
        proof: Proof,
        srs_hash,
    ) -> "ContractInput":
        """Assemble contract input from a proof and its verifier key."""
        return cls(
            from_left_index=from_left_index,
            from_len=from_len,
            header_pub_match=bytes(header_pub_match),
            public_inputs_num=len(public_inputs).to_bytes(_COUNTER_BYTES, "big"),
            domain_size=domain.size.to_bytes(_COUNTER_BYTES, "big"),
            vk_data=convert_vk_data(domain.generator(), verifier_comms, g2x),
            public_inputs=convert_public_inputs(public_inputs),
            proof=convert_proof(proof),
            srs_hash=bytes(srs_hash),
        )

    def to_dict(self) -> dict[str, Any]:
        """Camel-cased mapping with byte fields rendered as 0x-prefixed hex."""
        data: dict[str, Any] = {}
        for name, key in _INT_FIELDS.items():
            data[key] = getattr(self, name)
        for name, key in _HEX_FIELDS.items():
            data[key] = to_0x_hex(getattr(self, name))
        for name, key in _LIST_FIELDS.items():
            data[key] = list(getattr(self, name))
        order = [
            "fromLeftIndex",
            "fromLen",
            "headerPubMatch",
            "publicInputsNum",
            "domainSize",
            "vkData",
            "publicInputs",
            "proof",
            "srsHash",
        ]
        return {key: data[key] for key in order}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ContractInput":
        """Parse the mapping produced by to_dict; raises ValueError on bad input."""
        try:
            values: dict[str, Any] = {
                name: int(data[key]) for name, key in _INT_FIELDS.items()
            }
            values.update(
                {name: from_0x_hex(str(data[key])) for name, key in _HEX_FIELDS.items()}
            )
            values.update(
                {name: [str(item) for item in data[key]] for name, key in _LIST_FIELDS.items()}
            )
        except KeyError as exc:
            raise ValueError(f"missing field {exc.args[0]!r}") from exc
        except TypeError as exc:
            raise ValueError(f"malformed contract input: {exc}") from exc
        return cls(**values)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, text: str) -> "ContractInput":
        return cls.from_dict(json.loads(text))