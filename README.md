# mailproof

Python building blocks for zero-knowledge proofs about e-mail headers over
the BN254 curve: a Keccak-256 Fiat-Shamir transcript, radix-2 evaluation
domains over the scalar field, a reader for powers-of-tau and zkey parameter
files, witness preparation for the header circuits, and the encodings that
turn proofs and verifier keys into the word lists a verifier contract reads.

Field elements are plain Python `int`s reduced modulo the BN254 scalar field.
G1 points are `(x, y)` tuples, G2 points are `((x_c0, x_c1), (y_c0, y_c1))`,
and the point at infinity is `None`.

## Modules

- `mailproof.transcript` — `Transcript`, a two-lane Keccak-256 state.
  `update_with_u256` absorbs a 32-byte word, `update_with_fr` a field element,
  `update_with_g1` the x and y words of a G1 point, and `generate_challenge`
  returns the next challenge as a field element.
- `mailproof.domain` — `EvaluationDomain(n)`, the multiplicative subgroup of
  the smallest power-of-two size at least `n`, with `element`, `generator`,
  `fft`, `ifft`, `interpolate`, `vanishing_polynomial`,
  `evaluate_vanishing_polynomial`, `lagrange_polynomial`,
  `evaluate_lagrange_polynomial` and `batch_evaluate_lagrange_polynomial`
  (Lagrange indices run from 1 to the domain size). Polynomials are lists of
  coefficients, lowest first. Also `evaluate_polynomial`,
  `padding_and_interpolate`, `blind_t`, `coset_generator`, and the label
  generators `gen_verify_comms_labels`, `gen_verify_open_zeta_labels` and
  `gen_verify_open_zeta_omega_labels`.
- `mailproof.encoding` — `to_0x_hex`, `from_0x_hex`, SHA-256 message padding
  with `padding_bytes`, `g1_words` and `g2_words` (big-endian 32-byte
  coordinates), and `convert_public_inputs`, `convert_vk_data` and
  `convert_proof`, which produce lists of `0x` hex strings.
- `mailproof.types` — `Proof`, a dataclass of commitments, evaluations and
  opening proofs, and `ContractInput`, built with `ContractInput.build` and
  round-tripped through `to_dict` / `from_dict` and `to_json` / `from_json`
  (camel-cased keys, byte fields as `0x` hex).
- `mailproof.ptau` — `BinFile`, which indexes the sections of a sectioned
  binary file and reads them on demand: `ptau_header`, `groth_header`, `ptau`,
  `pckey`, `g1_section`, `g2_section` and the zkey queries `ic`, `a_query`,
  `b_g1_query`, `b_g2_query`, `l_query`, `h_query`. `read_ptau_to_pckey(path)`
  loads a `PCKey` from a file on disk. Read failures raise `ProverError`.
- `mailproof.circuit` — `PrivateInputs` (header bytes, field positions and
  pepper) and `Email1024CircuitInput`. `from_private_inputs` extracts the
  address-with-pepper bytes and the public-match string in which every byte
  outside the From and Subject fields is zeroed; `padded_inputs` returns the
  SHA-256 padded strings widened to the circuit limits together with their
  block counts; `parameters` gives the maximum header and address lengths.
- `mailproof.circuit_2048` — `Email2048CircuitInput`, the same inputs with a
  2048-byte header limit.

## Install

```
pip install .
```

## Example

```python
from mailproof.transcript import Transcript
from mailproof.domain import EvaluationDomain
from mailproof.encoding import padding_bytes, to_0x_hex

transcript = Transcript()
transcript.update_with_u256(bytes(32))
challenge = transcript.generate_challenge()

domain = EvaluationDomain(8)
value = domain.evaluate_lagrange_polynomial(1, challenge)

padded = padding_bytes(b"abc")
assert len(padded) % 64 == 0
print(to_0x_hex(padded[:4]))
```

Reading a powers-of-tau file:

```python
from mailproof.ptau import read_ptau_to_pckey

pckey = read_ptau_to_pckey("ceremony.ptau")
print(pckey.max_degree)
```

## What this package does not do

There is no command-line program. The package does not parse raw e-mail
messages: `PrivateInputs` must be filled in by the caller. It does not
synthesize constraint systems, compute prover keys, create or verify proofs,
or perform elliptic-curve or pairing arithmetic; it prepares circuit inputs,
runs the transcript and domain arithmetic, reads parameter files, and encodes
proofs that were produced elsewhere.

## Tests

```
pip install .[test]
pytest
```