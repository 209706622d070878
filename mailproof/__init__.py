"""Transcript, evaluation domains, encodings, ptau reading and circuit inputs for e-mail header proofs over BN254."""

__version__ = "0.1.0"
__all__ = ["circuit", "circuit_2048", "domain", "encoding", "ptau", "transcript", "types"]