# vecsim/pauli.py
from dataclasses import dataclass
from typing import Union
import numpy as np
from .errors import InvalidPauliSyntax
from . import gates as G

PAULI_LABELS = "IXYZ"

@dataclass(frozen=True)
class PauliString:
    """
    A signed tensor product of single-qubit Paulis.

    Character j of `paulis` acts on qubit offset+j (offset chosen at
    application time), so "XZ" is X on the lower qubit and Z on the next one.
    """
    sign: int
    paulis: str

    def __post_init__(self):
        if self.sign not in (1, -1):
            raise InvalidPauliSyntax(f"sign must be +1 or -1, got {self.sign!r}")
        if not self.paulis or any(c not in PAULI_LABELS for c in self.paulis):
            raise InvalidPauliSyntax(f"bad Pauli labels {self.paulis!r}")

    @staticmethod
    def from_str(text: str) -> "PauliString":
        """Parse `[+|-]<I|X|Y|Z>+`, e.g. "-XZ" or "IYI"."""
        if not isinstance(text, str):
            raise InvalidPauliSyntax(f"expected text, got {type(text).__name__}")
        sign = 1
        body = text
        if text[:1] in ("+", "-"):
            sign = -1 if text[0] == "-" else 1
            body = text[1:]
        if not body:
            raise InvalidPauliSyntax(f"no Pauli labels in {text!r}")
        for c in body:
            if c not in PAULI_LABELS:
                raise InvalidPauliSyntax(f"invalid character {c!r} in Pauli string {text!r}")
        return PauliString(sign, body)

    @staticmethod
    def coerce(value: Union["PauliString", str]) -> "PauliString":
        if isinstance(value, PauliString):
            return value
        return PauliString.from_str(value)

    def __str__(self):
        return ("+" if self.sign > 0 else "-") + self.paulis

    def __len__(self):
        return len(self.paulis)

    def __neg__(self) -> "PauliString":
        return PauliString(-self.sign, self.paulis)

    def unsigned(self) -> "PauliString":
        return PauliString(1, self.paulis)

    def commutes(self, other: "PauliString") -> bool:
        """True iff the two strings (aligned at qubit 0) commute."""
        anti = 0
        for a, b in zip(self.paulis, other.paulis):
            if a != "I" and b != "I" and a != b:
                anti += 1
        return anti % 2 == 0

    def to_matrix(self) -> np.ndarray:
        """Dense 2^L x 2^L matrix; character 0 is the least significant bit."""
        m = np.eye(1, dtype=np.complex128)
        for c in self.paulis:
            m = np.kron(G.lookup(c), m)
        return self.sign * m
