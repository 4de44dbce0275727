# vecsim/state.py
import logging
from dataclasses import dataclass
from typing import Iterable, Union
import numpy as np
from . import gates as G
from .errors import DimensionMismatch, InconsistentStabilizers, UnknownGate
from .pauli import PauliString

logger = logging.getLogger(__name__)

DEFAULT_DTYPE = np.complex64
ATOL = 1e-4
BACKENDS = ("serial", "numba")

PauliLike = Union[PauliString, str]

def _kernels(backend: str):
    if backend == "serial":
        from . import apply_serial as kernels
    elif backend == "numba":
        try:
            from . import apply_numba as kernels
        except ImportError as e:
            raise RuntimeError("Numba backend not available. Did you `pip install numba`?") from e
    else:
        raise NotImplementedError(f"Unknown backend: {backend}")
    return kernels

@dataclass
class StateVector:
    """
    Dense state of n qubits.

    psi[i] is the amplitude of basis state i, where bit q of i (bit 0 least
    significant) is the value of qubit q. Normalization is not enforced.
    """
    n: int
    psi: np.ndarray  # shape (2**n,), dtype complex64/128
    backend: str = "serial"

    def __post_init__(self):
        if self.n < 0:
            raise ValueError(f"qubit count must be >= 0, got {self.n}")
        if self.psi.shape != (1 << self.n,):
            raise DimensionMismatch(
                f"{self.n} qubits need {1 << self.n} amplitudes, got shape {self.psi.shape}")

    @staticmethod
    def zero(n: int, dtype=DEFAULT_DTYPE, backend: str = "serial") -> "StateVector":
        N = 1 << n
        psi = np.zeros(N, dtype=dtype)
        psi[0] = 1.0 + 0.0j
        return StateVector(n=n, psi=psi, backend=backend)

    @staticmethod
    def from_amplitudes(amplitudes, dtype=DEFAULT_DTYPE, backend: str = "serial") -> "StateVector":
        psi = np.array(amplitudes, dtype=dtype).reshape(-1)
        N = psi.shape[0]
        if N == 0 or N & (N - 1):
            raise DimensionMismatch(f"amplitude count must be a power of two, got {N}")
        return StateVector(n=N.bit_length() - 1, psi=psi, backend=backend)

    @property
    def dtype(self):
        return self.psi.dtype

    @property
    def amplitudes(self) -> np.ndarray:
        return self.psi

    @amplitudes.setter
    def amplitudes(self, values):
        values = np.asarray(values).reshape(-1)
        if values.shape != self.psi.shape:
            raise DimensionMismatch(
                f"{self.n} qubits need {self.psi.shape[0]} amplitudes, got {values.shape[0]}")
        self.psi[:] = values

    def norm2(self) -> float:
        return float(np.vdot(self.psi, self.psi).real)

    def check_normalized(self, tol=1e-6):
        n2 = self.norm2()
        if not (abs(1.0 - n2) <= tol):
            raise AssertionError(f"Normalization failed: ||psi||^2={n2}")

    def copy(self) -> "StateVector":
        return StateVector(self.n, self.psi.copy(), self.backend)

    def as_numpy(self) -> np.ndarray:
        return self.psi

    def inner_product(self, other: "StateVector") -> complex:
        """<self|other>."""
        if self.n != other.n:
            raise DimensionMismatch(f"cannot combine {self.n}-qubit and {other.n}-qubit states")
        return complex(np.vdot(self.psi, other.psi))

    # ---------------------------------------------------------------------

    def apply(self, op: Union[str, PauliString], *args: int):
        """
        apply("H", 0), apply("CNOT", control, target): named unitary.
        apply(pauli_string, offset=0): signed Pauli product.
        """
        if isinstance(op, PauliString):
            if len(args) > 1:
                raise TypeError(f"Pauli application takes one offset, got {args}")
            self.apply_pauli(op, *args)
        else:
            self.apply_gate(op, *args)

    def apply_gate(self, name: str, *qubits: int):
        U = G.lookup(name)
        k = G.gate_arity(name)
        if len(qubits) != k:
            raise UnknownGate(f"{name} acts on {k} qubit(s), got {len(qubits)} target(s)")
        for q in qubits:
            self._check_qubit(q)
        kernels = _kernels(self.backend)
        if k == 1:
            kernels.apply_single_qubit(self, U, qubits[0])
        else:
            kernels.apply_two_qubit_4x4(self, U, qubits[0], qubits[1])

    def apply_pauli(self, pauli: PauliLike, offset: int = 0):
        pauli = PauliString.coerce(pauli)
        self._check_span(pauli, offset)
        _kernels(self.backend).apply_pauli(self, pauli, offset)

    def project(self, pauli: PauliLike) -> float:
        """
        Project onto the sign-eigenspace of the unsigned Pauli product,
        (I + sign*P)/2, and return the probability of that outcome.

        The result is rescaled to the norm the state had before projecting.
        A zero-probability outcome leaves the degenerate vector in place and
        returns 0.0.
        """
        pauli = PauliString.coerce(pauli)
        self._check_span(pauli, 0)
        before = self.norm2()
        if before == 0.0:
            return 0.0

        flipped = self.copy()
        flipped.apply_pauli(pauli.unsigned())
        projected = (self.psi + pauli.sign * flipped.psi) * 0.5
        after = float(np.vdot(projected, projected).real)
        probability = after / before

        if after <= before * np.finfo(self.dtype).eps**2:
            logger.debug("projection onto %s has zero probability", pauli)
            self.psi[:] = projected
            return 0.0
        projected *= np.sqrt(before / after)
        self.psi[:] = projected
        return min(probability, 1.0)

    def approximate_equals(self, other: "StateVector", ignore_global_phase: bool = False,
                           atol: float = ATOL) -> bool:
        """
        Every amplitude pair within `atol` (complex distance). With
        `ignore_global_phase`, `self` is first rotated by the unit phase
        taken from the largest-magnitude amplitude pair.
        """
        if self.n != other.n:
            return False
        a = self.psi.astype(np.complex128)
        b = other.psi.astype(np.complex128)
        phase = 1.0
        if ignore_global_phase:
            k = int(np.argmax(np.maximum(np.abs(a), np.abs(b))))
            ref = b[k] * np.conj(a[k])
            if abs(ref) > 0:
                phase = ref / abs(ref)
        return bool(np.all(np.abs(a * phase - b) <= atol))

    @staticmethod
    def from_stabilizers(stabilizers: Iterable[PauliLike], dtype=DEFAULT_DTYPE,
                         backend: str = "serial") -> "StateVector":
        """
        Joint +1 eigenstate (up to global phase) of commuting, independent
        generators, found by projecting the uniform superposition onto each
        generator in turn.
        """
        stabilizers = [PauliString.coerce(s) for s in stabilizers]
        if not stabilizers:
            raise DimensionMismatch("cannot infer a qubit count from an empty stabilizer list")
        n = len(stabilizers[0])
        for s in stabilizers:
            if len(s) != n:
                raise DimensionMismatch(f"stabilizer {s} does not span {n} qubits")
        for i, a in enumerate(stabilizers):
            for b in stabilizers[i+1:]:
                if not a.commutes(b):
                    raise InconsistentStabilizers(f"stabilizers {a} and {b} anticommute")

        N = 1 << n
        st = StateVector(n, np.full(N, 1.0 / np.sqrt(N), dtype=dtype), backend)
        for s in stabilizers:
            p = st.project(s)
            logger.debug("from_stabilizers: project %s -> p=%.6f", s, p)
            if p == 0.0:
                raise InconsistentStabilizers(
                    f"projection onto {s} has zero probability; generators must commute and be independent")
        return st

    # ---------------------------------------------------------------------

    def _check_qubit(self, q: int):
        if not 0 <= q < self.n:
            raise DimensionMismatch(f"qubit {q} out of range for {self.n}-qubit state")

    def _check_span(self, pauli: PauliString, offset: int):
        if offset < 0 or offset + len(pauli) > self.n:
            raise DimensionMismatch(
                f"{pauli} at offset {offset} does not fit a {self.n}-qubit state")
