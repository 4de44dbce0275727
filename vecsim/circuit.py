# vecsim/circuit.py
import logging
from dataclasses import dataclass
from typing import List, Tuple, Optional
import numpy as np
from .state import StateVector, PauliLike, BACKENDS
from .pauli import PauliString
from . import gates as G
from .errors import DimensionMismatch, UnknownGate

logger = logging.getLogger(__name__)

Op = Tuple[object, Tuple]  # e.g., ("H",(k,)) or ("CNOT",(c,t)) or (PauliString,(offset,))

@dataclass
class Circuit:
    n: int
    ops: List[Op]

    @staticmethod
    def empty(n:int) -> "Circuit":
        return Circuit(n, [])

    def append(self, name:str, *qubits:int) -> "Circuit":
        k = G.gate_arity(name)
        if len(qubits) != k:
            raise UnknownGate(f"{name} acts on {k} qubit(s), got {len(qubits)} target(s)")
        self.ops.append((name, tuple(qubits)))
        return self

    def h(self, k:int): return self.append("H", k)
    def x(self, k:int): return self.append("X", k)
    def y(self, k:int): return self.append("Y", k)
    def z(self, k:int): return self.append("Z", k)
    def cnot(self, c:int, t:int): return self.append("CNOT", c, t)
    def cz(self, a:int, b:int): return self.append("CZ", a, b)
    def swap(self, a:int, b:int): return self.append("SWAP", a, b)

    def pauli(self, p:PauliLike, offset:int=0) -> "Circuit":
        self.ops.append((PauliString.coerce(p), (offset,)))
        return self

    def run(self, backend:str="serial", dtype=np.complex64, state:Optional[StateVector]=None,
            check_norm=True, num_threads=None, check_norm_tol=None) -> StateVector:
        """Replay the ops onto |0...0> (or a copy of `state`) and return the result."""
        if backend not in BACKENDS:
            raise NotImplementedError(f"Unknown backend: {backend}")
        if state is None:
            st = StateVector.zero(self.n, dtype=dtype, backend=backend)
        else:
            if state.n != self.n:
                raise DimensionMismatch(f"circuit has {self.n} qubits, state has {state.n}")
            st = state.copy()
            st.backend = backend

        if backend == "numba" and num_threads is not None:
            try:
                from .apply_numba import set_threads
            except ImportError as e:
                raise RuntimeError("Numba backend not available. Did you `pip install numba`?") from e
            set_threads(int(num_threads))

        for op, args in self.ops:
            st.apply(op, *args)
        logger.debug("ran %d ops on %d qubits (backend=%s)", len(self.ops), self.n, backend)

        if check_norm:
            st.check_normalized(tol=1e-6 if check_norm_tol is None else check_norm_tol)
        return st
