# vecsim/gates.py
import types
import numpy as np
from .errors import UnknownGate

# Two-qubit matrices are little-endian over the gate arguments:
# row/col index = b(first) + 2*b(second), so CNOT(control, target) flips
# the target when bit 0 of the sub-index is set.

_S = np.sqrt(0.5)
_P = 0.5 + 0.5j   # (1+i)/2
_M = 0.5 - 0.5j   # (1-i)/2

def _mat(*rows) -> np.ndarray:
    m = np.array(rows, dtype=np.complex128)
    m.flags.writeable = False
    return m

_I = _mat([1, 0],
          [0, 1])
_X = _mat([0, 1],
          [1, 0])
_Y = _mat([0, -1j],
          [1j, 0])
_Z = _mat([1, 0],
          [0, -1])
_H = _mat([_S, _S],
          [_S, -_S])
_S_GATE = _mat([1, 0],
               [0, 1j])
_S_DAG = _mat([1, 0],
              [0, -1j])
_CNOT = _mat([1, 0, 0, 0],
             [0, 0, 0, 1],
             [0, 0, 1, 0],
             [0, 1, 0, 0])

GATE_UNITARIES = types.MappingProxyType({
    "I": _I,
    "X": _X,
    "Y": _Y,
    "Z": _Z,
    "H": _H,
    "H_XY": _mat([0, _S - _S*1j],
                 [_S + _S*1j, 0]),
    "H_YZ": _mat([_S, -_S*1j],
                 [_S*1j, -_S]),
    "SQRT_X": _mat([_P, _M],
                   [_M, _P]),
    "SQRT_X_DAG": _mat([_M, _P],
                       [_P, _M]),
    "SQRT_Y": _mat([_P, -_P],
                   [_P, _P]),
    "SQRT_Y_DAG": _mat([_M, _M],
                       [-_M, _M]),
    "S": _S_GATE,
    "S_DAG": _S_DAG,
    "SQRT_Z": _S_GATE,
    "SQRT_Z_DAG": _S_DAG,
    "CNOT": _CNOT,
    "CX": _CNOT,
    "CY": _mat([1, 0, 0, 0],
               [0, 0, 0, -1j],
               [0, 0, 1, 0],
               [0, 1j, 0, 0]),
    "CZ": _mat([1, 0, 0, 0],
               [0, 1, 0, 0],
               [0, 0, 1, 0],
               [0, 0, 0, -1]),
    "SWAP": _mat([1, 0, 0, 0],
                 [0, 0, 1, 0],
                 [0, 1, 0, 0],
                 [0, 0, 0, 1]),
    "ISWAP": _mat([1, 0, 0, 0],
                  [0, 0, 1j, 0],
                  [0, 1j, 0, 0],
                  [0, 0, 0, 1]),
    "ISWAP_DAG": _mat([1, 0, 0, 0],
                      [0, 0, -1j, 0],
                      [0, -1j, 0, 0],
                      [0, 0, 0, 1]),
})

def lookup(name: str) -> np.ndarray:
    """Return the (read-only, complex128) unitary registered under `name`."""
    try:
        return GATE_UNITARIES[name]
    except KeyError:
        raise UnknownGate(f"Unknown gate {name!r}") from None

def gate_arity(name: str) -> int:
    """Number of qubits the named gate acts on."""
    dim = lookup(name).shape[0]
    return dim.bit_length() - 1
