# vecsim/apply_serial.py
import numpy as np
from .state import StateVector
from .pauli import PauliString

def apply_single_qubit(state: StateVector, U2: np.ndarray, k: int):
    """Apply 2x2 gate U2 to qubit k (little-endian: bit k)."""
    psi = state.psi
    assert U2.shape == (2,2)
    U2 = U2.astype(state.dtype)
    N = psi.shape[0]
    step = 1 << k
    block = step << 1
    # iterate blocks of size 2^(k+1), update pairs (i0, i1=i0+step)
    for base in range(0, N, block):
        for off in range(step):
            i0 = base + off
            i1 = i0 + step
            a0 = psi[i0]
            a1 = psi[i1]
            psi[i0] = U2[0,0]*a0 + U2[0,1]*a1
            psi[i1] = U2[1,0]*a0 + U2[1,1]*a1

def apply_two_qubit_4x4(state: StateVector, U4: np.ndarray, a: int, b: int):
    """
    Apply 4x4 gate U4 to qubits (a, b). Sub-index order is b(a) + 2*b(b),
    i.e. the first qubit argument is the low bit of the 4x4 basis.
    """
    if a == b:
        raise ValueError("a and b must differ")
    assert U4.shape == (4,4)
    U4 = U4.astype(state.dtype)

    psi = state.psi
    N = psi.shape[0]
    ma = 1 << a
    mb = 1 << b
    k, l = min(a, b), max(a, b)
    # loop over indices where bits k and l are 0:
    # pattern repeats every 2^(l+1); within that, scan chunks of 2^(k+1).
    for base in range(0, N, 1 << (l+1)):
        for chunk in range(0, 1 << l, 1 << (k+1)):
            for off in range(1 << k):
                i00 = base + chunk + off
                i01 = i00 | ma
                i10 = i00 | mb
                i11 = i00 | ma | mb
                a00, a01, a10, a11 = psi[i00], psi[i01], psi[i10], psi[i11]
                psi[i00] = U4[0,0]*a00 + U4[0,1]*a01 + U4[0,2]*a10 + U4[0,3]*a11
                psi[i01] = U4[1,0]*a00 + U4[1,1]*a01 + U4[1,2]*a10 + U4[1,3]*a11
                psi[i10] = U4[2,0]*a00 + U4[2,1]*a01 + U4[2,2]*a10 + U4[2,3]*a11
                psi[i11] = U4[3,0]*a00 + U4[3,1]*a01 + U4[3,2]*a10 + U4[3,3]*a11

def apply_pauli(state: StateVector, pauli: PauliString, offset: int):
    """
    Apply a signed Pauli string to qubits [offset, offset+len(pauli)).
    Each label is applied to every amplitude pair differing only in its
    qubit bit; the sign is applied once at the end.
    """
    psi = state.psi
    N = psi.shape[0]
    for j, label in enumerate(pauli.paulis):
        if label == "I":
            continue
        step = 1 << (offset + j)
        block = step << 1
        for base in range(0, N, block):
            for off in range(step):
                i0 = base + off
                i1 = i0 + step
                a0 = psi[i0]
                a1 = psi[i1]
                if label == "X":
                    psi[i0] = a1
                    psi[i1] = a0
                elif label == "Z":
                    psi[i1] = -a1
                else:
                    # Y|0> = i|1>, Y|1> = -i|0>
                    psi[i0] = -1j*a1
                    psi[i1] = 1j*a0
    if pauli.sign < 0:
        np.negative(psi, out=psi)
