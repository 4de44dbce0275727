# vecsim/apply_numba.py
import numpy as np
from numba import config, njit, prange, set_num_threads, get_num_threads
from .state import StateVector
from .pauli import PauliString

# ---------- kernels ----------

@njit(parallel=True, fastmath=True)
def _single_qubit_kernel(psi, U2, k):
    N = psi.shape[0]
    step = 1 << k
    block = step << 1
    nblocks = N // block
    for b in prange(nblocks):
        base = b * block
        for off in range(step):
            i0 = base + off
            i1 = i0 + step
            a0 = psi[i0]
            a1 = psi[i1]
            psi[i0] = U2[0,0]*a0 + U2[0,1]*a1
            psi[i1] = U2[1,0]*a0 + U2[1,1]*a1

@njit(parallel=True, fastmath=True)
def _two_qubit_4x4_kernel(psi, U4, a, b):
    N = psi.shape[0]
    ma = 1 << a
    mb = 1 << b
    # Iterate only bases where bits a and b are 0 → disjoint quads.
    for i00 in prange(N):
        if (i00 & ma) == 0 and (i00 & mb) == 0:
            i01 = i00 | ma
            i10 = i00 | mb
            i11 = i00 | ma | mb
            a00 = psi[i00]; a01 = psi[i01]; a10 = psi[i10]; a11 = psi[i11]
            psi[i00] = U4[0,0]*a00 + U4[0,1]*a01 + U4[0,2]*a10 + U4[0,3]*a11
            psi[i01] = U4[1,0]*a00 + U4[1,1]*a01 + U4[1,2]*a10 + U4[1,3]*a11
            psi[i10] = U4[2,0]*a00 + U4[2,1]*a01 + U4[2,2]*a10 + U4[2,3]*a11
            psi[i11] = U4[3,0]*a00 + U4[3,1]*a01 + U4[3,2]*a10 + U4[3,3]*a11

@njit(parallel=True, fastmath=True)
def _pauli_kernel(psi, out, xmask, zmask, phase):
    # P|i> = phase * (-1)^popcount(i & zmask) |i ^ xmask>
    N = psi.shape[0]
    for i in prange(N):
        m = i & zmask
        parity = 0
        while m:
            parity ^= 1
            m &= m - 1
        amp = phase[0] * psi[i]
        if parity:
            amp = -amp
        out[i ^ xmask] = amp

# ---------- user-facing apply helpers ----------

def set_threads(n: int):
    # numba rejects counts above the pool size fixed at import
    set_num_threads(max(1, min(int(n), config.NUMBA_NUM_THREADS)))

def get_threads() -> int:
    return get_num_threads()

def apply_single_qubit(state: StateVector, U2: np.ndarray, k: int):
    _single_qubit_kernel(state.psi, U2.astype(state.dtype), k)

def apply_two_qubit_4x4(state: StateVector, U4: np.ndarray, a: int, b: int):
    if a == b:
        raise ValueError("a and b must differ")
    _two_qubit_4x4_kernel(state.psi, U4.astype(state.dtype), a, b)

def apply_pauli(state: StateVector, pauli: PauliString, offset: int):
    xmask = 0
    zmask = 0
    ys = 0
    for j, label in enumerate(pauli.paulis):
        bit = 1 << (offset + j)
        if label in "XY":
            xmask |= bit
        if label in "YZ":
            zmask |= bit
        if label == "Y":
            ys += 1
    # each Y contributes a factor i (Y = iXZ)
    phase = np.array([pauli.sign * (1, 1j, -1, -1j)[ys % 4]], dtype=state.dtype)
    out = np.empty_like(state.psi)
    _pauli_kernel(state.psi, out, xmask, zmask, phase)
    state.psi[:] = out
