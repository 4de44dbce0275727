# vecsim/tests/test_pauli.py
import numpy as np
import pytest
from hypothesis import given, strategies
from vecsim.pauli import PauliString
from vecsim.state import StateVector
from vecsim.errors import InvalidPauliSyntax


@strategies.composite
def pauli_strings(draw, min_size=1, max_size=4):
    sign = draw(strategies.sampled_from(["", "+", "-"]))
    labels = draw(strategies.text(alphabet="IXYZ", min_size=min_size, max_size=max_size))
    return sign + labels


def random_state(n, seed):
    rng = np.random.default_rng(seed)
    psi = rng.normal(size=1 << n) + 1j * rng.normal(size=1 << n)
    psi /= np.linalg.norm(psi)
    return StateVector.from_amplitudes(psi, dtype=np.complex128)


def test_parse():
    p = PauliString.from_str("-XYZI")
    assert p.sign == -1
    assert p.paulis == "XYZI"
    assert len(p) == 4
    assert PauliString.from_str("ZZ") == PauliString(1, "ZZ")
    assert PauliString.from_str("+ZZ") == PauliString(1, "ZZ")


@pytest.mark.parametrize("text", ["", "+", "-", "XQ", "xz", "+-X", "X+", " X", "iX"])
def test_parse_rejects(text):
    with pytest.raises(InvalidPauliSyntax):
        PauliString.from_str(text)


def test_constructor_validates():
    with pytest.raises(InvalidPauliSyntax):
        PauliString(2, "X")
    with pytest.raises(InvalidPauliSyntax):
        PauliString(1, "")


@given(pauli_strings())
def test_str_roundtrip(text):
    p = PauliString.from_str(text)
    assert PauliString.from_str(str(p)) == p
    assert str(p)[0] in "+-"


def test_neg_and_unsigned():
    p = PauliString.from_str("-XZ")
    assert -p == PauliString(1, "XZ")
    assert p.unsigned() == PauliString(1, "XZ")
    assert (-p).unsigned() == p.unsigned()


def test_commutes():
    P = PauliString.from_str
    assert P("XX").commutes(P("ZZ"))
    assert not P("XI").commutes(P("ZI"))
    assert P("XXX").commutes(P("-IZZ"))
    assert P("XYZ").commutes(P("ZZZ"))
    assert not P("XYZ").commutes(P("ZII"))
    assert P("Y").commutes(P("Y"))


def test_to_matrix_qubit_order():
    m = PauliString.from_str("XI").to_matrix()
    # X on qubit 0 maps |00> (index 0) to |01> (index 1)
    assert m[1, 0] == 1
    m = PauliString.from_str("-IX").to_matrix()
    assert m[2, 0] == -1


@given(pauli_strings(), strategies.integers(0, 2**32 - 1))
def test_apply_matches_dense_matrix(text, seed):
    p = PauliString.from_str(text)
    st = random_state(len(p), seed)
    expect = p.to_matrix() @ st.as_numpy()
    st.apply(p)
    assert np.allclose(st.as_numpy(), expect, atol=1e-9, rtol=0)


@given(pauli_strings(max_size=3), strategies.integers(0, 2), strategies.integers(0, 2**32 - 1))
def test_apply_with_offset_matches_embedded_matrix(text, offset, seed):
    p = PauliString.from_str(text)
    n = len(p) + offset + 1
    st = random_state(n, seed)
    # identity below the offset and one identity qubit above the string
    full = np.kron(np.eye(2), np.kron(p.to_matrix(), np.eye(1 << offset)))
    expect = full @ st.as_numpy()
    st.apply(p, offset)
    assert np.allclose(st.as_numpy(), expect, atol=1e-9, rtol=0)


@given(pauli_strings(), strategies.integers(0, 2**32 - 1))
def test_apply_twice_is_identity(text, seed):
    p = PauliString.from_str(text)
    st = random_state(len(p), seed)
    ref = st.copy()
    st.apply(p)
    st.apply(p)
    assert st.approximate_equals(ref)
