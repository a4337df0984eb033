"""Dual quaternions for describing positions, rotations and poses."""

from __future__ import annotations

import math
from numbers import Real
from typing import Iterable, Tuple

_THRESHOLD = 1e-12

Quaternion = Tuple[float, float, float, float]


def _qmul(a: Quaternion, b: Quaternion) -> Quaternion:
    a0, a1, a2, a3 = a
    b0, b1, b2, b3 = b
    return (
        a0 * b0 - a1 * b1 - a2 * b2 - a3 * b3,
        a0 * b1 + a1 * b0 + a2 * b3 - a3 * b2,
        a0 * b2 - a1 * b3 + a2 * b0 + a3 * b1,
        a0 * b3 + a1 * b2 - a2 * b1 + a3 * b0,
    )


def _qadd(a: Quaternion, b: Quaternion) -> Quaternion:
    return tuple(x + y for x, y in zip(a, b))  # type: ignore[return-value]


class DualQuaternion:
    """An immutable dual quaternion ``q0 + q1 i + q2 j + q3 k + E (q4 + q5 i + q6 j + q7 k)``.

    It may be built from up to eight real coefficients, missing ones being
    zero, or from a single iterable holding them.
    """

    __slots__ = ("_q",)

    def __init__(self, *args):
        if len(args) == 1 and not isinstance(args[0], Real):
            values = tuple(args[0])
        else:
            values = args
        if len(values) > 8:
            raise TypeError(
                f"a dual quaternion has at most 8 coefficients, got {len(values)}"
            )
        coefficients = [float(v) for v in values]
        coefficients.extend([0.0] * (8 - len(coefficients)))
        self._q: Tuple[float, ...] = tuple(coefficients)

    @classmethod
    def _coerce(cls, value) -> "DualQuaternion | None":
        if isinstance(value, DualQuaternion):
            return value
        if isinstance(value, Real):
            return cls(value)
        return None

    @classmethod
    def _from_parts(cls, primary: Iterable[float], dual: Iterable[float]) -> "DualQuaternion":
        return cls(tuple(primary) + tuple(dual))

    @property
    def _p(self) -> Quaternion:
        return self._q[:4]  # type: ignore[return-value]

    @property
    def _d(self) -> Quaternion:
        return self._q[4:]  # type: ignore[return-value]

    def primary(self) -> "DualQuaternion":
        """The primary (non-dual) part."""
        return DualQuaternion(self._p)

    def dual(self) -> "DualQuaternion":
        """The dual part, as a quaternion."""
        return DualQuaternion(self._d)

    def conj(self) -> "DualQuaternion":
        """The conjugate: both quaternion parts conjugated."""
        q = self._q
        return DualQuaternion(q[0], -q[1], -q[2], -q[3], q[4], -q[5], -q[6], -q[7])

    def norm(self) -> "DualQuaternion":
        """The dual-number norm, with tiny coefficients rounded to zero."""
        if all(abs(c) < _THRESHOLD for c in self._p):
            return DualQuaternion(0)
        squared = (self.conj() * self)._q
        a = math.sqrt(squared[0])
        b = squared[4] / (2.0 * a)
        a = 0.0 if abs(a) < _THRESHOLD else a
        b = 0.0 if abs(b) < _THRESHOLD else b
        return DualQuaternion(a, 0, 0, 0, b)

    def normalize(self) -> "DualQuaternion":
        """This dual quaternion divided by its norm."""
        n = self.norm()._q
        a, b = n[0], n[4]
        if a == 0.0:
            raise ValueError("cannot normalize a dual quaternion with zero primary part")
        inverse = DualQuaternion(1.0 / a, 0, 0, 0, -b / (a * a))
        return self * inverse

    def translation(self) -> "DualQuaternion":
        """The translation, as a pure quaternion, of a unit dual quaternion."""
        if not self.is_unit():
            raise ValueError("translation() requires a unit dual quaternion")
        return 2.0 * self.dual() * self.primary().conj()

    def vec3(self) -> Tuple[float, float, float]:
        """The imaginary coefficients of the primary part."""
        return self._q[1:4]  # type: ignore[return-value]

    def vec4(self) -> Quaternion:
        """The four coefficients of the primary part."""
        return self._p

    def vec8(self) -> Tuple[float, ...]:
        """All eight coefficients."""
        return self._q

    def is_unit(self) -> bool:
        """Whether the norm equals one."""
        return self.norm() == 1

    def __add__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return DualQuaternion(a + b for a, b in zip(self._q, o._q))

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return DualQuaternion(a - b for a, b in zip(self._q, o._q))

    def __rsub__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o - self

    def __neg__(self):
        return DualQuaternion(-c for c in self._q)

    def __mul__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        primary = _qmul(self._p, o._p)
        dual = _qadd(_qmul(self._p, o._d), _qmul(self._d, o._p))
        return DualQuaternion._from_parts(primary, dual)

    def __rmul__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o * self

    def __truediv__(self, other):
        if not isinstance(other, Real):
            return NotImplemented
        return DualQuaternion(c / other for c in self._q)

    def __eq__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return all(abs(a - b) < _THRESHOLD for a, b in zip(self._q, o._q))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return "DualQuaternion(" + ", ".join(repr(c) for c in self._q) + ")"


def is_unit(dq: DualQuaternion) -> bool:
    """Whether ``dq`` has unit norm."""
    return dq.is_unit()