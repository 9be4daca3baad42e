"""
Bonds: labeled, directed connections between two sites.

A bond points from a source site to a target site of the same unitcell. The
target may sit in a translated copy of the unitcell; the integer `wrap`
vector (n1, ..., nN) says which one, in units of the Bravais vectors.
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Sequence, Union

from .exceptions import DimensionMismatchError, InvalidIndexError


L = TypeVar('L')

IntArrayLike = Union[Sequence[int], np.ndarray]


def _as_wrap(wrap: IntArrayLike) -> np.ndarray:
    wrap = np.asarray(wrap)
    if wrap.ndim != 1:
        raise DimensionMismatchError(
            f"Bond wrap must be a 1D vector, got shape {wrap.shape}"
        )
    if wrap.size and not np.all(np.equal(np.mod(wrap, 1), 0)):
        raise ValueError(f"Bond wrap must be integer valued, got {wrap.tolist()}")
    return wrap.astype(int)


def _as_index(index: int, kind: str) -> int:
    if isinstance(index, (bool, np.bool_)) or not isinstance(index, (int, np.integer)):
        raise TypeError(f"Bond {kind} index must be an int, got {index!r}")
    if index < 0:
        raise InvalidIndexError(f"Bond {kind} index must be non-negative, got {index}")
    return int(index)


class AbstractBond(ABC, Generic[L]):
    """
    Abstract base class for bonds.

    Accessors follow the same get_/set_ convention as sites:
        get_label / set_label
        get_source / set_source
        get_target / set_target
        get_wrap / set_wrap
    """

    @abstractmethod
    def get_label(self) -> L:
        pass

    @abstractmethod
    def set_label(self, label: L) -> None:
        pass

    @abstractmethod
    def get_source(self) -> int:
        """Index of the site the bond starts from."""
        pass

    @abstractmethod
    def set_source(self, index: int) -> None:
        pass

    @abstractmethod
    def get_target(self) -> int:
        """Index of the site the bond points to."""
        pass

    @abstractmethod
    def set_target(self, index: int) -> None:
        pass

    @abstractmethod
    def get_wrap(self) -> np.ndarray:
        """
        Bravais translation of the target site.

        Returns
        -------
        wrap : np.ndarray of int, shape (N,)
        """
        pass

    @abstractmethod
    def set_wrap(self, wrap: IntArrayLike) -> None:
        pass

    @property
    def label(self) -> L:
        return self.get_label()

    @label.setter
    def label(self, value: L) -> None:
        self.set_label(value)

    @property
    def source(self) -> int:
        return self.get_source()

    @source.setter
    def source(self, value: int) -> None:
        self.set_source(value)

    @property
    def target(self) -> int:
        return self.get_target()

    @target.setter
    def target(self, value: int) -> None:
        self.set_target(value)

    @property
    def wrap(self) -> np.ndarray:
        return self.get_wrap()

    @wrap.setter
    def wrap(self, value: IntArrayLike) -> None:
        self.set_wrap(value)

    @property
    def translational_dimension(self) -> int:
        """Length N of the wrap vector."""
        return len(self.get_wrap())

    def is_reverse_of(self, other: 'AbstractBond') -> bool:
        """Check whether `other` is the mirror image of this bond."""
        return (self.source == other.target
                and self.target == other.source
                and self.label == other.label
                and np.array_equal(self.wrap, -other.wrap))

    @property
    def connection(self) -> tuple:
        """Hashable (source, target, wrap) triple, ignoring the label."""
        return (self.source, self.target, tuple(int(w) for w in self.get_wrap()))

    @property
    def reverse_connection(self) -> tuple:
        """Connection of the mirror bond."""
        return (self.target, self.source, tuple(-int(w) for w in self.get_wrap()))


class Bond(AbstractBond[L]):
    """
    Default bond implementation.

    Parameters
    ----------
    source : int
        Index of the source site in the owning unitcell
    target : int
        Index of the target site in the owning unitcell
    label : L, optional
        Bond label of any type (default: 1)
    wrap : array_like of int, shape (N,), optional
        Bravais translation of the target (default: empty, i.e. N = 0)

    Examples
    --------
    >>> bond = Bond(0, 1, label='x', wrap=(1, 0))
    >>> bond.reversed()
    Bond(source=1, target=0, label='x', wrap=[-1, 0])
    """

    def __init__(self, source: int, target: int, label: L = 1,
                 wrap: IntArrayLike = ()):
        self._source = _as_index(source, 'source')
        self._target = _as_index(target, 'target')
        self._label = label
        self._wrap = _as_wrap(wrap)

    def get_label(self) -> L:
        return self._label

    def set_label(self, label: L) -> None:
        self._label = label

    def get_source(self) -> int:
        return self._source

    def set_source(self, index: int) -> None:
        self._source = _as_index(index, 'source')

    def get_target(self) -> int:
        return self._target

    def set_target(self, index: int) -> None:
        self._target = _as_index(index, 'target')

    def get_wrap(self) -> np.ndarray:
        return self._wrap

    def set_wrap(self, wrap: IntArrayLike) -> None:
        wrap = _as_wrap(wrap)
        if len(wrap) != len(self._wrap):
            raise DimensionMismatchError(
                f"Bond has wrap of length {len(self._wrap)}, "
                f"got wrap of length {len(wrap)}"
            )
        self._wrap = wrap

    def reversed(self) -> 'Bond[L]':
        """Return the mirror bond (target -> source, -wrap)."""
        return Bond(self._target, self._source, self._label, -self._wrap)

    def copy(self) -> 'Bond[L]':
        return Bond(self._source, self._target, self._label, self._wrap.copy())

    def __eq__(self, other) -> bool:
        if not isinstance(other, AbstractBond):
            return NotImplemented
        return (self.source == other.source
                and self.target == other.target
                and self.label == other.label
                and np.array_equal(self.wrap, other.wrap))

    __hash__ = None

    def __repr__(self) -> str:
        return (f"Bond(source={self._source}, target={self._target}, "
                f"label={self._label!r}, wrap={self._wrap.tolist()})")
