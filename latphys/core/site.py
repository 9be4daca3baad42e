"""
Sites: labeled points in real space.

A site carries a label of arbitrary type and a coordinate vector whose length
D is fixed when the site is created. Sites know nothing about bonds or
lattice vectors - those belong to the unitcell that owns the site.
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Sequence, Union

from .exceptions import DimensionMismatchError


L = TypeVar('L')

ArrayLike = Union[Sequence[float], np.ndarray]


def _as_point(point: ArrayLike) -> np.ndarray:
    point = np.array(point, dtype=float)
    if point.ndim != 1:
        raise DimensionMismatchError(
            f"Site coordinates must be a 1D vector, got shape {point.shape}"
        )
    return point


class AbstractSite(ABC, Generic[L]):
    """
    Abstract base class for sites.

    Subclasses implement the four accessors below; the `label` and `point`
    properties forward to them, so custom site types stay usable wherever
    a Site is expected.

    Notes
    -----
    The getter/setter convention is:
        get_label() / set_label(label)
        get_point() / set_point(point)

    Reading back a value right after setting it returns the value just set.
    """

    @abstractmethod
    def get_label(self) -> L:
        """Get the label of the site."""
        pass

    @abstractmethod
    def set_label(self, label: L) -> None:
        """Set the label of the site."""
        pass

    @abstractmethod
    def get_point(self) -> np.ndarray:
        """
        Get the real-space coordinates of the site.

        Returns
        -------
        point : np.ndarray, shape (D,)
        """
        pass

    @abstractmethod
    def set_point(self, point: ArrayLike) -> None:
        """
        Set the real-space coordinates of the site.

        Raises
        ------
        DimensionMismatchError
            If the new point does not have length D
        """
        pass

    @property
    def label(self) -> L:
        return self.get_label()

    @label.setter
    def label(self, value: L) -> None:
        self.set_label(value)

    @property
    def point(self) -> np.ndarray:
        return self.get_point()

    @point.setter
    def point(self, value: ArrayLike) -> None:
        self.set_point(value)

    @property
    def dimension(self) -> int:
        """Embedding dimension D."""
        return len(self.get_point())


class Site(AbstractSite[L]):
    """
    Default site implementation: a label and a coordinate vector.

    Parameters
    ----------
    point : array_like, shape (D,)
        Real-space coordinates. A float copy is stored.
    label : L, optional
        Site label of any type (default: 1)

    Examples
    --------
    >>> site = Site([0.0, 0.5], label='A')
    >>> site.label
    'A'
    >>> site.point = [1.0, 1.0]
    >>> site.get_point()
    array([1., 1.])
    """

    def __init__(self, point: ArrayLike, label: L = 1):
        self._point = _as_point(point)
        self._label = label

    def get_label(self) -> L:
        return self._label

    def set_label(self, label: L) -> None:
        self._label = label

    def get_point(self) -> np.ndarray:
        return self._point

    def set_point(self, point: ArrayLike) -> None:
        point = _as_point(point)
        if len(point) != len(self._point):
            raise DimensionMismatchError(
                f"Site has dimension {len(self._point)}, "
                f"got point of length {len(point)}"
            )
        self._point = point

    def copy(self) -> 'Site[L]':
        return Site(self._point.copy(), self._label)

    def __eq__(self, other) -> bool:
        if not isinstance(other, AbstractSite):
            return NotImplemented
        return (self.label == other.label
                and self.dimension == other.dimension
                and np.allclose(self.point, other.point))

    __hash__ = None

    def __repr__(self) -> str:
        return f"Site(point={self._point.tolist()}, label={self._label!r})"
