"""
Abstract base class and default implementation of unitcells.

A unitcell is the minimal repeating unit of a periodic structure. It holds
- an ordered list of sites (labeled points in R^D)
- an ordered list of bonds between those sites
- N Bravais lattice vectors, each in R^D

Structural consistency is checked when the unitcell is built and whenever a
site or bond is added, so an invalid unitcell never exists.
"""

import logging
import numpy as np
from abc import ABC, abstractmethod
from collections import defaultdict
from copy import deepcopy
from typing import List, Optional, Sequence, Generic, TypeVar

from ..bond import AbstractBond
from ..exceptions import DimensionMismatchError, InvalidIndexError
from ..labels import check_label_type
from ..site import AbstractSite


logger = logging.getLogger(__name__)

LS = TypeVar('LS')
LB = TypeVar('LB')


class AbstractUnitcell(ABC, Generic[LS, LB]):
    """
    Abstract base class for unitcells.

    Subclasses provide the three lists; everything else (geometry, neighbor
    look-up, coordinate conversion) is derived from them here.

    Notes
    -----
    Two dimensions characterize a unitcell:
    - D (`dimension`): length of site coordinates and lattice vectors
    - N (`translational_dimension`): number of Bravais vectors, N <= D

    A 2D graphene sheet has D = N = 2, a chain embedded in the plane has
    D = 2 and N = 1, a finite molecule has N = 0.
    """

    @abstractmethod
    def get_sites(self) -> List[AbstractSite[LS]]:
        """Get the ordered list of sites."""
        pass

    @abstractmethod
    def get_bonds(self) -> List[AbstractBond[LB]]:
        """Get the ordered list of bonds."""
        pass

    @abstractmethod
    def get_lattice_vectors(self) -> np.ndarray:
        """
        Get the Bravais lattice vectors.

        Returns
        -------
        vectors : np.ndarray, shape (N, D)
            One lattice vector per row
        """
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Embedding dimension D."""
        pass

    @property
    def sites(self) -> List[AbstractSite[LS]]:
        return self.get_sites()

    @property
    def bonds(self) -> List[AbstractBond[LB]]:
        return self.get_bonds()

    @property
    def lattice_vectors(self) -> np.ndarray:
        return self.get_lattice_vectors()

    @property
    def num_sites(self) -> int:
        return len(self.get_sites())

    @property
    def num_bonds(self) -> int:
        return len(self.get_bonds())

    @property
    def translational_dimension(self) -> int:
        """Number of Bravais vectors N."""
        return len(self.get_lattice_vectors())

    def get_site(self, index: int) -> AbstractSite[LS]:
        """Get a site by index, raising InvalidIndexError if out of range."""
        sites = self.get_sites()
        if not 0 <= index < len(sites):
            raise InvalidIndexError(
                f"Site index {index} out of range for {len(sites)} sites"
            )
        return sites[index]

    def get_bond(self, index: int) -> AbstractBond[LB]:
        """Get a bond by index, raising InvalidIndexError if out of range."""
        bonds = self.get_bonds()
        if not 0 <= index < len(bonds):
            raise InvalidIndexError(
                f"Bond index {index} out of range for {len(bonds)} bonds"
            )
        return bonds[index]

    def get_points(self) -> np.ndarray:
        """
        Get all site coordinates.

        Returns
        -------
        points : np.ndarray, shape (num_sites, D)
        """
        if not self.get_sites():
            return np.zeros((0, self.dimension))
        return np.array([site.get_point() for site in self.get_sites()])

    def get_bonds_from(self, index: int) -> List[AbstractBond[LB]]:
        """
        Get all bonds that start at a given site.

        Parameters
        ----------
        index : int
            Source site index

        Returns
        -------
        bonds : List[AbstractBond]
            Bonds in their stored order
        """
        self.get_site(index)
        return [bond for bond in self.get_bonds() if bond.source == index]

    def bond_vector(self, bond: AbstractBond[LB]) -> np.ndarray:
        """
        Real-space vector from the source to the target of a bond.

        Computed as point(target) + wrap · A - point(source), where the
        rows of A are the lattice vectors.
        """
        source = self.get_site(bond.source).get_point()
        target = self.get_site(bond.target).get_point()
        shift = np.zeros(self.dimension)
        if self.translational_dimension:
            shift = bond.get_wrap() @ self.get_lattice_vectors()
        return target + shift - source

    def bond_length(self, bond: AbstractBond[LB]) -> float:
        """Euclidean length of a bond."""
        return float(np.linalg.norm(self.bond_vector(bond)))

    def coordination(self, index: int) -> int:
        """Number of bonds starting at a site."""
        return len(self.get_bonds_from(index))

    def is_bidirectional(self) -> bool:
        """
        Check that every bond is stored together with its mirror.

        Returns
        -------
        bidirectional : bool
            True if for every bond (i, j, w) a bond (j, i, -w) with the same
            label exists.
        """
        labels = defaultdict(list)
        for bond in self.get_bonds():
            labels[bond.connection].append(bond.label)
        for bond in self.get_bonds():
            if bond.label not in labels.get(bond.reverse_connection, ()):
                return False
        return True

    def get_reciprocal_vectors(self) -> np.ndarray:
        """
        Get reciprocal lattice vectors.

        Returns
        -------
        vectors : np.ndarray, shape (D, D)
            Reciprocal vectors [b1, ..., bD], one per row

        Notes
        -----
        Defined by: a_i · b_j = 2π δ_ij, i.e. B = 2π (A^-1)^T.

        Raises
        ------
        DimensionMismatchError
            If N != D (no full set of Bravais vectors)
        """
        if self.translational_dimension != self.dimension:
            raise DimensionMismatchError(
                f"Reciprocal vectors need N == D, got N={self.translational_dimension}, "
                f"D={self.dimension}"
            )
        A = self.get_lattice_vectors()
        return 2 * np.pi * np.linalg.inv(A).T

    def get_volume(self) -> float:
        """
        Volume (area, length) spanned by the lattice vectors.

        Notes
        -----
        |det A| for N == D. For N < D the square root of the Gram
        determinant det(A A^T) is used, which is the N-dimensional volume
        of the parallelepiped. Returns 0.0 when N == 0.
        """
        A = self.get_lattice_vectors()
        if len(A) == 0:
            return 0.0
        if A.shape[0] == A.shape[1]:
            return float(abs(np.linalg.det(A)))
        return float(np.sqrt(abs(np.linalg.det(A @ A.T))))

    def real_to_fractional(self, position: np.ndarray) -> np.ndarray:
        """
        Convert real-space coordinates to fractional coordinates.

        Parameters
        ----------
        position : np.ndarray, shape (D,)

        Returns
        -------
        fractional : np.ndarray, shape (N,)
            (n1, ..., nN) such that position = sum_i n_i a_i. For N < D this
            is the least-squares solution.
        """
        A = self.get_lattice_vectors()
        if len(A) == 0:
            return np.zeros(0)
        fractional, *_ = np.linalg.lstsq(A.T, np.asarray(position, dtype=float), rcond=None)
        return fractional

    def fractional_to_real(self, fractional: np.ndarray) -> np.ndarray:
        """
        Convert fractional coordinates to real-space coordinates.

        Parameters
        ----------
        fractional : np.ndarray, shape (N,)

        Returns
        -------
        position : np.ndarray, shape (D,)
        """
        fractional = np.asarray(fractional, dtype=float)
        if len(fractional) != self.translational_dimension:
            raise DimensionMismatchError(
                f"Expected {self.translational_dimension} fractional coordinates, "
                f"got {len(fractional)}"
            )
        if not self.translational_dimension:
            return np.zeros(self.dimension)
        return fractional @ self.get_lattice_vectors()

    def __repr__(self) -> str:
        name = self.__class__.__name__
        return (f"{name}(D={self.dimension}, N={self.translational_dimension}, "
                f"sites={self.num_sites}, bonds={self.num_bonds})")


class Unitcell(AbstractUnitcell[LS, LB]):
    """
    Default unitcell: lists of sites, bonds and Bravais vectors.

    Parameters
    ----------
    lattice_vectors : array_like, shape (N, D)
        Bravais lattice vectors, one per row. May be empty (N = 0).
    sites : Sequence[AbstractSite]
        Sites of the unitcell. The unitcell keeps its own list; the site
        objects themselves are owned by this unitcell from now on.
    bonds : Sequence[AbstractBond], optional
        Bonds between the sites
    dimension : int, optional
        Embedding dimension D. Only needed when it cannot be read off the
        lattice vectors or sites (empty unitcell without lattice vectors).

    Raises
    ------
    DimensionMismatchError
        If sites, lattice vectors or wrap vectors disagree on D or N
    InvalidIndexError
        If a bond refers to a site index that does not exist
    LabelTypeError
        If site labels (or bond labels) are of different types

    Examples
    --------
    Single-site square unitcell with one bond along a1:

    >>> uc = Unitcell(
    ...     lattice_vectors=[[1.0, 0.0], [0.0, 1.0]],
    ...     sites=[Site([0.0, 0.0])],
    ...     bonds=[Bond(0, 0, wrap=(1, 0))],
    ... )
    >>> uc.num_sites, uc.num_bonds, uc.translational_dimension
    (1, 1, 2)
    """

    def __init__(self,
                 lattice_vectors,
                 sites: Sequence[AbstractSite[LS]],
                 bonds: Sequence[AbstractBond[LB]] = (),
                 dimension: Optional[int] = None):
        try:
            vectors = np.array(lattice_vectors, dtype=float)
        except ValueError as exc:
            raise DimensionMismatchError(
                f"Lattice vectors must all have the same length: {exc}"
            ) from exc
        sites = list(sites)
        bonds = list(bonds)

        if dimension is None:
            if vectors.ndim == 2 and vectors.shape[0] > 0:
                dimension = vectors.shape[1]
            elif sites:
                dimension = sites[0].dimension
            else:
                raise DimensionMismatchError(
                    "Cannot infer dimension of an empty unitcell without "
                    "lattice vectors; pass dimension explicitly"
                )

        if vectors.size == 0:
            vectors = np.zeros((0, dimension))
        if vectors.ndim != 2 or vectors.shape[1] != dimension:
            raise DimensionMismatchError(
                f"Lattice vectors must have shape (N, {dimension}), got {vectors.shape}"
            )
        if vectors.shape[0] > dimension:
            raise DimensionMismatchError(
                f"Got {vectors.shape[0]} lattice vectors in {dimension} dimensions"
            )

        self._dimension = int(dimension)
        self._lattice_vectors = vectors
        self._sites: List[AbstractSite[LS]] = []
        self._bonds: List[AbstractBond[LB]] = []

        for site in sites:
            self._check_site(site)
            self._sites.append(site)
        for bond in bonds:
            self._check_bond(bond)
            self._bonds.append(bond)

        logger.debug("Built %r", self)

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def site_label_type(self) -> Optional[type]:
        """Label type of the first site (None while there are no sites)."""
        if not self._sites:
            return None
        return type(self._sites[0].label)

    @property
    def bond_label_type(self) -> Optional[type]:
        """Label type of the first bond (None while there are no bonds)."""
        if not self._bonds:
            return None
        return type(self._bonds[0].label)

    def get_sites(self) -> List[AbstractSite[LS]]:
        return self._sites

    def get_bonds(self) -> List[AbstractBond[LB]]:
        return self._bonds

    def get_lattice_vectors(self) -> np.ndarray:
        return self._lattice_vectors

    def _check_site(self, site: AbstractSite[LS]) -> None:
        if not isinstance(site, AbstractSite):
            raise TypeError(f"Expected an AbstractSite, got {type(site).__name__}")
        if site.dimension != self._dimension:
            raise DimensionMismatchError(
                f"Site {len(self._sites)} has dimension {site.dimension}, "
                f"unitcell has dimension {self._dimension}"
            )
        check_label_type(site.label, 'site', len(self._sites), self.site_label_type)

    def _check_bond(self, bond: AbstractBond[LB]) -> None:
        if not isinstance(bond, AbstractBond):
            raise TypeError(f"Expected an AbstractBond, got {type(bond).__name__}")
        if bond.translational_dimension != self.translational_dimension:
            raise DimensionMismatchError(
                f"Bond {len(self._bonds)} has wrap of length "
                f"{bond.translational_dimension}, unitcell has "
                f"{self.translational_dimension} lattice vectors"
            )
        for index in (bond.source, bond.target):
            if not 0 <= index < len(self._sites):
                raise InvalidIndexError(
                    f"Bond {len(self._bonds)} refers to site {index}, "
                    f"unitcell has {len(self._sites)} sites"
                )
        check_label_type(bond.label, 'bond', len(self._bonds), self.bond_label_type)

    def add_site(self, site: AbstractSite[LS]) -> int:
        """
        Append a site.

        Returns
        -------
        index : int
            Index of the new site
        """
        self._check_site(site)
        self._sites.append(site)
        return len(self._sites) - 1

    def add_bond(self, bond: AbstractBond[LB], mirror: bool = False) -> None:
        """
        Append a bond.

        Parameters
        ----------
        bond : AbstractBond
            Bond to add
        mirror : bool, optional
            Also add the reversed bond (target -> source, -wrap).
            The bond must then provide `reversed()`.
        """
        self._check_bond(bond)
        self._bonds.append(bond)
        if mirror:
            reverse = bond.reversed()
            self._check_bond(reverse)
            self._bonds.append(reverse)

    def copy(self) -> 'Unitcell[LS, LB]':
        """Deep copy of sites, bonds and lattice vectors."""
        return Unitcell(
            self._lattice_vectors.copy(),
            [deepcopy(site) for site in self._sites],
            [deepcopy(bond) for bond in self._bonds],
            dimension=self._dimension,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, AbstractUnitcell):
            return NotImplemented
        return (self.dimension == other.dimension
                and self.get_lattice_vectors().shape == other.get_lattice_vectors().shape
                and np.allclose(self.get_lattice_vectors(), other.get_lattice_vectors())
                and self.get_sites() == other.get_sites()
                and self.get_bonds() == other.get_bonds())

    __hash__ = None
