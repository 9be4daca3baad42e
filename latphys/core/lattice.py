"""
Finite lattices built by replicating a unitcell.

A lattice is itself a unitcell-like container: its sites are copies of the
unitcell sites shifted into every cell of an L_1 × ... × L_N block, and its
bonds are the unitcell bonds re-indexed inside that block. Each Bravais
direction is either periodic (bonds wrap around and the lattice keeps the
super-vector L_i a_i) or open (bonds leaving the block are dropped).
"""

import itertools
import logging
import numpy as np
from copy import deepcopy
from typing import List, Sequence, Tuple, Union

from .bond import Bond
from .exceptions import DimensionMismatchError, InvalidIndexError
from .unitcell.base import AbstractUnitcell, Unitcell


logger = logging.getLogger(__name__)


class Lattice(Unitcell):
    """
    A unitcell replicated over a finite block of cells.

    Use build_lattice() rather than calling the constructor directly.

    Parameters
    ----------
    lattice_vectors : array_like, shape (P, D)
        Super-vectors L_i a_i of the P periodic directions
    sites, bonds
        As for Unitcell; wraps have length P
    unitcell : AbstractUnitcell
        The unitcell this lattice was built from; a copy is kept
    extent : Tuple[int, ...]
        Number of cells along each Bravais direction of the unitcell
    periodic : Tuple[bool, ...]
        Boundary condition along each Bravais direction

    Attributes
    ----------
    unitcell
        Snapshot of the unitcell at build time
    num_basis : int
        Number of unitcell sites per cell
    extent, periodic
        As passed to the constructor
    """

    def __init__(self, lattice_vectors, sites, bonds,
                 unitcell: AbstractUnitcell,
                 extent: Tuple[int, ...],
                 periodic: Tuple[bool, ...]):
        self.unitcell = deepcopy(unitcell)
        self.num_basis = self.unitcell.num_sites
        self.extent = tuple(extent)
        self.periodic = tuple(periodic)
        super().__init__(lattice_vectors, sites, bonds, dimension=unitcell.dimension)

    @property
    def num_cells(self) -> int:
        return int(np.prod(self.extent, dtype=int))

    def get_cell_index(self, site_index: int) -> Tuple[Tuple[int, ...], int]:
        """
        Locate a lattice site in the block of cells.

        Parameters
        ----------
        site_index : int
            Index of a lattice site

        Returns
        -------
        cell : Tuple[int, ...]
            Cell coordinates (n_1, ..., n_N)
        basis_index : int
            Index of the corresponding unitcell site
        """
        self.get_site(site_index)
        flat, basis_index = divmod(site_index, self.num_basis)
        if not self.extent:
            return (), basis_index
        cell = tuple(int(n) for n in np.unravel_index(flat, self.extent))
        return cell, basis_index

    def copy(self) -> 'Lattice':
        base = super().copy()
        return Lattice(base.get_lattice_vectors(), base.get_sites(), base.get_bonds(),
                       self.unitcell, self.extent, self.periodic)

    def __repr__(self) -> str:
        return (f"Lattice(extent={self.extent}, periodic={self.periodic}, "
                f"sites={self.num_sites}, bonds={self.num_bonds})")


def _normalize_periodic(periodic: Union[bool, Sequence[bool]], n: int) -> Tuple[bool, ...]:
    if isinstance(periodic, (bool, np.bool_)):
        return (bool(periodic),) * n
    periodic = tuple(bool(p) for p in periodic)
    if len(periodic) != n:
        raise DimensionMismatchError(
            f"Expected {n} boundary conditions, got {len(periodic)}"
        )
    return periodic


def build_lattice(unitcell: AbstractUnitcell,
                  extent: Sequence[int],
                  periodic: Union[bool, Sequence[bool]] = True) -> Lattice:
    """
    Replicate a unitcell over L_1 × ... × L_N cells.

    Parameters
    ----------
    unitcell : AbstractUnitcell
        Unitcell to replicate
    extent : Sequence[int]
        Number of cells L_i along each Bravais vector, each >= 1
    periodic : bool or Sequence[bool], optional
        Periodic (True) or open (False) boundary, for all directions or per
        direction. Default is periodic everywhere.

    Returns
    -------
    lattice : Lattice
        Sites ordered by cell (last cell index fastest), then by unitcell
        site: index = ravel(cell) * num_sites + basis_index.

    Notes
    -----
    A bond (i, j, w) from cell n points to cell m = n + w. Along a periodic
    direction the new wrap component is m_i // L_i and the cell wraps to
    m_i mod L_i. Along an open direction the bond is dropped whenever m_i
    leaves [0, L_i).

    Examples
    --------
    >>> from latphys import create_unitcell
    >>> lattice = build_lattice(create_unitcell('square'), (4, 4))
    >>> lattice.num_sites, lattice.num_bonds
    (16, 64)
    >>> lattice = build_lattice(create_unitcell('square'), (4, 4), periodic=False)
    >>> lattice.num_bonds
    48

    Raises
    ------
    DimensionMismatchError
        If extent or periodic do not have one entry per Bravais vector
    InvalidIndexError
        If a unitcell bond refers to a site the unitcell does not have
    ValueError
        If any extent is smaller than 1
    """
    n_dim = unitcell.translational_dimension
    extent = tuple(int(L) for L in extent)
    if len(extent) != n_dim:
        raise DimensionMismatchError(
            f"Unitcell has {n_dim} lattice vectors, got extent of length {len(extent)}"
        )
    if any(L < 1 for L in extent):
        raise ValueError(f"Lattice extent must be at least 1 in every direction, got {extent}")
    periodic = _normalize_periodic(periodic, n_dim)

    A = unitcell.get_lattice_vectors()
    num_basis = unitcell.num_sites
    for idx, bond in enumerate(unitcell.get_bonds()):
        for index in (bond.source, bond.target):
            if not 0 <= index < num_basis:
                raise InvalidIndexError(
                    f"Unitcell bond {idx} refers to site {index}, "
                    f"unitcell has {num_basis} sites"
                )
    cells = list(itertools.product(*(range(L) for L in extent)))

    sites = []
    for cell in cells:
        shift = np.array(cell, dtype=float) @ A if n_dim else np.zeros(unitcell.dimension)
        for site in unitcell.get_sites():
            replica = deepcopy(site)
            replica.set_point(site.get_point() + shift)
            sites.append(replica)

    L = np.array(extent, dtype=int)
    is_periodic = np.array(periodic, dtype=bool)
    bonds: List[Bond] = []
    dropped = 0
    for flat, cell in enumerate(cells):
        n = np.array(cell, dtype=int)
        for bond in unitcell.get_bonds():
            m = n + bond.get_wrap()
            outside = (m < 0) | (m >= L)
            if np.any(outside & ~is_periodic):
                dropped += 1
                continue
            wrap = np.floor_divide(m, L)[is_periodic]
            m = np.mod(m, L)
            target_flat = int(np.ravel_multi_index(tuple(m), extent)) if n_dim else 0
            bonds.append(Bond(
                flat * num_basis + bond.source,
                target_flat * num_basis + bond.target,
                bond.get_label(),
                wrap,
            ))

    vectors = (L[:, None] * A)[is_periodic] if n_dim else np.zeros((0, unitcell.dimension))

    lattice = Lattice(vectors, sites, bonds, unitcell, extent, periodic)
    logger.debug("Built %r from %r (%d open-boundary bonds dropped)",
                 lattice, unitcell, dropped)
    return lattice


def build_lattice_periodic(unitcell: AbstractUnitcell, extent: Sequence[int]) -> Lattice:
    """Lattice with periodic boundaries in every direction."""
    return build_lattice(unitcell, extent, periodic=True)


def build_lattice_open(unitcell: AbstractUnitcell, extent: Sequence[int]) -> Lattice:
    """Lattice with open boundaries in every direction (no lattice vectors)."""
    return build_lattice(unitcell, extent, periodic=False)
