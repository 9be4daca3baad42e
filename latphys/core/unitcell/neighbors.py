"""
Bond discovery by neighbor shells.

Sites are compared against all translated images of the unitcell within a
finite search window. Distances are grouped into shells (1 = nearest
neighbors, 2 = next-nearest, ...) and one directed bond is produced per
(source, target, wrap) that lies on the requested shell.
"""

import itertools
import logging
import numpy as np
from scipy.spatial.distance import cdist
from typing import Any, List, Optional

from ..bond import Bond
from ..labels import default_label
from .base import Unitcell


logger = logging.getLogger(__name__)


def get_distance_shells(lattice_vectors, points, search_range: int = 2,
                        tol: float = 1e-6) -> List[float]:
    """
    Distinct non-zero site-to-site distances, sorted ascending.

    Parameters
    ----------
    lattice_vectors : array_like, shape (N, D)
    points : array_like, shape (S, D)
    search_range : int
        Images n_i in [-search_range, search_range] are included
    tol : float
        Distances closer than tol are grouped into one shell
    """
    dists, _ = _image_distances(lattice_vectors, points, search_range)
    shells: List[float] = []
    for d in np.sort(dists[dists > tol]):
        if not shells or d - shells[-1] > tol:
            shells.append(float(d))
    return shells


def _image_distances(lattice_vectors, points, search_range: int):
    points = np.atleast_2d(np.asarray(points, dtype=float))
    dim = points.shape[1]
    A = np.asarray(lattice_vectors, dtype=float).reshape(-1, dim)

    # shape (M, N); a single empty wrap when N == 0
    wraps = np.array(
        list(itertools.product(range(-search_range, search_range + 1), repeat=len(A))),
        dtype=int,
    )
    shifts = wraps @ A

    # images[m, t] = points[t] + shifts[m], flattened to index m * S + t
    images = shifts[:, None, :] + points[None, :, :]
    dists = cdist(points, images.reshape(-1, dim))
    return dists, wraps


def find_neighbor_bonds(lattice_vectors,
                        points,
                        order: int = 1,
                        label: Any = 1,
                        search_range: Optional[int] = None,
                        tol: float = 1e-6) -> List[Bond]:
    """
    Build directed bonds to the `order`-th neighbor shell.

    Parameters
    ----------
    lattice_vectors : array_like, shape (N, D)
        Bravais lattice vectors
    points : array_like, shape (S, D)
        Site coordinates
    order : int, optional
        Neighbor shell: 1 = nearest neighbors (default), 2 = next-nearest, ...
    label : Any, optional
        Label given to every bond (default: 1)
    search_range : int, optional
        Translations n_i in [-search_range, search_range] are searched.
        Default is order + 1.
    tol : float, optional
        Tolerance for grouping distances into shells

    Returns
    -------
    bonds : List[Bond]
        Ordered by source, then target, then wrap (lexicographic). Every
        bond appears together with its mirror since distances are symmetric.

    Raises
    ------
    ValueError
        If order < 1 or fewer than `order` shells exist in the search window

    Examples
    --------
    >>> bonds = find_neighbor_bonds([[1.0, 0.0], [0.0, 1.0]], [[0.0, 0.0]])
    >>> len(bonds)
    4
    """
    if order < 1:
        raise ValueError(f"Neighbor order must be at least 1, got {order}")

    if search_range is None:
        search_range = order + 1

    shells = get_distance_shells(lattice_vectors, points, search_range, tol)
    if len(shells) < order:
        raise ValueError(
            f"Only {len(shells)} neighbor shells within search range "
            f"{search_range}, cannot build order {order}"
        )
    shell = shells[order - 1]

    dists, wraps = _image_distances(lattice_vectors, points, search_range)
    num_sites = dists.shape[0]

    bonds = []
    for source in range(num_sites):
        for target in range(num_sites):
            for m, wrap in enumerate(wraps):
                if abs(dists[source, m * num_sites + target] - shell) < tol:
                    bonds.append(Bond(source, target, label, wrap))

    logger.debug("Found %d bonds at distance %.6f (order %d)", len(bonds), shell, order)
    return bonds


def connect_neighbors(unitcell: Unitcell, order: int = 1, label: Any = None,
                      **kwargs) -> Unitcell:
    """
    Add bonds of a neighbor shell to an existing unitcell (in place).

    Bonds whose (source, target, wrap) is already present are skipped, so
    calling this twice, or on a preset, adds nothing new.

    Parameters
    ----------
    unitcell : Unitcell
        Unitcell to extend
    order : int, optional
        Neighbor shell (default: 1)
    label : Any, optional
        Label of the new bonds. Default is the default label of the
        unitcell's bond label type (int if it has no bonds yet).
    **kwargs
        Passed to find_neighbor_bonds (search_range, tol)

    Returns
    -------
    unitcell : Unitcell
        The same unitcell, for chaining
    """
    if label is None:
        label = default_label(unitcell.bond_label_type or int)

    bonds = find_neighbor_bonds(
        unitcell.get_lattice_vectors(), unitcell.get_points(),
        order=order, label=label, **kwargs
    )
    existing = {bond.connection for bond in unitcell.get_bonds()}
    added = 0
    for bond in bonds:
        if bond.connection in existing:
            continue
        unitcell.add_bond(bond)
        added += 1
    logger.debug("Added %d of %d neighbor bonds", added, len(bonds))
    return unitcell
