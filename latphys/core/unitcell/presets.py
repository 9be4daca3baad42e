"""
Pre-built unitcells for common lattice geometries.

Every preset is registered under a name and an integer version; versions
select between different cells of the same geometry (e.g. primitive vs.
conventional). All presets carry nearest-neighbor bonds stored in both
directions, with bond length 1 unless noted otherwise.

Available unitcells:
- chain (1)
- square (1: primitive, 2: √2 × √2 two-sublattice cell)
- triangular (1)
- honeycomb (1: primitive, 2: rectangular 4-site cell)
- kagome (1)
- cubic (1)
- bcc (1: primitive)
- fcc (1: primitive, 2: conventional cubic 4-site cell)
- diamond (1)
- pyrochlore (1)
"""

import logging
import numpy as np
from typing import Callable, Dict, List, Sequence, Tuple

from ..bond import Bond
from ..exceptions import UnknownUnitcellError
from ..labels import default_label
from ..site import Site
from .base import Unitcell
from .neighbors import find_neighbor_bonds


logger = logging.getLogger(__name__)

Builder = Callable[[type, type], Unitcell]

# Unitcell registry for name/version based construction
UNITCELL_REGISTRY: Dict[str, Dict[int, Builder]] = {}

SQRT3 = np.sqrt(3)


def register_unitcell(name: str, version: int = 1) -> Callable[[Builder], Builder]:
    """
    Decorator adding a builder to UNITCELL_REGISTRY.

    The builder is called as builder(site_label_type, bond_label_type) and
    must return a new Unitcell on every call.
    """
    def decorator(builder: Builder) -> Builder:
        versions = UNITCELL_REGISTRY.setdefault(name, {})
        if version in versions:
            raise ValueError(f"Unitcell '{name}' version {version} already registered")
        versions[version] = builder
        return builder
    return decorator


def _assemble(lattice_vectors,
              points: Sequence[Sequence[float]],
              connections: Sequence[Tuple[int, int, Tuple[int, ...]]],
              site_label_type: type,
              bond_label_type: type) -> Unitcell:
    """
    Build a unitcell from points and one-directional connections.

    Each (source, target, wrap) in `connections` is stored together with
    its mirror (target, source, -wrap), in the given order.
    """
    site_label = default_label(site_label_type)
    bond_label = default_label(bond_label_type)

    unitcell = Unitcell(lattice_vectors, [Site(p, site_label) for p in points])
    for source, target, wrap in connections:
        unitcell.add_bond(Bond(source, target, bond_label, wrap), mirror=True)
    return unitcell


# ---------------------------------------------------------------------------
# 1D / 2D
# ---------------------------------------------------------------------------

@register_unitcell('chain', 1)
def _chain(site_label_type: type, bond_label_type: type) -> Unitcell:
    """Linear chain with lattice constant 1."""
    return _assemble(
        [[1.0]],
        [[0.0]],
        [(0, 0, (1,))],
        site_label_type, bond_label_type,
    )


@register_unitcell('square', 1)
def _square_primitive(site_label_type: type, bond_label_type: type) -> Unitcell:
    """
    Square Bravais lattice.

    a1 = [1, 0], a2 = [0, 1], one site at the origin, 4 NN bonds.
    """
    return _assemble(
        [[1.0, 0.0],
         [0.0, 1.0]],
        [[0.0, 0.0]],
        [(0, 0, (1, 0)),
         (0, 0, (0, 1))],
        site_label_type, bond_label_type,
    )


@register_unitcell('square', 2)
def _square_sublattice(site_label_type: type, bond_label_type: type) -> Unitcell:
    """
    Square lattice in the √2 × √2 cell with two sublattices.

    a1 = [1, 1], a2 = [1, -1], sites at [0, 0] and [1, 0]. Every bond
    connects the two sublattices.
    """
    return _assemble(
        [[1.0, 1.0],
         [1.0, -1.0]],
        [[0.0, 0.0],
         [1.0, 0.0]],
        [(0, 1, (0, 0)),
         (0, 1, (-1, -1)),
         (0, 1, (0, -1)),
         (0, 1, (-1, 0))],
        site_label_type, bond_label_type,
    )


@register_unitcell('triangular', 1)
def _triangular(site_label_type: type, bond_label_type: type) -> Unitcell:
    """
    Triangular (hexagonal) Bravais lattice.

    a1 = [1, 0], a2 = [1/2, √3/2]. The six NN vectors are ±a1, ±a2 and
    ±(a1 - a2).
    """
    return _assemble(
        [[1.0, 0.0],
         [0.5, SQRT3 / 2]],
        [[0.0, 0.0]],
        [(0, 0, (1, 0)),
         (0, 0, (0, 1)),
         (0, 0, (1, -1))],
        site_label_type, bond_label_type,
    )


@register_unitcell('honeycomb', 1)
def _honeycomb_primitive(site_label_type: type, bond_label_type: type) -> Unitcell:
    """
    Honeycomb lattice, primitive cell.

    a1 = [3/2, √3/2], a2 = [3/2, -√3/2], A at [0, 0], B at [1, 0].
    Each site has 3 neighbors on the other sublattice.
    """
    return _assemble(
        [[1.5, SQRT3 / 2],
         [1.5, -SQRT3 / 2]],
        [[0.0, 0.0],
         [1.0, 0.0]],
        [(0, 1, (0, 0)),
         (0, 1, (-1, 0)),
         (0, 1, (0, -1))],
        site_label_type, bond_label_type,
    )


@register_unitcell('honeycomb', 2)
def _honeycomb_rectangular(site_label_type: type, bond_label_type: type) -> Unitcell:
    """
    Honeycomb lattice, rectangular cell with 4 sites.

    a1 = [√3, 0], a2 = [0, 3]. Sites (A, B, A, B) at
    [0, 0], [0, 1], [√3/2, 3/2], [√3/2, 5/2].
    """
    return _assemble(
        [[SQRT3, 0.0],
         [0.0, 3.0]],
        [[0.0, 0.0],
         [0.0, 1.0],
         [SQRT3 / 2, 1.5],
         [SQRT3 / 2, 2.5]],
        [(0, 1, (0, 0)),
         (1, 2, (0, 0)),
         (1, 2, (-1, 0)),
         (2, 3, (0, 0)),
         (3, 0, (0, 1)),
         (3, 0, (1, 1))],
        site_label_type, bond_label_type,
    )


@register_unitcell('kagome', 1)
def _kagome(site_label_type: type, bond_label_type: type) -> Unitcell:
    """
    Kagome lattice.

    a1 = [2, 0], a2 = [1, √3], corner-sharing triangles of side 1.
    Each site has 4 neighbors.
    """
    return _assemble(
        [[2.0, 0.0],
         [1.0, SQRT3]],
        [[0.0, 0.0],
         [1.0, 0.0],
         [0.5, SQRT3 / 2]],
        [(0, 1, (0, 0)),
         (0, 2, (0, 0)),
         (1, 2, (0, 0)),
         (1, 0, (1, 0)),
         (2, 0, (0, 1)),
         (2, 1, (-1, 1))],
        site_label_type, bond_label_type,
    )


# ---------------------------------------------------------------------------
# 3D
# ---------------------------------------------------------------------------

FCC_PRIMITIVE = [[0.0, 0.5, 0.5],
                 [0.5, 0.0, 0.5],
                 [0.5, 0.5, 0.0]]


@register_unitcell('cubic', 1)
def _cubic(site_label_type: type, bond_label_type: type) -> Unitcell:
    """Simple cubic lattice, 6 NN bonds."""
    return _assemble(
        np.eye(3),
        [[0.0, 0.0, 0.0]],
        [(0, 0, (1, 0, 0)),
         (0, 0, (0, 1, 0)),
         (0, 0, (0, 0, 1))],
        site_label_type, bond_label_type,
    )


@register_unitcell('bcc', 1)
def _bcc_primitive(site_label_type: type, bond_label_type: type) -> Unitcell:
    """
    Body-centered cubic lattice, primitive cell.

    a1 = [-1/2, 1/2, 1/2], a2 = [1/2, -1/2, 1/2], a3 = [1/2, 1/2, -1/2].
    The 8 NN vectors are ±a1, ±a2, ±a3 and ±(a1 + a2 + a3), bond length √3/2.
    """
    return _assemble(
        [[-0.5, 0.5, 0.5],
         [0.5, -0.5, 0.5],
         [0.5, 0.5, -0.5]],
        [[0.0, 0.0, 0.0]],
        [(0, 0, (1, 0, 0)),
         (0, 0, (0, 1, 0)),
         (0, 0, (0, 0, 1)),
         (0, 0, (1, 1, 1))],
        site_label_type, bond_label_type,
    )


@register_unitcell('fcc', 1)
def _fcc_primitive(site_label_type: type, bond_label_type: type) -> Unitcell:
    """
    Face-centered cubic lattice, primitive cell.

    The 12 NN vectors are ±a_i and ±(a_i - a_j), bond length 1/√2.
    """
    return _assemble(
        FCC_PRIMITIVE,
        [[0.0, 0.0, 0.0]],
        [(0, 0, (1, 0, 0)),
         (0, 0, (0, 1, 0)),
         (0, 0, (0, 0, 1)),
         (0, 0, (1, -1, 0)),
         (0, 0, (0, 1, -1)),
         (0, 0, (1, 0, -1))],
        site_label_type, bond_label_type,
    )


@register_unitcell('fcc', 2)
def _fcc_conventional(site_label_type: type, bond_label_type: type) -> Unitcell:
    """
    Face-centered cubic lattice, conventional cubic cell with 4 sites.

    Bonds are found by nearest-neighbor search (12 per site, length 1/√2).
    """
    points = [[0.0, 0.0, 0.0],
              [0.0, 0.5, 0.5],
              [0.5, 0.0, 0.5],
              [0.5, 0.5, 0.0]]
    unitcell = Unitcell(
        np.eye(3), [Site(p, default_label(site_label_type)) for p in points]
    )
    for bond in find_neighbor_bonds(np.eye(3), points, order=1,
                                    label=default_label(bond_label_type)):
        unitcell.add_bond(bond)
    return unitcell


@register_unitcell('diamond', 1)
def _diamond(site_label_type: type, bond_label_type: type) -> Unitcell:
    """
    Diamond lattice: fcc primitive cell with sites at 0 and [1/4, 1/4, 1/4].

    Each site has 4 neighbors on the other sublattice, bond length √3/4.
    """
    return _assemble(
        FCC_PRIMITIVE,
        [[0.0, 0.0, 0.0],
         [0.25, 0.25, 0.25]],
        [(0, 1, (0, 0, 0)),
         (0, 1, (-1, 0, 0)),
         (0, 1, (0, -1, 0)),
         (0, 1, (0, 0, -1))],
        site_label_type, bond_label_type,
    )


@register_unitcell('pyrochlore', 1)
def _pyrochlore(site_label_type: type, bond_label_type: type) -> Unitcell:
    """
    Pyrochlore lattice: corner-sharing tetrahedra on the fcc primitive cell.

    Sites at 0 and a_i / 2. Each site has 6 neighbors, bond length √2/4.
    """
    a = np.array(FCC_PRIMITIVE)
    return _assemble(
        FCC_PRIMITIVE,
        [[0.0, 0.0, 0.0],
         a[0] / 2,
         a[1] / 2,
         a[2] / 2],
        [(0, 1, (0, 0, 0)),
         (0, 2, (0, 0, 0)),
         (0, 3, (0, 0, 0)),
         (1, 2, (0, 0, 0)),
         (1, 3, (0, 0, 0)),
         (2, 3, (0, 0, 0)),
         (1, 0, (1, 0, 0)),
         (2, 0, (0, 1, 0)),
         (3, 0, (0, 0, 1)),
         (1, 2, (1, -1, 0)),
         (1, 3, (1, 0, -1)),
         (2, 3, (0, 1, -1))],
        site_label_type, bond_label_type,
    )


def available_unitcells() -> Dict[str, List[int]]:
    """
    List registered unitcells.

    Returns
    -------
    available : Dict[str, List[int]]
        Sorted versions per unitcell name
    """
    return {name: sorted(versions) for name, versions in sorted(UNITCELL_REGISTRY.items())}


def create_unitcell(name: str,
                    version: int = 1,
                    site_label_type: type = int,
                    bond_label_type: type = int) -> Unitcell:
    """
    Factory function to create unitcells from string names.

    Parameters
    ----------
    name : str
        Name of the geometry ('honeycomb', 'kagome', 'fcc', ...)
    version : int, optional
        Which cell of that geometry to build (default: 1)
    site_label_type : type, optional
        Type of the site labels (default: int)
    bond_label_type : type, optional
        Type of the bond labels (default: int)

    Returns
    -------
    unitcell : Unitcell
        A new unitcell; calling twice gives equal but independent objects

    Examples
    --------
    >>> uc = create_unitcell('honeycomb', site_label_type=str)
    >>> uc.num_sites, uc.num_bonds
    (2, 6)
    >>> uc.get_site(0).label
    '1'

    Raises
    ------
    UnknownUnitcellError
        If the name or the version is not registered
    """
    if name not in UNITCELL_REGISTRY:
        available = ', '.join(sorted(UNITCELL_REGISTRY.keys()))
        raise UnknownUnitcellError(f"Unknown unitcell '{name}'. "
                                   f"Available unitcells: {available}")

    versions = UNITCELL_REGISTRY[name]
    if version not in versions:
        available = ', '.join(str(v) for v in sorted(versions))
        raise UnknownUnitcellError(f"Unknown version {version} of unitcell '{name}'. "
                                   f"Available versions: {available}")

    unitcell = versions[version](site_label_type, bond_label_type)
    logger.debug("Created unitcell '%s' (version %d): %r", name, version, unitcell)
    return unitcell
