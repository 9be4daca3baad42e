"""
Core data model of the latphys package.

This module contains the fundamental abstractions:
- Site: labeled point in real space
- Bond: labeled, directed connection between two sites with a Bravais wrap
- Unitcell: sites + bonds + Bravais lattice vectors
- Lattice: a unitcell replicated over a finite block of cells

Labels may be of any type; the coordinate dimension D and the number of
Bravais vectors N are checked when containers are built.
"""

from .exceptions import (
    LatticeError,
    DimensionMismatchError,
    InvalidIndexError,
    LabelTypeError,
    UnknownUnitcellError,
    ConfigError,
)

from .labels import default_label

from .site import AbstractSite, Site
from .bond import AbstractBond, Bond

from .unitcell import (
    AbstractUnitcell,
    Unitcell,
    UNITCELL_REGISTRY,
    register_unitcell,
    create_unitcell,
    available_unitcells,
    find_neighbor_bonds,
    connect_neighbors,
)

from .lattice import Lattice, build_lattice, build_lattice_periodic, build_lattice_open

__all__ = [
    # Errors
    'LatticeError',
    'DimensionMismatchError',
    'InvalidIndexError',
    'LabelTypeError',
    'UnknownUnitcellError',
    'ConfigError',

    # Labels
    'default_label',

    # Sites and bonds
    'AbstractSite',
    'Site',
    'AbstractBond',
    'Bond',

    # Unitcells
    'AbstractUnitcell',
    'Unitcell',
    'UNITCELL_REGISTRY',
    'register_unitcell',
    'create_unitcell',
    'available_unitcells',
    'find_neighbor_bonds',
    'connect_neighbors',

    # Lattices
    'Lattice',
    'build_lattice',
    'build_lattice_periodic',
    'build_lattice_open',
]
