"""
latphys: labeled lattice data model for condensed-matter physics

A Python package describing the geometry of lattice models: sites, bonds,
unitcells built from Bravais vectors, and finite lattices replicated from a
unitcell, together with a registry of common unitcells.

Main Components
---------------
core : Data model (Site, Bond, Unitcell, Lattice) and unitcell presets
io : YAML build configuration, pandas/numpy views for plotting
utils : Logging setup

Quick Start
-----------
>>> from latphys import Site, Bond, Unitcell, create_unitcell, build_lattice
>>>
>>> # Single-site square unitcell with one bond along a1
>>> uc = Unitcell(
...     lattice_vectors=[[1.0, 0.0], [0.0, 1.0]],
...     sites=[Site([0.0, 0.0])],
...     bonds=[Bond(0, 0, wrap=(1, 0))],
... )
>>>
>>> # Pre-built kagome unitcell with string labels
>>> kagome = create_unitcell('kagome', site_label_type=str)
>>>
>>> # 6 x 6 periodic lattice
>>> lattice = build_lattice(kagome, (6, 6))
>>> print(lattice)
"""

import logging

__version__ = "0.1.0"

from .core import (
    # Errors
    LatticeError,
    DimensionMismatchError,
    InvalidIndexError,
    LabelTypeError,
    UnknownUnitcellError,
    ConfigError,

    # Data model
    default_label,
    AbstractSite,
    Site,
    AbstractBond,
    Bond,
    AbstractUnitcell,
    Unitcell,
    Lattice,

    # Construction
    UNITCELL_REGISTRY,
    register_unitcell,
    create_unitcell,
    available_unitcells,
    find_neighbor_bonds,
    connect_neighbors,
    build_lattice,
    build_lattice_periodic,
    build_lattice_open,
)

from .io import BuildConfig, load_config, build_from_config
from .utils import setup_logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    '__version__',

    'LatticeError',
    'DimensionMismatchError',
    'InvalidIndexError',
    'LabelTypeError',
    'UnknownUnitcellError',
    'ConfigError',

    'default_label',
    'AbstractSite',
    'Site',
    'AbstractBond',
    'Bond',
    'AbstractUnitcell',
    'Unitcell',
    'Lattice',

    'UNITCELL_REGISTRY',
    'register_unitcell',
    'create_unitcell',
    'available_unitcells',
    'find_neighbor_bonds',
    'connect_neighbors',
    'build_lattice',
    'build_lattice_periodic',
    'build_lattice_open',

    'BuildConfig',
    'load_config',
    'build_from_config',
    'setup_logging',
]
