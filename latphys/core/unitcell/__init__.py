"""
Unitcell module.

This module provides the abstract and default unitcell implementations, the
registry of pre-built unitcells and neighbor-shell bond discovery.

Available unitcells: see `available_unitcells()`.
"""

from .base import AbstractUnitcell, Unitcell
from .neighbors import find_neighbor_bonds, connect_neighbors, get_distance_shells
from .presets import (
    UNITCELL_REGISTRY,
    register_unitcell,
    create_unitcell,
    available_unitcells,
)

__all__ = [
    'AbstractUnitcell',
    'Unitcell',
    'find_neighbor_bonds',
    'connect_neighbors',
    'get_distance_shells',
    'UNITCELL_REGISTRY',
    'register_unitcell',
    'create_unitcell',
    'available_unitcells',
]
