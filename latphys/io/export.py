"""
Tabular views of unitcells and lattices.

These are the read-only data a plotting front-end needs: site positions and
labels, bond endpoints and labels. Nothing here draws.
"""

import numpy as np
import pandas as pd
from collections import defaultdict

from ..core.unitcell.base import AbstractUnitcell

AXIS_NAMES = ('x', 'y', 'z')


def _axis_names(dimension: int):
    if dimension <= len(AXIS_NAMES):
        return list(AXIS_NAMES[:dimension])
    return [f'x{i + 1}' for i in range(dimension)]


def sites_frame(cell: AbstractUnitcell) -> pd.DataFrame:
    """
    One row per site.

    Returns
    -------
    frame : pd.DataFrame
        Columns 'label' and one coordinate column per dimension ('x', 'y',
        'z'; 'x1', 'x2', ... above three dimensions). Indexed by site index.
    """
    points = cell.get_points()
    frame = pd.DataFrame(points, columns=_axis_names(cell.dimension))
    frame.insert(0, 'label', [site.label for site in cell.get_sites()])
    frame.index.name = 'site'
    return frame


def bonds_frame(cell: AbstractUnitcell) -> pd.DataFrame:
    """
    One row per bond.

    Returns
    -------
    frame : pd.DataFrame
        Columns 'source', 'target', 'label', 'wrap_1' ... 'wrap_N' and
        'length'. Indexed by bond index.
    """
    bonds = cell.get_bonds()
    wrap_columns = [f'wrap_{i + 1}' for i in range(cell.translational_dimension)]
    columns = ['source', 'target', 'label'] + wrap_columns + ['length']

    rows = []
    for bond in bonds:
        rows.append([bond.source, bond.target, bond.label]
                    + [int(w) for w in bond.get_wrap()]
                    + [cell.bond_length(bond)])

    frame = pd.DataFrame(rows, columns=columns)
    frame.index.name = 'bond'
    return frame


def bond_segments(cell: AbstractUnitcell, unique: bool = True) -> np.ndarray:
    """
    Start and end points of all bonds.

    Parameters
    ----------
    cell : AbstractUnitcell
        Unitcell or lattice
    unique : bool, optional
        Keep only one bond of each mirror pair (default: True)

    Returns
    -------
    segments : np.ndarray, shape (M, 2, D)
        segments[k] = [start, end]; the end lies in the translated cell for
        bonds with non-zero wrap
    """
    kept = []
    kept_labels = defaultdict(list)
    for bond in cell.get_bonds():
        if unique and bond.label in kept_labels.get(bond.reverse_connection, ()):
            continue
        kept.append(bond)
        kept_labels[bond.connection].append(bond.label)

    if not kept:
        return np.zeros((0, 2, cell.dimension))

    segments = []
    for bond in kept:
        start = cell.get_site(bond.source).get_point()
        segments.append([start, start + cell.bond_vector(bond)])
    return np.array(segments)
