"""
Unitcell Demo

This example walks through the data model:
- Site and Bond (labels, coordinates, wraps)
- Unitcell (custom and pre-built)
- Lattice (periodic and open replication)
- Tabular views for plotting
"""

import numpy as np
import sys
from pathlib import Path

# Add latphys to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from latphys import (
    Site,
    Bond,
    Unitcell,
    create_unitcell,
    available_unitcells,
    build_lattice,
)
from latphys.io import sites_frame, bonds_frame


def example_custom_unitcell():
    """Example 1: Build a unitcell by hand."""
    print("="*60)
    print("Example 1: Custom single-site square unitcell")
    print("="*60)

    site = Site([0.0, 0.0], label='A')
    print(f"\nSite: {site}")

    # Getters and setters
    site.set_label('B')
    site.point = [0.0, 0.0]
    print(f"After relabeling: label = {site.get_label()}, point = {site.get_point()}")

    uc = Unitcell(
        lattice_vectors=[[1.0, 0.0], [0.0, 1.0]],
        sites=[site],
    )
    # Bond along a1, stored together with its mirror
    uc.add_bond(Bond(0, 0, label='x', wrap=(1, 0)), mirror=True)

    print(f"\nUnitcell: {uc}")
    for i, bond in enumerate(uc.get_bonds()):
        print(f"  Bond {i+1}: {bond}, vector = {uc.bond_vector(bond)}")


def example_presets():
    """Example 2: Pre-built unitcells."""
    print("\n" + "="*60)
    print("Example 2: Pre-built unitcells")
    print("="*60)

    print("\nAvailable unitcells:")
    for name, versions in available_unitcells().items():
        print(f"  {name:12s} versions {versions}")

    # Primitive and rectangular honeycomb cells, string site labels
    for version in (1, 2):
        uc = create_unitcell('honeycomb', version, site_label_type=str)
        print(f"\nhoneycomb v{version}: {uc}")
        print(f"  area per site = {uc.get_volume() / uc.num_sites:.4f}")

    pyrochlore = create_unitcell('pyrochlore')
    print(f"\npyrochlore: {pyrochlore}")
    print(f"  coordination = {[pyrochlore.coordination(i) for i in range(pyrochlore.num_sites)]}")


def example_lattice():
    """Example 3: Lattices from unitcells."""
    print("\n" + "="*60)
    print("Example 3: Periodic and open lattices")
    print("="*60)

    kagome = create_unitcell('kagome')

    periodic = build_lattice(kagome, (4, 4))
    print(f"\nPeriodic: {periodic}")

    ribbon = build_lattice(kagome, (4, 4), periodic=(True, False))
    print(f"Ribbon:   {ribbon}")

    coordination = np.array([ribbon.coordination(i) for i in range(ribbon.num_sites)])
    print(f"  edge sites (coordination < 4): {np.sum(coordination < 4)}")


def example_tables():
    """Example 4: Data handed to a plotting front-end."""
    print("\n" + "="*60)
    print("Example 4: Site and bond tables")
    print("="*60)

    uc = create_unitcell('kagome', bond_label_type=str)
    print("\nSites:")
    print(sites_frame(uc))
    print("\nBonds:")
    print(bonds_frame(uc))


if __name__ == '__main__':
    example_custom_unitcell()
    example_presets()
    example_lattice()
    example_tables()
