"""
Unit tests for Lattice construction.

Tests:
- Site replication and ordering
- Periodic, open and mixed boundaries
- Bond re-indexing and wraps
- Input validation
"""

import numpy as np
import pytest
from latphys.core import (
    Lattice, build_lattice, build_lattice_open, build_lattice_periodic,
    Site, create_unitcell, DimensionMismatchError, InvalidIndexError,
)


class TestLatticeSites:
    """Test site replication."""

    def test_site_count(self):
        lattice = build_lattice(create_unitcell('kagome'), (3, 2))

        assert lattice.num_sites == 3 * 3 * 2
        assert lattice.num_cells == 6

    def test_site_positions(self):
        uc = create_unitcell('honeycomb', 1)
        lattice = build_lattice(uc, (2, 2))
        a1, a2 = uc.get_lattice_vectors()

        # cell (1, 0) holds sites 4, 5; cell (0, 1) holds sites 2, 3
        assert np.allclose(lattice.get_site(4).point, a1)
        assert np.allclose(lattice.get_site(5).point, a1 + [1.0, 0.0])
        assert np.allclose(lattice.get_site(2).point, a2)

    def test_cell_index(self):
        lattice = build_lattice(create_unitcell('honeycomb', 1), (2, 3))

        assert lattice.get_cell_index(0) == ((0, 0), 0)
        assert lattice.get_cell_index(3) == ((0, 1), 1)
        assert lattice.get_cell_index(7) == ((1, 0), 1)

    def test_labels_copied(self):
        uc = create_unitcell('square', site_label_type=str, bond_label_type=str)
        lattice = build_lattice(uc, (2, 2))

        assert all(site.label == '1' for site in lattice.get_sites())
        assert all(bond.label == '1' for bond in lattice.get_bonds())

    def test_sites_are_copies(self):
        uc = create_unitcell('square')
        lattice = build_lattice(uc, (2, 2))
        lattice.get_site(0).set_label(5)

        assert uc.get_site(0).label == 1

    def test_cell_index_independent_of_later_unitcell_edits(self):
        uc = create_unitcell('square')
        lattice = build_lattice(uc, (2, 2))
        before = lattice.get_cell_index(3)
        uc.add_site(Site([0.5, 0.5]))

        assert lattice.get_cell_index(3) == before == ((1, 1), 0)
        assert lattice.num_basis == 1
        assert lattice.unitcell.num_sites == 1


class TestPeriodicLattice:
    """Test periodic boundaries."""

    def test_single_cell_reproduces_unitcell(self):
        uc = create_unitcell('kagome')
        lattice = build_lattice_periodic(uc, (1, 1))

        assert lattice.get_bonds() == uc.get_bonds()
        assert np.allclose(lattice.get_lattice_vectors(), uc.get_lattice_vectors())

    def test_bond_count_and_coordination(self):
        lattice = build_lattice(create_unitcell('triangular'), (4, 4))

        assert lattice.num_bonds == 16 * 6
        for i in range(lattice.num_sites):
            assert lattice.coordination(i) == 6

    def test_super_vectors(self):
        uc = create_unitcell('triangular')
        lattice = build_lattice(uc, (4, 3))

        assert np.allclose(lattice.get_lattice_vectors(),
                           [4 * uc.get_lattice_vectors()[0], 3 * uc.get_lattice_vectors()[1]])
        assert lattice.translational_dimension == 2

    def test_wrapped_bond(self):
        """Test a bond leaving the block gets a wrap of the super-lattice."""
        lattice = build_lattice(create_unitcell('chain'), (3,))
        bond = [b for b in lattice.get_bonds_from(2) if b.target == 0][0]

        assert np.array_equal(bond.wrap, [1])
        assert np.isclose(lattice.bond_length(bond), 1.0)

    def test_bond_lengths_preserved(self):
        lattice = build_lattice(create_unitcell('pyrochlore'), (2, 2, 2))

        for bond in lattice.get_bonds():
            assert np.isclose(lattice.bond_length(bond), np.sqrt(2) / 4)
        assert lattice.is_bidirectional()


class TestOpenLattice:
    """Test open and mixed boundaries."""

    def test_open_square(self):
        lattice = build_lattice_open(create_unitcell('square'), (4, 4))

        assert lattice.num_bonds == 48
        assert lattice.translational_dimension == 0
        assert all(b.translational_dimension == 0 for b in lattice.get_bonds())
        assert lattice.coordination(0) == 2
        assert lattice.is_bidirectional()

    def test_open_chain(self):
        lattice = build_lattice(create_unitcell('chain'), (5,), periodic=False)

        assert lattice.num_bonds == 8
        assert lattice.coordination(0) == 1
        assert lattice.coordination(2) == 2

    def test_mixed_boundaries(self):
        """Test a cylinder: periodic along a1, open along a2."""
        uc = create_unitcell('square')
        lattice = build_lattice(uc, (4, 3), periodic=(True, False))

        assert lattice.translational_dimension == 1
        assert np.allclose(lattice.get_lattice_vectors(), [[4.0, 0.0]])
        # 4 * 3 horizontal + 4 * 2 vertical undirected bonds
        assert lattice.num_bonds == 2 * (12 + 8)
        assert all(len(b.wrap) == 1 for b in lattice.get_bonds())

    def test_open_lattice_geometry_is_local(self):
        lattice = build_lattice_open(create_unitcell('honeycomb', 2), (2, 2))

        for bond in lattice.get_bonds():
            assert np.isclose(lattice.bond_length(bond), 1.0)


class TestLatticeValidation:
    """Test input validation."""

    def test_extent_length_mismatch(self):
        with pytest.raises(DimensionMismatchError, match="extent of length 3"):
            build_lattice(create_unitcell('square'), (2, 2, 2))

    def test_extent_too_small(self):
        with pytest.raises(ValueError, match="at least 1"):
            build_lattice(create_unitcell('square'), (2, 0))

    def test_periodic_length_mismatch(self):
        with pytest.raises(DimensionMismatchError, match="boundary conditions"):
            build_lattice(create_unitcell('square'), (2, 2), periodic=(True,))

    def test_bond_retargeted_out_of_range(self):
        uc = create_unitcell('honeycomb')
        uc.get_bond(0).set_target(2)

        with pytest.raises(InvalidIndexError, match="Unitcell bond 0 refers to site 2"):
            build_lattice(uc, (3, 3))


class TestLatticeMisc:
    """Test copies and representations."""

    def test_copy(self):
        lattice = build_lattice(create_unitcell('square'), (2, 2))
        copy = lattice.copy()

        assert isinstance(copy, Lattice)
        assert copy == lattice
        assert copy.extent == (2, 2)
        assert copy.periodic == (True, True)

    def test_repr(self):
        lattice = build_lattice(create_unitcell('square'), (2, 2), periodic=False)

        assert repr(lattice) == ("Lattice(extent=(2, 2), periodic=(False, False), "
                                 "sites=4, bonds=8)")


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
