"""
Unit tests for the unitcell registry.

Tests:
- Site / bond / lattice vector counts per preset
- Nearest-neighbor bond lengths and coordination numbers
- Label types
- Determinism and independence of repeated calls
- Registry errors
"""

import numpy as np
import pytest
from latphys.core import (
    Site, Unitcell,
    UNITCELL_REGISTRY, create_unitcell, available_unitcells, register_unitcell,
    UnknownUnitcellError, LabelTypeError,
)


# name, version, D, sites, directed bonds, coordination, bond length
CATALOG = [
    ('chain',      1, 1, 1, 2,  2,  1.0),
    ('square',     1, 2, 1, 4,  4,  1.0),
    ('square',     2, 2, 2, 8,  4,  1.0),
    ('triangular', 1, 2, 1, 6,  6,  1.0),
    ('honeycomb',  1, 2, 2, 6,  3,  1.0),
    ('honeycomb',  2, 2, 4, 12, 3,  1.0),
    ('kagome',     1, 2, 3, 12, 4,  1.0),
    ('cubic',      1, 3, 1, 6,  6,  1.0),
    ('bcc',        1, 3, 1, 8,  8,  np.sqrt(3) / 2),
    ('fcc',        1, 3, 1, 12, 12, 1 / np.sqrt(2)),
    ('fcc',        2, 3, 4, 48, 12, 1 / np.sqrt(2)),
    ('diamond',    1, 3, 2, 8,  4,  np.sqrt(3) / 4),
    ('pyrochlore', 1, 3, 4, 24, 6,  np.sqrt(2) / 4),
]

CATALOG_IDS = [f"{name}-{version}" for name, version, *_ in CATALOG]


class TestPresetGeometry:
    """Test counts and geometry of every preset."""

    @pytest.mark.parametrize("name,version,dim,n_sites,n_bonds,coord,length",
                             CATALOG, ids=CATALOG_IDS)
    def test_counts(self, name, version, dim, n_sites, n_bonds, coord, length):
        uc = create_unitcell(name, version)

        assert uc.dimension == dim
        assert uc.translational_dimension == dim
        assert len(uc.get_lattice_vectors()) == uc.translational_dimension
        assert uc.num_sites == n_sites
        assert uc.num_bonds == n_bonds

    @pytest.mark.parametrize("name,version,dim,n_sites,n_bonds,coord,length",
                             CATALOG, ids=CATALOG_IDS)
    def test_nearest_neighbor_lengths(self, name, version, dim, n_sites, n_bonds,
                                      coord, length):
        uc = create_unitcell(name, version)

        for bond in uc.get_bonds():
            assert np.isclose(uc.bond_length(bond), length)

    @pytest.mark.parametrize("name,version,dim,n_sites,n_bonds,coord,length",
                             CATALOG, ids=CATALOG_IDS)
    def test_coordination(self, name, version, dim, n_sites, n_bonds, coord, length):
        uc = create_unitcell(name, version)

        for i in range(uc.num_sites):
            assert uc.coordination(i) == coord

    @pytest.mark.parametrize("name,version", [c[:2] for c in CATALOG], ids=CATALOG_IDS)
    def test_bidirectional(self, name, version):
        assert create_unitcell(name, version).is_bidirectional()

    @pytest.mark.parametrize("name,version", [c[:2] for c in CATALOG], ids=CATALOG_IDS)
    def test_no_duplicate_bonds(self, name, version):
        uc = create_unitcell(name, version)
        keys = {(b.source, b.target, tuple(b.wrap)) for b in uc.get_bonds()}

        assert len(keys) == uc.num_bonds

    def test_honeycomb_versions_same_density(self):
        """Test primitive and rectangular honeycomb cells have equal area per site."""
        primitive = create_unitcell('honeycomb', 1)
        rectangular = create_unitcell('honeycomb', 2)

        assert np.isclose(primitive.get_volume() / primitive.num_sites,
                          rectangular.get_volume() / rectangular.num_sites)

    def test_fcc_versions_same_density(self):
        primitive = create_unitcell('fcc', 1)
        conventional = create_unitcell('fcc', 2)

        assert np.isclose(primitive.get_volume(), 0.25)
        assert np.isclose(conventional.get_volume() / conventional.num_sites, 0.25)


class TestPresetLabels:
    """Test label type parametrization."""

    def test_default_int_labels(self):
        uc = create_unitcell('kagome')

        assert all(site.label == 1 for site in uc.get_sites())
        assert all(bond.label == 1 for bond in uc.get_bonds())
        assert uc.site_label_type is int

    def test_string_labels(self):
        uc = create_unitcell('honeycomb', site_label_type=str, bond_label_type=str)

        assert uc.get_site(0).label == '1'
        assert uc.get_bond(0).label == '1'
        assert uc.bond_label_type is str

    def test_mixed_label_types(self):
        uc = create_unitcell('triangular', site_label_type=float, bond_label_type=complex)

        assert uc.get_site(0).label == 1.0
        assert isinstance(uc.get_site(0).label, float)
        assert isinstance(uc.get_bond(0).label, complex)

    def test_custom_label_type(self):
        """Test label types that can be built without arguments."""
        uc = create_unitcell('square', bond_label_type=tuple)

        assert uc.get_bond(0).label == ()

    def test_label_type_without_default_raises(self):
        class NeedsArgument:
            def __init__(self, value):
                self.value = value

        with pytest.raises(LabelTypeError, match="NeedsArgument"):
            create_unitcell('square', site_label_type=NeedsArgument)


class TestPresetDeterminism:
    """Test repeated calls."""

    @pytest.mark.parametrize("name,version", [c[:2] for c in CATALOG], ids=CATALOG_IDS)
    def test_same_call_same_result(self, name, version):
        first = create_unitcell(name, version)
        second = create_unitcell(name, version)

        assert first == second
        assert np.allclose(first.get_points(), second.get_points())
        for b1, b2 in zip(first.get_bonds(), second.get_bonds()):
            assert b1 == b2

    def test_calls_are_independent(self):
        first = create_unitcell('square')
        second = create_unitcell('square')
        first.get_site(0).set_point([0.5, 0.5])
        first.get_bond(0).set_label(9)

        assert np.allclose(second.get_site(0).point, [0.0, 0.0])
        assert second.get_bond(0).label == 1


class TestRegistry:
    """Test registry lookup and errors."""

    def test_available(self):
        available = available_unitcells()

        assert available['honeycomb'] == [1, 2]
        assert available['fcc'] == [1, 2]
        assert 'pyrochlore' in available
        assert list(available) == sorted(available)

    def test_unknown_name_raises(self):
        with pytest.raises(UnknownUnitcellError, match="Unknown unitcell 'hexagonal'"):
            create_unitcell('hexagonal')

    def test_unknown_version_raises(self):
        with pytest.raises(UnknownUnitcellError, match="Available versions: 1, 2"):
            create_unitcell('honeycomb', 7)

    def test_unknown_name_is_value_error(self):
        with pytest.raises(ValueError):
            create_unitcell('hexagonal')

    def test_register_and_create(self):
        @register_unitcell('test_dimer', 1)
        def _dimer(site_label_type, bond_label_type):
            return Unitcell([], [Site([0.0, 0.0], site_label_type()),
                                 Site([1.0, 0.0], site_label_type())])

        try:
            uc = create_unitcell('test_dimer', site_label_type=str)
            assert uc.num_sites == 2
            assert uc.translational_dimension == 0
        finally:
            del UNITCELL_REGISTRY['test_dimer']

    def test_duplicate_registration_raises(self):
        with pytest.raises(ValueError, match="already registered"):
            register_unitcell('square', 1)(lambda s, b: None)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
