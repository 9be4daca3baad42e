"""
Unit tests for Site.

Tests:
- Construction and read access
- Label / point read-back after setting
- Dimension enforcement
- Custom site types through AbstractSite
"""

import numpy as np
import pytest
from latphys.core import Site, AbstractSite, DimensionMismatchError


class TestSiteCreation:
    """Test construction."""

    def test_point_and_label(self):
        """Test that constructor arguments are read back."""
        site = Site([0.0, 0.5], label='A')

        assert site.label == 'A'
        assert np.allclose(site.point, [0.0, 0.5])
        assert site.dimension == 2

    def test_default_label(self):
        """Test default label is 1."""
        site = Site([0.0, 0.0, 0.0])

        assert site.get_label() == 1
        assert site.dimension == 3

    def test_point_is_copied(self):
        """Test that the site does not alias the input array."""
        point = np.array([1.0, 2.0])
        site = Site(point)
        point[0] = 99.0

        assert np.allclose(site.get_point(), [1.0, 2.0])

    def test_point_stored_as_float(self):
        """Test integer coordinates are converted to float."""
        site = Site([1, 2])

        assert site.get_point().dtype == float

    def test_matrix_point_raises(self):
        """Test that a 2D array is rejected as coordinates."""
        with pytest.raises(DimensionMismatchError, match="1D vector"):
            Site([[0.0, 0.0], [1.0, 1.0]])


class TestSiteAccessors:
    """Test getter/setter read-back."""

    @pytest.mark.parametrize("label", [2, 'B', 0.5, (1, 'x')])
    def test_label_readback(self, label):
        """Test reading back a label right after setting it."""
        site = Site([0.0, 0.0])
        site.set_label(label)

        assert site.get_label() == label

    def test_label_property(self):
        """Test the label property forwards to the setter."""
        site = Site([0.0, 0.0])
        site.label = 'C'

        assert site.get_label() == 'C'

    def test_point_readback(self):
        """Test reading back a point right after setting it."""
        site = Site([0.0, 0.0])
        site.set_point([0.25, -1.0])

        assert np.allclose(site.get_point(), [0.25, -1.0])

    def test_point_property(self):
        """Test the point property forwards to the setter."""
        site = Site([0.0, 0.0])
        site.point = [3.0, 4.0]

        assert np.allclose(site.get_point(), [3.0, 4.0])

    def test_out_of_range_coordinates_accepted(self):
        """Test that no range validation is applied to coordinates."""
        site = Site([0.0, 0.0])
        site.set_point([1e12, -1e12])

        assert np.allclose(site.get_point(), [1e12, -1e12])

    def test_set_point_wrong_dimension_raises(self):
        """Test that changing the dimension is rejected."""
        site = Site([0.0, 0.0])

        with pytest.raises(DimensionMismatchError, match="dimension 2"):
            site.set_point([0.0, 0.0, 0.0])

        # Unchanged after the failed set
        assert np.allclose(site.get_point(), [0.0, 0.0])


class TestSiteComparison:
    """Test equality and copies."""

    def test_equal_sites(self):
        assert Site([0.0, 1.0], 'A') == Site([0.0, 1.0], 'A')

    def test_different_label(self):
        assert Site([0.0, 1.0], 'A') != Site([0.0, 1.0], 'B')

    def test_different_dimension(self):
        assert Site([0.0, 0.0], 1) != Site([0.0, 0.0, 0.0], 1)

    def test_copy_is_independent(self):
        site = Site([0.0, 1.0], 'A')
        copy = site.copy()
        copy.set_point([5.0, 5.0])

        assert np.allclose(site.get_point(), [0.0, 1.0])
        assert copy != site


class TestCustomSite:
    """Test user-defined site types through the abstract interface."""

    class TaggedSite(AbstractSite):
        def __init__(self, point, label, tag):
            self._point = np.array(point, dtype=float)
            self._label = label
            self.tag = tag

        def get_label(self):
            return self._label

        def set_label(self, label):
            self._label = label

        def get_point(self):
            return self._point

        def set_point(self, point):
            self._point = np.array(point, dtype=float)

    def test_properties_forward(self):
        """Test label/point properties of the abstract base."""
        site = self.TaggedSite([1.0, 2.0], 'A', tag='spin')
        site.label = 'B'

        assert site.label == 'B'
        assert site.dimension == 2
        assert site.tag == 'spin'

    def test_abstract_site_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            AbstractSite()


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
