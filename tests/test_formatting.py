"""Tests for tensor text renderings."""
import pytest

from sftensor.domain.entities.errors import UnboundBufferError
from sftensor.domain.entities.tensor import Tensor
from sftensor.domain.operations.formatting import (
    format_properties,
    format_raw,
    format_scalar,
    format_tensor,
)


class TestFormatScalar:
    """Tests for format_scalar."""

    @pytest.mark.parametrize(
        "value, expected",
        [(4, "4"), (-12, "-12"), (2.5, "2.5"), (4.0, "4"), (1e6, "1e+06")],
    )
    def test_numbers(self, value, expected):
        """Test that ints print as-is and floats print in %g style."""
        assert format_scalar(value) == expected


class TestFormatTensor:
    """Tests for format_tensor and str()."""

    def test_scalar(self):
        """Test that rank 0 renders the bare value."""
        assert format_tensor(Tensor.scalar(5)) == "5"

    def test_vector(self, vector_0_to_4):
        """Test the bracketed, space separated rank-1 form."""
        assert format_tensor(vector_0_to_4) == "[ 0 1 2 3 4 ]"

    def test_empty_vector(self):
        """Test that an empty vector keeps its brackets."""
        assert format_tensor(Tensor([0])) == "[ ]"

    def test_row_of_a_matrix(self, matrix_2x3):
        """Test that index(1) of [[1,2,3],[4,5,6]] renders as [ 4 5 6 ]."""
        assert str(matrix_2x3.index(1)) == "[ 4 5 6 ]"

    def test_slice_of_a_vector(self, vector_0_to_4):
        """Test that slice(1, 4) of [0..4] renders as [ 1 2 3 ]."""
        view = vector_0_to_4.slice(1, 4)
        assert view.shape == (3,)
        assert str(view) == "[ 1 2 3 ]"

    def test_matrix(self, matrix_2x3):
        """Test that rows are rendered on separate lines inside outer brackets."""
        assert str(matrix_2x3) == "[[ 1 2 3 ]\n[ 4 5 6 ]]"

    def test_rank_three(self):
        """Test that every rank-2 level brackets itself."""
        tensor = Tensor.from_sequence([[[1, 2], [3, 4]], [[5, 6], [7, 8]]])
        assert str(tensor) == "[[[ 1 2 ]\n[ 3 4 ]]\n[[ 5 6 ]\n[ 7 8 ]]]"

    def test_floats(self):
        """Test float elements."""
        assert str(Tensor.from_sequence([0.5, 2.0])) == "[ 0.5 2 ]"

    def test_block_view(self, grid_3x4):
        """Test that a 2-D block renders only the addressed elements."""
        assert str(grid_3x4[1:3, 1:3]) == "[[ 5 6 ]\n[ 9 10 ]]"


class TestFormatRaw:
    """Tests for format_raw."""

    def test_owner(self, matrix_2x3):
        """Test that an owner renders its whole buffer in order."""
        assert format_raw(matrix_2x3) == "1 2 3 4 5 6"

    def test_index_view_starts_at_its_base(self, matrix_2x3):
        """Test that an index view renders from its base."""
        assert format_raw(matrix_2x3.index(1)) == "4 5 6"

    def test_slice_view_ignores_offsets(self, vector_0_to_4):
        """Test that the raw rendering reads buffer order from the base."""
        assert format_raw(vector_0_to_4.slice(2, 4)) == "0 1"

    def test_unbound(self):
        """Test that an unbound tensor cannot be rendered raw."""
        with pytest.raises(UnboundBufferError):
            format_raw(Tensor([2], allocate=False))


class TestFormatProperties:
    """Tests for format_properties."""

    def test_owner(self, matrix_2x3):
        """Test the properties of an owning matrix."""
        assert format_properties(matrix_2x3) == (
            "Num Dimensions: 2\n"
            "Num Elements: 6\n"
            "Is Owner: 1\n"
            "Shape: 2\tStride: 3\tOffset 0\n"
            "Shape: 3\tStride: 1\tOffset 0"
        )

    def test_block_view(self, grid_3x4):
        """Test that a view reports narrowed shapes, original strides and offsets."""
        assert format_properties(grid_3x4.slice_many([(1, 3), (1, 3)])) == (
            "Num Dimensions: 2\n"
            "Num Elements: 4\n"
            "Is Owner: 0\n"
            "Shape: 2\tStride: 4\tOffset 1\n"
            "Shape: 2\tStride: 1\tOffset 1"
        )

    def test_scalar(self):
        """Test that a scalar lists no axes."""
        assert format_properties(Tensor.scalar(1.0)) == (
            "Num Dimensions: 0\nNum Elements: 1\nIs Owner: 1"
        )
