"""Pytest configuration and shared fixtures."""
import pytest
from fixtures.recording_sink import RecordingSink

from sftensor.domain.entities.tensor import Tensor


@pytest.fixture
def recording_sink():
    """
    Provide a RecordingSink instance for tests.

    Returns:
        RecordingSink: A new, empty RecordingSink.
    """
    return RecordingSink()


@pytest.fixture
def matrix_2x3():
    """
    Provide an owning int tensor of shape (2, 3) holding [[1, 2, 3], [4, 5, 6]].

    Returns:
        Tensor: The populated matrix.
    """
    tensor = Tensor([2, 3], dtype=int)
    tensor.assign([[1, 2, 3], [4, 5, 6]])
    return tensor


@pytest.fixture
def grid_3x4():
    """
    Provide an owning int tensor of shape (3, 4) holding 0..11 in row-major order.

    Returns:
        Tensor: The populated grid.
    """
    return Tensor.from_sequence([[0, 1, 2, 3], [4, 5, 6, 7], [8, 9, 10, 11]])


@pytest.fixture
def vector_0_to_4():
    """
    Provide an owning int tensor of shape (5,) holding [0, 1, 2, 3, 4].

    Returns:
        Tensor: The populated vector.
    """
    return Tensor.from_sequence([0, 1, 2, 3, 4])
