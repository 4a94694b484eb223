"""Tensor errors - raised eagerly by the call that violates a contract."""


class TensorError(Exception):
    """Base class for every error raised by tensor operations."""


class IndexingError(TensorError, IndexError):
    """Indexing a scalar, an empty or inverted range, or an out-of-bounds index."""


class DimensionMismatchError(TensorError):
    """Operand rank differs from the rank the operation requires."""


class ShapeMismatchError(TensorError):
    """Operand extents differ on some axis, or input data has the wrong length."""


class UnsupportedBroadcastError(TensorError):
    """Scalar or sequence assignment against a tensor of the wrong rank."""


class DivisionByZeroError(TensorError, ZeroDivisionError):
    """Elementwise division reached a right-hand leaf equal to zero."""


class UnboundBufferError(TensorError):
    """Element access on a tensor that has no buffer bound to it."""


class InvalidElementError(TensorError, TypeError):
    """Assigned value, or one of its elements, is not a number."""


class ElementOverflowError(TensorError, OverflowError):
    """A value does not fit in the element type of the buffer."""
