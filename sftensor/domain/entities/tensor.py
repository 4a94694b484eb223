"""Tensor entity - strided view over a flat NumPy buffer."""
from __future__ import annotations

import logging
import math
import operator
from collections.abc import Iterator, Sequence
from numbers import Number
from typing import Any

import numpy as np

from sftensor.domain.entities.errors import (
    DimensionMismatchError,
    ElementOverflowError,
    IndexingError,
    InvalidElementError,
    ShapeMismatchError,
    UnboundBufferError,
    UnsupportedBroadcastError,
)
from sftensor.domain.operations import elementwise, formatting

logger = logging.getLogger(__name__)


def _is_scalar(value: Any) -> bool:
    if isinstance(value, np.ndarray):
        return value.ndim == 0
    return isinstance(value, (Number, np.generic))


def _is_sequence(value: Any) -> bool:
    if isinstance(value, (str, bytes)):
        return False
    return isinstance(value, (Sequence, np.ndarray)) and not _is_scalar(value)


def _check_elements(values: Sequence[Any], dtype: np.dtype) -> None:
    for element in values:
        if not _is_scalar(element):
            raise InvalidElementError(
                f"Tensor elements must be numbers, got {type(element).__name__}"
            )
        try:
            np.asarray(element, dtype=dtype)
        except OverflowError as error:
            raise ElementOverflowError(
                f"Value {element} does not fit in a {dtype} element"
            ) from error


class Tensor:
    """
    N-dimensional strided tensor over a flat buffer.

    A tensor either owns its buffer (fresh allocation) or borrows the buffer of
    the tensor it was derived from (a view). Views share the same NumPy array
    object, so a view keeps the buffer alive for as long as it is referenced.

    Elements are addressed as ``base + sum(stride[d] * (index[d] + offset[d]))``.
    ``stride`` is fixed at construction; slicing only narrows ``shape`` and
    accumulates ``offset``.

    Attributes
    ----------
    rank : int
        Number of axes (0 for a scalar).
    shape : tuple[int, ...]
        Per-axis extents.
    stride : tuple[int, ...]
        Per-axis element strides of the originally allocated layout.
    offset : tuple[int, ...]
        Per-axis offsets accumulated by slicing.
    element_count : int
        Product of ``shape``.
    is_owner : bool
        Whether this tensor owns its buffer.
    """

    def __init__(
        self,
        shape: Sequence[int],
        allocate: bool = True,
        dtype: Any = np.float64,
        bounds_check: bool = True,
    ) -> None:
        """
        Create a row-major tensor of the given shape.

        Parameters
        ----------
        shape : Sequence[int]
            Per-axis extents. An empty shape creates a rank-0 (scalar) tensor.
        allocate : bool, optional
            Allocate a zero-filled buffer owned by this tensor. When False the
            buffer is left unbound. Default is True.
        dtype : Any, optional
            NumPy dtype of the elements. Default is float64.
        bounds_check : bool, optional
            Validate indices and slice ranges against the axis extents.
            Inherited by every view. Default is True.

        Raises
        ------
        ShapeMismatchError
            If any extent is negative.
        """
        self._shape = [operator.index(extent) for extent in shape]
        if any(extent < 0 for extent in self._shape):
            raise ShapeMismatchError(f"Negative extent in shape {tuple(self._shape)}")

        self._rank = len(self._shape)
        self._stride = [0] * self._rank
        self._offset = [0] * self._rank
        self._element_count = 1
        for dim in range(self._rank - 1, -1, -1):
            self._stride[dim] = self._element_count
            self._element_count *= self._shape[dim]

        self._dtype = np.dtype(dtype)
        self._bounds_check = bounds_check
        self._data: np.ndarray | None = None
        self._base = 0
        self._is_owner = False

        if allocate:
            self._data = np.zeros(self._element_count, dtype=self._dtype)
            self._is_owner = True
            logger.debug(
                f"Allocated {self._element_count} {self._dtype} elements for shape {self.shape}"
            )

    @classmethod
    def view_of(cls, parent: Tensor) -> Tensor:
        """Return a non-owning copy of ``parent`` that shares its buffer."""
        view = cls(
            parent._shape,
            allocate=False,
            dtype=parent._dtype,
            bounds_check=parent._bounds_check,
        )
        view._stride = list(parent._stride)
        view._offset = list(parent._offset)
        view._element_count = parent._element_count
        view._bind(parent._data, parent._base)
        return view

    @classmethod
    def from_sequence(
        cls,
        values: Any,
        dtype: Any = None,
        bounds_check: bool = True,
    ) -> Tensor:
        """
        Build an owning tensor from (possibly nested) numeric sequences.

        Parameters:
            values: Scalar, flat sequence or rectangular nested sequences.
            dtype: NumPy dtype; inferred from ``values`` when None.
            bounds_check (bool): Bounds checking flag for the new tensor.

        Returns:
            Tensor: Owning tensor whose shape is inferred from the nesting.

        Raises:
            ShapeMismatchError: If the nested sequences are ragged.
            InvalidElementError: If the values are not numeric.
        """
        try:
            array = np.asarray(values, dtype=dtype)
        except ValueError as error:
            raise ShapeMismatchError(f"Cannot build a tensor from ragged input: {error}") from error

        if array.dtype == object:
            raise ShapeMismatchError("Cannot build a tensor from ragged input")
        if array.dtype.kind not in "biufc":
            raise InvalidElementError(f"Tensor elements must be numeric, got dtype {array.dtype}")

        tensor = cls(array.shape, dtype=array.dtype, bounds_check=bounds_check)
        tensor._data[:] = array.reshape(-1)
        return tensor

    @classmethod
    def scalar(cls, value: Any, dtype: Any = None) -> Tensor:
        """Build an owning rank-0 tensor holding ``value``."""
        if not _is_scalar(value):
            raise UnsupportedBroadcastError(f"Expected a scalar, got {type(value).__name__}")
        tensor = cls([], dtype=np.asarray(value).dtype if dtype is None else dtype)
        return tensor.assign(value)

    @property
    def rank(self) -> int:
        return self._rank

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(self._shape)

    @property
    def stride(self) -> tuple[int, ...]:
        return tuple(self._stride)

    @property
    def offset(self) -> tuple[int, ...]:
        return tuple(self._offset)

    @property
    def element_count(self) -> int:
        return self._element_count

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def is_owner(self) -> bool:
        return self._is_owner

    @property
    def bounds_check(self) -> bool:
        return self._bounds_check

    @property
    def base(self) -> int:
        """Buffer position of the element at all-zero indices, before offsets."""
        return self._base

    @property
    def data(self) -> np.ndarray | None:
        """The backing buffer, shared with every view derived from it."""
        return self._data

    def release(self) -> None:
        """
        Drop this tensor's reference to the buffer it owns.

        Views never release anything. Views derived earlier keep their own
        reference, so they stay readable after the owner is released.
        """
        if not self._is_owner:
            return
        logger.debug(f"Releasing buffer of tensor with shape {self.shape}")
        self._data = None
        self._is_owner = False

    def _bind(self, data: np.ndarray | None, base: int) -> None:
        self._data = data
        self._base = base
        self._is_owner = False

    def _buffer(self) -> np.ndarray:
        if self._data is None:
            raise UnboundBufferError(f"Tensor with shape {self.shape} has no buffer bound")
        return self._data

    def _leaf_address(self) -> tuple[np.ndarray, int]:
        buffer = self._buffer()
        if not 0 <= self._base < len(buffer):
            raise IndexingError(
                f"Indexing Error: Address {self._base} outside a buffer of {len(buffer)} elements"
            )
        return buffer, self._base

    def _check_range(self, dim: int, start: int, end: int) -> None:
        if start < 0 or end > self._shape[dim]:
            raise IndexingError(
                f"Indexing Error: range [{start}, {end}) out of bounds for axis {dim} "
                f"of extent {self._shape[dim]}"
            )

    def index(self, i: int) -> Tensor:
        """
        Return a view of the ``i``-th sub-tensor along the leading axis.

        The view has rank ``rank - 1`` and shares this tensor's buffer.

        Raises
        ------
        IndexingError
            If this tensor is a scalar, or ``i`` is outside the leading axis
            while bounds checking is enabled.
        """
        i = operator.index(i)
        if self._rank == 0:
            raise IndexingError("Indexing Error: Index out of bounds, cannot index a scalar")
        if self._bounds_check and not 0 <= i < self._shape[0]:
            raise IndexingError(
                f"Indexing Error: Index {i} out of bounds for axis of extent {self._shape[0]}"
            )

        view = type(self).view_of(self)
        del view._shape[0]
        del view._stride[0]
        del view._offset[0]
        view._rank -= 1
        view._element_count = math.prod(view._shape)
        view._base = self._base + self._stride[0] * (i + self._offset[0])
        return view

    def slice(self, i: int, j: int) -> Tensor:
        """
        Return a view of rows ``[i, j)`` along the leading axis.

        Raises
        ------
        IndexingError
            If this tensor is a scalar, ``j <= i``, or the range leaves the
            leading axis while bounds checking is enabled.
        """
        i, j = operator.index(i), operator.index(j)
        if self._rank == 0:
            raise IndexingError("Indexing Error: Index out of bounds, cannot slice a scalar")
        if j <= i:
            raise IndexingError(f"Indexing Error: End Index {j} <= Start Index {i}")
        if self._bounds_check:
            self._check_range(0, i, j)

        view = type(self).view_of(self)
        view._shape[0] = j - i
        view._offset[0] += i
        view._element_count = math.prod(view._shape)
        return view

    def slice_many(self, ranges: Sequence[tuple[int, int]]) -> Tensor:
        """
        Return a view restricted to ``ranges[d] = (start, end)`` on each leading axis ``d``.

        Axes beyond ``len(ranges)`` are left untouched.
        """
        ranges = [(operator.index(start), operator.index(end)) for start, end in ranges]
        if len(ranges) > self._rank:
            raise IndexingError(
                f"Indexing Error: Index out of bounds, {len(ranges)} ranges for rank {self._rank}"
            )

        view = type(self).view_of(self)
        for dim, (start, end) in enumerate(ranges):
            if end <= start:
                raise IndexingError(f"Indexing Error: End Index {end} <= Start Index {start}")
            if self._bounds_check:
                self._check_range(dim, start, end)
            view._shape[dim] = end - start
            view._offset[dim] += start
        view._element_count = math.prod(view._shape)
        return view

    def _range_from_slice(self, key: slice, dim: int) -> tuple[int, int]:
        if key.step is not None:
            raise IndexingError("Indexing Error: Strided slicing is not supported")
        start = 0 if key.start is None else operator.index(key.start)
        end = self._shape[dim] if key.stop is None else operator.index(key.stop)
        return start, end

    def __getitem__(self, key: Any) -> Tensor:
        if isinstance(key, slice):
            if self._rank == 0:
                raise IndexingError("Indexing Error: Index out of bounds, cannot slice a scalar")
            return self.slice(*self._range_from_slice(key, 0))
        if isinstance(key, tuple):
            if all(isinstance(part, slice) for part in key):
                if len(key) > self._rank:
                    raise IndexingError(
                        f"Indexing Error: Index out of bounds, {len(key)} ranges for rank {self._rank}"
                    )
                return self.slice_many(
                    [self._range_from_slice(part, dim) for dim, part in enumerate(key)]
                )
            if not any(isinstance(part, slice) for part in key):
                view = self
                for part in key:
                    view = view.index(part)
                return view
            raise IndexingError("Indexing Error: Mixed integer and range subscripts are not supported")
        try:
            return self.index(key)
        except TypeError as error:
            raise IndexingError(
                f"Indexing Error: Unsupported subscript of type {type(key).__name__}"
            ) from error

    def __setitem__(self, key: Any, value: Any) -> None:
        self[key].assign(value)

    def __len__(self) -> int:
        if self._rank == 0:
            raise TypeError("len() of a rank-0 tensor")
        return self._shape[0]

    def __iter__(self) -> Iterator[Tensor]:
        if self._rank == 0:
            raise TypeError("Iteration over a rank-0 tensor")
        for i in range(self._shape[0]):
            yield self.index(i)

    def item(self) -> Any:
        """Return the scalar addressed by a rank-0 tensor as a Python number."""
        if self._rank != 0:
            raise IndexingError(f"item() requires a rank-0 tensor, got rank {self._rank}")
        buffer, address = self._leaf_address()
        return buffer[address].item()

    def tolist(self) -> Any:
        """Read every element back as nested Python lists (a bare number for rank 0)."""
        if self._rank == 0:
            return self.item()
        return [self.index(i).tolist() for i in range(self._shape[0])]

    def _check_compatible(self, other: Tensor, what: str) -> None:
        if self._rank != other._rank:
            raise DimensionMismatchError(
                f"Dimension mismatch in {what}: rank {self._rank} vs rank {other._rank}"
            )
        if self._shape != other._shape:
            raise ShapeMismatchError(f"Shape mismatch in {what}: {self.shape} vs {other.shape}")

    def assign(self, value: Any) -> Tensor:
        """
        Copy ``value`` into the elements addressed by this tensor.

        The buffer reference is never rebound; values are written in place, so
        the write is visible through every view sharing the buffer.

        Parameters
        ----------
        value : Tensor | scalar | sequence | nested sequence
            - Tensor: same rank and shape, copied element by element.
            - scalar: only for rank-0 tensors.
            - flat sequence: only for rank-1 tensors of matching length.
            - nested sequence: only for rank-2 tensors of matching extents.

        Returns
        -------
        Tensor
            This tensor.
        """
        if isinstance(value, Tensor):
            self._check_compatible(value, "tensor assignment")
            elementwise.copy_values(self, value)
            return self

        if _is_scalar(value):
            if self._rank != 0:
                raise UnsupportedBroadcastError("Broadcasting is not yet supported")
            buffer, address = self._leaf_address()
            try:
                buffer[address] = value
            except OverflowError as error:
                raise ElementOverflowError(
                    f"Value {value} does not fit in a {self._dtype} element"
                ) from error
            return self

        if not _is_sequence(value):
            raise InvalidElementError(
                f"Cannot assign a value of type {type(value).__name__} to a tensor"
            )

        if any(_is_sequence(row) for row in value):
            self._assign_nested(value)
        else:
            self._assign_flat(value)
        return self

    def _assign_flat(self, values: Sequence[Any]) -> None:
        if self._rank != 1:
            raise UnsupportedBroadcastError("Broadcasting not yet supported")
        if len(values) != self._shape[0]:
            raise ShapeMismatchError(
                f"Mismatch in tensor and vector shape: {self._shape[0]} vs {len(values)}"
            )
        _check_elements(values, self._dtype)
        for i, element in enumerate(values):
            self.index(i).assign(element)

    def _assign_nested(self, rows: Sequence[Sequence[Any]]) -> None:
        if self._rank != 2:
            raise UnsupportedBroadcastError("Broadcasting not yet supported")
        if len(rows) != self._shape[0]:
            raise ShapeMismatchError(
                f"Mismatch in tensor and vector shape: {self._shape[0]} rows vs {len(rows)}"
            )
        for row in rows:
            if not _is_sequence(row) or len(row) != self._shape[1]:
                raise ShapeMismatchError(
                    f"Mismatch in tensor and vector shape: rows must have {self._shape[1]} elements"
                )
            _check_elements(row, self._dtype)
        for i, row in enumerate(rows):
            view = self.index(i)
            for j, element in enumerate(row):
                view.index(j).assign(element)

    def _binary(self, name: str, other: Tensor) -> Tensor:
        if not isinstance(other, Tensor):
            raise TypeError(f"Elementwise {name} expects a Tensor, got {type(other).__name__}")
        self._check_compatible(other, f"elementwise {name}")

        result = type(self)(
            self._shape,
            dtype=np.result_type(self._dtype, other._dtype),
            bounds_check=self._bounds_check,
        )
        logger.debug(f"Elementwise {name} over shape {self.shape}")
        elementwise.apply(elementwise.OPERATORS[name], self, other, result)
        return result

    def add(self, other: Tensor) -> Tensor:
        return self._binary("add", other)

    def sub(self, other: Tensor) -> Tensor:
        return self._binary("sub", other)

    def mul(self, other: Tensor) -> Tensor:
        return self._binary("mul", other)

    def div(self, other: Tensor) -> Tensor:
        """Elementwise division; raises DivisionByZeroError on a zero right-hand element."""
        return self._binary("div", other)

    __add__ = add
    __sub__ = sub
    __mul__ = mul
    __truediv__ = div

    def __str__(self) -> str:
        return formatting.format_tensor(self)

    def __repr__(self) -> str:
        return (
            f"Tensor(shape={self.shape}, dtype={self._dtype}, "
            f"owner={self._is_owner}, offset={self.offset})"
        )
