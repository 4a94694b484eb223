"""
Evaluate Operation Use-Case.

This module provides a use-case for building two tensors from literal values,
combining them with one elementwise operator and writing the renderings of the
result to a sink.
"""
import logging
from dataclasses import dataclass
from typing import Any

from sftensor.domain.entities.errors import TensorError
from sftensor.domain.entities.tensor import Tensor
from sftensor.domain.interfaces.sink import TensorSink
from sftensor.domain.operations.formatting import (
    format_properties,
    format_raw,
    format_tensor,
)

logger = logging.getLogger(__name__)


@dataclass
class OperationResult:
    """Result of a single evaluated operation."""

    name: str
    op: str
    shape: tuple[int, ...]
    values: Any


class EvaluateOperation:
    """
    Use-case for evaluating one elementwise operation between two operands.

    This use-case orchestrates the workflow of:
    1. Building the left and right operands
    2. Applying the named elementwise operator
    3. Writing the structured rendering (and optionally the raw buffer and the
       tensor properties) to the sink

    Attributes
    ----------
    name : str
        Label of the operation, written as a header line.
    op : str
        Operator name: "add", "sub", "mul" or "div".
    left, right : Any
        Scalars or (nested) sequences of numbers.
    sink : TensorSink
        Destination of the rendered text.
    dtype : str | None
        NumPy dtype for both operands, or None to infer it from the values.
    bounds_check : bool
        Bounds checking flag for the operands.
    show_raw : bool
        Also write the raw buffer of the result.
    show_properties : bool
        Also write the properties of the result.
    """

    def __init__(
        self,
        name: str,
        op: str,
        left: Any,
        right: Any,
        sink: TensorSink,
        dtype: str | None = None,
        bounds_check: bool = True,
        show_raw: bool = False,
        show_properties: bool = False,
    ) -> None:
        self.name = name
        self.op = op
        self.left = left
        self.right = right
        self.sink = sink
        self.dtype = dtype
        self.bounds_check = bounds_check
        self.show_raw = show_raw
        self.show_properties = show_properties

    def build_operand(self, values: Any) -> Tensor:
        """
        Build an owning tensor from literal values.

        Parameters
        ----------
        values : Any
            Scalar or (nested) sequence of numbers.

        Returns
        -------
        Tensor
            Tensor using this use-case's dtype and bounds checking settings.
        """
        return Tensor.from_sequence(values, dtype=self.dtype, bounds_check=self.bounds_check)

    def compute(self, left: Tensor, right: Tensor) -> Tensor:
        """
        Apply the configured operator to two tensors.

        Raises
        ------
        ValueError
            If the operator name is unknown.
        """
        operations = {
            "add": left.add,
            "sub": left.sub,
            "mul": left.mul,
            "div": left.div,
        }
        if self.op not in operations:
            raise ValueError(f"Unknown operation '{self.op}'")
        return operations[self.op](right)

    def run(self) -> OperationResult:
        """
        Evaluate the operation and write its renderings to the sink.

        Returns
        -------
        OperationResult
            Name, operator, shape and values of the result.

        Raises
        ------
        TensorError
            If the operands cannot be combined (rank or shape mismatch,
            division by zero, ...). The error is logged before propagating.
        """
        logger.info(f"Evaluating {self.name} ({self.op})...")

        try:
            left = self.build_operand(self.left)
            right = self.build_operand(self.right)
            result = self.compute(left, right)
        except TensorError as error:
            logger.error(f"Failed to evaluate {self.name}: {error}")
            raise error

        self.sink.write(f"{self.name}: {self.op} {left.shape}")
        self.sink.write(format_tensor(result))
        if self.show_raw:
            self.sink.write(format_raw(result))
        if self.show_properties:
            self.sink.write(format_properties(result))

        logger.info(f"Evaluated {self.name}: shape {result.shape}")
        return OperationResult(
            name=self.name,
            op=self.op,
            shape=result.shape,
            values=result.tolist(),
        )
