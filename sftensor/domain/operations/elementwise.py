"""
Recursive elementwise kernels over tensor views.

Every kernel descends depth-first over the leading axis, left to right, pairing
up corresponding sub-views until it reaches rank-0 leaves, where exactly one
scalar is read or written. Callers validate ranks and shapes before descending.
"""
from __future__ import annotations

import operator
from typing import TYPE_CHECKING, Any, Callable

from sftensor.domain.entities.errors import DivisionByZeroError

if TYPE_CHECKING:
    from sftensor.domain.entities.tensor import Tensor

ScalarOperator = Callable[[Any, Any], Any]


def divide(left: Any, right: Any) -> Any:
    """
    Divide two scalars, refusing a zero divisor.

    Raises:
        DivisionByZeroError: If ``right`` equals zero.
    """
    if right == 0:
        raise DivisionByZeroError("Division by 0 error in elementwise division")
    return left / right


OPERATORS: dict[str, ScalarOperator] = {
    "add": operator.add,
    "sub": operator.sub,
    "mul": operator.mul,
    "div": divide,
}


def copy_values(destination: Tensor, source: Tensor) -> None:
    """Copy every scalar of ``source`` into the matching element of ``destination``."""
    if destination.rank == 0 and source.rank == 0:
        destination.assign(source.item())
        return

    for i in range(destination.shape[0]):
        copy_values(destination.index(i), source.index(i))


def apply(operation: ScalarOperator, first: Tensor, second: Tensor, result: Tensor) -> None:
    """
    Store ``operation(first[...], second[...])`` into ``result[...]`` for every leaf.

    Parameters
    ----------
    operation : ScalarOperator
        Binary scalar function, one of ``OPERATORS``.
    first, second : Tensor
        Operands of identical shape.
    result : Tensor
        Destination of the same shape as the operands.
    """
    if first.rank == 0 and second.rank == 0 and result.rank == 0:
        result.assign(operation(first.item(), second.item()))
        return

    for i in range(first.shape[0]):
        apply(operation, first.index(i), second.index(i), result.index(i))
