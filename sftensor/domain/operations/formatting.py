"""Pure text renderings of tensors. The caller decides where the text goes."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sftensor.domain.entities.errors import UnboundBufferError

if TYPE_CHECKING:
    from sftensor.domain.entities.tensor import Tensor


def format_scalar(value: Any) -> str:
    # %g style: "4", "2.5", "1e+06"
    if isinstance(value, float):
        return format(value, "g")
    return str(value)


def format_tensor(tensor: Tensor) -> str:
    """
    Render a tensor structurally.

    Rank 0 renders the bare scalar, rank 1 renders ``[ e0 e1 ... ]`` and higher
    ranks render each leading sub-tensor on its own line inside brackets.

    Parameters:
        tensor (Tensor): Tensor or view to render.

    Returns:
        str: The rendering, without a trailing newline.
    """
    if tensor.rank == 0:
        return format_scalar(tensor.item())

    if tensor.rank == 1:
        elements = "".join(
            f"{format_scalar(tensor.index(i).item())} " for i in range(tensor.shape[0])
        )
        return f"[ {elements}]"

    rows = [format_tensor(tensor.index(i)) for i in range(tensor.shape[0])]
    return "[" + "\n".join(rows) + "]"


def format_raw(tensor: Tensor) -> str:
    """
    Render the ``element_count`` buffer entries starting at the tensor's base.

    Entries are taken in buffer order, ignoring slicing offsets, so this shows
    the memory a view starts at rather than the elements it addresses.
    """
    if tensor.data is None:
        raise UnboundBufferError(f"Tensor with shape {tensor.shape} has no buffer bound")
    window = tensor.data[tensor.base:tensor.base + tensor.element_count]
    return " ".join(format_scalar(value.item()) for value in window)


def format_properties(tensor: Tensor) -> str:
    """Render rank, element count, ownership and per-axis shape/stride/offset."""
    lines = [
        f"Num Dimensions: {tensor.rank}",
        f"Num Elements: {tensor.element_count}",
        f"Is Owner: {int(tensor.is_owner)}",
    ]
    for extent, stride, offset in zip(tensor.shape, tensor.stride, tensor.offset):
        lines.append(f"Shape: {extent}\tStride: {stride}\tOffset {offset}")
    return "\n".join(lines)
