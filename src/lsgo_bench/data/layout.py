"""
Sub-Component Layout

How a decomposed function splits its permuted index vector into slices.
"""

from dataclasses import dataclass
from typing import List, Sequence

from ..core.errors import DimensionMismatchError


@dataclass(frozen=True)
class SubComponent:
    """
    One slice of the permuted index vector.

    Attributes:
        start: Offset into the permutation where the slice begins
        size: Number of dimensions in the slice
        weight: Multiplier applied to the slice's kernel value
    """
    start: int
    size: int
    weight: float = 1.0

    @property
    def stop(self) -> int:
        return self.start + self.size


def build_subcomponents(
    sizes: Sequence[int],
    weights: Sequence[float],
    overlap: int = 0
) -> List[SubComponent]:
    """
    Lay sub-components out over the permuted index vector.

    Component i starts at sum(sizes[:i]) - i * overlap, so with a
    non-zero overlap neighbouring components share `overlap` indices.

    Args:
        sizes: Size of each sub-component
        weights: Weight of each sub-component
        overlap: Number of indices shared by consecutive components

    Returns:
        List of SubComponent in evaluation order
    """
    if len(sizes) != len(weights):
        raise DimensionMismatchError(len(sizes), len(weights), "weights")

    components = []
    consumed = 0
    for i, (size, weight) in enumerate(zip(sizes, weights)):
        components.append(SubComponent(
            start=consumed - i * overlap,
            size=int(size),
            weight=float(weight)
        ))
        consumed += int(size)
    return components
