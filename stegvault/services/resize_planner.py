"""Resize planning for uploaded images.

We aim for less than ``max_dimension`` pixels on either axis. Pictures
larger than that are squeezed to half of it. Gigantic pictures (more than
twice the bound) are first downsampled to the bound with a cheap
nearest-neighbour pass, so the smoothing resize never runs over the full
source pixel count; the smoothing pass evens out the roughness.

Planning is pure arithmetic over bounds, so it is tested without images.
"""
from __future__ import annotations

from stegvault.errors import InvalidDimensionError
from stegvault.models import ResizePlan, ResizeStep


def _fit(width: int, height: int, bound: int) -> tuple[int, int]:
    """Scale (width, height) so the long axis equals ``bound``.

    Width is the long axis for square images. The short axis is rounded
    toward zero but never below one pixel.
    """

    if width >= height:
        return bound, max(1, height * bound // width)
    return max(1, width * bound // height), bound


def plan_resize(width: int, height: int, max_dimension: int) -> ResizePlan:
    """Return the zero, one or two steps that bring an image under the bound.

    Raises:
        InvalidDimensionError: width or height is not positive, or the bound
            is too small to halve.
    """

    if width <= 0 or height <= 0:
        raise InvalidDimensionError(f"Image bounds must be positive, got {width}x{height}")
    if max_dimension < 2:
        raise InvalidDimensionError(f"max_dimension must be at least 2, got {max_dimension}")

    longest = max(width, height)
    if longest <= max_dimension:
        return ResizePlan()

    steps: list[ResizeStep] = []
    if longest > 2 * max_dimension:
        width, height = _fit(width, height, max_dimension)
        steps.append(ResizeStep(kind="downsample", width=width, height=height))

    width, height = _fit(width, height, max_dimension // 2)
    steps.append(ResizeStep(kind="resize", width=width, height=height))
    return ResizePlan(steps=tuple(steps))
