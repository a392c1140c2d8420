"""Pytest configuration and fixtures."""

from collections.abc import Callable

import pytest

from whiteboard.scene.schema import Element, Rect


ElementFactory = Callable[..., Element]


@pytest.fixture
def make_element() -> ElementFactory:
    """Factory for elements given their bounds as ``(min_x, min_y, max_x, max_y)``."""
    counter = iter(range(1_000_000))

    def factory(
        min_x: float,
        min_y: float,
        max_x: float,
        max_y: float,
        rotation: float = 0.0,
        opacity: float = 1.0,
        element_id: str | None = None,
    ) -> Element:
        return Element(
            id=element_id or f"element_{next(counter)}",
            rect=Rect(min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y),
            rotation=rotation,
            opacity=opacity,
        )

    return factory


@pytest.fixture
def row_of_four() -> list[Rect]:
    """Four 10x10 rects in a row, 10 apart."""
    return [Rect(x, 0, x + 10, 10) for x in (0, 20, 40, 60)]
