"""Fixtures for CLI tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

SHAPES = """\
class Shape {
public:
  virtual double area() const = 0;
  virtual void scale(double, double) = 0;
};

class Circle : public Shape {
public:
  void scale(double, double) override;
};

class Square {
public:
};
"""


@pytest.fixture(autouse=True)
def _reset_root_handlers() -> Generator[None, None, None]:
    """Drop handlers bound to the runner's streams once a command has finished."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        handler.close()
    root.handlers.clear()


@pytest.fixture
def shapes_source() -> str:
    return SHAPES


@pytest.fixture
def circle_with_area() -> str:
    """SHAPES after adding the override Circle is missing."""
    return SHAPES.replace(
        "class Circle : public Shape {\npublic:",
        "class Circle : public Shape {\npublic:\ndouble area() const override;\n",
    )


@pytest.fixture
def shapes_file(tmp_path: Path) -> Path:
    path = tmp_path / "shapes.hpp"
    path.write_text(SHAPES)
    return path
