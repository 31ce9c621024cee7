"""Example rendering exports."""

from .example_renderer import PLACEHOLDER_VALUES, render_example

__all__ = ["PLACEHOLDER_VALUES", "render_example"]
