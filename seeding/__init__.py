"""Demo data generation for the lesson slot planner."""

from .data_factory import DataGenerator

__all__ = ["DataGenerator"]
