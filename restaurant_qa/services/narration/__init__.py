"""Answer template generation module."""

from restaurant_qa.services.narration.generator import ResponseGenerator

__all__ = ["ResponseGenerator"]
