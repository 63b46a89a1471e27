"""Configuration package: settings, constants and prompt templates."""

from restaurant_qa.config.prompts import PromptLibrary, render_prompt
from restaurant_qa.config.settings import Settings, get_settings

__all__ = ["PromptLibrary", "Settings", "get_settings", "render_prompt"]
