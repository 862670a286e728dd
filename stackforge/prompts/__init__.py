"""Prompt composition for Stackforge.

Key classes:
    PromptBuilder   - Composes generation prompts from technology modules
    PromptConfig    - Inputs of a prompt build
    PromptRenderer  - Jinja2 rendering of the fixed prompt prose
"""

from .builder import GLOBAL_REQUIREMENTS, PromptBuilder, PromptConfig
from .modules import MODULE_REGISTRY, Technology, UnknownTechnologyError
from .templates import PromptRenderer

__all__ = [
    "GLOBAL_REQUIREMENTS",
    "MODULE_REGISTRY",
    "PromptBuilder",
    "PromptConfig",
    "PromptRenderer",
    "Technology",
    "UnknownTechnologyError",
]
