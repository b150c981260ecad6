"""Script rendering for command-script tool steps."""

from .script_renderer import SCRIPT_TEMPLATES, ScriptRenderer

__all__ = ["SCRIPT_TEMPLATES", "ScriptRenderer"]
