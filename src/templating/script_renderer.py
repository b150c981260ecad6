#!/usr/bin/env python3
"""
Jinja2 rendering of step command scripts.

Script-driven steps (Yosys) carry a list of commands instead of an argument
vector. The execution layer renders them into a script file with a
standard header and hands that file to the tool.
"""

import logging
from pathlib import Path
from typing import Dict, Final, Optional, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from ..exceptions import ScriptRenderError
from ..project.worker import WorkerStep
from ..string_utils import generate_script_header_comment, log_debug_safe, safe_format

logger = logging.getLogger(__name__)

# Tool -> script template, relative to the templates directory
SCRIPT_TEMPLATES: Final[Dict[str, str]] = {
    "yosys": "scripts/yosys.ys.j2",
}


class ScriptRenderer:
    """Renders a script step's commands through its tool's template."""

    def __init__(self, template_dir: Optional[Union[str, Path]] = None, prefix: str = "TOOL"):
        self.template_dir = Path(template_dir or Path(__file__).parent.parent / "templates")
        self.prefix = prefix
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )

    def render_step(
        self,
        step: WorkerStep,
        target: Optional[str] = None,
        device: Optional[str] = None,
    ) -> str:
        """
        Render ``step`` to script text.

        Raises:
            ScriptRenderError: if the step has no commands, the tool has no
                template, or rendering fails
        """
        if not step.is_script:
            raise ScriptRenderError(
                safe_format("Step {step} has no command script", step=step.id)
            )
        template_name = SCRIPT_TEMPLATES.get(step.tool)
        if template_name is None:
            raise ScriptRenderError(
                safe_format("No script template for tool {tool}", tool=step.tool)
            )

        header = generate_script_header_comment(
            safe_format("{tool} {step} script", tool=step.tool.capitalize(), step=step.id),
            target=target,
            device=device,
        )
        try:
            template = self.env.get_template(template_name)
            return template.render(header=header, commands=step.commands)
        except TemplateError as e:
            raise ScriptRenderError(
                safe_format(
                    "Failed to render template '{template_name}': {error}",
                    template_name=template_name,
                    error=e,
                )
            ) from e

    def write_step_script(
        self,
        step: WorkerStep,
        path: Union[str, Path],
        target: Optional[str] = None,
        device: Optional[str] = None,
    ) -> Path:
        """Render ``step`` and write it to ``path``."""
        path = Path(path)
        path.write_text(self.render_step(step, target=target, device=device), encoding="utf-8")
        log_debug_safe(
            logger,
            "Wrote {step} script to {path}",
            prefix=self.prefix,
            step=step.id,
            path=path,
        )
        return path
