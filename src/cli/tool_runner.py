#!/usr/bin/env python3
"""
ToolRunner: sequential execution of a generated pipeline.

Steps run strictly in generation order in the project directory. The first
failing step aborts the pipeline; files produced by earlier steps are left
in place.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from ..constants import SCRIPT_FILE_NAME
from ..exceptions import ToolExecutionError
from ..log_config import get_logger
from ..project.worker import WorkerStep
from ..string_utils import format_arguments, log_error_safe, log_info_safe, safe_format
from ..templating import ScriptRenderer


class ToolRunner:
    """
    Runs the steps of one pipeline.

    Attributes:
        cwd: directory the tools run in (the project directory)
        renderer: renders script steps to a script file
        logger: attach a logger
    """

    def __init__(
        self,
        cwd: Path,
        renderer: Optional[ScriptRenderer] = None,
        logger: Optional[logging.Logger] = None,
        prefix: str = "TOOL",
    ):
        self.cwd: Path = Path(cwd)
        self.renderer: ScriptRenderer = renderer or ScriptRenderer()
        self.logger: logging.Logger = logger or get_logger(self.__class__.__name__)
        self.prefix: str = prefix

    def get_command(self, step: WorkerStep) -> List[str]:
        """Argument vector for a step; script steps take the script file."""
        if step.is_script:
            return [step.tool, SCRIPT_FILE_NAME]
        return [step.tool, *step.arguments]

    def run_step(
        self,
        step: WorkerStep,
        target: Optional[str] = None,
        device: Optional[str] = None,
    ) -> None:
        """
        Run a single step.

        Raises:
            ToolExecutionError: if the tool is missing or exits non-zero
        """
        if shutil.which(step.tool) is None:
            raise ToolExecutionError(
                step.tool,
                None,
                safe_format("Tool {tool} was not found on PATH", tool=step.tool),
            )

        script_path: Optional[Path] = None
        if step.is_script:
            script_path = self.renderer.write_step_script(
                step, self.cwd / SCRIPT_FILE_NAME, target=target, device=device
            )

        command = self.get_command(step)
        log_info_safe(
            self.logger,
            "Running {step}: {command}",
            prefix=self.prefix,
            step=step.id,
            command=" ".join(format_arguments(command)),
        )
        try:
            result = subprocess.run(command, cwd=str(self.cwd), check=False)
        finally:
            if script_path is not None:
                script_path.unlink(missing_ok=True)

        if result.returncode != 0:
            log_error_safe(
                self.logger,
                "Step {step} failed with exit code {code}",
                prefix=self.prefix,
                step=step.id,
                code=result.returncode,
            )
            raise ToolExecutionError(step.tool, result.returncode)

    def run(
        self,
        steps: Sequence[WorkerStep],
        target: Optional[str] = None,
        device: Optional[str] = None,
    ) -> None:
        """Run every step in order, stopping at the first failure."""
        for step in steps:
            self.run_step(step, target=target, device=device)
        log_info_safe(
            self.logger,
            "Pipeline finished successfully ✓ ({count} step(s))",
            prefix=self.prefix,
            count=len(steps),
        )
