#!/usr/bin/env python3
"""Generated pipeline types shared by every tool generator."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .configuration import TargetConfiguration, ToolOptions


@dataclass
class WorkerStep:
    """One external tool invocation.

    A step carries either an argument vector or a command script (the
    script is written to a file and handed to the tool), never both.
    """

    id: str
    tool: str
    arguments: List[str] = field(default_factory=list)
    commands: Optional[List[str]] = None

    def __post_init__(self) -> None:
        if self.commands is not None and self.arguments:
            raise ValueError(f"Step {self.id} cannot have both arguments and commands")

    @property
    def is_script(self) -> bool:
        return self.commands is not None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "tool": self.tool}
        if self.is_script:
            data["commands"] = list(self.commands or [])
        else:
            data["arguments"] = list(self.arguments)
        return data


@dataclass
class WorkerOptions:
    """Everything needed to run one tool pipeline for a target."""

    input_files: List[str]
    output_files: List[str]
    target: TargetConfiguration
    options: ToolOptions
    steps: List[WorkerStep]

    def get_step(self, step_id: str) -> WorkerStep:
        for step in self.steps:
            if step.id == step_id:
                return step
        raise KeyError(step_id)
