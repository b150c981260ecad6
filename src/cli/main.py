#!/usr/bin/env python3
"""
EDAcation command line interface.

Commands:
  init       Create a new project file
  targets    List the targets of a project
  yosys      Synthesize a target (prepare + synth)
  yosys-rtl  Elaborate a target to an RTL netlist
  nextpnr    Place and route a target
  iverilog   Simulate a target's testbench
  flasher    Pack and flash a target's bitstream
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from ..__version__ import __title__, __version__
from ..constants import PROJECT_FILE_SUFFIX
from ..exceptions import EDAcationError
from ..log_config import get_logger, setup_logging
from ..project import WORKER_GENERATORS, Project, TargetConfiguration, resolve_target_device
from ..project.worker import WorkerOptions
from ..string_utils import format_arguments, safe_format
from ..utils.build_logger import BuildLogger, get_build_logger
from .tool_runner import ToolRunner

TOOL_COMMANDS = tuple(WORKER_GENERATORS)


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="edacation",
        description=f"{__title__} - FPGA toolchain pipeline generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create a project
  edacation init blinky --name Blinky

  # Show the synthesis pipeline for the first target without running it
  edacation yosys blinky.edaproject 1 --no-execute

  # Synthesize and place-and-route target "default"
  edacation yosys blinky default
  edacation nextpnr blinky default
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument(
        "--quiet", "-q", action="store_true", help="Suppress non-error messages"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    init_parser = subparsers.add_parser("init", help="Create a new project file")
    init_parser.add_argument("project", help="Project file path")
    init_parser.add_argument("--name", help="Project name (default: file name)")

    targets_parser = subparsers.add_parser("targets", help="List project targets")
    targets_parser.add_argument("project", help="Project file path")

    for tool in TOOL_COMMANDS:
        tool_parser = subparsers.add_parser(tool, help=f"Generate and run the {tool} pipeline")
        tool_parser.add_argument("project", help="Project file path")
        tool_parser.add_argument("target", help="Target id or 1-based index")
        tool_parser.add_argument(
            "--execute",
            "-x",
            action=argparse.BooleanOptionalAction,
            default=True,
            help="Run the generated steps (--no-execute only prints them)",
        )
    return parser


# ----------------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------------


def resolve_project_path(path: str) -> Path:
    """The literal path if it exists, otherwise ``<path>.edaproject``."""
    literal = Path(path)
    if literal.is_file():
        return literal
    suffixed = literal.with_name(literal.name + PROJECT_FILE_SUFFIX)
    if suffixed.is_file():
        return suffixed
    raise FileNotFoundError(safe_format("Project file not found: {path}", path=path))


def find_target(project: Project, ref: str) -> Optional[TargetConfiguration]:
    """Look a target up by id, falling back to a 1-based index."""
    target = project.get_target(ref)
    if target is not None:
        return target
    if ref.isdigit():
        index = int(ref) - 1
        targets = project.get_configuration().targets
        if 0 <= index < len(targets):
            return targets[index]
    return None


def print_targets(console: Console, project: Project) -> None:
    table = Table(title="Targets", show_lines=False)
    table.add_column("#", style="dim")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="white")
    table.add_column("Device", style="yellow")
    for index, target in enumerate(project.get_configuration().targets, start=1):
        table.add_row(
            str(index),
            target.id,
            target.name,
            f"{target.vendor}/{target.family}/{target.device}/{target.package}",
        )
    console.print(table)


def print_device(console: Console, target: TargetConfiguration) -> str:
    """Print the target's resolved device and return a one-line description."""
    resolved = resolve_target_device(target)
    table = Table(title=safe_format("Target {name}", name=target.name), show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Vendor", resolved.vendor.name)
    table.add_row("Family", resolved.family.name)
    table.add_row("Device", resolved.device.name)
    table.add_row("Package", resolved.package.name)
    console.print(table)
    return f"{resolved.device.name} ({resolved.package.name})"


def print_steps(console: Console, worker_options: WorkerOptions) -> None:
    for number, step in enumerate(worker_options.steps, start=1):
        console.print(f"[bold]Step {number}[/bold] [cyan]{step.id}[/cyan]: {step.tool}")
        if step.is_script:
            for command in step.commands or []:
                console.print(f"  {command}", markup=False, highlight=False)
        else:
            console.print(
                "  " + " ".join(format_arguments([step.tool, *step.arguments])),
                markup=False,
                highlight=False,
            )


# ----------------------------------------------------------------------------
# Handlers
# ----------------------------------------------------------------------------


def handle_init(args: argparse.Namespace, build_logger: BuildLogger) -> int:
    path = Path(args.project)
    if path.suffix != PROJECT_FILE_SUFFIX:
        path = path.with_name(path.name + PROJECT_FILE_SUFFIX)
    if path.exists():
        build_logger.error("Project file already exists: {path}", prefix="project", path=path)
        return 1

    project = Project(args.name or path.stem)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(Project.store_to_data(project))
    build_logger.info(
        "Created project {name} at {path}", prefix="project", name=project.get_name(), path=path
    )
    return 0


def handle_targets(args: argparse.Namespace, console: Console) -> int:
    project_path = resolve_project_path(args.project)
    project = Project.load_from_data(project_path.read_bytes())
    print_targets(console, project)
    return 0


def handle_tool(args: argparse.Namespace, console: Console, build_logger: BuildLogger) -> int:
    project_path = resolve_project_path(args.project)
    project = Project.load_from_data(project_path.read_bytes())

    target = find_target(project, args.target)
    if target is None:
        build_logger.error("Unknown target: {target}", target=args.target)
        console.print("Available targets:")
        print_targets(console, project)
        return 1

    device = print_device(console, target)

    build_logger.push_phase(args.command)
    generate = WORKER_GENERATORS[args.command]
    worker_options = generate(project.get_configuration(), target.id, project.get_input_files())
    print_steps(console, worker_options)

    if not args.execute:
        build_logger.info("Not executing (--no-execute given)")
        build_logger.pop_phase(args.command)
        return 0

    cwd = project_path.parent
    (cwd / (target.directory or ".")).mkdir(parents=True, exist_ok=True)
    ToolRunner(cwd, logger=build_logger.logger).run(
        worker_options.steps, target=target.name, device=device
    )

    project.add_output_files((path, target.id) for path in worker_options.output_files)
    project_path.write_bytes(Project.store_to_data(project))
    build_logger.info(
        "Registered {count} output file(s) in {path}",
        prefix="project",
        count=len(worker_options.output_files),
        path=project_path,
    )
    build_logger.pop_phase(args.command)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        setup_logging(level=logging.DEBUG)
    elif args.quiet:
        setup_logging(level=logging.ERROR)
    else:
        setup_logging(level=logging.INFO)

    build_logger = get_build_logger(get_logger("edacation.cli"))
    console = Console()

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == "init":
            return handle_init(args, build_logger)
        if args.command == "targets":
            return handle_targets(args, console)
        return handle_tool(args, console, build_logger)
    except EDAcationError as e:
        build_logger.error("{error}", error=str(e))
        return 1
    except OSError as e:
        build_logger.error("{error}", error=str(e))
        return 1
    except KeyboardInterrupt:
        build_logger.warning("Interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
