"""ngtail pipeline controller.

Creates an Angular project with Tailwind CSS in five stages:

Stage 1: PROBE    -- Make sure the Angular CLI is installed.
Stage 2: COLLECT  -- Ask for the application name and stylesheet format.
Stage 3: GENERATE -- Run ``ng new``.
Stage 4: MUTATE   -- Install Tailwind, write PostCSS config, styles and CLAUDE.md.
Stage 5: VERIFY   -- Run the project's build.

Every stage is a hard gate: the first failure aborts the run and the
remaining stages never start.  Nothing is rolled back, so a project created
before the failure stays on disk.

Usage::

    ngtail
    ngtail --output ~/projects
    python -m ngtail
"""

from __future__ import annotations

import asyncio
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TextIO

from pydantic import ValidationError
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from ngtail.config import Config
from ngtail.errors import PipelineError
from ngtail.models import (
    STAGE_STATES,
    GeneratedProject,
    PipelineState,
    ScaffoldParameters,
    Stage,
)
from ngtail.probe import EnvironmentProbe
from ngtail.prompts import collect_parameters
from ngtail.scaffolder import DelegatedGenerator, PostGenerationMutator
from ngtail.utils import (
    STAGE_NAMES,
    console,
    format_duration,
    print_error,
    print_stage_header,
    print_success,
    print_summary_table,
)
from ngtail.verify import VerificationBuilder

EXIT_ABORTED = 1
EXIT_INTERRUPTED = 130


class Pipeline:
    """Runs the scaffolding stages in order and stops at the first failure.

    Attributes:
        config: Pipeline configuration.
        state: Current ``PipelineState``; ends as ``COMPLETE`` or ``ABORTED``.
        params: Answers from the COLLECT stage, once available.
        project: Handle to the generated project, once GENERATE succeeded.
        result: Summary returned by :meth:`run`.
    """

    _STAGE_METHODS: dict[Stage, str] = {
        Stage.PROBE: "stage_probe",
        Stage.COLLECT: "stage_collect",
        Stage.GENERATE: "stage_generate",
        Stage.MUTATE: "stage_mutate",
        Stage.VERIFY: "stage_verify",
    }

    def __init__(self, config: Config, prompt_stream: TextIO | None = None) -> None:
        self.config = config
        self.prompt_stream = prompt_stream
        self.probe = EnvironmentProbe(config)
        self.generator = DelegatedGenerator(config)
        self.mutator = PostGenerationMutator(config)
        self.verifier = VerificationBuilder(config)

        self.state = PipelineState.PROBING
        self.params: ScaffoldParameters | None = None
        self.project: GeneratedProject | None = None
        self.result: dict[str, Any] = {
            "started_at": datetime.now(timezone.utc).isoformat(),
            "stages_completed": [],
            "failed_stage": None,
            "error": None,
            "project_path": None,
            "durations": {},
            "success": False,
        }

    # ------------------------------------------------------------------
    # Driver
    # ------------------------------------------------------------------

    async def run(self) -> dict[str, Any]:
        """Execute every stage and return the result summary."""
        pipeline_start = time.monotonic()

        console.print(
            Panel(
                "[bold bright_cyan]Angular + Tailwind CSS Project Setup[/bold bright_cyan]\n"
                f"Output : {escape(str(self.config.output_dir.resolve()))}",
                border_style="bright_cyan",
            )
        )

        for stage in Stage:
            self.state = STAGE_STATES[stage]
            stage_name = STAGE_NAMES[stage]
            print_stage_header(stage, stage_name)

            stage_start = time.monotonic()
            try:
                await getattr(self, self._STAGE_METHODS[stage])()
            except PipelineError as exc:
                self._abort(stage, str(exc))
                break
            except Exception as exc:
                self._abort(
                    stage,
                    f"Stage {int(stage)} ({stage_name}): {type(exc).__name__}: {exc}",
                )
                break
            finally:
                self.result["durations"][stage_name] = format_duration(
                    time.monotonic() - stage_start
                )

            self.result["stages_completed"].append(int(stage))
        else:
            self.state = PipelineState.COMPLETE
            self.result["success"] = True

        total_elapsed = time.monotonic() - pipeline_start
        self.result["state"] = self.state.value
        self.result["total_duration"] = format_duration(total_elapsed)
        self.result["finished_at"] = datetime.now(timezone.utc).isoformat()

        self._print_final_summary()
        return self.result

    def _abort(self, stage: Stage, message: str) -> None:
        self.state = PipelineState.ABORTED
        self.result["failed_stage"] = int(stage)
        self.result["error"] = message
        print_error(f"Error: {message}")

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    async def stage_probe(self) -> None:
        await self.probe.check()
        console.print(f"  [green]+[/green] {self.config.tools.scaffold_cli} is available")

    async def stage_collect(self) -> None:
        # The prompt channel is closed by the time this returns.
        self.params = collect_parameters(console=console, stream=self.prompt_stream)

    async def stage_generate(self) -> None:
        assert self.params is not None
        self.project = await self.generator.generate(self.params)
        self.result["project_path"] = str(self.project.root)

    async def stage_mutate(self) -> None:
        assert self.params is not None and self.project is not None
        await self.mutator.apply(self.project, self.params)

    async def stage_verify(self) -> None:
        assert self.project is not None
        await self.verifier.verify(self.project)

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def _print_final_summary(self) -> None:
        rows: dict[str, str] = dict(self.result["durations"])
        rows["Total"] = self.result["total_duration"]
        if self.result["project_path"]:
            rows["Project"] = self.result["project_path"]
        print_summary_table(rows, title="Setup Summary")

        if not self.result["success"] or self.params is None:
            return

        name = self.params.project_name
        console.print(
            Panel(
                Text(
                    f"Your Angular + Tailwind CSS project '{name}' has been created.\n\n"
                    "Next steps:\n"
                    f"  cd {name}\n"
                    "  ng serve\n\n"
                    "Then open http://localhost:4200 in your browser.\n\n"
                    "Start using Tailwind classes in your components:\n"
                    '  <h1 class="text-3xl font-bold underline">Hello world!</h1>',
                ),
                title="[bold green]Setup Complete![/bold green]",
                border_style="green",
            )
        )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``ngtail`` and ``python -m ngtail``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="ngtail",
        description="Create an Angular project preconfigured with Tailwind CSS",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  ngtail\n"
            "  ngtail --output ~/projects\n"
        ),
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Directory in which the project is created (default: current directory)",
    )

    args = parser.parse_args(argv)

    try:
        config = Config.from_env()
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        print_error(f"Error: Invalid configuration: {details}")
        sys.exit(EXIT_ABORTED)
    except ValueError as exc:
        print_error(f"Error: Invalid configuration: {exc}")
        sys.exit(EXIT_ABORTED)
    if args.output:
        config.output_dir = Path(args.output)

    if not config.output_dir.is_dir():
        print_error(f"Error: Output directory not found: {config.output_dir}")
        sys.exit(EXIT_ABORTED)

    pipeline = Pipeline(config)
    try:
        result = asyncio.run(pipeline.run())
    except KeyboardInterrupt:
        print_error("Interrupted.")
        sys.exit(EXIT_INTERRUPTED)

    if result.get("success"):
        print_success("Setup completed successfully!")
    else:
        sys.exit(EXIT_ABORTED)


if __name__ == "__main__":
    main()
