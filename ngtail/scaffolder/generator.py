"""Delegated project generation via ``ng new``.

The Angular CLI builds the whole project tree; this module only decides the
arguments, streams the CLI's output to the terminal and judges the exit code.
"""

from __future__ import annotations

from ngtail.config import Config
from ngtail.errors import CommandFailedError
from ngtail.models import GeneratedProject, ScaffoldParameters, Stage
from ngtail.utils import console, format_command, print_command, run_command


class DelegatedGenerator:
    """Runs the scaffolding CLI and returns a handle to the new project."""

    def __init__(self, config: Config) -> None:
        self.config = config

    async def generate(self, params: ScaffoldParameters) -> GeneratedProject:
        """Create ``<output_dir>/<project_name>`` with ``ng new``.

        Git initialisation is skipped and all remaining questions take their
        defaults.  The CLI's own output is the only diagnostic on failure,
        apart from a note when the command timed out.

        Raises:
            CommandFailedError: If the CLI exits non-zero.
        """
        output_dir = self.config.output_dir.resolve()
        cmd = self.config.tools.new_command(
            params.project_name, params.style_format.value
        )

        console.print(
            f"\nCreating Angular project '{params.project_name}' with "
            f"{params.style_format.value} stylesheets...",
            markup=False,
        )
        print_command(cmd)

        returncode, _, stderr = await run_command(
            cmd,
            cwd=output_dir,
            timeout=self.config.command_timeout,
            capture=False,
        )
        if returncode != 0:
            raise CommandFailedError(
                Stage.GENERATE, format_command(cmd), returncode, detail=stderr
            )

        return GeneratedProject(root=output_dir / params.project_name)
