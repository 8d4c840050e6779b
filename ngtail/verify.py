"""Verification build for the mutated project."""

from __future__ import annotations

from ngtail.config import Config
from ngtail.errors import CommandFailedError
from ngtail.models import GeneratedProject, Stage
from ngtail.utils import console, format_command, print_command, run_command


class VerificationBuilder:
    """Runs ``npm run build`` inside the generated project.

    A failed build is reported, not repaired: the project stays on disk so the
    broken configuration can be inspected.
    """

    def __init__(self, config: Config) -> None:
        self.config = config

    async def verify(self, project: GeneratedProject) -> None:
        cmd = self.config.tools.build_command()
        console.print("\nRunning initial build to verify setup...", markup=False)
        print_command(cmd)

        returncode, _, stderr = await run_command(
            cmd,
            cwd=project.root,
            timeout=self.config.command_timeout,
            capture=False,
        )
        if returncode != 0:
            raise CommandFailedError(
                Stage.VERIFY, format_command(cmd), returncode, detail=stderr
            )
