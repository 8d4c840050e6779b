"""Check that the Angular CLI is installed before anything else runs."""

from __future__ import annotations

import asyncio

from ngtail.config import Config
from ngtail.errors import MissingDependencyError
from ngtail.models import Stage
from ngtail.utils import run_command


class EnvironmentProbe:
    """Runs ``ng version`` quietly and fails if it cannot be executed."""

    def __init__(self, config: Config) -> None:
        self.config = config

    async def check(self) -> None:
        """Raise ``MissingDependencyError`` unless the scaffolding CLI works.

        The version check's own output is captured and discarded, and its
        stdin is detached so a first-run question cannot block the probe.
        """
        tools = self.config.tools
        try:
            returncode, _, _ = await run_command(
                tools.version_command(),
                timeout=self.config.command_timeout,
                capture=True,
                stdin=asyncio.subprocess.DEVNULL,
            )
        except OSError:
            returncode = -1

        if returncode != 0:
            raise MissingDependencyError(
                Stage.PROBE, tools.scaffold_cli, tools.scaffold_install_hint
            )
