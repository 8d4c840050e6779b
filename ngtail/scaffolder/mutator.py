"""Post-generation changes applied to the Angular project.

Installs Tailwind CSS, then writes the three fixed artifacts:

1. ``.postcssrc.json`` enabling the ``@tailwindcss/postcss`` plugin.
2. ``src/styles.<format>`` with the Tailwind import prepended.
3. ``CLAUDE.md`` describing how to style the project.

Writes happen in that order.  Each one is atomic on its own, but there is no
transaction across them: a failure leaves earlier writes in place.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from ngtail.config import Config
from ngtail.errors import CommandFailedError, MutationError
from ngtail.models import GeneratedProject, ScaffoldParameters, Stage
from ngtail.utils import (
    console,
    format_command,
    print_command,
    read_bytes_if_exists,
    run_command,
    write_bytes_atomic,
    write_text_atomic,
)

from .templates import GUIDANCE_DOC, POSTCSS_CONFIG, TAILWIND_IMPORT


def prepend_import(existing: bytes) -> bytes:
    """Return the stylesheet content with the Tailwind import in front.

    *existing* is kept byte for byte whatever its encoding, including when it
    is empty.
    """
    return TAILWIND_IMPORT.encode("utf-8") + existing


class PostGenerationMutator:
    """Adds Tailwind CSS to a freshly generated project."""

    def __init__(self, config: Config) -> None:
        self.config = config

    async def apply(self, project: GeneratedProject, params: ScaffoldParameters) -> list[Path]:
        """Install dependencies and write every artifact.

        Returns:
            The written paths, in write order.

        Raises:
            CommandFailedError: If the dependency install fails.  No file has
                been touched at that point.
            MutationError: If a file cannot be read or written.
        """
        await self.install_dependencies(project)

        console.print("\nConfiguring PostCSS...", markup=False)
        postcss = await self._write(project.postcss_config_path, POSTCSS_CONFIG)

        console.print(
            f"Adding Tailwind CSS import to styles.{params.style_format.value}...",
            markup=False,
        )
        stylesheet = await self.prepend_stylesheet_import(project, params)

        console.print("Creating CLAUDE.md file...", markup=False)
        guidance = await self._write(project.guidance_path, GUIDANCE_DOC)

        return [postcss, stylesheet, guidance]

    async def install_dependencies(self, project: GeneratedProject) -> None:
        """Install Tailwind and its PostCSS toolchain into the project."""
        cmd = self.config.tools.install_command()
        console.print("\nInstalling Tailwind CSS and dependencies...", markup=False)
        print_command(cmd)

        returncode, _, stderr = await run_command(
            cmd,
            cwd=project.root,
            timeout=self.config.command_timeout,
            capture=False,
        )
        if returncode != 0:
            raise CommandFailedError(
                Stage.MUTATE, format_command(cmd), returncode, detail=stderr
            )

    async def prepend_stylesheet_import(
        self, project: GeneratedProject, params: ScaffoldParameters
    ) -> Path:
        """Put the Tailwind import at the top of ``src/styles.<format>``.

        A missing stylesheet is treated as empty, so the file ends up holding
        only the import line.  Running this twice imports Tailwind twice.
        """
        path = project.stylesheet_path(params.style_format)
        try:
            existing = await asyncio.to_thread(read_bytes_if_exists, path)
        except OSError as exc:
            raise MutationError(
                Stage.MUTATE, str(path), str(exc), action="read"
            ) from exc
        return await self._write(path, prepend_import(existing))

    async def _write(self, path: Path, content: str | bytes) -> Path:
        writer = write_bytes_atomic if isinstance(content, bytes) else write_text_atomic
        try:
            return await asyncio.to_thread(writer, path, content)
        except OSError as exc:
            raise MutationError(Stage.MUTATE, str(path), str(exc)) from exc
