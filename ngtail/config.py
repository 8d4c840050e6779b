"""ngtail configuration.

Typed configuration for the scaffolding pipeline. All settings use Pydantic v2
models so they are validated at construction time and can be overridden from
environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class ToolConfig(BaseModel):
    """External command-line tools and the arguments handed to them."""

    scaffold_cli: str = Field(default="ng", description="Angular CLI executable")
    scaffold_install_hint: str = Field(default="npm install -g @angular/cli")
    package_manager: str = Field(default="npm")
    install_packages: list[str] = Field(
        default_factory=lambda: ["tailwindcss", "@tailwindcss/postcss", "postcss"],
        min_length=1,
    )
    force_install: bool = Field(
        default=True, description="Bypass peer dependency conflict checks"
    )
    build_script: str = Field(default="build", description="package.json script run to verify")

    def version_command(self) -> list[str]:
        """Command whose success proves the scaffolding CLI is usable."""
        return [self.scaffold_cli, "version"]

    def new_command(self, project_name: str, style: str) -> list[str]:
        """``ng new`` without git init and without further prompts."""
        return [
            self.scaffold_cli,
            "new",
            project_name,
            "--style",
            style,
            "--skip-git",
            "--defaults",
        ]

    def install_command(self) -> list[str]:
        cmd = [self.package_manager, "install", *self.install_packages]
        if self.force_install:
            cmd.append("--force")
        return cmd

    def build_command(self) -> list[str]:
        return [self.package_manager, "run", self.build_script]


class Config(BaseModel):
    """Global ngtail configuration.

    Created once by the CLI entry point and passed to every stage.
    """

    output_dir: Path = Field(default=Path("."))
    tools: ToolConfig = Field(default_factory=ToolConfig)
    command_timeout: float | None = Field(
        default=None, gt=0, description="Per-command timeout in seconds; None waits indefinitely"
    )

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            NGTAIL_OUTPUT_DIR, NGTAIL_SCAFFOLD_CLI, NGTAIL_PACKAGE_MANAGER,
            NGTAIL_BUILD_SCRIPT, NGTAIL_COMMAND_TIMEOUT.
        """
        tool_kwargs: dict[str, Any] = {}
        if os.environ.get("NGTAIL_SCAFFOLD_CLI"):
            tool_kwargs["scaffold_cli"] = os.environ["NGTAIL_SCAFFOLD_CLI"]
        if os.environ.get("NGTAIL_PACKAGE_MANAGER"):
            tool_kwargs["package_manager"] = os.environ["NGTAIL_PACKAGE_MANAGER"]
        if os.environ.get("NGTAIL_BUILD_SCRIPT"):
            tool_kwargs["build_script"] = os.environ["NGTAIL_BUILD_SCRIPT"]

        timeout: float | None = None
        raw_timeout = os.environ.get("NGTAIL_COMMAND_TIMEOUT")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(
                    f"NGTAIL_COMMAND_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
                ) from None

        return cls(
            output_dir=Path(os.environ.get("NGTAIL_OUTPUT_DIR", ".")),
            tools=ToolConfig(**tool_kwargs),
            command_timeout=timeout,
        )
