"""Data models shared by the pipeline stages.

``ScaffoldParameters`` is produced once by the prompt stage and never changes
afterwards; ``GeneratedProject`` is the handle to the directory the Angular
CLI created, from which every later path is derived.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Stage(IntEnum):
    """Pipeline stages in execution order."""

    PROBE = 1
    COLLECT = 2
    GENERATE = 3
    MUTATE = 4
    VERIFY = 5


class PipelineState(str, Enum):
    """States of the pipeline controller.

    The controller walks the stage states in order and ends in either
    ``COMPLETE`` or ``ABORTED``; there is no way back to an earlier state.
    """

    PROBING = "probing"
    COLLECTING = "collecting"
    GENERATING = "generating"
    MUTATING = "mutating"
    VERIFYING = "verifying"
    COMPLETE = "complete"
    ABORTED = "aborted"


STAGE_STATES: dict[Stage, PipelineState] = {
    Stage.PROBE: PipelineState.PROBING,
    Stage.COLLECT: PipelineState.COLLECTING,
    Stage.GENERATE: PipelineState.GENERATING,
    Stage.MUTATE: PipelineState.MUTATING,
    Stage.VERIFY: PipelineState.VERIFYING,
}


class StyleFormat(str, Enum):
    """Stylesheet formats supported by ``ng new --style``."""

    CSS = "css"
    SCSS = "scss"
    SASS = "sass"
    LESS = "less"


class ScaffoldParameters(BaseModel):
    """Answers collected from the user."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    project_name: str = Field(..., min_length=1, description="Trimmed application name")
    style_format: StyleFormat = Field(default=StyleFormat.CSS)


class GeneratedProject(BaseModel):
    """Handle to the project root created by the scaffolding CLI."""

    model_config = ConfigDict(frozen=True)

    root: Path

    @property
    def postcss_config_path(self) -> Path:
        """PostCSS plugin configuration picked up by the Angular build."""
        return self.root / ".postcssrc.json"

    def stylesheet_path(self, style_format: StyleFormat) -> Path:
        """Global stylesheet entry file, ``src/styles.<format>``."""
        return self.root / "src" / f"styles.{style_format.value}"

    @property
    def guidance_path(self) -> Path:
        """Agent guidance document at the project root."""
        return self.root / "CLAUDE.md"
