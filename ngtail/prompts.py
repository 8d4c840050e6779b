"""Interactive collection of the project name and stylesheet format.

Questions are asked over a ``PromptSession``, a line-oriented channel that is
closed as soon as both answers are in so later stages (the streamed build
output in particular) have the terminal to themselves.
"""

from __future__ import annotations

from typing import TextIO

from rich.console import Console

from ngtail.errors import ParameterError
from ngtail.models import ScaffoldParameters, Stage, StyleFormat

NAME_PROMPT = "Enter the application name: "
STYLE_PROMPT = "Enter your choice [1-4] (press Enter for CSS): "

STYLE_MENU: list[str] = [
    "1) CSS (default)",
    "2) SCSS",
    "3) Sass",
    "4) Less",
]

# Exact menu answers; anything else means CSS.
STYLE_CHOICES: dict[str, StyleFormat] = {
    "2": StyleFormat.SCSS,
    "3": StyleFormat.SASS,
    "4": StyleFormat.LESS,
}


def resolve_style_choice(answer: str) -> StyleFormat:
    """Map a menu answer to a ``StyleFormat``, defaulting to CSS.

    Examples::

        resolve_style_choice("3")   -> StyleFormat.SASS
        resolve_style_choice(" 4 ") -> StyleFormat.LESS
        resolve_style_choice("")    -> StyleFormat.CSS
        resolve_style_choice("7")   -> StyleFormat.CSS
    """
    return STYLE_CHOICES.get(answer.strip(), StyleFormat.CSS)


class PromptSession:
    """A closable question/answer channel on top of a Rich console.

    Use as a context manager; the session is closed on exit whether or not
    the questions succeeded.

    Args:
        console: Console the prompts are written to.
        stream: Optional file to read answers from instead of stdin.
    """

    def __init__(self, console: Console | None = None, stream: TextIO | None = None) -> None:
        self.console = console or Console()
        self._stream = stream
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def ask(self, prompt: str) -> str:
        """Print *prompt* and return the submitted line without its newline.

        End of input counts as an empty answer.
        """
        if self._closed:
            raise RuntimeError("Prompt session is closed")
        try:
            line = self.console.input(prompt, markup=False, stream=self._stream)
        except EOFError:
            return ""
        return line.rstrip("\r\n")

    def say(self, message: str = "") -> None:
        self.console.print(message, markup=False, highlight=False)

    def close(self) -> None:
        self._closed = True

    def __enter__(self) -> "PromptSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class ParameterCollector:
    """Asks for the application name and the stylesheet format.

    Validation is single-shot: an empty name aborts rather than re-prompting,
    and an unrecognised style answer falls back to CSS.
    """

    def __init__(self, session: PromptSession) -> None:
        self.session = session

    def collect(self) -> ScaffoldParameters:
        name = self.session.ask(NAME_PROMPT).strip()
        if not name:
            raise ParameterError(Stage.COLLECT, "Application name cannot be empty.")

        self.session.say()
        self.session.say("Select stylesheet format:")
        for option in STYLE_MENU:
            self.session.say(f"  {option}")

        style = resolve_style_choice(self.session.ask(STYLE_PROMPT))
        return ScaffoldParameters(project_name=name, style_format=style)


def collect_parameters(
    console: Console | None = None, stream: TextIO | None = None
) -> ScaffoldParameters:
    """Run both questions and close the prompt channel before returning."""
    with PromptSession(console=console, stream=stream) as session:
        return ParameterCollector(session).collect()
