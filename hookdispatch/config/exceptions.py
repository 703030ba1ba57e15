"""Exceptions raised while loading dispatcher configuration."""

from pathlib import Path
from typing import List, Optional, Union


class ConfigurationError(Exception):
    """
    Configuration could not be loaded or did not validate.

    ``errors`` holds one line per problem found and ``suggestions`` holds
    hints for fixing them; both are folded into ``str(error)`` so the CLI can
    print the exception as-is. ``path`` names the file involved, when known.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
        path: Optional[Union[str, Path]] = None,
    ):
        self.message = message
        self.errors = list(errors or [])
        self.suggestions = list(suggestions or [])
        self.path = Path(path) if path is not None else None
        super().__init__(self.render())

    def render(self) -> str:
        header = self.message if self.path is None else f"{self.message} ({self.path})"
        lines = [header]
        if self.errors:
            lines += ["", "Validation Errors:"]
            lines += [f"  {n}. {error}" for n, error in enumerate(self.errors, 1)]
        if self.suggestions:
            lines += ["", "Suggestions:"]
            lines += [f"  - {hint}" for hint in self.suggestions]
        return "\n".join(lines)
