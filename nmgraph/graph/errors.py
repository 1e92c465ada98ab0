"""Error taxonomy for dependency graph analysis.

Resolution and manifest failures are fatal: they propagate out of the
builder untouched and are reported once by the CLI. Hitting the depth
limit is not an error and is reported through ``BuildResult`` instead.
"""

from pathlib import Path
from typing import Union


class AnalysisError(Exception):
    """Base class for all fatal analysis errors."""

    pass


class ResolutionError(AnalysisError):
    """A required package cannot be found by the upward directory search.

    Attributes:
        name: Package name that failed to resolve.
        from_path: Directory of the package that requested it.
    """

    def __init__(self, name: str, from_path: Union[str, Path]) -> None:
        self.name = name
        self.from_path = str(from_path)
        super().__init__(f"cannot find package '{name}' from {self.from_path}.")


class ManifestError(AnalysisError):
    """A package manifest is missing or malformed.

    Attributes:
        path: Directory the manifest was expected in.
        reason: Short description of the failure.
    """

    def __init__(self, path: Union[str, Path], reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"invalid manifest in {self.path}: {reason}")


class ConfigError(AnalysisError):
    """Configuration source could not be read or validated."""

    pass


__all__ = ["AnalysisError", "ConfigError", "ManifestError", "ResolutionError"]
