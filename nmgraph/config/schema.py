"""Configuration schema definitions using Pydantic for validation.

Configuration errors are caught before any traversal starts, with the
offending field named in the message.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


class ServeConfig(BaseModel):
    """Options for the result viewer.

    Attributes:
        host: Interface the viewer binds to.
        port: TCP port of the viewer.
        open_browser: Open a browser tab once the server starts.
    """

    host: str = "127.0.0.1"
    port: int = Field(default=8420, ge=1, le=65535)
    open_browser: bool = True


class AnalyzeConfig(BaseModel):
    """Top-level configuration for one analysis run.

    Attributes:
        max_depth: Maximum recursion depth, root being 1 (None = unlimited).
        workers: Threads used to visit sibling dependencies.
        modules_dir: Name of the nested module directory.
        manifest_name: File name of the package descriptor.
        include_optional: Follow optionalDependencies.
        include_dev: Follow the root project's devDependencies.
        output_name: File name used when saving JSON into a directory.
        serve: Viewer options.
    """

    max_depth: Optional[int] = Field(default=None, ge=1)
    workers: int = Field(default=4, ge=1, le=64)
    modules_dir: str = "node_modules"
    manifest_name: str = "package.json"
    include_optional: bool = True
    include_dev: bool = True
    output_name: str = "dep-analyze.json"
    serve: ServeConfig = Field(default_factory=ServeConfig)

    model_config = {"extra": "forbid"}

    @field_validator("modules_dir", "manifest_name", "output_name")
    @classmethod
    def validate_plain_name(cls, v: str) -> str:
        """Require a single non-empty path component."""
        if not v or "/" in v or "\\" in v or v in {".", ".."}:
            raise ValueError(f"Invalid file name '{v}'")
        return v

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalyzeConfig":
        """Create configuration from dictionary.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()

    def builder_options(self) -> Dict[str, Any]:
        """Keyword arguments for ``GraphBuilder``."""
        return {
            "max_depth": self.max_depth,
            "workers": self.workers,
            "include_optional": self.include_optional,
            "include_dev": self.include_dev,
            "modules_dir": self.modules_dir,
            "manifest_name": self.manifest_name,
        }
