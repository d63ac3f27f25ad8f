"""
Pydantic models for hookrun configuration.

Configuration maps hook class names (prolog, epilog, ...) to the pattern and
timeout used to run them, and describes how script environments are built.

Example config file (.hookrun.json):
    {
        "hooks": {
            "prolog": {"pattern": "/etc/hookrun/prolog.d/*", "max_wait_seconds": 30},
            "epilog": {"pattern": "/etc/hookrun/epilog.d/*"}
        },
        "environment": {
            "inherit": false,
            "env_files": ["/etc/hookrun/hook.env"],
            "variables": {"PATH": "/usr/bin:/bin"}
        }
    }
"""

from pydantic import BaseModel, Field

DEFAULT_HOOK_CLASSES = ("prolog", "epilog")


class HookClassConfig(BaseModel):
    """How to run one class of hooks."""

    pattern: str | None = Field(
        default=None, description="Glob pattern for the hook scripts (unset: nothing to run)"
    )
    max_wait_seconds: int = Field(
        default=-1, ge=-1, description="Per-script timeout in seconds, -1 for no limit"
    )


class EnvironmentConfig(BaseModel):
    """
    Environment given to hook scripts.

    Scripts never inherit the runner's environment unless ``inherit`` is set.
    """

    inherit: bool = Field(
        default=False, description="Start from the runner's own environment"
    )
    env_files: list[str] = Field(
        default_factory=list, description="dotenv files merged into the environment"
    )
    variables: dict[str, str] = Field(
        default_factory=dict, description="Explicit variables, applied last"
    )


class HookRunConfig(BaseModel):
    """Top-level hookrun configuration."""

    hooks: dict[str, HookClassConfig] = Field(
        default_factory=lambda: {name: HookClassConfig() for name in DEFAULT_HOOK_CLASSES},
        description="Hook classes by name",
    )
    environment: EnvironmentConfig = Field(default_factory=EnvironmentConfig)

    def get_hook(self, name: str) -> HookClassConfig:
        """
        Get the configuration for a hook class.

        Args:
            name: Hook class name

        Returns:
            The configured HookClassConfig, or an empty one (no pattern) if
            the class is not configured
        """
        return self.hooks.get(name) or HookClassConfig()
