"""Stack configuration.

StackConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class StackConfig:
    """Middleware stack configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = StackConfig(name="auth", strict_slashes=True)
    """

    # Label used in log lines
    name: str = "stack"

    # Forwarded to compare_path() for string patterns
    strict_slashes: bool = False  # "/users/" and "/users" differ when True
    case_sensitive: bool = True
