"""Exit codes for arrftercare CLI commands.

Radarr and Sonarr only distinguish zero from non-zero, so the set is kept
to the two codes they act on. Click's own usage errors exit with 2.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for arrftercare CLI commands."""

    # Normal completion, including deliberate skips
    SUCCESS = 0

    # Any hard error: missing tools, bad target, detection/probe/encode failure
    GENERAL_ERROR = 1
