"""Exception hierarchy for arrftercare.

Every condition that prevents a run from continuing in a meaningful way
(missing tools, unusable input, a failed probe) is raised as a subclass of
ArrftercareError. The CLI maps these to a non-zero exit. "Nothing to do"
conditions are never raised; they are reported as skip outcomes.
"""


class ArrftercareError(Exception):
    """Base exception for hard errors.

    All arrftercare exceptions inherit from this class, allowing the CLI
    to catch every hard error with a single except clause.
    """


class InvalidTargetError(ArrftercareError):
    """Raised when the media path or directory to process is unusable.

    Attributes:
        path: The offending path, or None if no path was supplied at all.
    """

    def __init__(self, message: str, path: object = None) -> None:
        self.path = path
        super().__init__(message)
