"""Exit code taxonomy for the ideinfo CLI."""

from __future__ import annotations

from enum import IntEnum

from ideinfo.errors import IdeInfoContractError, IdeInfoGraphError, IdeInfoInputError


class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    - 0: Success
    - 1-9: General errors (parse, validation, config)
    - 10-19: Aspect errors
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    PARSE_ERROR = 2
    VALIDATION_ERROR = 3
    CONFIG_ERROR = 4

    INPUT_ERROR = 11
    GRAPH_ERROR = 12
    CONTRACT_ERROR = 13

    @classmethod
    def from_exception(cls, exc: BaseException) -> ExitCode:
        """Map an exception to an appropriate exit code.

        Returns
        -------
        ExitCode
            Exit code appropriate for the exception type.
        """
        if exc.__class__.__module__.startswith("cyclopts"):
            if exc.__class__.__name__ == "ValidationError":
                return cls.VALIDATION_ERROR
            return cls.PARSE_ERROR
        if isinstance(exc, IdeInfoInputError):
            return cls.INPUT_ERROR
        if isinstance(exc, IdeInfoGraphError):
            return cls.GRAPH_ERROR
        if isinstance(exc, IdeInfoContractError):
            return cls.CONTRACT_ERROR
        if isinstance(exc, (FileNotFoundError, PermissionError)):
            return cls.CONFIG_ERROR
        if isinstance(exc, (ValueError, TypeError)):
            return cls.VALIDATION_ERROR
        return cls.GENERAL_ERROR


__all__ = ["ExitCode"]
