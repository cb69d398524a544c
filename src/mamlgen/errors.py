"""Exceptions raised by mamlgen.

Only invalid input is surfaced to callers. Missing optional documentation
(absent decorators, absent companion documents, cmdlets without a
zero-argument constructor) is resolved locally and never raises.
"""


class MamlGenError(Exception):
    """Base exception for mamlgen failures."""

    pass


class InvalidArgumentError(MamlGenError, ValueError):
    """Raised when a public operation receives an argument it cannot use.

    Attributes:
        argument_name: Name of the offending argument
    """

    def __init__(self, argument_name: str, message: str):
        super().__init__(message)
        self.argument_name = argument_name


class MissingArgumentError(InvalidArgumentError):
    """Raised when a required argument is None."""

    def __init__(self, argument_name: str, message: str | None = None):
        super().__init__(
            argument_name, message or f"Argument '{argument_name}' must not be None."
        )


class NotACmdletError(InvalidArgumentError):
    """Raised when a class does not have the shape of a cmdlet."""

    pass


class ConfigError(MamlGenError):
    """Raised when generator configuration is invalid."""

    pass


class ModuleLoadError(MamlGenError):
    """Raised when a target module cannot be imported."""

    pass
