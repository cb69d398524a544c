"""Declarations used to describe cmdlets.

A cmdlet is a class deriving from Cmdlet and decorated with @cmdlet. Its
parameters are public class attributes (or properties) annotated with
``Annotated[T, Parameter(...)]``. Help text is attached with the remaining
class decorators.

Example:
    >>> @cmdlet("Get", "Greeting")
    ... @synopsis("Outputs a greeting")
    ... class GetGreeting(Cmdlet):
    ...     Name: Annotated[str, Parameter(mandatory=True, help_message="Who to greet")]
    ...     Title: Annotated[str, Parameter(value_from_remaining_arguments=True), Alias("Honorific")]

Class decorators that may be repeated (@example, @input_type, @output_type)
keep reading order: the topmost decorator is the first declaration.
"""

from dataclasses import dataclass
from typing import Any

from mamlgen.errors import MissingArgumentError

ALL_PARAMETER_SETS = "__AllParameterSets"

_DECLARATIONS_ATTR = "__maml_declarations__"


class Cmdlet:
    """Base class for commands."""

    def __init__(self):
        self.output: list[Any] = []

    def write_object(self, value: Any) -> None:
        """Emit an object to the pipeline."""
        self.output.append(value)

    def process_record(self) -> None:
        """Process one input record. Subclasses override this."""
        pass


class SwitchParameter:
    """On/off toggle type for switch parameters.

    A switch parameter never takes a value on the command line, so its
    parameter value is documented as optional.
    """

    def __init__(self, is_present: bool = False):
        self.is_present = is_present

    def __bool__(self) -> bool:
        return self.is_present

    def __str__(self) -> str:
        return str(self.is_present)

    def __repr__(self) -> str:
        return f"SwitchParameter({self.is_present!r})"


# ============================================================================
# CLASS-LEVEL DECLARATIONS
# ============================================================================


@dataclass(frozen=True)
class CmdletDeclaration:
    verb: str
    noun: str


@dataclass(frozen=True)
class CmdletSynopsis:
    synopsis: str


@dataclass(frozen=True)
class CmdletDescription:
    description: str


@dataclass(frozen=True)
class CmdletExample:
    """An example shown in the help content for a cmdlet."""

    title: str
    code: str
    remarks: str
    description: str | None = None

    def __post_init__(self):
        if self.title is None:
            raise MissingArgumentError("title")
        if self.code is None:
            raise MissingArgumentError("code")
        if self.remarks is None:
            raise MissingArgumentError("remarks")


class CmdletInputType:
    """An input type accepted by a cmdlet.

    Args:
        type_or_name: A class, or the name of the input type. A None or empty
            name falls back to "None".
        description: Optional description of the input type
        uri: Optional link to the input type's documentation
    """

    def __init__(
        self,
        type_or_name: type | str | None,
        description: str | None = None,
        uri: str | None = None,
    ):
        if isinstance(type_or_name, type):
            self.type: type | None = type_or_name
            name = type_or_name.__name__
        else:
            self.type = None
            name = type_or_name
        self.name = name or "None"
        self.description = description
        self.uri = uri

    @property
    def is_python_type(self) -> bool:
        return self.type is not None

    def __repr__(self) -> str:
        return f"CmdletInputType({self.name!r})"


@dataclass(frozen=True)
class OutputType:
    types: tuple[type | str, ...]

    @property
    def type_names(self) -> list[str]:
        return [t if isinstance(t, str) else t.__name__ for t in self.types]


def _declare(cls: type, declaration: Any) -> type:
    # Decorators run bottom-up; prepending keeps top-to-bottom reading order.
    own = cls.__dict__.get(_DECLARATIONS_ATTR)
    if own is None:
        own = []
        setattr(cls, _DECLARATIONS_ATTR, own)
    own.insert(0, declaration)
    return cls


def get_declarations(cls: type, kind: type, inherit: bool = True) -> list[Any]:
    """Get the class-level declarations of one kind.

    Args:
        cls: Class to inspect
        kind: Declaration class to look for
        inherit: Search base classes when the class itself declares nothing

    Returns:
        Declarations in reading order, from the nearest class that has any
    """
    classes = cls.__mro__ if inherit else (cls,)
    for klass in classes:
        found = [d for d in klass.__dict__.get(_DECLARATIONS_ATTR, ()) if isinstance(d, kind)]
        if found:
            return found
    return []


def cmdlet(verb: str, noun: str):
    """Declare a class as the cmdlet ``{verb}-{noun}``."""
    return lambda cls: _declare(cls, CmdletDeclaration(verb, noun))


def synopsis(text: str):
    """Attach a one-line synopsis to a cmdlet."""
    if text is None:
        raise MissingArgumentError("text")
    return lambda cls: _declare(cls, CmdletSynopsis(text))


def description(text: str):
    """Attach a detailed description to a cmdlet."""
    if text is None:
        raise MissingArgumentError("text")
    return lambda cls: _declare(cls, CmdletDescription(text))


def example(title: str, code: str, remarks: str, description: str | None = None):
    """Attach an example to a cmdlet. May be repeated."""
    declaration = CmdletExample(title=title, code=code, remarks=remarks, description=description)
    return lambda cls: _declare(cls, declaration)


def input_type(type_or_name: type | str | None, description: str | None = None, uri: str | None = None):
    """Declare an input type accepted by a cmdlet. May be repeated."""
    declaration = CmdletInputType(type_or_name, description=description, uri=uri)
    return lambda cls: _declare(cls, declaration)


def output_type(*types: type | str):
    """Declare one or more types written to the pipeline. May be repeated."""
    declaration = OutputType(tuple(types))
    return lambda cls: _declare(cls, declaration)


# ============================================================================
# PROPERTY-LEVEL DECLARATIONS (used inside typing.Annotated)
# ============================================================================


@dataclass(frozen=True)
class Parameter:
    """Declares a property as a cmdlet parameter.

    A property may carry several Parameter declarations, one per parameter
    set it belongs to.

    Attributes:
        mandatory: Parameter must be supplied
        position: 0-based position, or None for a named-only parameter
        parameter_set_name: Parameter set this declaration belongs to
        value_from_pipeline: Value can be taken from pipeline objects
        value_from_pipeline_by_property_name: Value can be taken from a
            same-named property of pipeline objects
        value_from_remaining_arguments: Value collects remaining arguments
        help_message: Short description of the parameter
    """

    mandatory: bool = False
    position: int | None = None
    parameter_set_name: str = ALL_PARAMETER_SETS
    value_from_pipeline: bool = False
    value_from_pipeline_by_property_name: bool = False
    value_from_remaining_arguments: bool = False
    help_message: str | None = None

    def __post_init__(self):
        if self.position is not None and self.position < 0:
            raise ValueError(f"Parameter position must be non-negative, got {self.position}")


class Alias:
    """Alternative names for a parameter."""

    def __init__(self, *names: str):
        self.names = tuple(names)

    def __repr__(self) -> str:
        return f"Alias({', '.join(repr(n) for n in self.names)})"


@dataclass(frozen=True)
class SupportsWildcards:
    """Marks a parameter as accepting wildcard patterns."""

    pass
