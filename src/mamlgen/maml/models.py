"""MAML document model.

Plain records for the PowerShell MAML help vocabulary. Element names,
namespaces and ordering live in mamlgen.maml.writer; these classes only carry
data and the defaults the vocabulary expects.
"""

from dataclasses import dataclass, field

from mamlgen.maml.pipeline import PipelineInputType


@dataclass
class ParameterValue:
    """Value information for a parameter ("command:parameterValue")."""

    data_type: str = ""
    is_mandatory: bool = True
    is_variable_length: bool = False


@dataclass(eq=False)
class Parameter:
    """A cmdlet parameter ("command:parameter").

    Syntax items hold references to the same Parameter objects listed in
    Command.parameters, so parameters compare by identity.

    Attributes:
        name: Parameter name
        description: Description paragraphs
        value: Value information
        default_value: Default value text ("None" when unknown)
        is_mandatory: Parameter must be supplied
        is_variable_length: Always true in official documentation
        supports_globbing: Parameter accepts wildcards
        supports_pipeline_input: Pipeline input support flags
        position: "named", or the 0-based position as text
        aliases: Aliases of the form "Alias1, Alias2" ("none" when absent)
    """

    name: str = ""
    description: list[str] = field(default_factory=list)
    value: ParameterValue = field(default_factory=ParameterValue)
    default_value: str = "None"
    is_mandatory: bool = False
    is_variable_length: bool = True
    supports_globbing: bool = False
    supports_pipeline_input: PipelineInputType = PipelineInputType.NONE
    position: str = "named"
    aliases: str = "none"


@dataclass
class SyntaxItem:
    """The calling shape of one parameter set ("command:syntaxItem")."""

    command_name: str = ""
    parameters: list[Parameter] = field(default_factory=list)


@dataclass
class CommandDetails:
    name: str = ""
    synopsis: list[str] = field(default_factory=list)
    verb: str = ""
    noun: str = ""


@dataclass
class CommandExample:
    title: str = "Example"
    description: list[str] = field(default_factory=list)
    code: str = ""
    remarks: list[str] = field(default_factory=list)


@dataclass
class DataType:
    name: str = ""
    uri: str | None = None
    description: list[str] = field(default_factory=list)


@dataclass
class CommandValue:
    """An input type or return value of a cmdlet."""

    data_type: DataType = field(default_factory=DataType)
    description: list[str] = field(default_factory=list)


@dataclass
class Command:
    """Help content for one cmdlet ("command:command")."""

    details: CommandDetails = field(default_factory=CommandDetails)
    description: list[str] = field(default_factory=list)
    syntax: list[SyntaxItem] = field(default_factory=list)
    parameters: list[Parameter] = field(default_factory=list)
    input_types: list[CommandValue] = field(default_factory=list)
    return_values: list[CommandValue] = field(default_factory=list)
    examples: list[CommandExample] = field(default_factory=list)


@dataclass
class HelpItems:
    """Root of a MAML help file ("helpItems")."""

    schema: str = "maml"
    commands: list[Command] = field(default_factory=list)
