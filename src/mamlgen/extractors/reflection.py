"""Documentation extractor reading declarations attached to cmdlet classes.

Reads @synopsis, @description, @example, @input_type and @output_type off the
class, and Parameter help messages off its properties.
"""

from mamlgen.declarations import (
    CmdletDescription,
    CmdletExample,
    CmdletInputType,
    CmdletSynopsis,
    OutputType,
    get_declarations,
)
from mamlgen.errors import MissingArgumentError
from mamlgen.extractors.base import NO_OPINION, DocumentationExtractor, NoOpinion
from mamlgen.maml.models import CommandExample, CommandValue, DataType
from mamlgen.reflector import PropertyInfo, get_parameter_declarations
from mamlgen.text import to_paragraphs


class ReflectionDocumentationExtractor(DocumentationExtractor):
    """Cmdlet documentation extractor that reads declarations off the class."""

    def get_cmdlet_synopsis(self, cmdlet_type: type) -> str | NoOpinion:
        if cmdlet_type is None:
            raise MissingArgumentError("cmdlet_type")

        declarations = get_declarations(cmdlet_type, CmdletSynopsis)
        if not declarations:
            return NO_OPINION
        return declarations[0].synopsis.strip()

    def get_cmdlet_description(self, cmdlet_type: type) -> str | NoOpinion:
        if cmdlet_type is None:
            raise MissingArgumentError("cmdlet_type")

        declarations = get_declarations(cmdlet_type, CmdletDescription)
        if not declarations:
            return NO_OPINION
        return declarations[0].description.strip()

    def get_parameter_description(self, prop: PropertyInfo) -> str | NoOpinion:
        """Use the help message of the last declaration that has one."""
        if prop is None:
            raise MissingArgumentError("prop")

        messages = [
            declaration.help_message
            for declaration in get_parameter_declarations(prop)
            if declaration.help_message is not None
        ]
        if not messages:
            return NO_OPINION
        return messages[-1].strip()

    def get_cmdlet_examples(self, cmdlet_type: type) -> list[CommandExample] | NoOpinion:
        if cmdlet_type is None:
            raise MissingArgumentError("cmdlet_type")

        declarations = get_declarations(cmdlet_type, CmdletExample, inherit=False)
        if not declarations:
            return NO_OPINION

        return [
            CommandExample(
                title=declaration.title,
                description=to_paragraphs(declaration.description),
                code=declaration.code,
                remarks=to_paragraphs(declaration.remarks),
            )
            for declaration in declarations
        ]

    def get_cmdlet_return_values(self, cmdlet_type: type) -> list[CommandValue] | NoOpinion:
        if cmdlet_type is None:
            raise MissingArgumentError("cmdlet_type")

        declarations = get_declarations(cmdlet_type, OutputType, inherit=False)
        if not declarations:
            return NO_OPINION

        return [
            CommandValue(data_type=DataType(name=name))
            for declaration in declarations
            for name in declaration.type_names
        ]

    def get_cmdlet_input_types(self, cmdlet_type: type) -> list[CommandValue] | NoOpinion:
        if cmdlet_type is None:
            raise MissingArgumentError("cmdlet_type")

        declarations = get_declarations(cmdlet_type, CmdletInputType, inherit=False)
        if not declarations:
            return NO_OPINION

        input_types = []
        for declaration in declarations:
            description = [] if declaration.description is None else to_paragraphs(declaration.description.strip())
            input_types.append(
                CommandValue(
                    data_type=DataType(name=declaration.name, uri=declaration.uri),
                    description=description,
                )
            )
        return input_types
