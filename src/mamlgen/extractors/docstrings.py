"""Documentation extractor reading Google-style docstrings.

The cmdlet class's own docstring supplies the synopsis (summary line), the
description (remaining text), examples (``Example:`` sections) and return
values (``Returns:``/``Yields:`` entries). Parameters are documented in the
``Attributes:`` or ``Args:`` section of the declaring class, or in the
docstring of a property getter.
"""

import logging

import docstring_parser
from docstring_parser import Docstring, DocstringStyle

from mamlgen.errors import MissingArgumentError
from mamlgen.extractors.base import NO_OPINION, DocumentationExtractor, NoOpinion
from mamlgen.maml.models import CommandExample, CommandValue, DataType
from mamlgen.reflector import PropertyInfo
from mamlgen.text import to_paragraphs

logger = logging.getLogger(__name__)


class DocstringDocumentationExtractor(DocumentationExtractor):
    """Cmdlet documentation extractor that parses docstrings."""

    def __init__(self, style: DocstringStyle = DocstringStyle.GOOGLE):
        self.style = style

    def _parse(self, owner: object, doc: str | None) -> Docstring | None:
        if not doc or not doc.strip():
            return None
        try:
            return docstring_parser.parse(doc, style=self.style)
        except docstring_parser.ParseError as e:
            logger.warning(f"Ignoring unparsable docstring of {owner!r}: {e}")
            return None

    def _class_docstring(self, cmdlet_type: type) -> Docstring | None:
        # Only the class's own docstring; __doc__ is not inherited from bases.
        return self._parse(cmdlet_type, vars(cmdlet_type).get("__doc__"))

    def get_cmdlet_synopsis(self, cmdlet_type: type) -> str | NoOpinion:
        if cmdlet_type is None:
            raise MissingArgumentError("cmdlet_type")

        parsed = self._class_docstring(cmdlet_type)
        if parsed is None:
            return NO_OPINION
        return (parsed.short_description or "").strip()

    def get_cmdlet_description(self, cmdlet_type: type) -> str | NoOpinion:
        if cmdlet_type is None:
            raise MissingArgumentError("cmdlet_type")

        parsed = self._class_docstring(cmdlet_type)
        if parsed is None:
            return NO_OPINION
        return (parsed.long_description or "").strip()

    def get_parameter_description(self, prop: PropertyInfo) -> str | NoOpinion:
        if prop is None:
            raise MissingArgumentError("prop")

        parsed = self._class_docstring(prop.declaring_type)
        if parsed is not None:
            for param in parsed.params:
                if param.arg_name == prop.name:
                    return (param.description or "").strip()

        member = vars(prop.declaring_type).get(prop.name)
        if isinstance(member, property) and member.fget is not None:
            getter_doc = self._parse(member.fget, member.fget.__doc__)
            if getter_doc is not None:
                parts = [getter_doc.short_description, getter_doc.long_description]
                return "\n\n".join(part.strip() for part in parts if part)

        return NO_OPINION

    def get_cmdlet_examples(self, cmdlet_type: type) -> list[CommandExample] | NoOpinion:
        if cmdlet_type is None:
            raise MissingArgumentError("cmdlet_type")

        parsed = self._class_docstring(cmdlet_type)
        if parsed is None or not parsed.examples:
            return NO_OPINION

        examples = []
        for section in parsed.examples:
            text = (section.description or "").strip()
            if section.snippet:
                examples.append(CommandExample(code=section.snippet, remarks=to_paragraphs(text)))
            else:
                examples.append(CommandExample(code=text))
        return examples

    def get_cmdlet_return_values(self, cmdlet_type: type) -> list[CommandValue] | NoOpinion:
        if cmdlet_type is None:
            raise MissingArgumentError("cmdlet_type")

        parsed = self._class_docstring(cmdlet_type)
        if parsed is None or not parsed.many_returns:
            return NO_OPINION

        return_values = []
        for entry in parsed.many_returns:
            paragraphs = to_paragraphs((entry.description or "").strip())
            if entry.type_name:
                name, description = entry.type_name.strip(), paragraphs
            else:
                # Untyped entry: the first line names the type.
                name, *description = paragraphs
            return_values.append(CommandValue(data_type=DataType(name=name), description=description))
        return return_values
