"""MAML XML writer.

Serializes the document model with xml.etree.ElementTree. Elements are
created with their literal prefixed names ("command:parameter") and the
prefix declarations are written on the root element in a fixed order, so the
output does not depend on ElementTree's global namespace registry.

Example:
    >>> command = MamlGenerator().generate(GetGreeting)
    >>> print(dumps(command))
"""

import logging
import xml.etree.ElementTree as ET
from typing import TextIO

from mamlgen.maml.constants import ROOT_NAMESPACE, STANDARD_PREFIXES
from mamlgen.maml.models import (
    Command,
    CommandExample,
    CommandValue,
    HelpItems,
    Parameter,
    SyntaxItem,
)
from mamlgen.maml.pipeline import to_literal

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _text(parent: ET.Element, tag: str, text: str) -> ET.Element:
    element = ET.SubElement(parent, tag)
    element.text = text
    return element


def _paras(parent: ET.Element, tag: str, paragraphs: list[str]) -> ET.Element:
    element = ET.SubElement(parent, tag)
    for paragraph in paragraphs:
        _text(element, "maml:para", paragraph)
    return element


def _declare_prefixes(element: ET.Element) -> None:
    for prefix, namespace in STANDARD_PREFIXES.items():
        element.set(f"xmlns:{prefix}", namespace)


def _parameter(parent: ET.Element, parameter: Parameter) -> None:
    element = ET.SubElement(
        parent,
        "command:parameter",
        {
            "required": _bool(parameter.is_mandatory),
            "variableLength": _bool(parameter.is_variable_length),
            "globbing": _bool(parameter.supports_globbing),
            "pipelineInput": to_literal(parameter.supports_pipeline_input),
            "position": parameter.position,
            "aliases": parameter.aliases,
        },
    )
    _text(element, "maml:name", parameter.name)
    _paras(element, "maml:description", parameter.description)
    value = ET.SubElement(
        element,
        "command:parameterValue",
        {
            "required": _bool(parameter.value.is_mandatory),
            "variableLength": _bool(parameter.value.is_variable_length),
        },
    )
    value.text = parameter.value.data_type
    _text(element, "dev:defaultValue", parameter.default_value)


def _syntax_item(parent: ET.Element, item: SyntaxItem) -> None:
    element = ET.SubElement(parent, "command:syntaxItem")
    _text(element, "maml:name", item.command_name)
    for parameter in item.parameters:
        _parameter(element, parameter)


def _command_value(parent: ET.Element, tag: str, value: CommandValue) -> None:
    element = ET.SubElement(parent, tag)
    data_type = ET.SubElement(element, "dev:type")
    _text(data_type, "maml:name", value.data_type.name)
    if value.data_type.uri is not None:
        _text(data_type, "maml:uri", value.data_type.uri)
    if value.data_type.description:
        _paras(data_type, "maml:description", value.data_type.description)
    _paras(element, "maml:description", value.description)


def _example(parent: ET.Element, example: CommandExample) -> None:
    element = ET.SubElement(parent, "command:example")
    _text(element, "maml:title", example.title)
    _paras(element, "maml:introduction", example.description)
    _text(element, "dev:code", example.code)
    _paras(element, "dev:remarks", example.remarks)


def command_to_element(command: Command, parent: ET.Element | None = None) -> ET.Element:
    """Build the "command:command" element for a Command.

    Args:
        command: Command to serialize
        parent: Element to append to; when None a standalone root element is
            created carrying the namespace prefix declarations

    Returns:
        The command element
    """
    if parent is None:
        element = ET.Element("command:command")
        _declare_prefixes(element)
    else:
        element = ET.SubElement(parent, "command:command")

    details = ET.SubElement(element, "command:details")
    _text(details, "command:name", command.details.name)
    _paras(details, "maml:description", command.details.synopsis)
    _text(details, "command:verb", command.details.verb)
    _text(details, "command:noun", command.details.noun)

    _paras(element, "maml:description", command.description)

    syntax = ET.SubElement(element, "command:syntax")
    for item in command.syntax:
        _syntax_item(syntax, item)

    parameters = ET.SubElement(element, "command:parameters")
    for parameter in command.parameters:
        _parameter(parameters, parameter)

    input_types = ET.SubElement(element, "command:inputTypes")
    for value in command.input_types:
        _command_value(input_types, "command:inputType", value)

    return_values = ET.SubElement(element, "command:returnValues")
    for value in command.return_values:
        _command_value(return_values, "command:returnValue", value)

    examples = ET.SubElement(element, "command:examples")
    for example in command.examples:
        _example(examples, example)

    return element


def help_items_to_element(help_items: HelpItems) -> ET.Element:
    """Build the "helpItems" root element for a help file."""
    root = ET.Element("helpItems", {"xmlns": ROOT_NAMESPACE})
    _declare_prefixes(root)
    root.set("schema", help_items.schema)
    for command in help_items.commands:
        command_to_element(command, root)
    return root


def dumps(document: Command | HelpItems, indent: str = "  ") -> str:
    """Serialize a Command or HelpItems document to MAML XML text.

    Args:
        document: Document to serialize
        indent: Indentation unit

    Returns:
        XML text with declaration, "\\n" newlines and no trailing newline
    """
    if isinstance(document, HelpItems):
        root = help_items_to_element(document)
    elif isinstance(document, Command):
        root = command_to_element(document)
    else:
        raise TypeError(f"Cannot serialize {type(document).__name__} as MAML")

    if indent:
        ET.indent(root, space=indent)
    body = ET.tostring(root, encoding="unicode", short_empty_elements=True)
    logger.debug(f"Serialized {root.tag} ({len(body)} characters)")
    return f"{XML_DECLARATION}\n{body}"


def write(document: Command | HelpItems, stream: TextIO, indent: str = "  ") -> None:
    """Write a Command or HelpItems document to a text stream."""
    stream.write(dumps(document, indent=indent))
    stream.write("\n")
