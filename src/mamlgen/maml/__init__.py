"""MAML document model and writer.

Public API:
    HelpItems, Command, CommandDetails, SyntaxItem, Parameter, ParameterValue,
    CommandExample, CommandValue, DataType: document records
    PipelineInputType: pipeline input flags
    dumps, write: XML serialization
"""

from mamlgen.maml.models import (
    Command,
    CommandDetails,
    CommandExample,
    CommandValue,
    DataType,
    HelpItems,
    Parameter,
    ParameterValue,
    SyntaxItem,
)
from mamlgen.maml.pipeline import PipelineInputType, to_literal
from mamlgen.maml.writer import dumps, write

__all__ = [
    "Command",
    "CommandDetails",
    "CommandExample",
    "CommandValue",
    "DataType",
    "HelpItems",
    "Parameter",
    "ParameterValue",
    "PipelineInputType",
    "SyntaxItem",
    "dumps",
    "to_literal",
    "write",
]
