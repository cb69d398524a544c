"""Contract for cmdlet documentation extractors.

Every query has three possible outcomes:
- NO_OPINION: this extractor cannot answer; the generator asks the next one
- an empty string or list: documented as empty
- a populated result
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Literal, TypeAlias

from mamlgen.errors import MissingArgumentError
from mamlgen.maml.models import CommandExample, CommandValue
from mamlgen.reflector import PropertyInfo


class _NoOpinion(Enum):
    NO_OPINION = "NO_OPINION"

    def __repr__(self) -> str:
        return "NO_OPINION"


NO_OPINION = _NoOpinion.NO_OPINION

NoOpinion: TypeAlias = Literal[_NoOpinion.NO_OPINION]


class DocumentationExtractor(ABC):
    """Extracts cmdlet documentation from one source."""

    @abstractmethod
    def get_cmdlet_synopsis(self, cmdlet_type: type) -> str | NoOpinion:
        """Extract the synopsis for a cmdlet.

        Args:
            cmdlet_type: The class that implements the cmdlet

        Returns:
            The synopsis, or NO_OPINION. An empty string means the synopsis
            is documented as empty.
        """

    @abstractmethod
    def get_cmdlet_description(self, cmdlet_type: type) -> str | NoOpinion:
        """Extract the detailed description for a cmdlet."""

    @abstractmethod
    def get_parameter_description(self, prop: PropertyInfo) -> str | NoOpinion:
        """Extract the description for a cmdlet parameter.

        Args:
            prop: The property that represents the parameter
        """

    @abstractmethod
    def get_cmdlet_examples(self, cmdlet_type: type) -> list[CommandExample] | NoOpinion:
        """Extract the examples for a cmdlet, in declaration order."""

    @abstractmethod
    def get_cmdlet_return_values(self, cmdlet_type: type) -> list[CommandValue] | NoOpinion:
        """Extract the values a cmdlet writes to the pipeline."""

    def get_cmdlet_input_types(self, cmdlet_type: type) -> list[CommandValue] | NoOpinion:
        """Extract the input types a cmdlet accepts.

        Sources without input type information keep this default.
        """
        if cmdlet_type is None:
            raise MissingArgumentError("cmdlet_type")
        return NO_OPINION
