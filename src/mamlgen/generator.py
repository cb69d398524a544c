"""MAML help generation for cmdlet classes.

MamlGenerator turns a cmdlet class into a Command record:

1. Enumerate the class's properties and keep those with Parameter declarations
2. Merge the declarations of each property into one Parameter
3. Group parameters by parameter set into syntax items
4. Ask the extractor chain for synopsis, description, examples, input types
   and return values

Extractors are asked in order. For text queries (synopsis, descriptions) the
first answer other than NO_OPINION wins, even an empty one. For list queries
(examples, input types, return values) the first non-empty list wins.

Example:
    >>> generator = MamlGenerator()
    >>> command = generator.generate(GetGreeting)
    >>> command.details.name
    'Get-Greeting'
"""

import inspect
import logging
import types
from collections.abc import Iterable
from typing import Any

from mamlgen.config import GeneratorConfig
from mamlgen.declarations import Alias, SupportsWildcards, SwitchParameter
from mamlgen.defaults import read_default_value
from mamlgen.errors import MissingArgumentError, NotACmdletError
from mamlgen.extractors import (
    EXTRACTOR_NAMES,
    NO_OPINION,
    DocstringDocumentationExtractor,
    DocumentationExtractor,
    ReflectionDocumentationExtractor,
    XmlCommentDocumentationExtractor,
)
from mamlgen.maml.models import (
    Command,
    CommandDetails,
    HelpItems,
    Parameter,
    ParameterValue,
    SyntaxItem,
)
from mamlgen.maml.pipeline import PipelineInputType
from mamlgen.reflector import (
    COMMON_NAMESPACES,
    PropertyInfo,
    get_cmdlet_declaration,
    get_cmdlet_types,
    get_parameter_declarations,
    get_properties,
    is_cmdlet,
    is_cmdlet_parameter,
    type_display_name,
)
from mamlgen.text import to_paragraphs

logger = logging.getLogger(__name__)


def default_extractors() -> list[DocumentationExtractor]:
    """Build the default extractor chain: reflection, XML comments, docstrings."""
    return [
        ReflectionDocumentationExtractor(),
        XmlCommentDocumentationExtractor(),
        DocstringDocumentationExtractor(),
    ]


def _is_switch(value_type: Any) -> bool:
    return inspect.isclass(value_type) and issubclass(value_type, SwitchParameter)


class MamlGenerator:
    """Generates MAML help content for cmdlet classes.

    Args:
        *extractors: Documentation extractors in precedence order, or a single
            iterable of them. Defaults to default_extractors().
        common_namespaces: Modules whose classes are named without module prefix

    Raises:
        MissingArgumentError: If the extractors (or one of them) is None
    """

    to_paragraphs = staticmethod(to_paragraphs)

    def __init__(self, *extractors: Any, common_namespaces: Iterable[str] = COMMON_NAMESPACES):
        if len(extractors) == 1 and not isinstance(extractors[0], DocumentationExtractor):
            if extractors[0] is None:
                raise MissingArgumentError("extractors")
            extractors = tuple(extractors[0])
        elif not extractors:
            extractors = tuple(default_extractors())

        if any(extractor is None for extractor in extractors):
            raise MissingArgumentError("extractors", "Extractor list must not contain None.")

        self._extractors: tuple[DocumentationExtractor, ...] = tuple(extractors)
        self.common_namespaces = tuple(common_namespaces)

    @classmethod
    def from_config(cls, config: GeneratorConfig) -> "MamlGenerator":
        """Build a generator from configuration."""
        if config is None:
            raise MissingArgumentError("config")

        config.validate()
        extractors = []
        for name in config.extractors:
            if name == "xml-comments":
                extractors.append(XmlCommentDocumentationExtractor(config.companion_extension))
            else:
                extractors.append(EXTRACTOR_NAMES[name]())
        return cls(extractors, common_namespaces=config.common_namespaces)

    @property
    def extractors(self) -> tuple[DocumentationExtractor, ...]:
        return self._extractors

    # ========================================================================
    # EXTRACTOR CHAIN
    # ========================================================================

    def _first_text(self, query: str, argument: Any) -> str | None:
        for extractor in self._extractors:
            result = getattr(extractor, query)(argument)
            if result is not NO_OPINION:
                logger.debug(f"{query}: answered by {type(extractor).__name__}")
                return result
        logger.debug(f"{query}: no extractor had an opinion")
        return None

    def _first_list(self, query: str, argument: Any) -> list[Any]:
        for extractor in self._extractors:
            result = getattr(extractor, query)(argument)
            if result is not NO_OPINION and result:
                logger.debug(f"{query}: answered by {type(extractor).__name__}")
                return list(result)
        return []

    # ========================================================================
    # PARAMETERS
    # ========================================================================

    def _build_parameter(self, cmdlet_type: type, prop: PropertyInfo) -> tuple[Parameter, list[str]]:
        declarations = get_parameter_declarations(prop)

        pipeline_input = PipelineInputType.NONE
        position = None
        for declaration in declarations:
            if declaration.value_from_pipeline:
                pipeline_input |= PipelineInputType.BY_VALUE
            if declaration.value_from_pipeline_by_property_name:
                pipeline_input |= PipelineInputType.BY_PROPERTY_NAME
            if declaration.value_from_remaining_arguments:
                pipeline_input |= PipelineInputType.FROM_REMAINING_ARGUMENTS
            if declaration.position is not None:
                position = declaration.position

        aliases = [name for alias in prop.get_metadata(Alias) for name in alias.names]
        description = self._first_text("get_parameter_description", prop)
        default_value = read_default_value(cmdlet_type, prop)

        parameter = Parameter(
            name=prop.name,
            description=[] if description is None else to_paragraphs(description),
            value=ParameterValue(
                data_type=type_display_name(prop.value_type, self.common_namespaces),
                is_mandatory=not _is_switch(prop.value_type),
            ),
            default_value="None" if default_value is None else default_value,
            is_mandatory=any(declaration.mandatory for declaration in declarations),
            supports_globbing=bool(prop.get_metadata(SupportsWildcards)),
            supports_pipeline_input=pipeline_input,
            position="named" if position is None else str(position),
            aliases=", ".join(aliases) if aliases else "none",
        )
        set_names = [declaration.parameter_set_name for declaration in reversed(declarations)]
        return parameter, set_names

    def _build_syntax(self, command_name: str, membership: list[tuple[Parameter, list[str]]]) -> list[SyntaxItem]:
        parameter_sets: dict[str, list[Parameter]] = {}
        for parameter, set_names in membership:
            for set_name in dict.fromkeys(set_names):
                parameter_sets.setdefault(set_name, []).append(parameter)

        return [
            SyntaxItem(command_name=command_name, parameters=parameter_sets[set_name])
            for set_name in sorted(parameter_sets)
        ]

    # ========================================================================
    # GENERATION
    # ========================================================================

    def generate(self, cmdlet_type: type) -> Command:
        """Generate help content for a cmdlet.

        Args:
            cmdlet_type: The class that implements the cmdlet

        Returns:
            Command record

        Raises:
            MissingArgumentError: If cmdlet_type is None
            NotACmdletError: If cmdlet_type does not implement a cmdlet
        """
        if cmdlet_type is None:
            raise MissingArgumentError("cmdlet_type")
        if not is_cmdlet(cmdlet_type):
            name = getattr(cmdlet_type, "__qualname__", None)
            full_name = f"{cmdlet_type.__module__}.{name}" if name else repr(cmdlet_type)
            raise NotACmdletError(
                "cmdlet_type",
                f"'{full_name}' does not implement a cmdlet (must be public, non-abstract, "
                f"derive from 'mamlgen.declarations.Cmdlet', and be decorated with '@cmdlet').",
            )

        declaration = get_cmdlet_declaration(cmdlet_type)
        command_name = f"{declaration.verb}-{declaration.noun}"
        logger.debug(f"Generating help for {command_name} ({cmdlet_type.__qualname__})")

        membership = []
        # Write-only properties first, then readable ones; stable within each group.
        for prop in sorted(get_properties(cmdlet_type), key=lambda p: p.can_read):
            if not is_cmdlet_parameter(prop):
                logger.debug(f"Skipping {cmdlet_type.__qualname__}.{prop.name}: not a parameter")
                continue
            membership.append(self._build_parameter(cmdlet_type, prop))

        synopsis = self._first_text("get_cmdlet_synopsis", cmdlet_type)
        description = self._first_text("get_cmdlet_description", cmdlet_type)
        examples = self._first_list("get_cmdlet_examples", cmdlet_type)

        return Command(
            details=CommandDetails(
                name=command_name,
                synopsis=to_paragraphs(synopsis),
                verb=declaration.verb,
                noun=declaration.noun,
            ),
            description=to_paragraphs(description),
            syntax=self._build_syntax(command_name, membership),
            parameters=[parameter for parameter, _ in membership],
            input_types=self._first_list("get_cmdlet_input_types", cmdlet_type),
            return_values=self._first_list("get_cmdlet_return_values", cmdlet_type),
            examples=sorted(examples, key=lambda example: example.title),
        )

    def generate_module(self, module: types.ModuleType) -> HelpItems:
        """Generate help content for every cmdlet defined in a module.

        Raises:
            MissingArgumentError: If module is None
        """
        if module is None:
            raise MissingArgumentError("module")
        return HelpItems(commands=[self.generate(cmdlet_type) for cmdlet_type in get_cmdlet_types(module)])
