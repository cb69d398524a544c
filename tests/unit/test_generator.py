"""
Unit tests for MamlGenerator.

Test Coverage:
- End-to-end generation for the sample greeting cmdlets
- Parameter merging (mandatory, pipeline input, position, aliases, globbing)
- Parameter set grouping and ordering
- Extractor chain precedence
- Argument validation and non-cmdlet rejection
- Module-level generation and configuration
"""

from typing import Annotated

import pytest

from mamlgen.config import GeneratorConfig
from mamlgen.declarations import (
    Alias,
    Cmdlet,
    Parameter,
    SupportsWildcards,
    SwitchParameter,
    cmdlet,
    synopsis,
)
from mamlgen.errors import MissingArgumentError, NotACmdletError
from mamlgen.extractors import (
    NO_OPINION,
    DocstringDocumentationExtractor,
    DocumentationExtractor,
    ReflectionDocumentationExtractor,
    XmlCommentDocumentationExtractor,
)
from mamlgen.generator import MamlGenerator
from mamlgen.maml import CommandExample, CommandValue, DataType, PipelineInputType, to_literal


@cmdlet("Test", "Merge")
class MergeCmdlet(Cmdlet):
    Both: Annotated[str, Parameter(mandatory=True), Parameter(mandatory=False, parameter_set_name="B")]
    Piped: Annotated[
        str,
        Parameter(value_from_pipeline=True),
        Parameter(
            parameter_set_name="B",
            value_from_pipeline_by_property_name=True,
            value_from_remaining_arguments=True,
        ),
    ]
    Named: Annotated[str, Parameter()]
    Positioned: Annotated[str, Parameter(position=2)]
    Repositioned: Annotated[str, Parameter(position=1), Parameter(parameter_set_name="B")]
    Aliased: Annotated[str, Parameter(), Alias("First", "Second"), Alias("Third"), SupportsWildcards()]
    Switch: Annotated[SwitchParameter, Parameter()] = SwitchParameter()
    NotAParameter: str = "plain"


@cmdlet("Test", "Order")
class OrderCmdlet(Cmdlet):
    Readable: Annotated[str, Parameter()]

    def _set_sink(self, value: Annotated[str, Parameter()]) -> None:
        pass

    Sink = property(fset=_set_sink)


@cmdlet("Test", "Sets")
class SetsCmdlet(Cmdlet):
    Zeta: Annotated[str, Parameter(parameter_set_name="Zeta"), Parameter(parameter_set_name="Zeta")]
    Alpha: Annotated[str, Parameter(parameter_set_name="alpha")]
    Beta: Annotated[str, Parameter(parameter_set_name="Beta")]


@cmdlet("Test", "Empty")
class EmptyCmdlet(Cmdlet):
    pass


@cmdlet("Test", "Declared")
@synopsis("Declared")
class DeclaredSynopsisCmdlet(Cmdlet):
    pass


class FakeExtractor(DocumentationExtractor):
    """Extractor returning fixed answers for every query."""

    def __init__(self, text=NO_OPINION, items=NO_OPINION):
        self.text = text
        self.items = items

    def get_cmdlet_synopsis(self, cmdlet_type):
        return self.text

    def get_cmdlet_description(self, cmdlet_type):
        return self.text

    def get_parameter_description(self, prop):
        return self.text

    def get_cmdlet_examples(self, cmdlet_type):
        return self.items

    def get_cmdlet_return_values(self, cmdlet_type):
        return self.items

    def get_cmdlet_input_types(self, cmdlet_type):
        return self.items


def parameters_by_name(command):
    return {parameter.name: parameter for parameter in command.parameters}


# ============================================================================
# END-TO-END TESTS
# ============================================================================


class TestGreetingEndToEnd:
    """Test generation for the sample greeting cmdlets."""

    def test_get_greeting_shape(self, reflection_generator, greeting_module):
        command = reflection_generator.generate(greeting_module.GetGreeting)

        assert command.details.name == "Get-Greeting"
        assert command.details.verb == "Get"
        assert command.details.noun == "Greeting"
        assert len(command.syntax) == 1
        assert [p.name for p in command.syntax[0].parameters] == ["Name", "Title"]
        assert command.syntax[0].command_name == "Get-Greeting"

    def test_get_greeting_parameters(self, reflection_generator, greeting_module):
        command = reflection_generator.generate(greeting_module.GetGreeting)
        name, title = command.parameters

        assert name.is_mandatory
        assert name.aliases == "none"
        assert name.position == "named"
        assert name.description == ["The name of the person to greet"]
        assert name.value.data_type == "str"
        assert name.default_value == "None"
        assert to_literal(name.supports_pipeline_input) == "false"

        assert not title.is_mandatory
        assert title.aliases == "Honorific"
        assert to_literal(title.supports_pipeline_input) == "true (ByPropertyName, FromRemainingArguments)"
        assert title.description == []

    def test_get_greeting_with_default_chain(self, generator, greeting_module):
        command = generator.generate(greeting_module.GetGreeting)

        assert command.details.synopsis == ["Gets a greeting for a person."]
        assert command.description == [
            "Builds a greeting from a name and an optional title.",
            "Titles are placed before the name.",
        ]
        name, title = command.parameters
        assert name.description == ["The name of the person to greet"]
        assert title.description == ["The title placed before the name."]
        assert [example.title for example in command.examples] == ["A titled greeting", "Greet by name"]
        assert command.return_values == [CommandValue(data_type=DataType(name="str"))]
        assert command.input_types == []

    def test_send_greeting_parameter_sets(self, generator, greeting_module):
        command = generator.generate(greeting_module.SendGreeting)

        assert [p.name for p in command.parameters] == ["Greeting", "Recipient", "Loud"]
        assert [[p.name for p in item.parameters] for item in command.syntax] == [
            ["Greeting", "Recipient"],
            ["Greeting", "Loud"],
        ]

        greeting, recipient, loud = command.parameters
        assert greeting.is_mandatory
        assert greeting.position == "0"
        assert greeting.default_value == "Hello"
        assert recipient.supports_globbing
        assert recipient.value.data_type == "list[str]"
        assert recipient.description == ["Who receives the greeting."]
        assert loud.value.data_type == "mamlgen.declarations.SwitchParameter"
        assert loud.value.is_mandatory is False
        assert loud.default_value == "False"

    def test_send_greeting_documentation(self, generator, greeting_module):
        command = generator.generate(greeting_module.SendGreeting)

        assert command.details.synopsis == ["Sends a greeting to one or more recipients."]
        assert command.description == ["The greeting is written to the pipeline once per recipient."]
        assert command.examples == [
            CommandExample(
                title="Send to one recipient",
                description=[""],
                code="Send-Greeting -Recipient World",
                remarks=["Writes 'Hello, World'."],
            )
        ]
        assert command.return_values == [
            CommandValue(data_type=DataType(name="str"), description=["One greeting per recipient."])
        ]


# ============================================================================
# PARAMETER MERGE TESTS
# ============================================================================


class TestParameterMerge:
    """Test merging several declarations into one parameter."""

    @pytest.fixture
    def merged(self, reflection_generator):
        return parameters_by_name(reflection_generator.generate(MergeCmdlet))

    def test_mandatory_if_any_declaration_is(self, merged):
        assert merged["Both"].is_mandatory
        assert not merged["Named"].is_mandatory

    def test_pipeline_input_is_union(self, merged):
        assert merged["Piped"].supports_pipeline_input == (
            PipelineInputType.BY_VALUE
            | PipelineInputType.BY_PROPERTY_NAME
            | PipelineInputType.FROM_REMAINING_ARGUMENTS
        )
        assert to_literal(merged["Piped"].supports_pipeline_input) == (
            "true (ByPropertyName, ByValue, FromRemainingArguments)"
        )

    def test_position(self, merged):
        assert merged["Named"].position == "named"
        assert merged["Positioned"].position == "2"
        assert merged["Repositioned"].position == "1"

    def test_aliases_and_globbing(self, merged):
        assert merged["Aliased"].aliases == "First, Second, Third"
        assert merged["Aliased"].supports_globbing
        assert not merged["Named"].supports_globbing

    def test_switch_value_is_optional(self, merged):
        assert merged["Switch"].value.is_mandatory is False
        assert merged["Named"].value.is_mandatory is True

    def test_fixed_fields(self, merged):
        assert all(parameter.is_variable_length for parameter in merged.values())
        assert all(parameter.value.is_variable_length is False for parameter in merged.values())

    def test_non_parameters_are_absent(self, reflection_generator):
        command = reflection_generator.generate(MergeCmdlet)
        assert "NotAParameter" not in parameters_by_name(command)
        for item in command.syntax:
            assert "NotAParameter" not in [p.name for p in item.parameters]

    def test_write_only_properties_come_first(self, reflection_generator):
        command = reflection_generator.generate(OrderCmdlet)
        assert [p.name for p in command.parameters] == ["Sink", "Readable"]
        assert command.parameters[0].default_value == "None"


# ============================================================================
# SYNTAX GROUPING TESTS
# ============================================================================


class TestSyntaxGrouping:
    """Test grouping parameters into syntax items."""

    def test_sets_ordered_by_name(self, reflection_generator):
        command = reflection_generator.generate(MergeCmdlet)
        names = [[p.name for p in item.parameters] for item in command.syntax]
        # "B" sorts before "__AllParameterSets"
        assert names[0] == ["Both", "Piped", "Repositioned"]
        assert names[1] == ["Both", "Piped", "Named", "Positioned", "Repositioned", "Aliased", "Switch"]

    def test_ordinal_ordering_and_single_membership(self, reflection_generator):
        command = reflection_generator.generate(SetsCmdlet)
        assert [[p.name for p in item.parameters] for item in command.syntax] == [["Beta"], ["Zeta"], ["Alpha"]]

    def test_syntax_items_share_parameter_objects(self, reflection_generator):
        command = reflection_generator.generate(MergeCmdlet)
        for item in command.syntax:
            for parameter in item.parameters:
                assert any(parameter is p for p in command.parameters)

    def test_no_parameters(self, reflection_generator):
        command = reflection_generator.generate(EmptyCmdlet)
        assert command.parameters == []
        assert command.syntax == []


# ============================================================================
# EXTRACTOR CHAIN TESTS
# ============================================================================


class TestExtractorChain:
    """Test precedence across extractors."""

    def test_empty_text_is_final(self):
        generator = MamlGenerator(FakeExtractor(), FakeExtractor(text=""), FakeExtractor(text="Later"))
        command = generator.generate(MergeCmdlet)
        assert command.details.synopsis == [""]
        assert parameters_by_name(command)["Named"].description == [""]

    def test_first_opinion_wins(self):
        generator = MamlGenerator(FakeExtractor(text="First"), FakeExtractor(text="Second"))
        assert generator.generate(MergeCmdlet).description == ["First"]

    def test_empty_list_is_not_final(self):
        examples = [CommandExample(title="From C")]
        generator = MamlGenerator(FakeExtractor(), FakeExtractor(items=[]), FakeExtractor(items=examples))
        command = generator.generate(MergeCmdlet)
        assert command.examples == examples
        assert command.return_values == examples
        assert command.input_types == examples

    def test_no_opinion_then_empty_list(self):
        generator = MamlGenerator(FakeExtractor(), FakeExtractor(items=[]))
        command = generator.generate(MergeCmdlet)
        assert command.examples == []
        assert command.return_values == []
        assert command.input_types == []

    def test_no_opinion_defaults(self):
        command = MamlGenerator(FakeExtractor()).generate(MergeCmdlet)
        assert command.details.synopsis == [""]
        assert command.description == [""]
        assert parameters_by_name(command)["Named"].description == []

    def test_examples_sorted_by_title_stably(self):
        examples = [
            CommandExample(title="b", code="1"),
            CommandExample(title="a"),
            CommandExample(title="b", code="2"),
        ]
        command = MamlGenerator(FakeExtractor(items=examples)).generate(MergeCmdlet)
        assert [(e.title, e.code) for e in command.examples] == [("a", ""), ("b", "1"), ("b", "2")]

    def test_reflection_takes_precedence(self):
        generator = MamlGenerator(ReflectionDocumentationExtractor(), FakeExtractor(text="Fallback"))
        assert generator.generate(DeclaredSynopsisCmdlet).details.synopsis == ["Declared"]


# ============================================================================
# VALIDATION TESTS
# ============================================================================


class TestValidation:
    """Test argument validation."""

    def test_none_cmdlet_type(self, generator):
        with pytest.raises(MissingArgumentError) as exc_info:
            generator.generate(None)
        assert exc_info.value.argument_name == "cmdlet_type"

    def test_not_a_cmdlet(self, generator):
        with pytest.raises(NotACmdletError) as exc_info:
            generator.generate(FakeExtractor)
        assert exc_info.value.argument_name == "cmdlet_type"
        assert "FakeExtractor' does not implement a cmdlet" in str(exc_info.value)
        assert "mamlgen.declarations.Cmdlet" in str(exc_info.value)

    def test_not_a_cmdlet_is_value_error(self, generator):
        with pytest.raises(ValueError):
            generator.generate(Cmdlet)

    def test_none_extractors(self):
        with pytest.raises(MissingArgumentError):
            MamlGenerator(None)

    def test_none_extractor_in_list(self):
        with pytest.raises(MissingArgumentError):
            MamlGenerator([ReflectionDocumentationExtractor(), None])

    def test_none_module(self, generator):
        with pytest.raises(MissingArgumentError):
            generator.generate_module(None)


# ============================================================================
# CONSTRUCTION TESTS
# ============================================================================


class TestConstruction:
    """Test building generators."""

    def test_default_chain(self):
        kinds = [type(e) for e in MamlGenerator().extractors]
        assert kinds == [
            ReflectionDocumentationExtractor,
            XmlCommentDocumentationExtractor,
            DocstringDocumentationExtractor,
        ]

    def test_iterable_of_extractors(self):
        extractors = [FakeExtractor(), FakeExtractor()]
        assert list(MamlGenerator(extractors).extractors) == extractors

    def test_from_config(self):
        config = GeneratorConfig(
            extractors=["docstrings", "xml-comments"],
            common_namespaces=["builtins", "pathlib"],
            companion_extension=".help.xml",
        )
        generator = MamlGenerator.from_config(config)

        docstrings, xml_comments = generator.extractors
        assert isinstance(docstrings, DocstringDocumentationExtractor)
        assert xml_comments.extension == ".help.xml"
        assert generator.common_namespaces == ("builtins", "pathlib")

    def test_paragraph_helper(self):
        assert MamlGenerator.to_paragraphs("a\nb") == ["a", "b"]


# ============================================================================
# MODULE GENERATION TESTS
# ============================================================================


class TestGenerateModule:
    """Test generation for every cmdlet in a module."""

    def test_generate_module(self, generator, greeting_module):
        help_items = generator.generate_module(greeting_module)
        assert help_items.schema == "maml"
        assert [c.details.name for c in help_items.commands] == ["Get-Greeting", "Send-Greeting"]
