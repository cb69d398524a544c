"""Documentation extractor reading XML documentation comment files.

Each module can ship a companion document next to its source file, with the
same base name and an ".xml" extension (``greeting.py`` -> ``greeting.xml``).
The document uses the XML doc-comment layout:

    <doc>
      <members>
        <member name="T:package.module.GetGreeting">
          <summary>...</summary>
          <remarks>...</remarks>
          <example>...</example>
          <returns>...</returns>
        </member>
        <member name="P:package.module.GetGreeting.Name">
          <summary>...</summary>
        </member>
      </members>
    </doc>

Documents are parsed once per module and cached for the life of the
extractor. A missing document is not cached, so one created later is found.
A malformed document is cached as "no documentation".

A ``<returns>`` node names its type in one of two ways. When it has a
``<see>`` carrying any attribute (``cref``, ``uri`` or another such as
``langword``), the type name is the ``cref`` value, or "" without one, and
every paragraph describes the value. Otherwise the first paragraph is the
type name and the rest describe the value.
"""

import logging
import sys
import threading
import types
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

from mamlgen.errors import MissingArgumentError
from mamlgen.extractors.base import NO_OPINION, DocumentationExtractor, NoOpinion
from mamlgen.maml.models import CommandExample, CommandValue, DataType
from mamlgen.reflector import PropertyInfo
from mamlgen.text import to_paragraphs

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".xml"


def _inner_text(element: ET.Element) -> str:
    return "".join(element.itertext())


def _flatten(paragraph_lists: list[list[str]]) -> list[str]:
    return [paragraph for paragraphs in paragraph_lists for paragraph in paragraphs]


def type_member_id(cls: type) -> str:
    return f"T:{cls.__module__}.{cls.__qualname__}"


def property_member_id(prop: PropertyInfo) -> str:
    declaring_type = prop.declaring_type
    return f"P:{declaring_type.__module__}.{declaring_type.__qualname__}.{prop.name}"


class XmlDoc:
    """Parsed XML documentation comments for one module."""

    def __init__(self, root: ET.Element):
        self._members: dict[str, ET.Element] = {}
        for member in root.iter("member"):
            name = member.get("name")
            if name:
                self._members[name] = member

    @classmethod
    def load(cls, path: Path) -> "XmlDoc":
        """Parse a documentation file.

        Raises:
            ET.ParseError: If the file is not well-formed XML
            OSError: If the file cannot be read
        """
        return cls(ET.parse(path).getroot())

    def __len__(self) -> int:
        return len(self._members)

    def _element_text(self, member_id: str, tag: str) -> str | None:
        member = self._members.get(member_id)
        if member is None:
            return None
        element = member.find(tag)
        if element is None:
            return None
        return _inner_text(element).strip()

    def get_summary(self, member_id: str) -> str | None:
        return self._element_text(member_id, "summary")

    def get_remarks(self, member_id: str) -> str | None:
        return self._element_text(member_id, "remarks")

    def get_examples(self, member_id: str) -> list[ET.Element]:
        member = self._members.get(member_id)
        return [] if member is None else member.findall("example")

    def get_returns(self, member_id: str) -> list[ET.Element]:
        member = self._members.get(member_id)
        return [] if member is None else member.findall("returns")


def _example(node: ET.Element) -> CommandExample:
    paras = node.findall("para")
    description = _flatten(
        [to_paragraphs(_inner_text(p).strip()) for p in paras if p.get("type") == "description"]
    )
    remarks = _flatten(
        [to_paragraphs(_inner_text(p).strip()) for p in paras if p.get("type") != "description"]
    )
    title = node.find("title")

    return CommandExample(
        title=_inner_text(title).strip() if title is not None else "Example",
        description=description,
        code="\n".join(_inner_text(code) for code in node.findall("code")),
        remarks=remarks,
    )


def _return_value(node: ET.Element) -> CommandValue:
    see = node.find("see")
    paras = node.findall("para")
    if see is None and not paras:
        paragraphs = to_paragraphs(_inner_text(node).strip())
    else:
        paragraphs = _flatten([to_paragraphs(_inner_text(p).strip()) for p in paras])

    if see is None or not see.attrib:
        # The first paragraph names the type; the rest describes the value.
        if not paragraphs:
            paragraphs = to_paragraphs(_inner_text(node).strip())
        name, *description = paragraphs
        return CommandValue(data_type=DataType(name=name), description=description)

    uri = see.get("uri")
    return CommandValue(
        data_type=DataType(
            name=(see.get("cref") or "").strip(),
            uri=uri.strip() if uri is not None else None,
            description=to_paragraphs(_inner_text(see).strip()),
        ),
        description=paragraphs,
    )


class XmlCommentDocumentationExtractor(DocumentationExtractor):
    """Cmdlet documentation extractor that reads XML documentation comments.

    Thread-safety: the per-module document cache is guarded by a lock, and a
    document is read and parsed while holding it, so concurrent first access
    for one module loads it once.

    Example:
        >>> extractor = XmlCommentDocumentationExtractor()
        >>> extractor.get_cmdlet_synopsis(GetGreeting)  # parses greeting.xml
        >>> extractor.get_cmdlet_description(GetGreeting)  # cache hit
    """

    def __init__(self, extension: str = DEFAULT_EXTENSION):
        self.extension = extension
        self._documentation_cache: dict[types.ModuleType, XmlDoc | None] = {}
        self._cache_lock = threading.Lock()
        self._hit_count = 0
        self._miss_count = 0

    def get_documentation_path(self, module: types.ModuleType) -> Path | None:
        """Locate the companion document of a module (it may not exist)."""
        if module is None:
            raise MissingArgumentError("module")

        module_file = getattr(module, "__file__", None)
        if not module_file:
            return None
        return Path(module_file).with_suffix(self.extension)

    def get_module_documentation(self, module: types.ModuleType) -> XmlDoc | None:
        """Get the parsed documentation for a module.

        Args:
            module: The module

        Returns:
            XmlDoc, or None if the module has no (well-formed) companion document
        """
        if module is None:
            raise MissingArgumentError("module")

        with self._cache_lock:
            if module in self._documentation_cache:
                self._hit_count += 1
                return self._documentation_cache[module]

            path = self.get_documentation_path(module)
            if path is None or not path.is_file():
                logger.debug(f"No documentation file for module {module.__name__}")
                return None

            self._miss_count += 1
            try:
                documentation = XmlDoc.load(path)
                logger.debug(f"Loaded {len(documentation)} documented member(s) from {path}")
            except (ET.ParseError, OSError) as e:
                logger.warning(f"Ignoring malformed documentation file {path}: {e}")
                documentation = None

            self._documentation_cache[module] = documentation
            return documentation

    def invalidate(self, module: types.ModuleType | None = None) -> None:
        """Drop cached documentation for one module, or for all modules."""
        with self._cache_lock:
            if module is None:
                self._documentation_cache.clear()
            else:
                self._documentation_cache.pop(module, None)

    def get_cache_stats(self) -> dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with cached module count, hit and miss counts
        """
        with self._cache_lock:
            return {
                "cached_modules": len(self._documentation_cache),
                "hit_count": self._hit_count,
                "miss_count": self._miss_count,
            }

    def _type_documentation(self, cls: type) -> XmlDoc | None:
        module = sys.modules.get(cls.__module__)
        if module is None:
            return None
        return self.get_module_documentation(module)

    def get_cmdlet_synopsis(self, cmdlet_type: type) -> str | NoOpinion:
        if cmdlet_type is None:
            raise MissingArgumentError("cmdlet_type")

        documentation = self._type_documentation(cmdlet_type)
        if documentation is None:
            return NO_OPINION
        summary = documentation.get_summary(type_member_id(cmdlet_type))
        return NO_OPINION if summary is None else summary

    def get_cmdlet_description(self, cmdlet_type: type) -> str | NoOpinion:
        if cmdlet_type is None:
            raise MissingArgumentError("cmdlet_type")

        documentation = self._type_documentation(cmdlet_type)
        if documentation is None:
            return NO_OPINION
        remarks = documentation.get_remarks(type_member_id(cmdlet_type))
        return NO_OPINION if remarks is None else remarks

    def get_parameter_description(self, prop: PropertyInfo) -> str | NoOpinion:
        if prop is None:
            raise MissingArgumentError("prop")

        documentation = self._type_documentation(prop.declaring_type)
        if documentation is None:
            return NO_OPINION
        summary = documentation.get_summary(property_member_id(prop))
        return NO_OPINION if summary is None else summary

    def get_cmdlet_examples(self, cmdlet_type: type) -> list[CommandExample] | NoOpinion:
        if cmdlet_type is None:
            raise MissingArgumentError("cmdlet_type")

        documentation = self._type_documentation(cmdlet_type)
        if documentation is None:
            return NO_OPINION
        return [_example(node) for node in documentation.get_examples(type_member_id(cmdlet_type))]

    def get_cmdlet_return_values(self, cmdlet_type: type) -> list[CommandValue] | NoOpinion:
        if cmdlet_type is None:
            raise MissingArgumentError("cmdlet_type")

        documentation = self._type_documentation(cmdlet_type)
        if documentation is None:
            return NO_OPINION
        return [_return_value(node) for node in documentation.get_returns(type_member_id(cmdlet_type))]
