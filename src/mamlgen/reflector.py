"""Cmdlet introspection.

Answers three questions about Python classes:
- Is this class a cmdlet? (public, top-level, concrete, derives from Cmdlet,
  decorated with @cmdlet carrying a non-empty verb and noun)
- Which properties does it expose, in which order?
- Which Parameter declarations does each property carry?

Properties are public class annotations (readable) and public ``property``
objects (readable only when they have a getter). Annotation metadata comes
from ``typing.Annotated``; for a property the getter's return annotation is
used, or the setter's value annotation for a write-only property.
"""

import inspect
import logging
import sys
import types
import typing
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, get_args, get_origin

from mamlgen.declarations import Cmdlet, CmdletDeclaration, Parameter, get_declarations
from mamlgen.errors import MissingArgumentError

logger = logging.getLogger(__name__)

COMMON_NAMESPACES = ("builtins",)


@dataclass(frozen=True)
class PropertyInfo:
    """A property of a cmdlet class.

    Attributes:
        name: Property name
        declaring_type: Class that declares the property
        value_type: Annotated value type (None when unannotated)
        metadata: typing.Annotated metadata, in declaration order
        can_read: Property has a getter
    """

    name: str
    declaring_type: type
    value_type: Any
    metadata: tuple[Any, ...] = ()
    can_read: bool = True

    def get_metadata(self, kind: type) -> list[Any]:
        return [item for item in self.metadata if isinstance(item, kind)]


def _split_annotation(hint: Any) -> tuple[Any, tuple[Any, ...]]:
    if get_origin(hint) is Annotated:
        value_type, *metadata = get_args(hint)
        return value_type, tuple(metadata)
    return hint, ()


def _resolve_each(owner: str, raw: dict[str, Any], globalns: dict, localns: dict | None) -> dict[str, Any]:
    # Keep what resolves; an unresolvable hint only drops its own entry.
    resolved = {}
    for name, hint in raw.items():
        if isinstance(hint, str):
            try:
                hint = eval(hint, globalns, localns)
            except NameError as e:
                logger.debug(f"Skipping unresolved annotation {owner}.{name}: {e}")
                continue
        resolved[name] = hint
    return resolved


def _class_annotations(klass: type) -> dict[str, Any]:
    try:
        return inspect.get_annotations(klass, eval_str=True)
    except NameError:
        module = sys.modules.get(klass.__module__)
        globalns = vars(module) if module is not None else {}
        return _resolve_each(klass.__qualname__, inspect.get_annotations(klass), globalns, dict(vars(klass)))


def _function_hints(func: Any) -> dict[str, Any]:
    try:
        return typing.get_type_hints(func, include_extras=True)
    except NameError:
        return _resolve_each(func.__qualname__, inspect.get_annotations(func), getattr(func, "__globals__", {}), None)


def _property_annotation(member: property) -> tuple[Any, bool]:
    if member.fget is not None:
        return _function_hints(member.fget).get("return"), True
    if member.fset is not None:
        names = list(inspect.signature(member.fset).parameters)
        if len(names) >= 2:
            return _function_hints(member.fset).get(names[1]), False
    return None, False


def get_properties(cmdlet_type: type) -> list[PropertyInfo]:
    """List the public properties of a class.

    Base classes come first; within a class, annotated attributes come in
    annotation order followed by property objects in definition order. A
    redefinition in a subclass keeps the position of the base class definition.

    Args:
        cmdlet_type: Class to inspect

    Returns:
        List of PropertyInfo

    Raises:
        MissingArgumentError: If cmdlet_type is None
    """
    if cmdlet_type is None:
        raise MissingArgumentError("cmdlet_type")

    found: dict[str, PropertyInfo] = {}
    for klass in reversed(cmdlet_type.__mro__):
        if klass is object:
            continue
        for name, hint in _class_annotations(klass).items():
            if get_origin(hint) is ClassVar:
                continue
            value_type, metadata = _split_annotation(hint)
            found[name] = PropertyInfo(name, klass, value_type, metadata, can_read=True)
        for name, member in vars(klass).items():
            if isinstance(member, property):
                hint, can_read = _property_annotation(member)
                value_type, metadata = _split_annotation(hint)
                found[name] = PropertyInfo(name, klass, value_type, metadata, can_read=can_read)

    return [info for name, info in found.items() if not name.startswith("_")]


def get_parameter_declarations(prop: PropertyInfo) -> list[Parameter]:
    """Get the Parameter declarations of a property, in declaration order."""
    if prop is None:
        raise MissingArgumentError("prop")
    return prop.get_metadata(Parameter)


def is_cmdlet_parameter(prop: PropertyInfo) -> bool:
    """Check whether a property is a public property with one or more Parameter declarations."""
    if prop is None:
        raise MissingArgumentError("prop")
    return not prop.name.startswith("_") and bool(get_parameter_declarations(prop))


def get_cmdlet_declaration(cmdlet_type: type) -> CmdletDeclaration | None:
    declarations = get_declarations(cmdlet_type, CmdletDeclaration)
    return declarations[0] if declarations else None


def is_cmdlet(cmdlet_type: Any) -> bool:
    """Check whether a class implements a cmdlet.

    Args:
        cmdlet_type: Candidate class

    Returns:
        True if the class is public, top-level, non-abstract, derives from
        Cmdlet and is decorated with @cmdlet (non-empty verb and noun)

    Raises:
        MissingArgumentError: If cmdlet_type is None
    """
    if cmdlet_type is None:
        raise MissingArgumentError("cmdlet_type")

    if not inspect.isclass(cmdlet_type) or isinstance(cmdlet_type, types.GenericAlias):
        return False
    if cmdlet_type is Cmdlet or not issubclass(cmdlet_type, Cmdlet):
        return False
    if inspect.isabstract(cmdlet_type):
        return False
    # Nested and private classes are not public.
    if cmdlet_type.__name__.startswith("_") or cmdlet_type.__qualname__ != cmdlet_type.__name__:
        return False

    declaration = get_cmdlet_declaration(cmdlet_type)
    return declaration is not None and bool(declaration.verb) and bool(declaration.noun)


def get_cmdlet_types(module: types.ModuleType) -> list[type]:
    """List the cmdlet classes defined in a module, in definition order.

    Raises:
        MissingArgumentError: If module is None
    """
    if module is None:
        raise MissingArgumentError("module")

    cmdlet_types = []
    for member in vars(module).values():
        if (
            inspect.isclass(member)
            and member.__module__ == module.__name__
            and member not in cmdlet_types
            and is_cmdlet(member)
        ):
            cmdlet_types.append(member)
    logger.debug(f"Found {len(cmdlet_types)} cmdlet(s) in {module.__name__}")
    return cmdlet_types


def type_display_name(value_type: Any, common_namespaces: tuple[str, ...] = COMMON_NAMESPACES) -> str:
    """Name a value type the way help content expects.

    Classes from a common namespace use their short name, other classes their
    fully qualified name. Other annotations (generic aliases, unions) use their
    repr without a "typing." prefix.

    Example:
        >>> type_display_name(str)
        'str'
        >>> type_display_name(pathlib.Path)
        'pathlib.Path'
    """
    if inspect.isclass(value_type) and not isinstance(value_type, types.GenericAlias):
        if value_type.__module__ in common_namespaces:
            return value_type.__qualname__
        return f"{value_type.__module__}.{value_type.__qualname__}"
    return repr(value_type).removeprefix("typing.")
