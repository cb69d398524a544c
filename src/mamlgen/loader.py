"""Load the module that holds cmdlet classes.

A target is either an importable module name (``package.cmdlets``) or a path
to a ``.py`` file. A file is imported under its stem and registered in
``sys.modules``, so classes defined in it resolve back to their module. A
stem already registered for another module (``json.py``) is refused.
"""

import importlib
import importlib.util
import logging
import sys
import types
from pathlib import Path

from mamlgen.errors import ModuleLoadError

logger = logging.getLogger(__name__)


def _load_from_path(module_path: Path) -> types.ModuleType:
    if not module_path.is_file():
        raise ModuleLoadError(f"Module file not found: {module_path}")

    # A different module already registered under the stem stays in place.
    name = module_path.stem
    previous = sys.modules.get(name)
    if previous is not None:
        previous_file = getattr(previous, "__file__", None)
        if previous_file is None or Path(previous_file).resolve() != module_path:
            raise ModuleLoadError(f"Cannot load {module_path}: module name '{name}' is already in use by {previous!r}")

    # Sibling modules of the file must be importable.
    module_dir = str(module_path.parent)
    if module_dir not in sys.path:
        sys.path.insert(0, module_dir)

    spec = importlib.util.spec_from_file_location(name, module_path)
    if spec is None or spec.loader is None:
        raise ModuleLoadError(f"Failed to load module spec from {module_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        if previous is None:
            del sys.modules[name]
        else:
            sys.modules[name] = previous
        raise ModuleLoadError(f"Failed to import {module_path}: {e}") from e
    return module


def load_module(target: str) -> types.ModuleType:
    """Import a module by name or by file path.

    Args:
        target: Module name, or path to a .py file

    Returns:
        The imported module

    Raises:
        ModuleLoadError: If the module cannot be found or fails to import
    """
    if not target or not target.strip():
        raise ModuleLoadError("Target module cannot be empty")

    if target.endswith(".py") or "/" in target or "\\" in target:
        module_path = Path(target).expanduser().resolve()
        logger.debug(f"Loading module from file: {module_path}")
        return _load_from_path(module_path)

    logger.debug(f"Importing module: {target}")
    try:
        return importlib.import_module(target)
    except ImportError as e:
        raise ModuleLoadError(f"Cannot import module '{target}': {e}") from e
