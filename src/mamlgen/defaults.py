"""Default value discovery for cmdlet parameters.

The default of a parameter is whatever a freshly constructed cmdlet holds in
the property. The cmdlet is constructed without arguments, read once and
discarded. Any failure along the way means "no default available".
"""

import logging
from typing import Any

from mamlgen.reflector import PropertyInfo

logger = logging.getLogger(__name__)


def _discard(instance: Any) -> None:
    close = getattr(instance, "close", None)
    if callable(close):
        try:
            close()
        except Exception as e:
            logger.debug(f"Closing throwaway {type(instance).__qualname__} failed: {e}")


def read_default_value(cmdlet_type: type, prop: PropertyInfo) -> str | None:
    """Read a property's value off a throwaway zero-argument instance.

    Args:
        cmdlet_type: Cmdlet class to instantiate
        prop: Property to read

    Returns:
        The value as text, or None if the class cannot be constructed without
        arguments, the property cannot be read, or its value is None
    """
    if not prop.can_read:
        return None

    try:
        instance = cmdlet_type()
    except Exception as e:
        logger.debug(f"Cannot construct {cmdlet_type.__qualname__} without arguments: {e}")
        return None

    try:
        value = getattr(instance, prop.name)
    except Exception as e:
        logger.debug(f"No default for {cmdlet_type.__qualname__}.{prop.name}: {e}")
        return None
    finally:
        _discard(instance)

    return None if value is None else str(value)
