from __future__ import annotations

import importlib
import logging

from sqs_worker.core.models import Handler

logger = logging.getLogger(__name__)


# Registry mapping short names to message handlers
_REGISTRY: dict[str, Handler] = {}


def register_handler(name: str, handler: Handler) -> None:
    """
    Register a message handler under a short name.

    Args:
        name: Handler name (e.g., "log")
        handler: Callable taking the message body
    """
    if not callable(handler):
        raise ValueError(f"Handler '{name}' is not callable")
    _REGISTRY[name] = handler


def resolve_handler(ref: str) -> Handler:
    """
    Resolve a handler reference.

    Args:
        ref: Registered name (e.g., "log") or import path "package.module:function"

    Returns:
        The handler callable

    Raises:
        ValueError: If the name is unknown, the import fails, or the target is not callable
    """
    if ref in _REGISTRY:
        return _REGISTRY[ref]

    if ":" not in ref:
        available = ", ".join(sorted(_REGISTRY))
        raise ValueError(
            f"No handler registered for '{ref}'. Available: {available} "
            f"(or use an import path like 'package.module:function')"
        )

    module_name, _, attr_path = ref.partition(":")
    if not module_name or not attr_path:
        raise ValueError(f"Invalid handler reference '{ref}', expected 'package.module:function'")

    try:
        target = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import handler module '{module_name}': {e}") from e

    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise ValueError(f"Module '{module_name}' has no attribute '{attr_path}'") from e

    if not callable(target):
        raise ValueError(f"Handler '{ref}' is not callable")

    logger.debug(f"Resolved handler {ref}")
    return target


def _auto_register() -> None:
    """Register built-in handlers."""
    from sqs_worker.handlers import log_payload

    register_handler("log", log_payload)


_auto_register()
