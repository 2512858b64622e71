import importlib
import re
from collections.abc import Callable
from typing import Any

from .exceptions import ConfigurationError

NAME_PATTERN = re.compile(r"^(?:(?P<module>[a-zA-Z_][a-zA-Z0-9_.]*):)?(?P<function>[a-zA-Z_][a-zA-Z0-9_]*)$")


def parse_function_name(func_name: str) -> tuple[str | None, str]:
    match = NAME_PATTERN.match(func_name)
    if not match:
        raise ConfigurationError(f"Invalid function name format: {func_name}") from None

    return match.group("module"), match.group("function")


def import_function(func_name: str) -> Callable[..., Any]:
    """Import a function given as "module.path:function_name" or "function_name".

    A bare function name is looked up in the ``conftest`` module.

    Raises:
        ConfigurationError: If the function cannot be found or is not callable
    """
    module_path, function_name = parse_function_name(func_name)

    if module_path is None:
        try:
            module = importlib.import_module("conftest")
        except ImportError:
            raise ConfigurationError(f"Function '{function_name}' not found: no conftest module to search") from None
    else:
        try:
            module = importlib.import_module(module_path)
        except ImportError as e:
            raise ConfigurationError(f"Failed to import module '{module_path}'") from e

    if not hasattr(module, function_name):
        raise ConfigurationError(f"Function '{function_name}' not found in module '{module.__name__}'") from None

    func = getattr(module, function_name)
    if not callable(func):
        raise ConfigurationError(f"'{func_name}' is not a callable function") from None

    return func


def resolve_function(func: str | Callable[..., Any] | None) -> Callable[..., Any] | None:
    """Return ``func`` itself if callable, import it if given by name."""
    match func:
        case None:
            return None
        case str():
            return import_function(func)
        case _ if callable(func):
            return func
        case _:
            raise ConfigurationError(f"Expected a callable or import name, got {type(func).__name__}")
