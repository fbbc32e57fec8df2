"""
exception_factory command line entry point.

Inspect the built-in parent catalog or resolve a name the way the import hook
would, printing the generated type's method resolution order.
"""
import argparse
import logging
import sys
from typing import List, Optional

from exception_factory.core.config import load_config
from exception_factory.core.exceptions import (
    ConfigurationError,
    ExceptionTypeNotFoundError,
    ParentTypeNotFoundError,
    TemplateLoadError,
)
from exception_factory.core.registry import ExceptionRegistry, is_generated

EXIT_DECLINED = 1
EXIT_PARENT_NOT_FOUND = 2
EXIT_CONFIG_ERROR = 3


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the exception_factory CLI."""
    args = _parse_command_line_arguments(argv)
    logger = _setup_logging(args.debug)

    try:
        registry = _create_registry(args)
    except (ConfigurationError, TemplateLoadError) as e:
        logger.error(str(e))
        print(f"error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if args.command == "builtins":
        return _print_builtins(registry)
    return _resolve_name(registry, args.name)


def _parse_command_line_arguments(argv: Optional[List[str]]) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(prog="exception-factory", description="Lazy exception type registry")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", type=str, default=None,
                        help="Path to a YAML registry configuration (default: $EXCEPTION_FACTORY_CONFIG)")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("builtins", help="List the built-in parent catalog")

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a fully-qualified exception name")
    resolve_parser.add_argument("name", help="Dotted name, e.g. acme.data.NotFoundException")
    resolve_parser.add_argument("--prefix", action="append", default=[],
                                help="Additional package prefix (repeatable)")
    resolve_parser.add_argument("--override", action="append", default=[], metavar="SHORT=PARENT",
                                help="Explicit parent for a short name (repeatable)")
    return parser.parse_args(argv)


def _setup_logging(debug_mode: bool) -> logging.Logger:
    """Setup console logging for the CLI process."""
    log_level = logging.DEBUG if debug_mode else logging.WARNING

    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=log_level,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    logging.getLogger("exception_factory").setLevel(log_level)
    return logging.getLogger("exception_factory.cli")


def _create_registry(args: argparse.Namespace) -> ExceptionRegistry:
    registry = ExceptionRegistry(load_config(args.config))
    for prefix in getattr(args, "prefix", []):
        try:
            registry.add_package_prefix(prefix)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
    for override in getattr(args, "override", []):
        short_name, sep, parent = override.partition("=")
        if not sep or not short_name or not parent:
            raise ConfigurationError(f"Invalid override {override!r}, expected SHORT=PARENT")
        registry.set_parent_override(short_name, parent)
    registry.initialize()
    return registry


def _print_builtins(registry: ExceptionRegistry) -> int:
    width = max(len(name) for name in registry.builtin_parents)
    for short_name in sorted(registry.builtin_parents):
        print(f"{short_name:<{width}}  builtins.{registry.builtin_parents[short_name]}")
    return 0


def _resolve_name(registry: ExceptionRegistry, name: str) -> int:
    try:
        exc_type = registry.get_or_create(name)
    except ExceptionTypeNotFoundError as e:
        print(f"declined: {e}", file=sys.stderr)
        return EXIT_DECLINED
    except ParentTypeNotFoundError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_PARENT_NOT_FOUND

    origin = "generated" if is_generated(exc_type) else "existing"
    print(f"{name} ({origin})")
    for klass in exc_type.__mro__:
        print(f"  {klass.__module__}.{klass.__qualname__}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
