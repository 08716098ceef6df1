"""
Loggers for the schema model.

Every module logs through a child of "apigen.schema" named after its place in
the package:

    apigen_schema.graph.relationship_graph -> apigen.schema.graph.relationship_graph

Nothing is printed until the embedding generator run calls configure_logging();
until then records propagate to whatever the host application configured.
"""

import logging
import sys

LOGGER_NAME = "apigen.schema"
_PACKAGE = "apigen_schema"


def get_logger(name: str = None) -> logging.Logger:
    """Logger for a module ``__name__``; the hierarchy root when name is None."""
    if not name or name in (LOGGER_NAME, _PACKAGE):
        return logging.getLogger(LOGGER_NAME)
    if name.startswith(_PACKAGE + "."):
        name = name[len(_PACKAGE) + 1:]
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def _level_for(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


class _SchemaHandler(logging.StreamHandler):
    """The one handler configure_logging() owns on the hierarchy root."""


class _SchemaFormatter(logging.Formatter):
    """``[WARNING] message``; DEBUG records also name the emitting module."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno <= logging.DEBUG:
            module = record.name[len(LOGGER_NAME) + 1:] or LOGGER_NAME
            return f"[{record.levelname}] {module}: {message}"
        return f"[{record.levelname}] {message}"


def configure_logging(verbose: bool = False, quiet: bool = False, stream=None) -> logging.Logger:
    """
    Route apigen.schema records to a single stream handler.

    verbose selects DEBUG (skipped keys, converted schemas), quiet selects
    WARNING (cycles, conversion failures), the default is INFO. Calling it
    again only changes the level; it never stacks handlers.

    Returns:
        The hierarchy root logger
    """
    level = _level_for(verbose, quiet)
    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(level)
    root.propagate = False

    handler = next((h for h in root.handlers if isinstance(h, _SchemaHandler)), None)
    if handler is None:
        handler = _SchemaHandler(stream or sys.stderr)
        handler.setFormatter(_SchemaFormatter())
        root.addHandler(handler)
    elif stream is not None:
        handler.setStream(stream)
    handler.setLevel(level)
    return root
