"""Loggers for recordlens components.

Every component logs under the ``recordlens`` root logger, one child per
component (``recordlens.probe``, ``recordlens.backend.handle``, ...).
The library only carries a :class:`logging.NullHandler`; applications
opt in to output with :func:`configure_logging` or their own handlers.

Backend selection is logged at INFO by the probe. Everything else,
including absent runtime hooks and failing accessors or constructors,
is logged at DEBUG just before the corresponding exception is raised.

Example:
    >>> import logging
    >>> from recordlens.logging import configure_logging
    >>> configure_logging(level=logging.DEBUG)
"""

import logging
from typing import Optional


RECORDLENS_ROOT_LOGGER = "recordlens"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logging.getLogger(RECORDLENS_ROOT_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str = "") -> logging.Logger:
    """Get the logger of a recordlens component.

    Args:
        name: Dotted component name relative to the root, e.g.
            ``"backend.handle"``. Empty for the root logger.
    """
    if name:
        return logging.getLogger(f"{RECORDLENS_ROOT_LOGGER}.{name}")
    return logging.getLogger(RECORDLENS_ROOT_LOGGER)


def _output_handlers(logger: logging.Logger):
    return [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]


def configure_logging(
    level: int = logging.INFO,
    format_string: str = DEFAULT_FORMAT,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Send recordlens log records to a handler.

    A handler is installed only once; later calls just change the level.

    Args:
        level: Level of the root recordlens logger and its handler.
        format_string: Format for the installed handler.
        handler: Handler to install. Defaults to a ``StreamHandler``.

    Returns:
        The root recordlens logger.
    """
    logger = get_logger()
    logger.setLevel(level)

    if not _output_handlers(logger):
        if handler is None:
            handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(format_string))
        logger.addHandler(handler)

    for installed in _output_handlers(logger):
        installed.setLevel(level)
    return logger


def set_level(level: int, component: str = "") -> None:
    """Set the level of one component, or of all of recordlens.

    Setting the root level also adjusts the handlers installed by
    :func:`configure_logging`.
    """
    logger = get_logger(component)
    logger.setLevel(level)
    if not component:
        for handler in _output_handlers(logger):
            handler.setLevel(level)
