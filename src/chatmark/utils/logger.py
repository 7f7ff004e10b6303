"""Logger naming for chatmark.

Every module logs under the ``chatmark`` namespace, so applications can tune
the whole library with ``logging.getLogger("chatmark")``. The package root
logger carries a NullHandler; handlers and levels are left to the host
application.
"""

import logging

ROOT_LOGGER_NAME = "chatmark"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` inside the chatmark namespace.

    Example:
        >>> get_logger("chatmark.parser").name
        'chatmark.parser'
        >>> get_logger("bot").name
        'chatmark.bot'
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
