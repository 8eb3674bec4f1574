"""
Utilities package for the SFRFs toolbox.

Provides the logger that every pipeline component receives explicitly.
"""

from .logger import Logger


def resolve_logger(logger=None):
    """
    Return the given logger or a quiet default one.

    Args:
        logger (Logger, optional): Logger supplied by the caller.

    Returns:
        Logger: Logger to use inside a component.
    """
    if logger is None:
        return Logger.quiet()
    return logger


__all__ = [
    'Logger',
    'resolve_logger'
]
