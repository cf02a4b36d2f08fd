"""Internal helpers shared by the squaretag modules."""

from squaretag.utils.logger import ROOT_LOGGER, get_logger

__all__ = [
    "ROOT_LOGGER",
    "get_logger",
]
