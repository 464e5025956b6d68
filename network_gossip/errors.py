"""
Exception types raised by topology construction.
"""

from typing import Optional


class NetworkGossipError(Exception):
    """Base class for errors raised by the network_gossip package."""


class InvalidTopologyParameter(NetworkGossipError, ValueError):
    """
    A topology parameter is out of range.

    Raised eagerly, before any graph is built.
    """


class GenerationError(NetworkGossipError):
    """
    A generator could not produce a connected graph within its attempt budget.

    Callers may retry with different parameters (e.g. a larger probability).
    """

    def __init__(self, topology: str, attempts: int, message: Optional[str] = None):
        self.topology = topology
        self.attempts = attempts
        super().__init__(
            message or f"{topology}: no connected graph after {attempts} attempts"
        )
