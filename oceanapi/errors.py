"""Errors raised for invalid arguments passed to the API client."""

from __future__ import annotations


class ArgError(ValueError):
    """An invalid argument, naming the argument and why it was rejected."""

    def __init__(self, arg: str, reason: str) -> None:
        super().__init__(arg, reason)
        self.arg = arg
        self.reason = reason

    def __str__(self) -> str:
        return f"{self.arg} is invalid because {self.reason}"