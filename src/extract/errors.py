"""
Per-node extraction errors and the diagnostics they are turned into.
"""

from dataclasses import dataclass
from typing import Optional

from syntax.node import Node


class ExtractionError(Exception):
    """Base class for failures on a single syntax node."""

    kind = "ExtractionError"

    def __init__(self, message: str, node: Optional[Node] = None):
        super().__init__(message)
        self.node = node


class MalformedNode(ExtractionError):
    """Raised when a node lacks a child at a position the extractor relies on."""

    kind = "MalformedNode"


class UnsupportedReceiverKind(ExtractionError):
    """Raised when a `def recv.name` receiver is neither self nor a constant."""

    kind = "UnsupportedReceiverKind"


UnclassifiableReceiver = UnsupportedReceiverKind


@dataclass(frozen=True)
class Diagnostic:
    """A recorded, non-fatal extraction failure."""

    kind: str
    message: str
    location: str

    def __str__(self) -> str:
        return f"{self.location}: {self.kind}: {self.message}"

    @classmethod
    def from_error(cls, err: ExtractionError, file_path: str) -> "Diagnostic":
        line = err.node.location.line if err.node is not None else 0
        return cls(err.kind, str(err), f"{file_path}:{line}")
