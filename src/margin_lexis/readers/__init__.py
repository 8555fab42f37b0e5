"""Corpus readers for source documents."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

__all__ = ["DocumentReader"]


class DocumentReader(ABC):
    """Abstract interface for reading source documents into raw text."""

    @abstractmethod
    def read(self, path: Path) -> str:
        """Read a document and return its full text.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        pass

    @abstractmethod
    def supports(self, path: Path) -> bool:
        """Check if this reader supports the given file."""
        pass
