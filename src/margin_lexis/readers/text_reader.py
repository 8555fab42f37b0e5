"""Plain text document reader."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from . import DocumentReader
from ..constants import ENCODING_UTF8
from ..models import Document
from ..text_processing import build_document


class TextLoadError(Exception):
    """Raised when text cannot be loaded from a file."""


class TextReader(DocumentReader):
    """Reader for plain text documents."""

    def read(self, path: Path, *, encoding: str = ENCODING_UTF8) -> str:
        """Load raw text from a file.

        Raises:
            FileNotFoundError: If the file does not exist.
            TextLoadError: For decoding errors.
        """

        if not path.exists():
            raise FileNotFoundError(path)

        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError as exc:
            raise TextLoadError(f"Failed to decode file {path} with encoding {encoding}") from exc

    def supports(self, path: Path) -> bool:
        return path.suffix.lower() in {".txt", ".text", ".md"}


def load_corpus(paths: Iterable[Path], reader: DocumentReader | None = None) -> List[Document]:
    """Read and tokenize files in order; the file stem becomes the document id.

    Raises:
        TextLoadError: If a file format is not supported by the reader.
    """

    reader = reader or TextReader()
    documents: List[Document] = []
    for path in paths:
        path = Path(path)
        if not reader.supports(path):
            raise TextLoadError(f"Unsupported document format: {path.suffix}")
        documents.append(build_document(reader.read(path), path.stem, title=path.stem))
    return documents
