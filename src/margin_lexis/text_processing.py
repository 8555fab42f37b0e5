"""Whitespace/punctuation tokenization into paragraphs, sentences and occurrences."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List

import pandas as pd

from .constants import (
    DOCUMENT,
    LEMMA,
    LEMMA_STRIP_CHARS,
    OCCURRENCE_ID,
    PARAGRAPH_DIALOGUE,
    PARAGRAPH_PROSE,
    POS,
    SENTENCE_ID,
    SURFACE,
    TOKEN_COLUMNS,
)
from .models import Document, Paragraph, Sentence, WordOccurrence

_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")
_SENTENCE_PATTERN = re.compile(r"[^.!?]+[.!?]*")
_WHITESPACE = re.compile(r"\s+")
_STRIP_TABLE = str.maketrans("", "", LEMMA_STRIP_CHARS)
_DIALOGUE_MARKERS = ('"', "«")

TokenDict = Dict[str, object]


def normalize_lemma(word: str) -> str:
    """Lowercase a word and strip sentence punctuation, quotes and brackets."""
    return word.translate(_STRIP_TABLE).lower()


def split_sentences(block: str) -> List[str]:
    """Split a paragraph on sentence-terminating punctuation."""
    return _SENTENCE_PATTERN.findall(block) or [block]


def tokenize_text(text: str, id_prefix: str) -> List[Paragraph]:
    """Tokenize raw text into paragraphs of sentences of word occurrences.

    Occurrence ids are derived from position: ``{prefix}-p{i}-s{j}-w{k}``.
    Blank paragraphs and sentences are skipped. Input with no words at all
    yields a single paragraph holding one empty sentence without occurrences.
    """

    if text is None:
        raise ValueError("text must not be None")

    blocks = [block for block in _PARAGRAPH_SPLIT.split(text) if block.strip()] or [""]
    paragraphs: List[Paragraph] = []
    for p_idx, block in enumerate(blocks):
        paragraph_id = f"{id_prefix}-p{p_idx}"
        raw_sentences = [s.strip() for s in split_sentences(block) if s.strip()] or [""]
        sentences = []
        for s_idx, stripped in enumerate(raw_sentences):
            sentence_id = f"{paragraph_id}-s{s_idx}"
            words = [word for word in _WHITESPACE.split(stripped) if word]
            tokens = tuple(
                WordOccurrence(
                    id=f"{sentence_id}-w{w_idx}",
                    text=word,
                    lemma=normalize_lemma(word),
                )
                for w_idx, word in enumerate(words)
            )
            sentences.append(Sentence(id=sentence_id, text=stripped, tokens=tokens))
        kind = (
            PARAGRAPH_DIALOGUE
            if any(marker in block for marker in _DIALOGUE_MARKERS)
            else PARAGRAPH_PROSE
        )
        paragraphs.append(Paragraph(id=paragraph_id, type=kind, sentences=tuple(sentences)))
    return paragraphs


def build_document(text: str, doc_id: str, title: str = "") -> Document:
    """Tokenize text into a Document using doc_id as the occurrence id prefix."""

    if not doc_id:
        raise ValueError("doc_id must be provided")

    return Document(id=doc_id, title=title or doc_id, paragraphs=tuple(tokenize_text(text, doc_id)))


def create_tokens_dataframe(documents: Iterable[Document]) -> pd.DataFrame:
    """Flatten documents into a DataFrame with one row per occurrence."""

    records: List[TokenDict] = []
    for document in documents:
        for sentence in document.sentences():
            for token in sentence.tokens:
                records.append(
                    {
                        DOCUMENT: document.id,
                        SENTENCE_ID: sentence.id,
                        OCCURRENCE_ID: token.id,
                        SURFACE: token.text,
                        LEMMA: token.lemma,
                        POS: token.pos,
                    }
                )
    return pd.DataFrame(records, columns=TOKEN_COLUMNS)
