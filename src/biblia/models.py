"""Data models for Biblia API responses."""

import json
from dataclasses import dataclass, field, asdict
from typing import Optional

from bs4 import BeautifulSoup


def html_to_text(markup: str) -> str:
    """Strip HTML tags from passage content or search previews."""
    if not markup:
        return ""
    soup = BeautifulSoup(markup, "html.parser")
    return soup.get_text()


class _Record:
    """Shared JSON helpers for response records."""

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


# =============================================================================
# Bible listing (/find)
# =============================================================================

@dataclass
class BibleInfo(_Record):
    """Description of one available bible."""

    bible: str  # e.g., "kjv"
    title: str = ""
    abbreviatedTitle: str = ""
    publicationDate: str = ""
    languages: list[str] = field(default_factory=list)
    publishers: list[str] = field(default_factory=list)
    imageUrl: str = ""
    description: str = ""
    searchFields: list[str] = field(default_factory=list)
    copyright: str = ""
    extendedCopyright: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "BibleInfo":
        return cls(
            bible=data["bible"],
            title=data.get("title", ""),
            abbreviatedTitle=data.get("abbreviatedTitle", ""),
            publicationDate=data.get("publicationDate", ""),
            languages=list(data.get("languages", [])),
            publishers=list(data.get("publishers", [])),
            imageUrl=data.get("imageUrl", ""),
            description=data.get("description", ""),
            searchFields=list(data.get("searchFields", [])),
            copyright=data.get("copyright", ""),
            extendedCopyright=data.get("extendedCopyright", ""),
        )


@dataclass
class BibleList(_Record):
    bibles: list[BibleInfo] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "BibleList":
        return cls(bibles=[BibleInfo.from_dict(b) for b in data.get("bibles", [])])

    def names(self) -> list[str]:
        return [b.bible for b in self.bibles]


# =============================================================================
# Passage content (/content)
# =============================================================================

@dataclass
class Passage(_Record):
    """Passage content; HTML when requested with ``html=True``."""

    text: str

    @classmethod
    def from_dict(cls, data: dict) -> "Passage":
        return cls(text=data.get("text", ""))

    def plain_text(self) -> str:
        return html_to_text(self.text)


# =============================================================================
# Reference parsing (/parse)
# =============================================================================

@dataclass
class ReferenceParts(_Record):
    """Structured book/chapter/verse of a parsed reference."""

    book: str
    chapter: Optional[int] = None
    verse: Optional[int] = None
    endChapter: Optional[int] = None
    endVerse: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict) -> "ReferenceParts":
        return cls(
            book=data.get("book", ""),
            chapter=data.get("chapter"),
            verse=data.get("verse"),
            endChapter=data.get("endChapter"),
            endVerse=data.get("endVerse"),
        )


@dataclass
class ParsedPassage(_Record):
    passage: str  # e.g., "2 Kings 3-4"
    parts: Optional[ReferenceParts] = None

    @classmethod
    def from_dict(cls, data: dict) -> "ParsedPassage":
        parts = data.get("parts")
        return cls(
            passage=data.get("passage", ""),
            parts=ReferenceParts.from_dict(parts) if parts else None,
        )


@dataclass
class ParsedText(_Record):
    passage: str
    passages: list[ParsedPassage] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "ParsedText":
        return cls(
            passage=data.get("passage", ""),
            passages=[ParsedPassage.from_dict(p) for p in data.get("passages", [])],
        )


# =============================================================================
# Text scanning (/scan)
# =============================================================================

@dataclass
class ScannedReference(_Record):
    """A reference found in scanned text, located by character offset."""

    passage: str
    textIndex: int
    textLength: int

    @classmethod
    def from_dict(cls, data: dict) -> "ScannedReference":
        return cls(
            passage=data["passage"],
            textIndex=data["textIndex"],
            textLength=data["textLength"],
        )


@dataclass
class ScanResult(_Record):
    results: list[ScannedReference] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "ScanResult":
        return cls(results=[ScannedReference.from_dict(r) for r in data.get("results", [])])


# =============================================================================
# Reference comparison (/compare)
# =============================================================================

@dataclass
class Comparison(_Record):
    """
    Relationship between two references, as reported by the service.

    The ordering fields hold -1, 0 or 1.
    """

    equal: bool
    intersects: bool
    compare: int
    startToStart: int
    startToEnd: int
    endToStart: int
    endToEnd: int
    after: bool
    before: bool
    subset: bool
    strictSubset: bool
    superset: bool
    strictSuperset: bool

    @classmethod
    def from_dict(cls, data: dict) -> "Comparison":
        return cls(**{name: data[name] for name in cls.__dataclass_fields__})


# =============================================================================
# Search (/search)
# =============================================================================

@dataclass
class SearchHit(_Record):
    title: str  # e.g., "John 6:35"
    preview: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "SearchHit":
        return cls(title=data.get("title", ""), preview=data.get("preview", ""))

    def plain_preview(self) -> str:
        return html_to_text(self.preview)


@dataclass
class SearchResult(_Record):
    resultCount: int = 0
    hitCount: int = 0
    start: int = 0
    limit: Optional[int] = None
    results: list[SearchHit] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "SearchResult":
        return cls(
            resultCount=data.get("resultCount", 0),
            hitCount=data.get("hitCount", 0),
            start=data.get("start", 0),
            limit=data.get("limit"),
            results=[SearchHit.from_dict(r) for r in data.get("results", [])],
        )
