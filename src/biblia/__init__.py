"""
Biblia - Client for the Biblia Bible API: passages, search, reference parsing and comparison.
"""

from .client import (
    Biblia,
    BibleVersion,
    PassageStyle,
    BIBLE_VERSIONS,
    PASSAGE_STYLES,
    BASE_URL,
    encode_uri,
    set_params,
)
from .models import (
    BibleInfo,
    BibleList,
    Passage,
    ReferenceParts,
    ParsedPassage,
    ParsedText,
    ScannedReference,
    ScanResult,
    Comparison,
    SearchHit,
    SearchResult,
)

__all__ = [
    "Biblia",
    "BibleVersion",
    "PassageStyle",
    "BIBLE_VERSIONS",
    "PASSAGE_STYLES",
    "BASE_URL",
    "encode_uri",
    "set_params",
    "BibleInfo",
    "BibleList",
    "Passage",
    "ReferenceParts",
    "ParsedPassage",
    "ParsedText",
    "ScannedReference",
    "ScanResult",
    "Comparison",
    "SearchHit",
    "SearchResult",
]

__version__ = "0.1.0"
