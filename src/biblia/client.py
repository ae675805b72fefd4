"""Core client for the Biblia web API."""

import logging
import re
from typing import Any, Literal, Mapping, Optional, get_args
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

BASE_URL = "https://api.biblia.com/v1/bible"

BibleVersion = Literal[
    "darby", "asv", "ar-vandyke", "byz", "elzevir", "emphbbl",
    "it-diodati1649", "kjv", "kjv1900", "lsg", "eo-zamenbib", "leb", "scrmorph",
    "fi-raamattu", "rvr60", "rva", "bb-sbb-rusbt", "scr", "tr1894mr", "svv",
    "stephens", "tanakh", "wbtc-ptbrnt", "wh1881mr", "ylt",
]

BIBLE_VERSIONS: tuple[str, ...] = get_args(BibleVersion)

PassageStyle = Literal[
    "fullyFormatted", "oneVersePerLine", "oneVersePerLineFullReference",
    "quotation", "simpleParagraphs", "bibleTextOnly", "orationOneParagraph",
    "orationOneVersePerLine", "orationBibleParagraphs", "fullyFormattedWithFootnotes",
]

PASSAGE_STYLES: tuple[str, ...] = get_args(PassageStyle)

DEFAULT_BIBLE = "asv"

# Characters left alone by JavaScript's encodeURIComponent
_URI_SAFE = "!*'()"


# =============================================================================
# Query String Helpers
# =============================================================================

def encode_uri(text: str) -> str:
    """Percent-encode a passage or query the way encodeURIComponent does."""
    return quote(text, safe=_URI_SAFE)


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def set_params(options: Optional[Mapping[str, Any]]) -> str:
    """
    Encode options as a query fragment.

    Each entry becomes ``&key=value&`` in mapping order, so consecutive
    entries are joined by ``&&`` and the fragment ends with ``&``:

        >>> set_params({"mode": "verse", "limit": 5})
        '&mode=verse&&limit=5&'

    Values are not escaped. Booleans are written as ``true``/``false``.
    Empty keys and ``None`` values are skipped.
    """
    params = ""
    if not options:
        return params

    for key, value in options.items():
        if not key or value is None:
            continue
        params = f"{params}&{key}={_render(value)}&"

    return params


def merge_options(
    options: Optional[Mapping[str, Any]] = None, **kwargs: Any
) -> dict[str, Any]:
    """Combine a mapping of API option names with snake_case keyword options."""
    merged = dict(options or {})
    for name, value in kwargs.items():
        merged[_to_camel(name)] = value
    return merged


# =============================================================================
# Client
# =============================================================================

class Biblia:
    """
    Client for the Biblia Bible API.

    Each method issues one GET request and returns the decoded JSON body
    unchanged. Transport and decoding errors from ``requests`` propagate
    as raised; HTTP status codes are not inspected.

    Usage:
        bible = Biblia("your-api-key", "kjv")
        bible.get_passage("John 3:16", style="oneVersePerLine")["text"]
        bible.search("bread", mode="verse", limit=5)
    """

    BASE_URL = BASE_URL

    def __init__(
        self,
        api_key: str,
        bible: BibleVersion = DEFAULT_BIBLE,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            api_key: Key issued at https://bibliaapi.com/docs/API_Keys
            bible: Translation used by ``search`` and ``get_passage``
            session: HTTP transport; a new ``requests.Session`` if omitted
        """
        self.api_key = api_key
        self._bible = bible
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    def __repr__(self) -> str:
        return f"Biblia(bible={self._bible!r})"

    def __enter__(self) -> "Biblia":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self.session.close()

    @property
    def bible(self) -> str:
        """The translation currently used by ``search`` and ``get_passage``."""
        return self._bible

    def set_bible(self, bible: BibleVersion) -> None:
        """Switch the translation for subsequent ``search``/``get_passage`` calls."""
        self._bible = bible

    # -------------------------------------------------------------------------
    # Request plumbing
    # -------------------------------------------------------------------------

    def build_url(self, path: str, query: str = "") -> str:
        """Join base URL, endpoint path and query fragment, then append the key."""
        return f"{self.BASE_URL}{path}?{query}key={self.api_key}"

    def _get(self, url: str) -> Any:
        logger.debug("GET %s", _mask_key(url))
        response = self.session.get(url)
        return response.json()

    # -------------------------------------------------------------------------
    # Endpoints
    # -------------------------------------------------------------------------

    def get_bibles(self, options: Optional[Mapping[str, Any]] = None, **kwargs) -> dict:
        """
        List the available bibles and their descriptions.

        Options: bible, query, strictQuery, start, limit.
        """
        params = set_params(merge_options(options, **kwargs))
        return self._get(self.build_url("/find.js", params))

    def get_bible_names(self) -> list[str]:
        """Return the identifier of every available bible, in listing order."""
        result = self.get_bibles()
        return [entry["bible"] for entry in result["bibles"]]

    def parse_text(self, passage: str, options: Optional[Mapping[str, Any]] = None, **kwargs) -> dict:
        """
        Parse text as one or more Bible passages.

        Can also render a reference in short, medium or long form via ``style``.
        """
        params = set_params(merge_options(options, **kwargs))
        query = f"passage={encode_uri(passage)}&{params}"
        return self._get(self.build_url("/parse", query))

    def scan_text(self, text: str, options: Optional[Mapping[str, Any]] = None, **kwargs) -> dict:
        """
        Find Bible references mentioned in arbitrary text.

        The text is sent as given, without percent-encoding. Option:
        tagChapters (tag chapter references without a verse; default true).
        """
        params = set_params(merge_options(options, **kwargs))
        return self._get(self.build_url("/scan.js", f"{params}text={text}&"))

    def compare(self, first_verse: str, second_verse: str) -> dict:
        """Compare two Bible references."""
        query = f"first={encode_uri(first_verse)}&second={encode_uri(second_verse)}&"
        return self._get(self.build_url("/compare", query))

    def search(self, query: str, options: Optional[Mapping[str, Any]] = None, **kwargs) -> dict:
        """
        Search the current translation.

        Options: mode (verse or fuzzy), limit, preview (none, text, html),
        sort (relevance or passage), passages (e.g. "Matthew-John"), start.
        """
        bible = self._bible
        params = set_params(merge_options(options, **kwargs))
        return self._get(
            self.build_url(f"/search/{bible}.js", f"query={encode_uri(query)}&{params}")
        )

    def get_passage(self, passage: str, options: Optional[Mapping[str, Any]] = None, **kwargs) -> dict:
        """
        Return the content of a passage in the current translation.

        A truthy ``html`` option requests HTML wrapped in JSON; it selects
        the ``.html.js`` endpoint and is not sent as a parameter.
        """
        bible = self._bible
        merged = merge_options(options, **kwargs)
        fmt = "html." if merged.pop("html", False) else ""
        params = set_params(merged)
        return self._get(
            self.build_url(
                f"/content/{bible}.{fmt}js", f"{params}passage={encode_uri(passage)}&"
            )
        )


def _mask_key(url: str) -> str:
    return re.sub(r"key=[^&]*$", "key=***", url)
