"""
Shared fixtures for Biblia client tests.

The HTTP transport is a MagicMock session, so every test sees the exact
URL the client requested and no request leaves the process.
"""
from unittest.mock import MagicMock

import pytest

from biblia import Biblia


API_KEY = "test-key"
BASE = "https://api.biblia.com/v1/bible"


def make_session(payload=None):
    """Session whose get() returns a response decoding to ``payload``."""
    session = MagicMock()
    session.get.return_value.json.return_value = payload if payload is not None else {}
    return session


def requested_url(session) -> str:
    """The URL of the most recent GET."""
    args, _ = session.get.call_args
    return args[0]


@pytest.fixture
def session():
    return make_session()


@pytest.fixture
def client(session):
    return Biblia(API_KEY, session=session)


@pytest.fixture
def bibles_payload():
    return {
        "bibles": [
            {
                "bible": "asv",
                "title": "American Standard Version",
                "abbreviatedTitle": "ASV",
                "publicationDate": "1901",
                "languages": ["en"],
                "publishers": [],
                "imageUrl": "",
                "description": "",
                "searchFields": ["Bible"],
                "copyright": "Public domain",
                "extendedCopyright": "",
            },
            {"bible": "kjv", "title": "King James Version"},
        ]
    }


@pytest.fixture
def comparison_payload():
    return {
        "equal": False,
        "intersects": True,
        "compare": 1,
        "startToStart": 1,
        "startToEnd": -1,
        "endToStart": 1,
        "endToEnd": -1,
        "after": False,
        "before": False,
        "subset": True,
        "strictSubset": True,
        "superset": False,
        "strictSuperset": False,
    }
