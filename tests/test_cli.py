"""
Tests for the biblia command-line front end.
"""
import json
from unittest.mock import MagicMock

import pytest
import requests

from biblia.cli import fetch_passages, main
from biblia import Biblia

from conftest import API_KEY, BASE, make_session, requested_url


def run(argv, session):
    return main(["--key", API_KEY, *argv], session=session)


def test_names(capsys, bibles_payload):
    session = make_session(bibles_payload)

    assert run(["names"], session) == 0
    assert capsys.readouterr().out.splitlines() == ["asv", "kjv"]


def test_compare_prints_json(capsys, comparison_payload):
    session = make_session(comparison_payload)

    assert run(["compare", "Ge 3:4", "Ge 3:1-10"], session) == 0
    assert json.loads(capsys.readouterr().out) == comparison_payload
    assert requested_url(session) == (
        f"{BASE}/compare?first=Ge%203%3A4&second=Ge%203%3A1-10&key={API_KEY}"
    )


def test_search_uses_bible_flag(session):
    assert run(["--bible", "kjv", "search", "bread", "--limit", "5"], session) == 0
    assert requested_url(session) == f"{BASE}/search/kjv.js?query=bread&&limit=5&key={API_KEY}"


def test_bibles_filters(session):
    assert run(["bibles", "--query", "a", "--strict"], session) == 0
    assert requested_url(session) == f"{BASE}/find.js?&query=a&&strictQuery=true&key={API_KEY}"


def test_parse(session):
    assert run(["parse", "2 kgs 3-4", "--style", "long"], session) == 0
    assert requested_url(session) == f"{BASE}/parse?passage=2%20kgs%203-4&&style=long&key={API_KEY}"


def test_scan_without_chapter_tags(session):
    assert run(["scan", "Ge 1", "--no-tag-chapters"], session) == 0
    assert requested_url(session) == f"{BASE}/scan.js?&tagChapters=false&text=Ge 1&key={API_KEY}"


def test_passage_plain(capsys):
    session = make_session({"text": "<p>Jesus wept.</p>"})

    assert run(["passage", "John 11:35", "--plain"], session) == 0

    out = capsys.readouterr().out
    assert "John 11:35" in out
    assert "Jesus wept." in out
    assert "<p>" not in out
    assert "/content/asv.html.js?" in requested_url(session)


def test_transport_failure_exits_nonzero(capsys, session):
    session.get.side_effect = requests.ConnectionError("down")

    assert run(["compare", "Ge 1:1", "Ge 1:2"], session) == 1
    assert "compare failed" in capsys.readouterr().err


def test_missing_key(monkeypatch, session):
    monkeypatch.delenv("BIBLIA_API_KEY", raising=False)
    with pytest.raises(SystemExit):
        main(["names"], session=session)


def test_key_from_environment(monkeypatch, bibles_payload):
    monkeypatch.setenv("BIBLIA_API_KEY", "env-key")
    session = make_session(bibles_payload)

    # The default is read when the parser is built
    assert main(["names"], session=session) == 0
    assert requested_url(session).endswith("key=env-key")


def test_unknown_bible_is_rejected(session):
    with pytest.raises(SystemExit):
        run(["--bible", "nope", "names"], session)


class TestFetchPassages:

    def test_results_keep_input_order(self):
        session = MagicMock()

        def get(url):
            response = MagicMock()
            response.json.return_value = {"text": url}
            return response

        session.get.side_effect = get
        client = Biblia(API_KEY, session=session)

        outcomes = fetch_passages(client, ["Ge 1:1", "Ex 1:1", "Le 1:1"], {}, max_workers=3)

        assert [passage for passage, _, _ in outcomes] == ["Ge 1:1", "Ex 1:1", "Le 1:1"]
        assert all(error is None for _, _, error in outcomes)
        assert "passage=Ex%201%3A1" in outcomes[1][1]["text"]

    def test_one_failure_does_not_stop_others(self, capsys):
        session = MagicMock()

        def get(url):
            if "Ex%201" in url:
                raise requests.ConnectionError("down")
            response = MagicMock()
            response.json.return_value = {"text": "ok"}
            return response

        session.get.side_effect = get

        code = run(["passage", "Ge 1:1", "Ex 1:1"], session)

        captured = capsys.readouterr()
        assert code == 1
        assert "Ex 1:1" in captured.err
        assert json.loads(captured.out) == {"text": "ok"}
