"""Unit tests for the File provider, its decoders and its query language."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from lade.errors import BackendError, SecretNotFoundError
from lade.sdk.providers import File
from lade.sdk.providers.formats import load_ini, load_toml
from lade.sdk.providers.query import MISSING, QueryError, execute_query, parse_query, render

DOCUMENT = {
    "db": {"password": "pw", "port": 5432},
    "hosts": [{"name": "a"}, {"name": "b"}],
    "dotted.key": "d",
    "empty": None,
}


# ---------------------------------------------------------------------------
# Query language
# ---------------------------------------------------------------------------


class TestQuery:
    @pytest.mark.parametrize(
        "query, steps",
        [
            (".", []),
            (".a", ["a"]),
            (".a.b", ["a", "b"]),
            (".list[0]", ["list", 0]),
            (".list.[1]", ["list", 1]),
            ('.["dotted.key"]', ["dotted.key"]),
            ('."dotted.key"', ["dotted.key"]),
            ('["x"].y', ["x", "y"]),
        ],
    )
    def test_parse(self, query: str, steps: list[str | int]) -> None:
        assert parse_query(query) == steps

    @pytest.mark.parametrize("query", ["a", ".a[", ".a..b", '.["open'])
    def test_parse_error(self, query: str) -> None:
        with pytest.raises(QueryError):
            parse_query(query)

    @pytest.mark.parametrize(
        "query, expected",
        [
            (".db.password", "pw"),
            (".db.port", 5432),
            (".hosts[1].name", "b"),
            ('.["dotted.key"]', "d"),
            (".db.missing", MISSING),
            (".hosts[5]", MISSING),
            (".db[0]", MISSING),
            (".nothing", MISSING),
            (".empty", None),
        ],
    )
    def test_execute(self, query: str, expected: object) -> None:
        assert execute_query(query, DOCUMENT) == expected

    def test_render(self) -> None:
        assert render("s") == "s"
        assert render(5432) == "5432"
        assert render({"a": [1, 2]}) == '{"a":[1,2]}'
        assert render(None) == "null"
        assert render(True) == "true"


# ---------------------------------------------------------------------------
# Decoders
# ---------------------------------------------------------------------------


class TestFormats:
    def test_ini_sections_and_top_level(self) -> None:
        doc = load_ini("top = 1\n[db]\nPassword = pw\n")
        assert doc == {"top": "1", "db": {"Password": "pw"}}

    def test_ini_no_interpolation(self) -> None:
        assert load_ini("[s]\nv = 100%\n") == {"s": {"v": "100%"}}

    def test_toml_dates_become_strings(self) -> None:
        doc = load_toml('[db]\npassword = "pw"\nrotated = 2024-01-02\n')
        assert doc == {"db": {"password": "pw", "rotated": "2024-01-02"}}


# ---------------------------------------------------------------------------
# Provider
# ---------------------------------------------------------------------------


class TestFile:
    def test_accept_requires_query(self) -> None:
        provider = File()
        assert provider.accept("file://s.json?query=.a")
        assert not provider.accept("file://s.json")
        assert not provider.accept("vault://h/m/k/f?query=.a")

    def test_invalid_query_rejected_at_claim(self) -> None:
        with pytest.raises(QueryError):
            File().add("file://s.json?query=nodot")

    def test_query_key_must_match_exactly(self) -> None:
        provider = File()
        assert not provider.accept("file://s.json?other=1&xquery=.a")
        assert not provider.add("file://x.json?myquery=1")
        assert len(provider) == 0

    @pytest.mark.parametrize(
        "name, content",
        [
            ("s.json", '{"db": {"password": "pw"}}'),
            ("s.yaml", "db:\n  password: pw\n"),
            ("s.yml", "db:\n  password: pw\n"),
            ("s.toml", '[db]\npassword = "pw"\n'),
            ("s.ini", "[db]\npassword = pw\n"),
        ],
    )
    def test_formats(self, tmp_path: Path, name: str, content: str) -> None:
        (tmp_path / name).write_text(content)
        provider = File()
        provider.add(f"file://{name}?query=.db.password")
        result = asyncio.run(provider.resolve(tmp_path, {}))
        assert result == {f"file://{name}?query=.db.password": "pw"}

    def test_absolute_and_home_paths(self, tmp_path: Path) -> None:
        (tmp_path / "s.json").write_text('{"a": "1", "b": ["x"]}')
        provider = File(home=tmp_path)
        provider.add(f"file://{tmp_path}/s.json?query=.a")
        provider.add("file://~/s.json?query=.b")
        provider.add("file://$HOME/s.json?query=.b[0]")
        result = asyncio.run(provider.resolve(Path("/nonexistent"), {}))
        assert result == {
            f"file://{tmp_path}/s.json?query=.a": "1",
            "file://~/s.json?query=.b": '["x"]',
            "file://$HOME/s.json?query=.b[0]": "x",
        }

    def test_null_value_is_rendered(self, tmp_path: Path) -> None:
        (tmp_path / "s.json").write_text('{"a": null, "b": {"c": null}}')
        provider = File()
        provider.add("file://s.json?query=.a")
        provider.add("file://s.json?query=.b")
        result = asyncio.run(provider.resolve(tmp_path, {}))
        assert result == {
            "file://s.json?query=.a": "null",
            "file://s.json?query=.b": '{"c":null}',
        }

    def test_missing_query_result(self, tmp_path: Path) -> None:
        (tmp_path / "s.json").write_text('{"a": "1"}')
        provider = File()
        provider.add("file://s.json?query=.zzz")
        with pytest.raises(SecretNotFoundError, match=".zzz"):
            asyncio.run(provider.resolve(tmp_path, {}))

    def test_unsupported_format(self, tmp_path: Path) -> None:
        (tmp_path / "s.txt").write_text("a")
        provider = File()
        provider.add("file://s.txt?query=.a")
        with pytest.raises(BackendError, match="Unsupported file format"):
            asyncio.run(provider.resolve(tmp_path, {}))

    def test_missing_file(self, tmp_path: Path) -> None:
        provider = File()
        provider.add("file://absent.json?query=.a")
        with pytest.raises(BackendError, match="Cannot read file"):
            asyncio.run(provider.resolve(tmp_path, {}))

    def test_parse_error(self, tmp_path: Path) -> None:
        (tmp_path / "s.json").write_text("{broken")
        provider = File()
        provider.add("file://s.json?query=.a")
        with pytest.raises(BackendError, match="Cannot parse json"):
            asyncio.run(provider.resolve(tmp_path, {}))
