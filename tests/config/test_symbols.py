import json

import pytest

from tickerboard.config.symbols import SymbolConfig, SymbolConfigError, load_symbols, parse_symbols


def test_load_symbols_in_file_order(tmp_path):
    path = tmp_path / "symbols.json"
    path.write_text(
        json.dumps(
            [
                {"symbol": "MSFT.US", "name": "Microsoft", "domain": "microsoft.com"},
                {"symbol": "^SPX", "name": "S&P 500", "domain": ""},
            ]
        ),
        encoding="utf-8",
    )

    symbols = load_symbols(path)

    assert [s.symbol for s in symbols] == ["MSFT.US", "^SPX"]
    assert [s.key for s in symbols] == ["msft.us", "^spx"]


def test_shipped_symbol_list_is_valid():
    from pathlib import Path

    symbols = load_symbols(Path(__file__).resolve().parents[2] / "config" / "symbols.json")

    assert symbols
    assert all(s.name and s.domain for s in symbols)


def test_missing_file(tmp_path):
    with pytest.raises(SymbolConfigError, match="not found"):
        load_symbols(tmp_path / "missing.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "symbols.json"
    path.write_text("[{", encoding="utf-8")

    with pytest.raises(SymbolConfigError):
        load_symbols(path)


@pytest.mark.parametrize(
    "raw",
    [
        {"symbol": "ABC", "name": "Abc"},
        [{"name": "No symbol"}],
        [{"symbol": "../etc/passwd", "name": "Traversal"}],
        [{"symbol": "", "name": "Empty"}],
        ["ABC"],
    ],
)
def test_parse_symbols_rejects_invalid_payloads(raw):
    with pytest.raises(SymbolConfigError):
        parse_symbols(raw)


def test_symbol_is_stripped():
    assert SymbolConfig(symbol="  abc ", name="Abc").symbol == "abc"
