import types

import pytest

pytest.importorskip("tkinter")

from stacker_app.gui.panel_input_parsing import parse_pallet_count


def var(val):
    ns = types.SimpleNamespace()
    ns.get = lambda: val
    return ns


def test_parse_pallet_count_reads_variable():
    assert parse_pallet_count(var("3")) == 3


def test_blank_pallet_count_is_one():
    assert parse_pallet_count("") == 1
    assert parse_pallet_count(var("  ")) == 1


def test_pallet_count_is_clamped():
    assert parse_pallet_count("0") == 1
    assert parse_pallet_count("25") == 12


def test_invalid_pallet_count_reports_error():
    errors = []
    assert parse_pallet_count("many", on_error=errors.append) == 1
    assert errors == ["many"]
