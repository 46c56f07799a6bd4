from __future__ import annotations

import copy

import pytest

from hdo_questions.core.dates import convert_dates, parse_legacy_date


def _sample_tree():
    return {
        "id": 42,
        "tittel": "Om /Date( i tekst",
        "datert_dato": "/Date(1420066800000+0100)/",
        "sendt_dato": "/Date(1420070400000)/",
        "emne_liste": [{"id": 7, "navn": "Skatt", "endret_dato": "/Date(0+0000)/"}],
        "besvart_av": None,
        "flagg": True,
        "nested": [["/Date(1420066800000-0230)/", 3.5]],
    }


def test_convert_dates_uses_embedded_offset():
    assert convert_dates("/Date(1420066800000+0100)/") == "2015-01-01T00:00:00+01:00"
    assert convert_dates("/Date(1420070400000)/") == "2015-01-01T00:00:00+00:00"
    assert convert_dates("/Date(1420066800000-0230)/") == "2014-12-31T20:30:00-02:30"


def test_convert_dates_handles_dates_before_epoch():
    parsed = parse_legacy_date("/Date(-86400000+0000)/")
    assert parsed is not None
    assert parsed.isoformat() == "1969-12-31T00:00:00+00:00"


def test_convert_dates_preserves_tree_shape():
    tree = _sample_tree()
    converted = convert_dates(copy.deepcopy(tree))

    assert converted["id"] == 42
    assert converted["tittel"] == "Om /Date( i tekst"
    assert converted["besvart_av"] is None
    assert converted["flagg"] is True
    assert converted["datert_dato"] == "2015-01-01T00:00:00+01:00"
    assert converted["emne_liste"][0] == {"id": 7, "navn": "Skatt", "endret_dato": "1970-01-01T00:00:00+00:00"}
    assert converted["nested"] == [["2014-12-31T20:30:00-02:30", 3.5]]
    assert list(converted) == list(tree)


def test_convert_dates_is_idempotent():
    once = convert_dates(_sample_tree())
    twice = convert_dates(copy.deepcopy(once))
    assert twice == once


def test_convert_dates_updates_objects_in_place():
    doc = {"dato": "/Date(0)/"}
    assert convert_dates(doc) is doc
    assert doc["dato"] == "1970-01-01T00:00:00+00:00"


def test_unparseable_legacy_string_is_left_alone():
    assert convert_dates("/Date(soon)/") == "/Date(soon)/"


@pytest.mark.parametrize("value", ["/Date(0+2500)/", "/Date(999999999999999999)/"])
def test_out_of_range_legacy_dates_are_left_alone(value):
    assert parse_legacy_date(value) is None
    assert convert_dates({"dato": value}) == {"dato": value}
