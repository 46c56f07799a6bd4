from __future__ import annotations

import asyncio
import json
from typing import List

import pytest

from hdo_questions.pipeline import FileCache, Indexer, InvalidCacheFileError, PipelineEvent, question_type_for


def _write_cache_file(path, session, questions):
    path.write_text(json.dumps({"sesjon_id": session, "sporsmal_liste": questions}), encoding="utf-8")


def _indexer(app_config, client, events=None) -> Indexer:
    return Indexer(
        client=client,
        cache=FileCache(app_config.pipeline.output_path),
        config=app_config,
        progress_callback=events.append if events is not None else None,
    )


def test_question_type_is_taken_from_filename_prefix():
    assert question_type_for("/data/skriftligesporsmal.2011-2012.json") == "skriftligesporsmal"


@pytest.mark.parametrize("name", ["noprefix", "unknown.2011-2012.json", ".2011-2012.json"])
def test_question_type_rejects_malformed_names(name):
    with pytest.raises(InvalidCacheFileError):
        question_type_for(name)


def test_composite_document_id(app_config, search_client_factory):
    indexer = _indexer(app_config, search_client_factory())
    body = indexer.to_bulk_body("sporretimesporsmal", [{"id": 42}])
    assert body[0] == {"index": {"_index": "questions-test", "_id": "sporretimesporsmal-42"}}
    assert body[1] == {"id": 42}


def test_index_file_sends_one_bulk_request(app_config, tmp_path, search_client_factory):
    path = tmp_path / "sporretimesporsmal.2014-2015.json"
    _write_cache_file(
        path,
        "2014-2015",
        [
            {"id": 1, "tittel": "Første", "datert_dato": "/Date(1420070400000)/"},
            {"id": 2, "tittel": "Andre", "emne_liste": []},
        ],
    )
    client = search_client_factory()
    events: List[PipelineEvent] = []

    count = asyncio.run(_indexer(app_config, client, events).index_file(path))

    assert count == 2
    assert len(client.bulk_calls) == 1
    body = client.bulk_calls[0]
    assert len(body) == 4
    assert [entry["index"]["_id"] for entry in body[0::2]] == ["sporretimesporsmal-1", "sporretimesporsmal-2"]
    first, second = body[1], body[3]
    assert first["sesjon_id"] == "2014-2015"
    assert first["type_navn"] == "sporretimesporsmal"
    assert first["datert_dato"] == "2015-01-01T00:00:00+00:00"
    assert second["type_navn"] == "sporretimesporsmal"
    assert [event.kind for event in events] == ["indexed"]
    assert events[0].count == 2


def test_index_file_without_questions_skips_bulk(app_config, tmp_path, search_client_factory):
    path = tmp_path / "interpellasjoner.2009-2010.json"
    _write_cache_file(path, "2009-2010", [])
    client = search_client_factory()

    assert asyncio.run(_indexer(app_config, client).index_file(path)) == 0
    assert client.bulk_calls == []


def test_index_all_skips_malformed_files(app_config, tmp_path, search_client_factory):
    _write_cache_file(tmp_path / "interpellasjoner.2009-2010.json", "2009-2010", [{"id": 5}])
    _write_cache_file(tmp_path / "skriftligesporsmal.2009-2010.json", "2009-2010", [{"id": 6}, {"id": 7}])
    _write_cache_file(tmp_path / "referat.2009-2010.json", "2009-2010", [{"id": 8}])
    client = search_client_factory()
    events: List[PipelineEvent] = []

    summary = asyncio.run(_indexer(app_config, client, events).index_all())

    assert summary.files == 3
    assert summary.documents == 3
    assert summary.failures == 1
    assert len(client.bulk_calls) == 2
    assert sorted(event.kind for event in events) == ["failed", "indexed", "indexed"]


def test_index_all_reraises_other_errors_after_finishing(app_config, tmp_path, search_client_factory):
    (tmp_path / "interpellasjoner.2009-2010.json").write_text("not json", encoding="utf-8")
    _write_cache_file(tmp_path / "skriftligesporsmal.2009-2010.json", "2009-2010", [{"id": 6}])
    client = search_client_factory()

    with pytest.raises(json.JSONDecodeError):
        asyncio.run(_indexer(app_config, client).index_all())
    assert len(client.bulk_calls) == 1


def test_index_all_caps_files_in_flight(app_config, tmp_path, search_client_factory):
    in_flight = 0
    peak = 0

    class SlowSearchClient(search_client_factory):
        async def bulk(self, body):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return await super().bulk(body)

    sessions = ["2009-2010", "2010-2011", "2011-2012"]
    for session in sessions:
        for category in ("interpellasjoner", "skriftligesporsmal"):
            _write_cache_file(tmp_path / f"{category}.{session}.json", session, [{"id": 1}])
    client = SlowSearchClient()

    summary = asyncio.run(_indexer(app_config, client).index_all())

    assert app_config.pipeline.concurrency == 2
    assert summary.files == 6
    assert summary.documents == 6
    assert len(client.bulk_calls) == 6
    assert peak <= 2
