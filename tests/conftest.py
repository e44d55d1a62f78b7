"""Shared fixtures for the biblizap test suite."""

import json
from typing import Any

import pytest

from biblizap.config import Settings
from biblizap.models.record import Record


def make_record(**overrides: Any) -> Record:
    """Complete record with every field present, overridable per test."""
    values: dict[str, Any] = {
        "first_author": "Smith John",
        "year_published": 2020,
        "journal": "Nature",
        "title": "Cancer immunotherapy review",
        "summary": "Checkpoint inhibitors in solid tumours",
        "doi": "10.1/a",
        "citations": 120,
        "score": 90,
    }
    values.update(overrides)
    return Record(**values)


@pytest.fixture
def records() -> list[Record]:
    """Four complete records, ordered by descending score."""
    return [
        make_record(),
        make_record(
            first_author="Doe Jane",
            year_published=2018,
            journal="Chest",
            title="Lung nodules in smokers",
            summary="CT screening outcomes",
            doi="10.1/b",
            citations=45,
            score=75,
        ),
        make_record(
            first_author="Brown Ann",
            year_published=2022,
            journal="Lancet",
            title="Breast cancer screening",
            summary="Mammography trial",
            doi="10.1/c",
            citations=300,
            score=60,
        ),
        make_record(
            first_author="Lee Kim",
            year_published=2015,
            journal="Circulation",
            title="Cardiac imaging",
            summary="Echocardiography",
            doi="10.1/d",
            citations=10,
            score=40,
        ),
    ]


@pytest.fixture(autouse=True)
def settings(tmp_path):
    """Fresh Settings singleton rooted in a temporary directory."""
    Settings.reset()
    yield Settings.load(tmp_path)
    Settings.reset()


@pytest.fixture
def results_file(tmp_path, records):
    """Search result document on disk, as the CLI reads it."""
    path = tmp_path / "results.json"
    path.write_text(
        json.dumps({"articles": [r.to_dict() for r in records]}),
        encoding="utf-8",
    )
    return path
