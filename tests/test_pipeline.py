"""Tests for the grouping CLI and text pipeline."""

import asyncio
import json

import pandas as pd
import pytest

from phrasal_tokens import config, pipeline
from phrasal_tokens.dictionary import MappingDictionary
from phrasal_tokens.tokens import Token

ENV_NAMES = [
    "PHRASAL_WITH_DEFINITIONS",
    "PHRASAL_SKIP_DEFINITION_POINTERS",
    "PHRASAL_WITH_OFFSET",
    "PHRASAL_WITH_FREQUENCY",
    "PHRASAL_WORDS_RANK_TOP_N",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "load_dotenv", lambda: False)


@pytest.fixture
def tokens_path(tmp_path):
    tokens = [
        {"value": "Look", "normal": "look", "lemma": "look", "pos": "VB", "contextId": 0,
         "startOffset": 0, "endOffset": 4},
        {"value": "it", "normal": "it", "lemma": "it", "pos": "PRP", "contextId": 0,
         "startOffset": 5, "endOffset": 7},
        {"value": "up", "normal": "up", "lemma": "up", "pos": "RP", "contextId": 0,
         "startOffset": 8, "endOffset": 10},
        {"value": ".", "normal": ".", "lemma": ".", "pos": ".", "contextId": 0,
         "startOffset": 10, "endOffset": 11},
    ]
    path = tmp_path / "tokens.json"
    path.write_text(json.dumps(tokens), encoding="utf-8")
    return path


@pytest.fixture
def glossary_path(tmp_path):
    path = tmp_path / "glossary.csv"
    path.write_text("phrase,definition\nlook up,to search for information\n", encoding="utf-8")
    return path


def test_cli_groups_tokens(tmp_path, tokens_path, glossary_path):
    output_path = tmp_path / "out" / "grouped.json"
    stats_path = tmp_path / "out" / "stats.csv"

    pipeline.run_grouping_cli(
        [
            "--tokens", str(tokens_path),
            "--glossary", str(glossary_path),
            "--output", str(output_path),
            "--stats", str(stats_path),
        ]
    )

    grouped = json.loads(output_path.read_text(encoding="utf-8"))
    assert [t["value"] for t in grouped] == ["Look up", "it", "."]
    assert grouped[0]["startOffset"] == 0
    assert grouped[0]["endOffset"] == 10
    assert grouped[0]["definition"]["text"] == "to search for information"

    stats = pd.read_csv(stats_path)
    assert stats["phrasal"].tolist() == ["look up"]
    assert stats["score"].tolist() == [1.0]


def test_cli_flags_override_options(tmp_path, tokens_path, glossary_path):
    output_path = tmp_path / "grouped.json"

    pipeline.run_grouping_cli(
        [
            "--tokens", str(tokens_path),
            "--glossary", str(glossary_path),
            "--output", str(output_path),
            "--no-definitions",
            "--no-offset",
        ]
    )

    compound = json.loads(output_path.read_text(encoding="utf-8"))[0]
    assert "definition" not in compound
    assert "startOffset" not in compound


def test_cli_requires_source(tmp_path):
    with pytest.raises(SystemExit):
        pipeline.run_grouping_cli(["--output", str(tmp_path / "out.json")])


def test_process_text_uses_tagger(monkeypatch):
    tagged = [
        Token("come", "come", "come", pos="VB", context_id=0),
        Token("on", "on", "on", pos="RP", context_id=0),
    ]
    monkeypatch.setattr(pipeline, "initialize_spacy_model", lambda model_name: object())
    monkeypatch.setattr(pipeline, "tokenize_text", lambda text, nlp, with_offset: tagged)

    grouped = asyncio.run(
        pipeline.process_text("come on", MappingDictionary({"come on": "to encourage"}))
    )

    assert [t.value for t in grouped] == ["come on"]


def test_process_text_requires_text():
    with pytest.raises(ValueError):
        asyncio.run(pipeline.process_text(None, MappingDictionary({})))
