import json

import pytest

from phrasal_tokens.tokens import (
    Definition,
    Token,
    join_field,
    load_tokens_json,
    save_tokens_json,
    tokens_to_dataframe,
)


def _compound():
    look = Token("look", "look", "look", pos="VB", context_id=3, start_offset=0, end_offset=4)
    up = Token("up", "up", "up", pos="RP", context_id=3, start_offset=8, end_offset=10)
    return Token(
        value="look up",
        normal="look up",
        lemma="look up",
        pos="VB",
        context_id=3,
        start_offset=0,
        end_offset=10,
        tokens=[look, up],
        frequency=2,
        definition=Definition(text="to search", synset_id="look_up.v.01", pos="v"),
        tag="word",
    )


def test_to_dict_uses_camel_case_and_omits_absent_fields():
    token = Token("run", "run", "run", pos="VB", context_id=1)

    assert token.to_dict() == {
        "value": "run",
        "normal": "run",
        "lemma": "run",
        "pos": "VB",
        "contextId": 1,
    }


def test_compound_to_dict():
    data = _compound().to_dict()

    assert data["startOffset"] == 0
    assert data["endOffset"] == 10
    assert data["frequency"] == 2
    assert data["tag"] == "word"
    assert [t["value"] for t in data["tokens"]] == ["look", "up"]
    assert data["definition"] == {"text": "to search", "synsetId": "look_up.v.01", "pos": "v"}


def test_from_dict_restores_compound():
    compound = _compound()

    assert Token.from_dict(compound.to_dict()) == compound


def test_from_dict_defaults_and_string_definition():
    token = Token.from_dict({"value": "Go", "definition": "to move"})

    assert token.normal == "Go"
    assert token.lemma == "Go"
    assert token.definition == Definition(text="to move")
    assert token.tokens is None


def test_from_dict_requires_value():
    with pytest.raises(ValueError, match="value"):
        Token.from_dict({"lemma": "go"})


def test_is_compound():
    assert _compound().is_compound
    assert not Token("go").is_compound


def test_join_field():
    tokens = [Token("put", lemma="put"), Token("up", lemma="up"), Token("with", lemma=None)]

    assert join_field(tokens, "lemma") == "put up "
    assert join_field(tokens[:2], "value", "_") == "put_up"


def test_save_and_load_json(tmp_path):
    path = tmp_path / "out" / "tokens.json"
    tokens = [_compound(), Token("now", "now", "now", pos="RB", context_id=3)]

    save_tokens_json(tokens, path)

    assert json.loads(path.read_text(encoding="utf-8"))[1]["value"] == "now"
    assert load_tokens_json(path) == tokens


def test_load_json_requires_array(tmp_path):
    path = tmp_path / "tokens.json"
    path.write_text('{"value": "x"}', encoding="utf-8")

    with pytest.raises(ValueError):
        load_tokens_json(path)


def test_load_json_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_tokens_json(tmp_path / "missing.json")


def test_tokens_to_dataframe():
    df = tokens_to_dataframe([_compound(), Token("now", pos="RB")])

    assert list(df.columns) == [
        "value",
        "normal",
        "lemma",
        "pos",
        "context_id",
        "start_offset",
        "end_offset",
        "is_compound",
        "constituent_count",
        "frequency",
        "definition",
        "rank",
    ]
    assert df["is_compound"].tolist() == [True, False]
    assert df["constituent_count"].tolist() == [2, 1]
    assert df.loc[0, "definition"] == "to search"
