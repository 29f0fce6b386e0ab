"""Tests for reading and writing JSON documents."""

import json

import pytest

from coref_annotator.document.io import document_from_json, document_to_json, load_document
from coref_annotator.errors import DocumentFormatError
from coref_annotator.pipeline.coref import CorefAnnotator


@pytest.fixture
def payload():
    return {
        "text": "Obama spoke. Obama's plan passed.",
        "sentences": [
            {
                "tokens": [
                    {"word": "Obama", "characterOffsetBegin": 0, "characterOffsetEnd": 5,
                     "ner": "PERSON", "coarseNer": "PERSON"},
                    {"word": "spoke", "ner": "O"},
                    {"word": ".", "ner": "O"},
                ],
                "entitymentions": [{"tokenBegin": 0, "tokenEnd": 1, "ner": "PERSON"}],
            },
            {
                "tokens": [
                    {"word": "Obama", "ner": "PERSON", "coarseNer": "PERSON"},
                    {"word": "'s", "ner": "O"},
                    {"word": "plan", "ner": "O"},
                    {"word": "passed", "ner": "O"},
                    {"word": ".", "ner": "O"},
                ],
                "entitymentions": [{"tokenBegin": 0, "tokenEnd": 1, "ner": "PERSON"}],
            },
        ],
    }


class TestReading:
    def test_builds_sentences_tokens_and_mentions(self, payload):
        document = document_from_json(payload)

        assert len(document.sentences) == 2
        assert [t.index for t in document.tokens] == list(range(8))
        assert document.tokens[3].sentence_index == 1
        assert document.tokens[3].index_in_sentence == 0
        assert [m.index for m in document.entity_mentions] == [0, 1]
        assert document.tokens[3].entity_mention_index == 1
        assert document.tokens[0].end == 5

    def test_fine_label_defaults_to_primary(self, payload):
        document = document_from_json(payload)
        assert document.tokens[0].fine_grained_ner == "PERSON"

    def test_explicit_fine_label_is_kept(self, payload):
        payload["sentences"][0]["tokens"][0]["fineGrainedNer"] = "POLITICIAN"
        document = document_from_json(payload)
        assert document.tokens[0].fine_grained_ner == "POLITICIAN"
        assert document.tokens[0].ner == "PERSON"

    def test_missing_sentences_leaves_them_unset(self):
        document = document_from_json({"tokens": [{"word": "hello"}, {"word": "world"}]})
        assert document.sentences is None
        assert [t.index for t in document.tokens] == [0, 1]

    def test_pre_detected_coref_mentions(self, payload):
        payload["corefMentions"] = [
            {"sentenceIndex": 0, "startIndex": 0, "endIndex": 1, "type": "PROPER"},
            {"sentenceIndex": 1, "startIndex": 0, "endIndex": 2, "type": "PROPER", "headIndex": 0},
        ]
        document = document_from_json(payload)

        assert [m.text for m in document.coref_mentions] == ["Obama", "Obama 's"]
        assert document.coref_mentions[1].head_index == 0
        assert document.tokens[4].coref_mention_index == 1

    def test_span_outside_sentence_is_rejected(self, payload):
        payload["sentences"][0]["entitymentions"][0]["tokenEnd"] = 9
        with pytest.raises(DocumentFormatError):
            document_from_json(payload)

    def test_overlapping_entity_mentions_are_rejected(self, payload):
        payload["sentences"][1]["entitymentions"].append({"tokenBegin": 0, "tokenEnd": 2, "ner": "MISC"})
        with pytest.raises(DocumentFormatError, match="overlaps another entity mention"):
            document_from_json(payload)

    def test_overlapping_coref_mentions_are_rejected(self, payload):
        payload["corefMentions"] = [
            {"sentenceIndex": 1, "startIndex": 0, "endIndex": 2},
            {"sentenceIndex": 1, "startIndex": 1, "endIndex": 3},
        ]
        with pytest.raises(DocumentFormatError, match="overlaps another coref mention"):
            document_from_json(payload)

    def test_schema_violation_is_rejected(self):
        with pytest.raises(DocumentFormatError):
            document_from_json({"sentences": [{"tokens": [{"ner": "O"}]}]})

    def test_load_document_rejects_bad_json(self, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DocumentFormatError):
            load_document(path)

    def test_load_document_from_disk(self, tmp_path, payload):
        path = tmp_path / "doc.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        assert len(load_document(path).entity_mentions) == 2


class TestWriting:
    def test_annotated_document_output(self, payload):
        document = document_from_json(payload)
        CorefAnnotator().annotate(document)

        output = document_to_json(document)

        mentions = [em for s in output["sentences"] for em in s["entitymentions"]]
        assert [em["canonicalEntityMentionIndex"] for em in mentions] == [0, 0]
        assert list(output["corefs"]) == ["0"]
        chain = output["corefs"]["0"]
        assert [m["text"] for m in chain] == ["Obama", "Obama 's"]
        assert [m["isRepresentativeMention"] for m in chain] == [True, False]
        assert (chain[1]["sentNum"], chain[1]["startIndex"], chain[1]["endIndex"]) == (2, 1, 3)
        assert output["sentences"][0]["tokens"][0]["characterOffsetEnd"] == 5

    def test_unresolved_mentions_have_no_canonical_index(self, payload):
        document = document_from_json(payload)

        output = document_to_json(document)

        assert "corefs" not in output
        for sentence in output["sentences"]:
            for mention in sentence["entitymentions"]:
                assert "canonicalEntityMentionIndex" not in mention

    def test_unsegmented_document_writes_tokens(self):
        document = document_from_json({"tokens": [{"word": "hello", "speaker": "A"}]})
        output = document_to_json(document)
        assert output["tokens"][0]["word"] == "hello"
        assert output["tokens"][0]["speaker"] == "A"
