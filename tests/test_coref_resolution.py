"""Tests for canonical entity mention resolution through coref chains."""

import pytest

from coref_annotator.core.resolver import canonicalize_entity_mentions, resolve_canonical_index
from coref_annotator.document.annotation import ChainMention, CorefChain

from mock_documents import build_document, link


class TestScenarios:
    """Canonicalization over hand-built documents."""

    def test_mention_that_is_its_own_representative(self):
        """'Obama' whose chain's representative is that same 'Obama'."""
        document = build_document([("Obama", "PERSON"), "spoke", "."])
        em = document.add_entity_mention(0, 0, 1, ner="PERSON")
        document.add_coref_mention(0, 0, 1)
        link(document, {0: [0]}, {0: 0})

        resolved = canonicalize_entity_mentions(document)

        assert resolved == 1
        assert em.canonical_entity_mention_index == em.index == 0

    def test_possessive_mention_resolves_to_representative(self):
        """'the company' aligned to coref mention 'the company 's' resolves to 'Apple'."""
        document = build_document(
            [("Apple", "ORGANIZATION"), "said", "the", "company", "'s", "profits", "rose"]
        )
        apple = document.add_entity_mention(0, 0, 1, ner="ORGANIZATION")
        company = document.add_entity_mention(0, 2, 4, ner="ORGANIZATION")
        document.add_coref_mention(0, 0, 1)
        document.add_coref_mention(0, 2, 5)
        link(document, {0: [0, 1]}, {0: 0})

        canonicalize_entity_mentions(document)

        assert company.canonical_entity_mention_index == apple.index
        assert apple.canonical_entity_mention_index == apple.index

    def test_non_possessive_extra_token_is_left_unresolved(self):
        """'Apple' against coref mention 'Apple Inc'."""
        document = build_document([("Apple", "ORGANIZATION"), ("Inc", "ORGANIZATION"), "grew"])
        em = document.add_entity_mention(0, 0, 1, ner="ORGANIZATION")
        document.add_coref_mention(0, 0, 2)
        link(document, {0: [0]}, {0: 0})

        assert canonicalize_entity_mentions(document) == 0
        assert em.canonical_entity_mention_index is None

    def test_mention_without_coref_pointer_is_left_unresolved(self):
        """'it' with no coref mention on its token raises nothing."""
        document = build_document(["it", "rained"])
        em = document.add_entity_mention(0, 0, 1)
        document.coref_mentions = []
        document.coref_chains = {}

        assert canonicalize_entity_mentions(document) == 0
        assert em.canonical_entity_mention_index is None

    def test_representative_in_later_sentence(self):
        """Representative mention at the end of the second sentence (1-based lookup)."""
        document = build_document(
            ["He", "arrived", "."],
            ["Everyone", "greeted", ("Obama", "PERSON")],
        )
        he = document.add_entity_mention(0, 0, 1)
        obama = document.add_entity_mention(1, 2, 3, ner="PERSON")
        document.add_coref_mention(0, 0, 1)
        document.add_coref_mention(1, 2, 3)
        link(document, {4: [0, 1]}, {4: 1})

        canonicalize_entity_mentions(document)

        assert he.canonical_entity_mention_index == obama.index
        assert obama.canonical_entity_mention_index == obama.index


class TestUnresolvedCases:
    """Every lookup miss leaves the canonical index unset."""

    def test_missing_chain(self):
        document = build_document([("Obama", "PERSON")])
        em = document.add_entity_mention(0, 0, 1, ner="PERSON")
        cm = document.add_coref_mention(0, 0, 1, cluster_id=9)
        document.coref_chains = {}

        assert resolve_canonical_index(document, em) is None
        assert cm.cluster_id == 9

    def test_chains_never_computed(self):
        document = build_document([("Obama", "PERSON")])
        em = document.add_entity_mention(0, 0, 1, ner="PERSON")
        document.add_coref_mention(0, 0, 1, cluster_id=0)

        assert document.coref_chains is None
        assert resolve_canonical_index(document, em) is None

    def test_representative_without_entity_mention(self):
        """Chain represented by 'the senator', which NER did not tag."""
        document = build_document(
            ["the", "senator", "spoke", "."],
            [("Obama", "PERSON"), "left"],
        )
        obama = document.add_entity_mention(1, 0, 1, ner="PERSON")
        document.add_coref_mention(0, 0, 2)
        document.add_coref_mention(1, 0, 1)
        link(document, {0: [0, 1]}, {0: 0})

        canonicalize_entity_mentions(document)

        assert obama.canonical_entity_mention_index is None

    def test_representative_that_does_not_line_up(self):
        """Representative 'Apple Inc' only partly covered by entity mention 'Apple'."""
        document = build_document(
            [("Apple", "ORGANIZATION"), "Inc", "grew", "."],
            [("Apple", "ORGANIZATION"), "'s", "shares", "rose"],
        )
        document.add_entity_mention(0, 0, 1, ner="ORGANIZATION")
        second = document.add_entity_mention(1, 0, 1, ner="ORGANIZATION")
        document.add_coref_mention(0, 0, 2)
        document.add_coref_mention(1, 0, 2)
        link(document, {0: [0, 1]}, {0: 0})

        canonicalize_entity_mentions(document)

        assert second.canonical_entity_mention_index is None

    def test_representative_outside_document(self):
        document = build_document([("Obama", "PERSON")])
        em = document.add_entity_mention(0, 0, 1, ner="PERSON")
        document.add_coref_mention(0, 0, 1, cluster_id=0)
        stray = ChainMention(
            mention_id=5, cluster_id=0, sent_num=3, start_index=1, end_index=2, head_index=1
        )
        document.coref_chains = {0: CorefChain(chain_id=0, mentions=[stray], representative=stray)}

        assert resolve_canonical_index(document, em) is None

    def test_chain_without_representative(self):
        document = build_document([("Obama", "PERSON")])
        em = document.add_entity_mention(0, 0, 1, ner="PERSON")
        document.add_coref_mention(0, 0, 1, cluster_id=0)
        document.coref_chains = {0: CorefChain(chain_id=0)}

        assert resolve_canonical_index(document, em) is None


class TestIdempotence:
    @pytest.fixture
    def document(self):
        document = build_document(
            [("Obama", "PERSON"), "spoke", "."],
            [("Obama", "PERSON"), "'s", "plan", "passed"],
            [("Biden", "PERSON"), "agreed"],
        )
        document.add_entity_mention(0, 0, 1, ner="PERSON")
        document.add_entity_mention(1, 0, 1, ner="PERSON")
        document.add_entity_mention(2, 0, 1, ner="PERSON")
        document.add_coref_mention(0, 0, 1)
        document.add_coref_mention(1, 0, 2)
        document.add_coref_mention(2, 0, 1)
        link(document, {0: [0, 1], 2: [2]}, {0: 0, 2: 2})
        return document

    def test_second_pass_changes_nothing(self, document):
        canonicalize_entity_mentions(document)
        first = [m.canonical_entity_mention_index for m in document.entity_mentions]

        canonicalize_entity_mentions(document)
        second = [m.canonical_entity_mention_index for m in document.entity_mentions]

        assert first == second == [0, 0, 2]
