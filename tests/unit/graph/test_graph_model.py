"""Tests for the in-memory topic graph."""

import pytest

from ditakit.exceptions import AmbiguousRelationError, TopicNotFound
from ditakit.graph.model import Player, Relation, Topic, TopicGraph


@pytest.fixture
def graph() -> TopicGraph:
    return TopicGraph(
        Topic(id=1, type_uri="dita.topicmap", value="Map"),
        [Topic(id=2, type_uri="dita.topic"), Topic(id=3, type_uri="dita.topic")],
    )


def _rel(rid: int, a: int, b: int) -> Relation:
    return Relation(id=rid, kind="k", first=Player("from", a), second=Player("to", b))


class TestTopic:
    """Tests for Topic."""

    def test_get_string(self):
        topic = Topic(id=1, type_uri="t", children={"a": "x", "n": 3})

        assert topic.get_string("a") == "x"
        assert topic.get_string("n") == "3"
        assert topic.get_string("missing") is None
        assert topic.get_string("missing", "dflt") == "dflt"


class TestTopicGraph:
    """Tests for TopicGraph."""

    def test_container_is_a_topic(self, graph):
        assert graph.id == 1
        assert graph.get_topic(1).value == "Map"
        assert {t.id for t in graph.topics} == {1, 2, 3}

    def test_unknown_topic(self, graph):
        with pytest.raises(TopicNotFound) as exc_info:
            graph.get_topic(99)

        assert exc_info.value.topic_id == 99

    def test_relation_needs_known_endpoints(self, graph):
        with pytest.raises(TopicNotFound):
            graph.add_relation(_rel(1, 2, 99))

        assert graph.relations == []

    def test_lookup_both_directions(self, graph):
        graph.add_relation(_rel(1, 2, 3))

        assert graph.get_related_topic(2, "k", "from", "to").id == 3
        assert graph.get_related_topic(3, "k", "to", "from").id == 2

    def test_role_and_kind_must_match(self, graph):
        graph.add_relation(_rel(1, 2, 3))

        assert graph.get_related_topic(2, "k", "to", "from") is None
        assert graph.get_related_topic(2, "other", "from", "to") is None
        assert graph.get_related_topic(3, "k", "from", "to") is None

    def test_related_ids_in_insertion_order(self, graph):
        graph.add_relation(_rel(1, 1, 3))
        graph.add_relation(_rel(2, 1, 2))

        assert graph.get_related_ids(1, "k", "from", "to") == [3, 2]

    def test_ambiguous(self, graph):
        graph.add_relation(_rel(1, 1, 2))
        graph.add_relation(_rel(2, 1, 3))

        with pytest.raises(AmbiguousRelationError) as exc_info:
            graph.get_related_topic(1, "k", "from", "to")

        assert exc_info.value.candidates == [2, 3]

    def test_lookup_does_not_grow_index(self, graph):
        graph.get_related_ids(2, "k", "from", "to")

        assert graph.get_related_ids(2, "k", "from", "to") == []
        assert graph.relations == []
