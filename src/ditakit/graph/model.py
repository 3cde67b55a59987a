"""In-memory topic graph: topics, typed relations and the store protocol."""

from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from ditakit.exceptions import AmbiguousRelationError, TopicNotFound

TopicId = int


@dataclass(frozen=True)
class Topic:
    """A node of the content graph.

    Only two facets matter to the rendering pipeline: the id, and the
    child properties keyed by type URI (e.g. the desired output format).
    """

    id: TopicId
    type_uri: str
    value: str = ""
    children: Mapping[str, Any] = field(default_factory=dict)

    def get_string(self, type_uri: str, default: str | None = None) -> str | None:
        """Return a child property as string, or default when it is not set."""
        value = self.children.get(type_uri)
        if value is None:
            return default
        return str(value)


@dataclass(frozen=True)
class Player:
    """One endpoint of a relation: the topic and the role it plays."""

    role: str
    topic_id: TopicId


@dataclass(frozen=True)
class Relation:
    """A typed, directed edge with a role label per endpoint."""

    id: int
    kind: str
    first: Player
    second: Player


class TopicStore(Protocol):
    """Read access to topics and their relations."""

    def get_topic(self, topic_id: TopicId) -> Topic:
        """Return the topic or raise TopicNotFound."""
        ...

    def get_related_topic(
        self, topic_id: TopicId, kind: str, role: str, other_role: str
    ) -> Topic | None:
        """Return the single topic related to topic_id, or None.

        Raises AmbiguousRelationError when more than one topic qualifies.
        """
        ...


class TopicGraph:
    """All topics and relations of one document.

    Relations are indexed as ``(topic_id, kind, role) -> {other_role: [ids]}``
    so that a lookup never scans the edge list.
    """

    def __init__(
        self,
        container: Topic,
        topics: Iterable[Topic] = (),
        relations: Iterable[Relation] = (),
    ) -> None:
        self.container = container
        self._topics: dict[TopicId, Topic] = {container.id: container}
        self._index: dict[tuple[TopicId, str, str], dict[str, list[TopicId]]] = defaultdict(
            lambda: defaultdict(list)
        )
        self._relations: list[Relation] = []

        for topic in topics:
            self.add_topic(topic)
        for relation in relations:
            self.add_relation(relation)

    @property
    def id(self) -> TopicId:
        return self.container.id

    @property
    def topics(self) -> list[Topic]:
        return list(self._topics.values())

    @property
    def relations(self) -> list[Relation]:
        return list(self._relations)

    def add_topic(self, topic: Topic) -> None:
        self._topics[topic.id] = topic

    def add_relation(self, relation: Relation) -> None:
        """Index a relation in both directions.

        Both endpoints must already be known topics.
        """
        for player in (relation.first, relation.second):
            if player.topic_id not in self._topics:
                raise TopicNotFound(player.topic_id)

        self._relations.append(relation)
        first, second = relation.first, relation.second
        self._index[(first.topic_id, relation.kind, first.role)][second.role].append(
            second.topic_id
        )
        self._index[(second.topic_id, relation.kind, second.role)][first.role].append(
            first.topic_id
        )

    def get_topic(self, topic_id: TopicId) -> Topic:
        try:
            return self._topics[topic_id]
        except KeyError:
            raise TopicNotFound(topic_id) from None

    def get_related_ids(
        self, topic_id: TopicId, kind: str, role: str, other_role: str
    ) -> list[TopicId]:
        """Ids related to topic_id in relation order (possibly empty)."""
        key = (topic_id, kind, role)
        if key not in self._index:
            return []
        return list(self._index[key].get(other_role, ()))

    def get_related_topic(
        self, topic_id: TopicId, kind: str, role: str, other_role: str
    ) -> Topic | None:
        related = self.get_related_ids(topic_id, kind, role, other_role)
        if not related:
            return None
        if len(related) > 1:
            raise AmbiguousRelationError(topic_id, kind, related)
        return self.get_topic(related[0])
