"""Load topic graphs from YAML documents.

A graph document names its container topic, the topics, and the relations
between them. Each relation maps exactly two role URIs to topic ids::

    container: {id: 1000, type: dita.topicmap, value: User Guide}
    topics:
      - {id: 1, type: dita.processor, children: {dita.output_format: html5}}
      - {id: 10, type: dita.topic, value: Introduction}
    relations:
      - kind: dita.processor_start
        players: {dita.processor: 1, dita.start: 10}
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ditakit.exceptions import DitakitError, GraphLoadError
from ditakit.graph.model import Player, Relation, Topic, TopicGraph
from ditakit.utils.logging import get_logger

log = get_logger(__name__)


class TopicSpec(BaseModel):
    """A topic entry of a graph document."""

    id: int
    type: str
    value: str = ""
    children: dict[str, Any] = Field(default_factory=dict)

    def to_topic(self) -> Topic:
        return Topic(id=self.id, type_uri=self.type, value=self.value, children=self.children)


class RelationSpec(BaseModel):
    """A relation entry of a graph document."""

    kind: str
    players: dict[str, int]

    @field_validator("players")
    @classmethod
    def _two_players(cls, players: dict[str, int]) -> dict[str, int]:
        if len(players) != 2:
            raise ValueError(f"a relation needs exactly two roles, got {len(players)}")
        return players


class GraphDocument(BaseModel):
    """Top-level schema of a graph document."""

    container: TopicSpec
    topics: list[TopicSpec] = Field(default_factory=list)
    relations: list[RelationSpec] = Field(default_factory=list)

    def to_graph(self) -> TopicGraph:
        graph = TopicGraph(self.container.to_topic(), (t.to_topic() for t in self.topics))
        for index, spec in enumerate(self.relations, start=1):
            (role_a, topic_a), (role_b, topic_b) = spec.players.items()
            graph.add_relation(
                Relation(
                    id=index,
                    kind=spec.kind,
                    first=Player(role=role_a, topic_id=topic_a),
                    second=Player(role=role_b, topic_id=topic_b),
                )
            )
        return graph


def load_graph(source: Path) -> TopicGraph:
    """Read and validate a YAML graph document.

    Raises:
        GraphLoadError: If the file cannot be read, parsed, or validated, or if
            a relation refers to an unknown topic
    """
    try:
        raw = yaml.safe_load(source.read_text(encoding="utf-8"))
    except OSError as e:
        raise GraphLoadError(source, str(e), cause=e) from e
    except yaml.YAMLError as e:
        raise GraphLoadError(source, f"invalid YAML: {e}", cause=e) from e

    if not isinstance(raw, dict):
        raise GraphLoadError(source, "document must be a mapping")

    try:
        graph = GraphDocument.model_validate(raw).to_graph()
    except ValidationError as e:
        raise GraphLoadError(source, str(e), cause=e) from e
    except DitakitError as e:
        raise GraphLoadError(source, str(e), cause=e) from e

    log.debug(
        "Topic graph loaded",
        source=str(source),
        topics=len(graph.topics),
        relations=len(graph.relations),
    )
    return graph
