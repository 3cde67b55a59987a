"""Topic graph model and loading."""

from ditakit.graph.loader import load_graph
from ditakit.graph.model import Player, Relation, Topic, TopicGraph, TopicId, TopicStore

__all__ = [
    "Player",
    "Relation",
    "Topic",
    "TopicGraph",
    "TopicId",
    "TopicStore",
    "load_graph",
]
