"""Resolve the authoring order of topics into an explicit sequence."""

from ditakit.config.constants import (
    PROCESSOR_START,
    ROLE_PREDECESSOR,
    ROLE_PROCESSOR,
    ROLE_START,
    ROLE_SUCCESSOR,
    SEQUENCE,
)
from ditakit.exceptions import (
    NoStartTopic,
    SequenceCycleError,
    SequenceLookupFailure,
)
from ditakit.graph.model import Topic, TopicId, TopicStore
from ditakit.utils.logging import get_logger

log = get_logger(__name__)


class SequenceResolver:
    """Walk the successor chain that starts at a processor's start topic.

    Each topic may have at most one successor. A chain that returns to a
    topic already visited is rejected instead of being followed forever.
    """

    def __init__(self, store: TopicStore) -> None:
        self.store = store

    def resolve_sequence(self, processor_id: TopicId) -> list[Topic]:
        """Return the topics in chain order, start topic first.

        Raises:
            NoStartTopic: If the processor has no start relation
            SequenceCycleError: If the chain revisits a topic
            SequenceLookupFailure: If a relation query fails
        """
        sequence: list[Topic] = []
        visited: set[TopicId] = set()

        topic: Topic | None = self.find_start_topic(processor_id)
        while topic is not None:
            if topic.id in visited:
                raise SequenceCycleError(topic.id, [t.id for t in sequence])
            visited.add(topic.id)
            sequence.append(topic)
            topic = self.find_next_topic(topic.id)

        log.debug(
            "Topic sequence resolved",
            processor=processor_id,
            topics=[t.id for t in sequence],
        )
        return sequence

    def find_start_topic(self, processor_id: TopicId) -> Topic:
        try:
            topic = self.store.get_related_topic(
                processor_id, PROCESSOR_START, ROLE_PROCESSOR, ROLE_START
            )
        except Exception as e:
            raise SequenceLookupFailure(
                f"Finding start topic of processor {processor_id} failed: {e}", cause=e
            ) from e
        if topic is None:
            raise NoStartTopic(processor_id)
        return topic

    def find_next_topic(self, topic_id: TopicId) -> Topic | None:
        try:
            return self.store.get_related_topic(
                topic_id, SEQUENCE, ROLE_PREDECESSOR, ROLE_SUCCESSOR
            )
        except Exception as e:
            raise SequenceLookupFailure(
                f"Finding successor of topic {topic_id} failed: {e}", cause=e
            ) from e
