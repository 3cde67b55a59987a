"""Serialize an ordered topic sequence as a DITA map plus topic files."""

from pathlib import Path
from typing import Protocol

from lxml import etree

from ditakit.config.constants import DITA_BODY, MAP_SUFFIX, TOPIC_SUFFIX
from ditakit.exceptions import ExportFailure
from ditakit.graph.model import Topic
from ditakit.utils.logging import get_logger

log = get_logger(__name__)

MAP_DOCTYPE = '<!DOCTYPE map PUBLIC "-//OASIS//DTD DITA Map//EN" "map.dtd">'
TOPIC_DOCTYPE = '<!DOCTYPE topic PUBLIC "-//OASIS//DTD DITA Topic//EN" "topic.dtd">'


class DocumentExporter(Protocol):
    """Writes the intermediate document the toolchain renders."""

    def export(self, container: Topic, sequence: list[Topic]) -> Path:
        """Write ``<container.id>.xml`` into the working directory and return its path."""
        ...


def map_path(work_dir: Path, container_id: int) -> Path:
    """Location of the intermediate map for a container."""
    return work_dir / f"{container_id}{MAP_SUFFIX}"


class DitaMapExporter:
    """Write one DITA map referencing one topic file per sequence entry.

    The map keeps sequence order; each topic file carries the topic label as
    title and the ``dita.body`` property as paragraphs separated by blank
    lines.
    """

    def __init__(self, work_dir: Path) -> None:
        self.work_dir = work_dir

    def export(self, container: Topic, sequence: list[Topic]) -> Path:
        target = map_path(self.work_dir, container.id)
        try:
            for topic in sequence:
                self._write(self._topic_path(topic), self.build_topic(topic), TOPIC_DOCTYPE)
            self._write(target, self.build_map(container, sequence), MAP_DOCTYPE)
        except (OSError, ValueError) as e:
            raise ExportFailure(target, str(e), cause=e) from e

        log.info("Document exported", map=str(target), topics=len(sequence))
        return target

    def build_map(self, container: Topic, sequence: list[Topic]) -> etree._Element:
        root = etree.Element("map", id=f"map-{container.id}")
        etree.SubElement(root, "title").text = container.value or str(container.id)
        for topic in sequence:
            etree.SubElement(
                root,
                "topicref",
                href=self._topic_path(topic).name,
                navtitle=topic.value or str(topic.id),
            )
        return root

    def build_topic(self, topic: Topic) -> etree._Element:
        root = etree.Element("topic", id=f"topic-{topic.id}")
        etree.SubElement(root, "title").text = topic.value or str(topic.id)
        body = etree.SubElement(root, "body")
        for paragraph in _paragraphs(topic.get_string(DITA_BODY, "")):
            etree.SubElement(body, "p").text = paragraph
        return root

    def _topic_path(self, topic: Topic) -> Path:
        return self.work_dir / f"{topic.id}{TOPIC_SUFFIX}"

    @staticmethod
    def _write(path: Path, root: etree._Element, doctype: str) -> None:
        path.write_bytes(
            etree.tostring(
                root,
                xml_declaration=True,
                encoding="UTF-8",
                pretty_print=True,
                doctype=doctype,
            )
        )


def _paragraphs(text: str | None) -> list[str]:
    if not text:
        return []
    blocks = (" ".join(block.split()) for block in text.split("\n\n"))
    return [block for block in blocks if block]
