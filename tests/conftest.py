"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from ditakit.config.constants import (
    DITA_BODY,
    DITA_OUTPUT_FORMAT,
    PROCESSOR_START,
    ROLE_PREDECESSOR,
    ROLE_PROCESSOR,
    ROLE_START,
    ROLE_SUCCESSOR,
    SEQUENCE,
)
from ditakit.graph.model import Player, Relation, Topic, TopicGraph

CONTAINER_ID = 1000
PROCESSOR_ID = 1

# A launcher that records its arguments and working directory, then exits
# with the code found in $FAKE_DITA_EXIT (default 0).
FAKE_LAUNCHER = """#!/bin/sh
printf '%s\\n' "$@" > "$DITA_HOME/last-args.txt"
pwd > "$DITA_HOME/last-cwd.txt"
echo "${CLASSPATH:-unset}" > "$DITA_HOME/last-classpath.txt"
exit "${FAKE_DITA_EXIT:-0}"
"""


def _build_chain_graph(
    chain: list[int],
    output_format: str | None = "html5",
    with_start: bool = True,
) -> TopicGraph:
    """Container 1000, processor 1, and topics linked start -> successor in chain order."""
    children = {DITA_OUTPUT_FORMAT: output_format} if output_format else {}
    graph = TopicGraph(
        Topic(id=CONTAINER_ID, type_uri="dita.topicmap", value="User Guide"),
        [Topic(id=PROCESSOR_ID, type_uri="dita.processor", value="Processor", children=children)],
    )
    for topic_id in chain:
        graph.add_topic(
            Topic(
                id=topic_id,
                type_uri="dita.topic",
                value=f"Topic {topic_id}",
                children={DITA_BODY: f"Body of {topic_id}."},
            )
        )

    relation_id = 0
    if chain and with_start:
        relation_id += 1
        graph.add_relation(
            Relation(
                id=relation_id,
                kind=PROCESSOR_START,
                first=Player(ROLE_PROCESSOR, PROCESSOR_ID),
                second=Player(ROLE_START, chain[0]),
            )
        )
    for predecessor, successor in zip(chain, chain[1:], strict=False):
        relation_id += 1
        graph.add_relation(
            Relation(
                id=relation_id,
                kind=SEQUENCE,
                first=Player(ROLE_PREDECESSOR, predecessor),
                second=Player(ROLE_SUCCESSOR, successor),
            )
        )
    return graph


def _link(graph: TopicGraph, predecessor: int, successor: int) -> None:
    """Add one more sequence relation to a graph."""
    graph.add_relation(
        Relation(
            id=len(graph.relations) + 1,
            kind=SEQUENCE,
            first=Player(ROLE_PREDECESSOR, predecessor),
            second=Player(ROLE_SUCCESSOR, successor),
        )
    )


@pytest.fixture
def make_chain_graph():
    """Factory building a graph whose processor starts a linear chain of topics."""
    return _build_chain_graph


@pytest.fixture
def add_link():
    """Function adding one sequence relation to a graph."""
    return _link


@pytest.fixture
def chain_graph() -> TopicGraph:
    """Processor 1 -> 10 -> 11 -> 12."""
    return _build_chain_graph([10, 11, 12])


@pytest.fixture
def installed_toolchain(tmp_path: Path) -> Path:
    """An install dir that looks like an unpacked DITA-OT."""
    install = tmp_path / "dita-ot"
    (install / "config").mkdir(parents=True)
    (install / "bin").mkdir()
    (install / "config" / "configuration.properties").write_text(
        "# generated\ntranstypes=html5;pdf;markdown\n", encoding="utf-8"
    )
    launcher = install / "bin" / "dita"
    launcher.write_text(FAKE_LAUNCHER, encoding="utf-8")
    launcher.chmod(0o755)
    return install


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep settings tests away from the developer's ditakit.yaml and env."""
    from ditakit.config.settings import get_settings

    for name in (
        "INSTALL_DIR",
        "OUTPUT_DIR",
        "TEMP_DIR",
        "BUNDLE_ARCHIVE",
        "TOOLCHAIN_TIMEOUT",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(f"DITAKIT_{name}", raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()

