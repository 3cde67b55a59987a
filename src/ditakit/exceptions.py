"""Custom exceptions for ditakit."""

from pathlib import Path


class DitakitError(Exception):
    """Base exception class for ditakit."""

    pass


class TopicNotFound(DitakitError):
    """A topic id is not known to the topic store."""

    def __init__(self, topic_id: int) -> None:
        self.topic_id = topic_id
        super().__init__(f"Topic {topic_id} not found")


class AmbiguousRelationError(DitakitError):
    """More than one topic is related where at most one is allowed."""

    def __init__(self, topic_id: int, kind: str, candidates: list[int]) -> None:
        self.topic_id = topic_id
        self.kind = kind
        self.candidates = candidates
        super().__init__(
            f"Topic {topic_id} has {len(candidates)} related topics via {kind}: {candidates}"
        )


class SequenceLookupFailure(DitakitError):
    """Error while querying the relations that make up a topic sequence."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)


class NoStartTopic(SequenceLookupFailure):
    """The processor configuration has no start topic."""

    def __init__(self, processor_id: int) -> None:
        self.processor_id = processor_id
        super().__init__(f"No start topic defined for processor {processor_id}")


class SequenceCycleError(SequenceLookupFailure):
    """The successor chain returns to a topic already in the sequence."""

    def __init__(self, topic_id: int, sequence: list[int]) -> None:
        self.topic_id = topic_id
        self.sequence = sequence
        super().__init__(f"Sequence revisits topic {topic_id} after {sequence}")


class OutputFormatMissing(DitakitError):
    """The processor configuration does not declare an output format."""

    def __init__(self, processor_id: int) -> None:
        self.processor_id = processor_id
        super().__init__(f"Output format not set on processor {processor_id}")


class ExportFailure(DitakitError):
    """Error while writing the intermediate document."""

    def __init__(self, target: Path, message: str, cause: Exception | None = None) -> None:
        self.target = target
        self.cause = cause
        super().__init__(f"Export to {target} failed: {message}")


class RenderFailure(DitakitError):
    """The rendering toolchain failed."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)


class ToolchainUnavailable(DitakitError):
    """No toolchain installation and no bundled archive to unpack."""

    pass


class BootstrapIOFailure(DitakitError):
    """Unpacking the bundled toolchain failed."""

    def __init__(self, install_dir: Path, message: str, cause: Exception | None = None) -> None:
        self.install_dir = install_dir
        self.cause = cause
        super().__init__(f"Failed to unpack toolchain into {install_dir}: {message}")


class DirectoryCreationFailure(DitakitError):
    """A working directory could not be created."""

    def __init__(self, path: Path, cause: Exception | None = None) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Could not create directory {path}")


class GraphLoadError(DitakitError):
    """A topic graph document could not be read or validated."""

    def __init__(self, source: Path, message: str, cause: Exception | None = None) -> None:
        self.source = source
        self.cause = cause
        super().__init__(f"Cannot load topic graph {source}: {message}")
