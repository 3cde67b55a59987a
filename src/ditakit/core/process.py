"""One render job: resolve, export, render."""

from pathlib import Path

from ditakit.config.constants import DITA_OUTPUT_FORMAT
from ditakit.core.runtime import DitaRuntime
from ditakit.core.sequence import SequenceResolver
from ditakit.exceptions import OutputFormatMissing, RenderFailure
from ditakit.export.dita import map_path
from ditakit.graph.model import TopicId, TopicStore
from ditakit.toolchain.context import isolated_context
from ditakit.utils.logging import get_logger, job_context

log = get_logger(__name__)


class DitaProcess:
    """Render the topic sequence of one processor configuration.

    Runs synchronously; a job either completes or raises. Intermediate and
    partial output is left in place on failure.
    """

    def __init__(
        self,
        processor_id: TopicId,
        container_id: TopicId,
        store: TopicStore,
        runtime: DitaRuntime,
    ) -> None:
        self.processor_id = processor_id
        self.container_id = container_id
        self.store = store
        self.runtime = runtime
        self.resolver = SequenceResolver(store)

    def run(self) -> Path:
        """Resolve the sequence, export it and render it.

        Returns:
            The output directory the toolchain wrote to
        """
        with job_context(processor_id=self.processor_id, container_id=self.container_id):
            sequence = self.resolver.resolve_sequence(self.processor_id)
            log.info("Topics in sequence", count=len(sequence))
            self.runtime.exporter.export(self.store.get_topic(self.container_id), sequence)
            self.render()
        return self.runtime.dirs.output

    def get_output_format(self) -> str:
        processor = self.store.get_topic(self.processor_id)
        output_format = processor.get_string(DITA_OUTPUT_FORMAT)
        if not output_format:
            raise OutputFormatMissing(self.processor_id)
        return output_format

    def render(self) -> None:
        """Run the toolchain over ``<temp>/<container_id>.xml``.

        Raises:
            OutputFormatMissing: Before any toolchain call, if no format is set
            RenderFailure: If the toolchain fails for any reason
        """
        output_format = self.get_output_format()
        dirs = self.runtime.dirs

        with isolated_context(dirs.install, dirs.temp) as context:
            try:
                self.runtime.toolchain.new_processor(output_format).set_input(
                    map_path(dirs.temp, self.container_id)
                ).set_output_dir(dirs.output).run(context)
            except RenderFailure:
                raise
            except Exception as e:
                raise RenderFailure(f"DITA-OT processing failed: {e}", cause=e) from e

        log.info("DITA-OT processing successful", format=output_format, output=str(dirs.output))
