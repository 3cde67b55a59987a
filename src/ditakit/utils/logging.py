"""Logging configuration using structlog."""

import logging
import sys
import uuid
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from structlog.typing import EventDict, WrappedLogger

import structlog

BoundLogger = structlog.stdlib.BoundLogger


# =============================================================================
# Job Context
# =============================================================================

_job_id_var: ContextVar[str | None] = ContextVar("job_id", default=None)
_processor_var: ContextVar[int | None] = ContextVar("processor_id", default=None)
_container_var: ContextVar[int | None] = ContextVar("container_id", default=None)


def generate_job_id() -> str:
    """Generate a short 8-character id for correlating one render job."""
    return str(uuid.uuid4())[:8]


def get_job_id() -> str | None:
    """Get the id of the render job currently being logged, if any."""
    return _job_id_var.get()


@contextmanager
def job_context(
    processor_id: int | None = None,
    container_id: int | None = None,
    job_id: str | None = None,
) -> Generator[str, None, None]:
    """Tag every log record emitted inside the block with the render job.

    Example:
        >>> with job_context(processor_id=42, container_id=7) as job_id:
        ...     log.info("Rendering")  # includes job, processor and container
    """
    tokens = (
        _job_id_var.set(job_id or generate_job_id()),
        _processor_var.set(processor_id),
        _container_var.set(container_id),
    )
    try:
        yield _job_id_var.get()  # type: ignore[misc]
    finally:
        _container_var.reset(tokens[2])
        _processor_var.reset(tokens[1])
        _job_id_var.reset(tokens[0])


def _inject_job_context(
    _logger: "WrappedLogger", _method_name: str, event_dict: "EventDict"
) -> "EventDict":
    """Add job, processor and container ids unless the call already set them."""
    for key, var in (
        ("job", _job_id_var),
        ("processor", _processor_var),
        ("container", _container_var),
    ):
        value = var.get()
        if value is not None and key not in event_dict:
            event_dict[key] = value
    return event_dict


# =============================================================================
# Logging Configuration
# =============================================================================


class SafeStreamHandler(logging.StreamHandler):
    """A StreamHandler that replaces characters the stream cannot encode."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            stream = self.stream
            try:
                stream.write(msg + self.terminator)
            except UnicodeEncodeError:
                safe_msg = msg.encode(stream.encoding or "utf-8", errors="replace").decode(
                    stream.encoding or "utf-8", errors="replace"
                )
                stream.write(safe_msg + self.terminator)
            self.flush()
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)


# Toolchain output can be very long; keep log lines readable
_MAX_VALUE_LENGTH = 500

# Keys that are handled specially by ConsoleRenderer (not user context)
_INTERNAL_KEYS = {"event", "level", "timestamp", "_record", "_from_structlog"}


def _filter_event_dict(
    _logger: "WrappedLogger", _method_name: str, event_dict: "EventDict"
) -> "EventDict":
    """Truncate excessively long values in the event dict."""
    for key, value in list(event_dict.items()):
        if isinstance(value, str) and len(value) > _MAX_VALUE_LENGTH:
            event_dict[key] = value[:_MAX_VALUE_LENGTH] + f"... [{len(value)} chars total]"
        elif isinstance(value, (bytes, bytearray)) and len(value) > _MAX_VALUE_LENGTH:
            event_dict[key] = f"[BINARY DATA: {len(value)} bytes]"
    return event_dict


def _add_separator(
    _logger: "WrappedLogger", _method_name: str, event_dict: "EventDict"
) -> "EventDict":
    """Add a visual separator between event message and context variables."""
    has_context = any(k not in _INTERNAL_KEYS for k in event_dict)
    if has_context and "event" in event_dict:
        event_dict["event"] = f"{event_dict['event']} |"
    return event_dict


def _console_renderer(colors: bool) -> structlog.types.Processor:
    return structlog.dev.ConsoleRenderer(
        colors=colors,
        exception_formatter=structlog.dev.plain_traceback,
        pad_event_to=0,
        pad_level=False,
    )


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    json_format: bool = False,
    console_level: str | None = None,
    file_level: str | None = None,
) -> None:
    """Configure structlog for the application.

    Args:
        level: Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path; logs go to both console and file, rotated
                  daily with 7 days of history
        json_format: If True, render JSON instead of console lines
        console_level: Optional override for console handler level
        file_level: Optional override for file handler level
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _inject_job_context,
        _filter_event_dict,
        _add_separator,
    ]

    if json_format:
        final_processor: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = _console_renderer(colors=True)

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            final_processor,
        ],
    )

    console_handler = SafeStreamHandler(sys.stderr)
    c_level = getattr(logging, console_level.upper(), log_level) if console_level else log_level
    console_handler.setLevel(c_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)

        file_formatter = structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer()
                if json_format
                else _console_renderer(colors=False),
            ],
        )

        file_handler = TimedRotatingFileHandler(
            log_file,
            when="midnight",
            interval=1,
            backupCount=7,
            encoding="utf-8",
        )
        file_handler.suffix = "%Y-%m-%d"
        f_level = getattr(logging, file_level.upper(), log_level) if file_level else log_level
        file_handler.setLevel(f_level)
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,  # Allow reconfiguration
    )


def get_logger(name: str | None = None) -> BoundLogger:
    """Get a structlog bound logger."""
    return structlog.get_logger(name)


def create_task_log_path(log_dir: str | Path, prefix: str = "task") -> tuple[str, Path]:
    """Create a unique task log file path with timestamp and short UUID.

    Example:
        >>> task_id, log_path = create_task_log_path(".logs", "render")
        >>> print(log_path)  # .logs/render_20260109_143052_a1b2c3d4.log
    """
    log_dir_path = Path(log_dir)
    log_dir_path.mkdir(parents=True, exist_ok=True)

    task_id = generate_job_id()
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir_path / f"{prefix}_{timestamp}_{task_id}.log"

    return task_id, log_file


def setup_task_logging(
    log_dir: str | Path,
    prefix: str = "task",
    verbose: bool = False,
    json_format: bool = False,
) -> tuple[str, Path]:
    """Setup logging for one CLI task.

    The console shows WARNING and above unless verbose, the task log file
    always captures DEBUG.

    Returns:
        Tuple of (task_id, log_file_path)
    """
    task_id, log_path = create_task_log_path(log_dir, prefix)

    setup_logging(
        level="DEBUG",
        log_file=str(log_path),
        json_format=json_format,
        console_level="DEBUG" if verbose else "WARNING",
        file_level="DEBUG",
    )

    return task_id, log_path
