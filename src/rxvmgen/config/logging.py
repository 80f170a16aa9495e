"""structlog configuration for rxvmgen.

Logs go to stderr only, so generated code on stdout stays pipeable:
a console renderer by default (colored on a TTY), JSON lines with
``--log-json``. Records from stdlib ``logging.getLogger(__name__)``
loggers pass through the same renderer as structlog events.
"""

from __future__ import annotations

import logging
import sys

import structlog

HANDLER_NAME = "rxvmgen"

# Third-party loggers kept at WARNING even with --verbose.
_QUIET_LIBRARIES = ("jinja2",)


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _stderr_handler(
    renderer: structlog.types.Processor,
    pre_chain: list[structlog.types.Processor],
) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    return handler


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route structlog and stdlib logging to stderr.

    Repeated calls replace the previously installed rxvmgen handler and
    leave any other root handlers in place.

    Args:
        verbose: ``rxvmgen.*`` loggers at DEBUG instead of WARNING.
        log_json: Render JSON lines instead of the console format.
    """
    processors = _shared_processors()
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(_stderr_handler(renderer, processors))
    root.setLevel(logging.WARNING)

    logging.getLogger("rxvmgen").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)
