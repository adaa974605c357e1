# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Logging setup for the CSRF filter.

The filter logs through structlog under the ``csrfshield.csrf`` logger:
rejections at WARNING, random-source failures at ERROR and token issuance at
DEBUG. :func:`configure_logging` picks the renderer and the threshold for
that logger from ``csrfshield.logging.level`` and ``csrfshield.logging.format``
(``console`` or ``json``), or from explicit arguments.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from csrfshield.core.config import Config
from csrfshield.kernel.exceptions import ConfigurationException

CSRF_LOGGER_NAME = "csrfshield.csrf"

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_FORMATS = ("console", "json")


def get_csrf_logger() -> Any:
    """Return the structlog logger the CSRF filter writes to."""
    return structlog.get_logger(CSRF_LOGGER_NAME)


def configure_logging(
    config: Config | None = None,
    *,
    level: str | None = None,
    fmt: str | None = None,
) -> logging.Logger:
    """Configure structlog rendering and the ``csrfshield.csrf`` threshold.

    Explicit *level* and *fmt* win over *config*. The stdlib logger behind
    the filter gets a stdout handler only when it has none, so repeated calls
    never duplicate output and handlers installed by the host application are
    left alone.

    Returns:
        The stdlib ``csrfshield.csrf`` logger.

    Raises:
        ConfigurationException: For an unknown level or format.
    """
    config = config or Config()
    level_name = str(level or config.get("csrfshield.logging.level", "INFO")).upper()
    fmt_name = str(fmt or config.get("csrfshield.logging.format", "console")).lower()

    if level_name not in _LEVELS:
        raise ConfigurationException(
            f"unknown log level {level_name!r}",
            code="CONFIG_LOG_LEVEL",
            context={"level": level_name},
        )
    if fmt_name not in _FORMATS:
        raise ConfigurationException(
            f"unknown log format {fmt_name!r}",
            code="CONFIG_LOG_FORMAT",
            context={"format": fmt_name},
        )

    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if fmt_name == "json" else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )

    csrf_logger = logging.getLogger(CSRF_LOGGER_NAME)
    csrf_logger.setLevel(getattr(logging, level_name))
    if not csrf_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        csrf_logger.addHandler(handler)
    return csrf_logger
