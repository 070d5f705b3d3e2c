from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from pyrte.domain.errors import ExportFailedError
from pyrte.domain.interfaces import IExporter, IExporterRegistry
from pyrte.domain.models import ExportArtifact, ExportSource

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^a-zA-Z0-9]")


def sanitize_basename(title: str) -> str:
    """Every character outside [A-Za-z0-9] becomes '_'; an empty title becomes 'document'."""
    return _UNSAFE.sub("_", title or "") or "document"


@dataclass
class ExporterRegistry(IExporterRegistry):
    """
    Instance-based exporter registry (no globals, no side-effects).
    Kept local to the DI container; registration order is menu order.
    """

    _reg: dict[str, IExporter] = field(default_factory=dict)

    def register(self, e: IExporter) -> None:
        self._reg[e.name] = e

    def get(self, name: str) -> IExporter:
        return self._reg[name]

    def all(self) -> list[IExporter]:
        return list(self._reg.values())


def run_export(exporter: IExporter, source: ExportSource, title: str) -> ExportArtifact:
    """Render 'source' with 'exporter'; any failure surfaces as ExportFailedError."""
    basename = sanitize_basename(title)
    try:
        artifact = exporter.export(source, basename)
    except ExportFailedError:
        raise
    except Exception as e:
        logger.exception("%s export of %r failed", exporter.name, basename)
        raise ExportFailedError(f"Failed to export {exporter.name.upper()}: {e}") from e
    logger.info("Exported %s (%d bytes)", artifact.filename, len(artifact.data))
    return artifact
