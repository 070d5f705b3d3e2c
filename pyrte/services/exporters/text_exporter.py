from __future__ import annotations

from pyrte.domain.interfaces import IExporter
from pyrte.domain.models import ExportArtifact, ExportSource


class TextExporter(IExporter):
    name = "txt"
    label = "Export as Text"
    file_ext = "txt"
    media_type = "text/plain"

    def export(self, source: ExportSource, basename: str) -> ExportArtifact:
        return self.artifact(source.text.encode("utf-8"), basename)
