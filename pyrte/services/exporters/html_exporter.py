from __future__ import annotations

from pyrte.domain.interfaces import IExporter
from pyrte.domain.models import ExportArtifact, ExportSource


class HtmlExporter(IExporter):
    name = "html"
    label = "Export as HTML"
    file_ext = "html"
    media_type = "text/html"

    def export(self, source: ExportSource, basename: str) -> ExportArtifact:
        return self.artifact(source.html.encode("utf-8"), basename)
