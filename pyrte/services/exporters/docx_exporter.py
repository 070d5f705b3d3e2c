from __future__ import annotations

import re
from io import BytesIO

from docx import Document

from pyrte.domain.interfaces import IExporter
from pyrte.domain.models import ExportArtifact, ExportSource
from pyrte.utils.constants import MIME_DOCX

# Characters XML 1.0 cannot carry; python-docx refuses them
_XML_INVALID = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffc]")


class DocxExporter(IExporter):
    """One Word paragraph per line of the visible text."""

    name = "docx"
    label = "Export as DOCX"
    file_ext = "docx"
    media_type = MIME_DOCX

    def export(self, source: ExportSource, basename: str) -> ExportArtifact:
        doc = Document()
        doc.core_properties.title = basename
        for line in source.text.split("\n"):
            doc.add_paragraph(_XML_INVALID.sub("", line))
        out = BytesIO()
        doc.save(out)
        return self.artifact(out.getvalue(), basename)
