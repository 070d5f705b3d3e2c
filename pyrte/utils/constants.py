APP_ORG = "QuickTools"
APP_NAME = "PyRichTextEditor"

DEFAULT_TITLE = "Untitled Document"
DEFAULT_FONT = "Inter"

# Qt merges a bare <p></p> into the next block on import; this form survives
EMPTY_PARAGRAPH = '<p style="-qt-paragraph-type:empty"><br /></p>'

AUTOSAVE_DELAY_MS = 1000

FONT_OPTIONS = [
    "Inter",
    "Arial",
    "Georgia",
    "Times New Roman",
    "Courier New",
    "Verdana",
    "Comic Sans MS",
]

# (label, value); an empty value clears the mark
TEXT_COLORS = [
    ("Default", ""),
    ("Red", "#ef4444"),
    ("Orange", "#f97316"),
    ("Yellow", "#eab308"),
    ("Green", "#22c55e"),
    ("Blue", "#3b82f6"),
    ("Purple", "#a855f7"),
    ("Pink", "#ec4899"),
    ("Gray", "#6b7280"),
]

HIGHLIGHT_COLORS = [
    ("None", ""),
    ("Yellow", "#fef08a"),
    ("Green", "#bbf7d0"),
    ("Blue", "#bfdbfe"),
    ("Pink", "#fbcfe8"),
    ("Orange", "#fed7aa"),
    ("Purple", "#e9d5ff"),
]

IMPORT_FILTER = (
    "Documents (*.txt *.md *.html *.htm *.rtf *.pdf *.docx);;"
    "Text (*.txt *.md *.rtf);;HTML (*.html *.htm);;PDF (*.pdf);;Word (*.docx);;"
    "All files (*)"
)

MIME_PDF = "application/pdf"
MIME_DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

# PDF text layout, in points (A4)
PDF_PAGE_WIDTH = 595.28
PDF_PAGE_HEIGHT = 841.89
PDF_MARGIN = 48.0
PDF_LINE_HEIGHT = 14.0
PDF_FONT_FAMILY = "Helvetica"
PDF_FONT_SIZE = 11.0

LEGACY_DOC_MESSAGE = "Legacy .doc files are not supported. Please convert to .docx first."
UNREADABLE_MESSAGE = "Could not read the file. Please try again."

SETTINGS_GEOMETRY = "window/geometry"
SETTINGS_SPLITTER = "window/splitter"
SETTINGS_LAST_DOCUMENT = "document/last"
SETTINGS_LAST_EMAIL = "account/email"
