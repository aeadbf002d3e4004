"""Module: smarttable.config.columns

Date: 2026-10-19

Column classification and cell formatting settings.
"""

# =====================================
# MEDIA COLUMN DETECTION
# =====================================

# Column names containing any of these terms are media column candidates
MEDIA_NAME_VOCABULARY = (
    "url",
    "photo",
    "image",
    "document",
    "file",
    "attachment",
    "media",
    "avatar",
    "picture",
    "pic",
    "pdf",
    "doc",
    "video",
    "audio",
    "logo",
)

# Ordered: first matching group wins
MEDIA_KIND_KEYWORDS = (
    ("image", ("photo", "image", "avatar", "picture", "pic")),
    ("document", ("pdf", "doc", "document")),
    ("video", ("video",)),
    ("audio", ("audio",)),
)

# Rows inspected when confirming a candidate media column
CLASSIFIER_SAMPLE_SIZE = 5

# A sampled value qualifies as a file reference if it starts with one of these
FILE_REFERENCE_PREFIXES = ("http", "/")

# Extension -> kind, used for per-cell icons
MEDIA_EXTENSIONS = {
    "image": ("jpg", "jpeg", "png", "gif", "webp", "svg", "bmp"),
    "document": ("pdf", "doc", "docx", "txt", "rtf", "odt"),
    "video": ("mp4", "avi", "mov", "wmv", "flv", "webm"),
    "audio": ("mp3", "wav", "flac", "aac", "ogg"),
}

# Kinds that offer an external preview action
PREVIEWABLE_KINDS = ("image", "document")

# =====================================
# CELL FORMATTING
# =====================================

# Row fields checked (in order) for a file size annotation
FILE_SIZE_FIELDS = ("file_size", "size", "fileSize", "doc_size")

TEXT_TRUNCATE_LENGTH = 50
TEXT_TRUNCATE_KEEP = 47
TEXT_ELLIPSIS = "..."

NULL_TEXT = "null"
NO_FILE_TEXT = "No file"
DEFAULT_FILE_NAME = "file"
EMPTY_TABLE_TEXT = "No data available"
LOADING_TABLE_TEXT = "Loading..."

# =====================================
# SORTING
# =====================================

# Fields always compared numerically
NUMERIC_SORT_FIELDS = (
    "amount",
    "age",
    "salary",
    "fee",
    "commission",
    "balance",
    "price",
    "total",
)

# Fields always compared as instants
DATE_SORT_FIELDS = ()
