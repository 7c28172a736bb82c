"""Default values and limits for PDF Rasterizer."""

# Conversion defaults
DEFAULT_FORMAT = "png"
DEFAULT_QUALITY = 0.9
DEFAULT_SCALE = 2.0
DEFAULT_MAX_WIDTH = 0

# Scale presets offered by the CLI help (1x = 72 DPI)
SCALE_PRESETS = (1.0, 1.5, 2.0, 3.0, 4.0)
POINTS_PER_INCH = 72

# Quality bounds for lossy output
MIN_QUALITY = 0.0
MAX_QUALITY = 1.0

# Output naming
PAGE_FILENAME_PREFIX = "page"
ARCHIVE_FOLDER = "images"
ARCHIVE_SUFFIX = "-images"
ARCHIVE_EXTENSION = "zip"
ARCHIVE_MEDIA_TYPE = "application/zip"
DEFAULT_DOCUMENT_NAME = "document"

# Fixed timestamp for archive entries so identical input gives identical bytes
ARCHIVE_TIMESTAMP = (1980, 1, 1, 0, 0, 0)

# Free space required in the output directory before writing
MIN_FREE_SPACE_MB = 10

# Keys accepted in JSON settings files
SETTINGS_KEYS = ("format", "quality", "scale", "max_width")
