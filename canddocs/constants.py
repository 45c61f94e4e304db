from __future__ import annotations

# Single source of truth for static pipeline constants.

SNAPSHOT_VERSION = 1

# Candidate artifacts: two scanned pages per candidate.
PAGES_PER_CANDIDATE = 2
CANDIDATE_FILE_TEMPLATE = "{session}_{exam}_{centre}_{index:04d}.pdf"
IMPORTED_SUFFIX = "_Tr"

# File state store retry discipline (seconds).
FILE_RETRY_ATTEMPTS = 15
FILE_RETRY_DELAY = 0.15
WRITE_SETTLE_DELAY = 0.10
IMPORT_SETTLE_DELAY = 0.15
MOVE_SETTLE_DELAY = 0.07

# OCR image preprocessing.
MAX_IMAGE_DIMENSION = 2500
CONTRAST_STRENGTH = 0.45
BLUR_SIGMA = 0.7
SHARPEN_KERNEL = (
  (0, -1, 0),
  (-1, 5, -1),
  (0, -1, 0),
)

# Tesseract tuning for short structured fields.
OCR_RENDER_DPI = 200
OCR_CHAR_WHITELIST = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-/. "
OCR_PAGE_SEG_MODE = 6  # single uniform block of text
OCR_ENGINE_MODE = 1  # LSTM only

# Document validation.
SESSION_YEAR_MIN = 2000
SESSION_YEAR_MAX = 2030
NAME_BOILERPLATE_MARKER = "CERTIFICATE"
