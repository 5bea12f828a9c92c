"""Centralized configuration constants for album-composer."""

# Crop geometry
MIN_VISIBLE_PX = 10  # Smallest visible span (px) a crop may leave on either axis

# Page templates: layout tag -> photos per page
LAYOUT_CAPACITY = {
    "single": 1,
    "twoColumns": 2,
    "twoRows": 2,
    "grid2x2": 4,
}

# Print settings
FULL_PAGE_MIN_PX = (2480, 3508)  # A4 at 300 DPI, either orientation

# Serialization
SCHEMA_VERSION = "1.0.0"  # JSON schema version for working sets and layouts

# Image discovery
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png")
