"""
Constants and configuration values for the avatar maker.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Avatar defaults
DEFAULT_AVATAR_SIZE = (300, 300)
DEFAULT_CORNER_RADIUS = 25.0

# Corner geometry
SEAM_BIAS = 0.5  # corner squares start at the outer edge of the first pixel
DEFAULT_ARC_SEGMENTS = 32

# Coverage sampling (samples per pixel axis)
DEFAULT_SUPERSAMPLE = 4
MIN_SUPERSAMPLE = 1
MAX_SUPERSAMPLE = 16
COVERAGE_BAND_SAMPLES = 1 << 18  # samples evaluated at once while computing coverage

# Alpha replacement rules for partially covered pixels
ALPHA_RULE_CLAMP = "clamp"
ALPHA_RULE_SCALE = "scale"
ALPHA_RULES = (ALPHA_RULE_CLAMP, ALPHA_RULE_SCALE)
DEFAULT_ALPHA_RULE = ALPHA_RULE_CLAMP

# Resampling filter used by the resize/crop stage
DEFAULT_RESAMPLE = "lanczos"

# Output
DEFAULT_OUTPUT_FORMAT = "PNG"
ALPHA_OUTPUT_FORMATS = {
    "PNG": ".png",
    "WEBP": ".webp",
    "TIFF": ".tiff",
}

# Download
DOWNLOAD_TIMEOUT_SECONDS = 30
DOWNLOAD_FALLBACK_NAME = "download"
DOWNLOAD_DIR_PREFIX = "avatar-"

# Node types
NODE_TYPE_IMAGE_IMPORT = "Image Import"
NODE_TYPE_RESIZE_CROP = "Resize Crop"
NODE_TYPE_ROUNDED_CORNERS = "Rounded Corners"
NODE_TYPE_AVATAR = "Avatar"
NODE_TYPE_OUTPUT = "Output"
