"""
Configuration constants for the photo library.
"""

# --- Library Layout ---
# Everything the library writes about itself lives under this directory
# inside the output root, so it never collides with sorted files.
META_DIR_NAME = "_pometa"
INDEX_FILE_NAME = "hashes"
LOG_FILE_NAME = "photolib.log"

# --- Index Format ---
# Bump INDEX_VERSION whenever the on-disk layout changes. Older files keep
# loading; newer ones are refused instead of being misread.
INDEX_VERSION = 1
CONTENT_SENTINEL = "--START-CONTENT--"
HASH_HEX_LENGTH = 64
HASH_DIGEST_SIZE = 32

# --- Hashing ---
HASH_CHUNK_SIZE = 64 * 1024  # 64 KB chunks for reading

# --- Settings ---
DEFAULT_CONFIG_FILE = "photolib.toml"
DEFAULT_EXTENSIONS = ["jpg", "jpeg", "png", "heic", "dng", "cr2", "nef", "arw", "mp4", "mov"]
LOG_LEVEL_ENV = "PHOTOLIB_LOG_LEVEL"
