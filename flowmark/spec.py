"""
Flowmark Container Format v1.0
==============================

Layout:
    <name>.flm                   <- Zip-compatible archive
    └── document.json            <- The only member the format defines
                                    UTF-8 text, deflate-compressed

Payload:
    {"format": "flowmark", ...}  <- JSON object, `format` tag required
                                    every other field belongs to the editor

Design Decisions:
    - Zip container so the file opens in any archive tool
    - One member, whole-document overwrite (no partial updates)
    - Fixed timestamp + permission bits so saves are byte-for-byte reproducible
    - The tag is checked on load only; the payload is otherwise opaque
"""

import zipfile

# Member holding the JSON payload
MEMBER_NAME = "document.json"

# Required value of the payload's `format` field
FORMAT_TAG = "flowmark"

# File extension
EXTENSION = ".flm"

# Member write policy
COMPRESSION = zipfile.ZIP_DEFLATED
UNIX_PERMISSIONS = 0o644
FILE_TYPE_REGULAR = 0o100000
CREATE_SYSTEM_UNIX = 3
FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)  # Earliest timestamp zip can store

# Local file header signature - first bytes of every zip written by this package
ZIP_MAGIC = b"PK\x03\x04"

# Max magic scan (for fast identification - don't read more than this)
MAX_MAGIC_SCAN_BYTES = 4

# Safety limits
MAX_MEMBER_SIZE = 100 * 1024 * 1024  # 100MB max uncompressed payload

# Text encoding of the payload member
ENCODING = "utf-8"
