"""Common literal values used across pattern_assembly.

These constants keep reserved front-matter fields and marker syntax
centralized so the indexer, compositor, and tests import the same values
without drifting. Intended for internal use within the pattern_assembly
package.

Examples
--------
>>> from pattern_assembly import _constants
>>> _constants.NOTES_FIELD
'notes'
>>> bool(_constants.BODY_MARKER_PATTERN.search("<main>{% body %}</main>"))
True
"""

import re

NOTES_FIELD = "notes"
ORDER_FIELD = "order"
LAYOUT_FIELD = "layout"
DEST_FIELD = "dest"
DEST_COPY_FIELD = "dest-copy"
BASEURL_FIELD = "baseurl"
BLOCK_MARKUP_FIELD = "block_markup"
BLOCK_FLAG_FIELD = "is_block"
NAME_FIELD = "name"

COLLECTION_BASEURL = ".."
OUTPUT_SUFFIX = ".html"

BODY_MARKER_PATTERN = re.compile(r"\{%\s*body\s*%\}")
ERROR_LABEL = "pattern-assembly"
