"""Common literal values used across blog_index.

These constants keep folder names, metadata keys and artifact filenames
centralized so the config loader, the pipeline and the tests import the same
values without drifting.

Examples
--------
>>> from blog_index import _constants
>>> _constants.DEFAULT_PAGE_SIZE
4
>>> _constants.BUILD_PATHS_FILENAME
'build-paths.json'
"""

DEFAULT_BLOG_FOLDER_NAME = "blog"
DEFAULT_POST_FOLDER_NAME = "posts"
DEFAULT_CATEGORY_DESCRIPTION_FILE_NAME = "description.json"

DEFAULT_GENERATION_TIME_FIELD = "update"
DEFAULT_TITLE_FIELD = "title"

MIN_PAGE_SIZE = 4
DEFAULT_PAGE_SIZE = 4

MIN_TOC_DEPTH = 1
MAX_TOC_DEPTH = 5
EMPTY_HEADING_TEXT = "empty header"

SITEMAP_FILENAME = "sitemap.xml"
BUILD_PATHS_FILENAME = "build-paths.json"
