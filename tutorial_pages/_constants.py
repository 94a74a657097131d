"""Common literal values used across tutorial_pages.

These constants keep source markers, file suffixes, and template names
centralized so the segmenter, renderer, server, and tests can import the same
values without drifting. Intended for internal use within the tutorial_pages
package.

Examples
--------
>>> from tutorial_pages import _constants
>>> _constants.LITERATE_SUFFIX
'.gop'
>>> " " * _constants.TAB_WIDTH == _constants.TAB_REPLACEMENT
True
"""

TAB_WIDTH = 4
TAB_REPLACEMENT = " " * TAB_WIDTH

COMMENT_MARKER = "//"
HEADING_MARKER = "#"
HEADING_DEMOTION = "##"

LITERATE_SUFFIX = ".gop"
HOST_SUFFIX = ".go"
RUNNABLE_SUFFIXES = (LITERATE_SUFFIX, HOST_SUFFIX)
LITERATE_LEXER_FILENAME = "main.go"

EXAMPLE_TEMPLATE = "example.jinja"
INDEX_TEMPLATE = "index.jinja"
NOT_FOUND_TEMPLATE = "not_found.jinja"
