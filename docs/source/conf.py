import os
import sys

sys.path.insert(0, os.path.abspath("../../src"))

import urlcraft  # noqa: E402

project = "Urlcraft"
author = "Rodrigo Ezequiel Roldán"
copyright = "2026, Rodrigo Ezequiel Roldán"
release = urlcraft.__version__

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.doctest",
    "myst_parser",
]

exclude_patterns = []

myst_heading_anchors = 2

# Public names are re-exported from urlcraft; document them once
autodoc_default_options = {
    "imported-members": False,
    "members": True,
}
autodoc_member_order = "bysource"

html_theme = "furo"
html_title = "Urlcraft"
