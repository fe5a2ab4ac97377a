"""Sphinx configuration for visparams docs."""

project = "visparams"
copyright = "2025, visparams developers"
author = "visparams developers"
release = "0.1.0"

root_doc = "index"

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "myst_parser",
]

exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

html_theme = "sphinx_rtd_theme"

# MyST settings
myst_enable_extensions = ["colon_fence"]

autodoc_member_order = "bysource"
