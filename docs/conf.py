"""Sphinx configuration for the investproj projection engine."""

import os
import sys

# Put the repository root on sys.path so autodoc can import investproj
sys.path.insert(0, os.path.abspath(".."))

# -- Project information ---

project = "investproj"
author = "investproj Contributors"
release = "0.1.0"

# -- General configuration ---

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "sphinx_autodoc_typehints",
]

# Google-style docstrings only
napoleon_google_docstrings = True
napoleon_numpy_docstrings = False
napoleon_include_init_with_doc = True

# The engine modules are documented in pipeline order
autodoc_member_order = "bysource"
autodoc_typehints = "description"
autodoc_default_options = {
    "members": True,
    "undoc-members": False,
    "show-inheritance": True,
}

# -- Options for HTML output ---

html_theme = "alabaster"

exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]
