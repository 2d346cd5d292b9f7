# Configuration file for the Sphinx documentation builder.
#
# odesim documentation

import os
import sys

# Allow Sphinx to import the odesim package
sys.path.insert(0, os.path.abspath(".."))

import odesim  # noqa: E402

# -- Project information -----------------------------------------------------
project = "odesim"
author = "odesim"
copyright = "2025, odesim"
release = odesim.__version__
version = ".".join(release.split(".")[:2])

# -- General configuration ---------------------------------------------------
extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.mathjax",
    "sphinx.ext.intersphinx",
]
exclude_patterns = ["_build"]

# -- Options for HTML output -------------------------------------------------
try:
    import sphinx_rtd_theme  # noqa: F401
    html_theme = "sphinx_rtd_theme"
except ImportError:
    html_theme = "alabaster"
html_title = "odesim"

# -- Extension configuration -------------------------------------------------
autodoc_default_options = {
    "members": True,
    "member-order": "bysource",
    "show-inheritance": True,
}
# plotting helpers import matplotlib lazily; mock it for builds without it
autodoc_mock_imports = ["matplotlib"]

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
}

napoleon_google_docstring = True
napoleon_numpy_docstring = False
