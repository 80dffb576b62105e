# ruff: noqa: INP001

import photoionization

project = "ryd-photoionization"
copyright = "2025, Photoionization Developers"  # noqa: A001
author = "Photoionization Developers"
version = photoionization.__version__
release = version

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.mathjax",
    "sphinx.ext.napoleon",
    "sphinx_autodoc_typehints",
]
exclude_patterns = ["_build"]
master_doc = "index"
html_theme = "sphinx_rtd_theme"

autosummary_ignore_module_all = False
autodoc_typehints = "both"
