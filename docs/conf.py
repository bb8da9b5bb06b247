"""
Sphinx configuration file for hyperexp documentation.
"""

# Configuration file for the Sphinx documentation builder.
# This file only contains a selection of the most common options.

# -- Project information -----------------------------------------------------

project = 'hyperexp'
copyright = '2024, hyperexp developers'
author = 'hyperexp developers'

# The full version, including alpha/beta/rc tags
release = '0.1.0'

# -- General configuration ---------------------------------------------------

# Add any Sphinx extension module names here, as strings.
extensions = [
    'sphinx.ext.napoleon',
    'sphinx.ext.autodoc',
    'sphinx.ext.viewcode',
    'sphinx.ext.mathjax',
]

# Add any paths that contain templates here, relative to this directory.
templates_path = ['_templates']

# List of patterns, relative to source directory, that match files and
# directories to ignore when looking for source files.
exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store']

# -- Options for HTML output -------------------------------------------------

# The theme to use for HTML and HTML Help pages.
html_theme = 'sphinx_rtd_theme'

# -- Theme options -----------------------------------------------------------

html_theme_options = {
    'prev_next_buttons_location': 'bottom',
    'navigation_depth': 3,
}

# -- Autodoc settings --------------------------------------------------------

autodoc_member_order = 'bysource'
autodoc_default_options = {
    'members': True,
    'show-inheritance': True,
}

# -- Napoleon settings -------------------------------------------------------

napoleon_google_docstring = False
napoleon_numpy_docstring = True
napoleon_use_param = True
napoleon_use_rtype = True
