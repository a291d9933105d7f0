"""Sphinx configuration for the fernbank documentation."""

import os
import sys
sys.path.insert(0, os.path.abspath('../src'))

from fernbank.__version__ import __version__

project = 'fernbank'
author = 'fernbank Team'
copyright = '2024, fernbank Team'
version = release = __version__

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx_click',
]

exclude_patterns = ['_build']
master_doc = 'index'

# Members are documented in source order (fetch, aggregate, name, count)
autodoc_member_order = 'bysource'
autodoc_typehints = 'description'

html_theme = 'sphinx_rtd_theme'
html_title = f'fernbank {release}'

napoleon_google_docstring = True
napoleon_numpy_docstring = False
