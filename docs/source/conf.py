import os
import sys
sys.path.insert(0, os.path.abspath('../..'))

from domattach import __version__

# Project information
project = 'Domattach'
copyright = '2026, Domattach Authors'
author = 'Domattach Authors'
release = __version__

# Sphinx general settings
extensions = [
    'sphinx.ext.autodoc',
    'sphinxarg.ext',
]
templates_path = ['_templates']
exclude_patterns = []
language = 'en'

# HTML output settings
html_theme = 'alabaster'
html_static_path = ['_static']

# autodoc
autodoc_mock_imports = ['libvirt']
autodoc_typehints = 'description'
autodoc_member_order = 'bysource'
