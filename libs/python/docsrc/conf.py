# libs/python/docsrc/conf.py
import os
import sys

# -- Path setup --------------------------------------------------------------
# Make the 'src' directory importable so autodoc can find the package.
sys.path.insert(0, os.path.abspath('../src'))

# -- Project information -----------------------------------------------------
project = 'proxyobserver'
author = 'proxyobserver contributors'

try:
    from proxyobserver._version import __version__
    version = __version__
    release = __version__
except ImportError:
    print("Warning: Could not import proxyobserver._version to determine version.")
    version = '0.0.0'
    release = '0.0.0'

# -- General configuration ---------------------------------------------------
extensions = [
    'sphinx.ext.autodoc',      # Pull documentation from docstrings
    'sphinx.ext.napoleon',     # Google style "Args:/Returns:/Raises:" sections
    'sphinx.ext.intersphinx',  # Link to the Python documentation
    'sphinx.ext.viewcode',     # Add links to source code
]

autodoc_member_order = 'bysource'
napoleon_google_docstring = True
napoleon_numpy_docstring = False

intersphinx_mapping = {'python': ('https://docs.python.org/3', None)}

templates_path = ['_templates']
exclude_patterns = ['_build']

# -- Options for HTML output -------------------------------------------------
html_theme = 'sphinx_rtd_theme'
