"""diffgate - coverage and quality gates for the lines a diff touches."""

__version__ = "0.1.0"
