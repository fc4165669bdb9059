"""Statue static site generator.

Statue scans a tree of markdown files, renders them to HTML through shared
Jinja2 page templates and writes a deployable output directory together
with sitemap.xml and robots.txt.

The content pipeline lives in :mod:`statue.content` (scanning),
:mod:`statue.repository` (queries), :mod:`statue.cache` and
:mod:`statue.sidebar`; the CLI module provides the ``build`` and
``serve`` commands.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
