"""Confluence export analysis for MediaWiki migrations.

Reads the ``entities.xml`` metadata document of a Confluence XML export and
derives the lookup tables (namespace prefixes, target titles, attachment
file references, revision fingerprints) used by later migration stages.
"""

__version__ = "0.1.0"
