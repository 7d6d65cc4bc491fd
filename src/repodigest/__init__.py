"""repodigest - Turn a directory of source files into an LLM-ready digest.

The digest is a pruned directory tree plus the header-annotated contents of
every file that survived the extension, size and pattern filters.
"""

__version__ = "0.1.0"
