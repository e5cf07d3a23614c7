"""Schema-evolution compatibility harness.

Encode records under one schema revision, decode them under another, and
check which directions survive. See ``verifier``, ``store`` and ``channel``.
"""

__version__ = "0.1.0"
