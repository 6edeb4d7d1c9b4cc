"""
GitGhost — Mirror commit activity into a placeholder repository.
"""

__version__ = "0.1.0"
