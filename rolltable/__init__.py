"""
rolltable - weighted random tables for tabletop games.

Keeps named lists of weighted, tagged entries and draws from them: entries
can be filtered by tag, redirected to other lists through pool directives,
and carry dice notation that is rolled at draw time.
"""

__version__ = "0.1.0"
