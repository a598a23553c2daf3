"""CLI package.

The ``cli`` sub-package contains the Click application and its
commands. Commands import from the public ``tomlcore`` API plus the
``ast`` and ``grammar`` packages for dumping and printing.
"""
from __future__ import annotations
