"""hamlbuild - HAML template build tool.

Compiles HAML templates with haml-js or haml-coffee and writes HTML or
wrapped JavaScript.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
