"""
Run Package

This package holds the run-level settings shared by every component.

Modules:
    config: Configuration management (INI parsing and defaults)

Exported Classes:
    Config: Configuration parameters for the algorithm
"""

from recurneat.run.config import Config

__all__ = ['Config']
