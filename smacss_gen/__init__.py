"""SMACSS front-end project generator."""

__version__ = "0.1.0"
