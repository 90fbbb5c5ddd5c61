"""Solnaming: underscore naming-convention rules for Solidity ASTs."""

__version__ = "0.3.0"
