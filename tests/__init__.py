"""Test suite for the herkin package.

This package contains unit and integration tests validating the line
primitives and combinators, the block, scenario and feature grammars,
declarative step libraries, settings resolution, error formatting and
the evaluation semantics of parsed features.
"""
