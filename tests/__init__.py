"""Test suite for formstate.

This package contains tests for:
- Reducer transitions and configuration resolution
- Parsers and validator invocation
- Event system (emission, serialization)
- FormEngine registration, change/blur handling and submit pipeline
"""
