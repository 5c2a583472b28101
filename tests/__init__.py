"""
BioTerra Test Suite

This package contains unit tests and fixtures for the BioTerra explorer.

Run tests with:
    pytest tests/
    pytest tests/test_state_machine.py -v
    python -m unittest discover tests
"""
