"""Fuzz tests for sandbox-guard.

This package contains fuzz tests that use Google's Atheris fuzzing engine.
The validation engine must never raise and must never accept a value that
carries a forbidden character, whatever the input.
"""
