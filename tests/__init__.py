"""
Test Suite
==========

Test suite matching the html_convert/ package structure.

Test Categories:
- unit: Unit tests for templating, rendering, conversion and configuration
"""
