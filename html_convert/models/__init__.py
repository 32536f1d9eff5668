"""
Data Models
===========

Pydantic data models for conversion requests, capture options and artifacts.
"""
