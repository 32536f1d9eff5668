"""
Templating Module
=================

Asynchronous HTML source loading and literal ``{{key}}`` substitution.
"""
