"""
Rendering Module
===============

Headless browser rendering of HTML text into screenshots and PDF documents.

Components:
- engine: RenderEngine/RenderSession capability and the Playwright engine
"""
