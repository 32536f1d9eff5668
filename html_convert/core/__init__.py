"""
Core Conversion Logic
=====================

Modules:
- templating: HTML source loading and placeholder substitution
- rendering: Render engine capability and Playwright implementation
- converter: HTMLConverter orchestration
"""
