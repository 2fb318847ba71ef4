"""Infrastructure layer: template loading and PDF rendering.

This layer depends on stdlib and third-party libs (Jinja2, ReportLab).
It must never import from services, commands, or output.
"""
