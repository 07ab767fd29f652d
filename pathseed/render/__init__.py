"""
Renderers: turn extracted branches into test skeletons.

Components:
    - render_module: A whole pytest module for one analyzed file
    - render_function: One stub per branch of a single function
"""

from pathseed.render.stubs import call_expression, render_function, render_module

__all__ = [
    "call_expression",
    "render_function",
    "render_module",
]
