"""
Pathseed: Branch extraction and test-stub seeding for Python functions.

Pathseed walks the control-flow tree of each exported function, enabling you to:
- List every success and failure path ending in a return or raise
- See the chain of if/try decisions leading to each exit
- Generate commented pytest stubs, one per path

Usage:
    from pathlib import Path
    from pathseed.core.analyzer import Analyzer
    from pathseed.render import render_module

    analysis = Analyzer().analyze_file(Path("orders.py"))
    print(render_module(analysis))
"""

__version__ = "0.1.0"
