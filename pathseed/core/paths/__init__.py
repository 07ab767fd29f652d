"""
Path extraction: success and failure branches through a function body.

Data Structures:
    - Branch: An ordered sequence of statements ending in return/raise
    - BranchCollection: Branches of one outcome with a single open branch
    - BranchAccumulator: Success and failure collections for one function

Algorithms:
    - walker: DFS over conditionals and try blocks (walk, extract_branches)

Serialization:
    - serialize: JSON views used by the CLI and the MCP server
"""

from pathseed.core.paths.accumulator import BranchAccumulator, BranchCollection
from pathseed.core.paths.models import Branch, Outcome, TraversalContext
from pathseed.core.paths.walker import extract_branches, walk

__all__ = [
    "Branch",
    "BranchAccumulator",
    "BranchCollection",
    "Outcome",
    "TraversalContext",
    "extract_branches",
    "walk",
]
