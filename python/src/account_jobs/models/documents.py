"""
Document snapshots returned by the document store.

Workspace, event, expense and category documents are kept as opaque field
dicts; only the export flattening reads into them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class DocumentSnapshot:
    """One stored document: its id, full path and field data."""
    
    id: str
    path: str
    data: Dict[str, Any] = field(default_factory=dict)
