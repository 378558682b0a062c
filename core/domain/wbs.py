from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.domain.identifiers import generate_id

# Parent references that mark a root node. "null" shows up in imported payloads.
ROOT_PARENT_SENTINELS = (None, "", "null")


@dataclass
class WBSNode:
    id: str
    name: str = ""
    parent_id: Optional[str] = None

    @property
    def is_root(self) -> bool:
        return self.parent_id in ROOT_PARENT_SENTINELS

    @staticmethod
    def create(name: str, parent_id: Optional[str] = None) -> "WBSNode":
        return WBSNode(id=generate_id(), name=name, parent_id=parent_id)


__all__ = ["ROOT_PARENT_SENTINELS", "WBSNode"]
