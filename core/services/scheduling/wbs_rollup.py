from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional, Set, Tuple

from core.models import Activity, WBSNode
from core.services.scheduling.models import WbsDateRange

DateSpan = Tuple[Optional[date], Optional[date]]


def rollup_wbs_dates(
    wbs_nodes: List[WBSNode],
    activities: List[Activity],
) -> Dict[str, WbsDateRange]:
    """
    Aggregate min(start)/max(finish) over each node's own activities and its
    descendant nodes, starting from the roots. Nodes without any dated content
    are left out of the map.
    """
    children: Dict[str, List[WBSNode]] = {}
    for node in wbs_nodes:
        if not node.is_root:
            children.setdefault(node.parent_id, []).append(node)

    acts_by_wbs: Dict[str, List[Activity]] = {}
    for act in activities:
        if act.wbs_id is not None:
            acts_by_wbs.setdefault(act.wbs_id, []).append(act)

    rollup: Dict[str, WbsDateRange] = {}
    visited: Set[str] = set()

    def _process(node_id: str) -> DateSpan:
        if node_id in visited:
            return None, None
        visited.add(node_id)

        starts = [a.start_date for a in acts_by_wbs.get(node_id, []) if a.start_date is not None]
        ends = [a.end_date for a in acts_by_wbs.get(node_id, []) if a.end_date is not None]

        for child in children.get(node_id, []):
            child_start, child_end = _process(child.id)
            if child_start is not None:
                starts.append(child_start)
            if child_end is not None:
                ends.append(child_end)

        if not starts or not ends:
            return None, None

        start, end = min(starts), max(ends)
        rollup[node_id] = WbsDateRange(
            start_date=start,
            end_date=end,
            duration_days=(end - start).days + 1,
        )
        return start, end

    for root in wbs_nodes:
        if root.is_root:
            _process(root.id)

    return rollup


__all__ = ["rollup_wbs_dates"]
