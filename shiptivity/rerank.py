"""
Re-ranking engine.

Given a snapshot of every client, computes the snapshot that results from
moving one client to a new lane and/or priority. Pure: the input clients are
never mutated and nothing is persisted here. The caller saves the returned
list in a single transaction.

Moves:
  same lane   - clients between the old and new priority shift by one
                towards the vacated slot
  cross lane  - the old lane closes the gap, the new lane opens a slot
"""
import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from .schema import Client, Lane

logger = logging.getLogger(__name__)


class InvariantViolation(RuntimeError):
    """Raised when the engine is handed input that breaks its contract,
    or when a snapshot is not densely ranked."""
    pass


def lane_counts(clients: Iterable[Client]) -> Dict[Lane, int]:
    """Number of clients per lane (every lane present, possibly 0)."""
    counts = {lane: 0 for lane in Lane}
    for client in clients:
        counts[client.status] += 1
    return counts


def check_dense(clients: Iterable[Client]) -> None:
    """Raise InvariantViolation unless every lane holds priorities 1..N exactly once."""
    by_lane: Dict[Lane, List[int]] = {lane: [] for lane in Lane}
    for client in clients:
        by_lane[client.status].append(client.priority)
    for lane, priorities in by_lane.items():
        priorities.sort()
        if priorities != list(range(1, len(priorities) + 1)):
            raise InvariantViolation(
                f"Lane '{lane.value}' is not densely ranked: {priorities}"
            )


def _same_lane_shift(priority: int, orig: int, dest: int) -> int:
    # Moving up (dest < orig): [dest, orig) slides down one slot.
    if dest <= priority and priority < orig:
        return 1
    # Moving down (dest > orig): (orig, dest] slides up one slot.
    if orig < priority and priority <= dest:
        return -1
    return 0


def rerank(
    clients: List[Client],
    client_id: int,
    status: Optional[Lane] = None,
    priority: Optional[int] = None,
) -> List[Client]:
    """
    Move ``client_id`` to ``status`` / ``priority`` and re-rank its neighbours.

    Args:
        clients:   full current snapshot, densely ranked per lane.
        client_id: id of the client being moved.
        status:    destination lane; None keeps the current lane.
        priority:  destination priority; None means "bottom of the new lane"
                   when changing lanes, and "stay put" otherwise. Values past
                   the end of the lane are clamped to the bottom.

    Returns:
        A new list, in input order, with the mover and every shifted
        neighbour replaced. Unaffected clients are returned as-is.

    Raises:
        InvariantViolation: client_id is not in the snapshot, or priority < 1.
    """
    target = next((c for c in clients if c.id == client_id), None)
    if target is None:
        raise InvariantViolation(f"Client {client_id} is not in the snapshot")
    if priority is not None and priority < 1:
        raise InvariantViolation(f"Priority must be positive, got {priority}")

    orig_lane, orig_rank = target.status, target.priority
    dest_lane = status or orig_lane
    same_lane = dest_lane == orig_lane

    # The mover already counts towards its own lane.
    lane_size = lane_counts(clients)[dest_lane]
    max_rank = lane_size if same_lane else lane_size + 1

    if priority is None:
        if same_lane:
            return list(clients)
        dest_rank = max_rank
    else:
        dest_rank = min(priority, max_rank)

    if same_lane and dest_rank == orig_rank:
        return list(clients)

    logger.debug(
        f"Rerank client {client_id}: {orig_lane.value}#{orig_rank} -> "
        f"{dest_lane.value}#{dest_rank}"
    )

    updated = []
    for client in clients:
        if client.id == client_id:
            updated.append(replace(client, status=dest_lane, priority=dest_rank))
            continue

        shift = 0
        if same_lane:
            if client.status == dest_lane:
                shift = _same_lane_shift(client.priority, orig_rank, dest_rank)
        elif client.status == orig_lane:
            if client.priority >= orig_rank:
                shift = -1
        elif client.status == dest_lane:
            if client.priority >= dest_rank:
                shift = 1

        updated.append(replace(client, priority=client.priority + shift) if shift else client)

    return updated
