from __future__ import annotations


from .actions import Action, FlipAction, PowerUpAction, WaitAction
from .board import BoardState, CardInstance
from .session import Deferred, GameSession


def action_to_dict(a: Action) -> dict[str, object]:
    if isinstance(a, FlipAction):
        return {"type": "flip", "index": a.index}
    if isinstance(a, PowerUpAction):
        return {"type": "power_up"}
    if isinstance(a, WaitAction):
        return {"type": "wait", "seconds": a.seconds}
    # should be unreachable
    return {"type": "unknown"}


def action_from_dict(d: dict[str, object]) -> Action:
    t = d.get("type")
    if t == "flip":
        index = d.get("index")
        if not isinstance(index, int):
            raise ValueError("flip action needs an integer index")
        return FlipAction(index=index)
    if t == "power_up":
        return PowerUpAction()
    if t == "wait":
        seconds = d.get("seconds")
        if not isinstance(seconds, (int, float)):
            raise ValueError("wait action needs a number of seconds")
        return WaitAction(seconds=float(seconds))
    raise ValueError(f"Unknown action type: {t}")


def _card_to_dict(c: CardInstance) -> dict[str, object]:
    return {
        "item_id": c.item_id,
        "name": c.name,
        "face_image": c.face_image,
        "revealed": c.revealed,
        "matched": c.matched,
    }


def _board_to_dict(b: BoardState) -> dict[str, object]:
    return {
        "cards": [_card_to_dict(c) for c in b.cards],
        "clicks": b.clicks,
        "matched_pairs": b.matched_pairs,
        "total_pairs": b.total_pairs,
        "matched_ids": sorted(b.matched_ids),
    }


def _deferred_to_dict(d: Deferred) -> dict[str, object]:
    return {"due": d.due, "kind": d.kind, "indices": list(d.indices)}


def snapshot(session: GameSession) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current session."""
    return {
        "seed": session.seed,
        "status": session.status,
        "time_left": session.time_left,
        "locked": session.locked,
        "selection": list(session.pending_compare()),
        "power_up_used": session.power_up_used,
        "clock": session.clock,
        "board": _board_to_dict(session.board),
        "pending": [_deferred_to_dict(d) for d in session.pending],
        "action_log": [action_to_dict(a) for a in session.action_log],
    }
