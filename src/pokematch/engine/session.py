from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Iterable, Literal

from .actions import Action, FlipAction, PowerUpAction, WaitAction
from .board import BoardState, deal
from .types import Catalog

Event = dict[str, object]
Status = Literal["active", "won", "lost"]
DeferredKind = Literal["hide_mismatch", "end_power_up"]


@dataclass(frozen=True)
class SessionConfig:
    pairs: int
    seconds_per_pair: int = 10
    mismatch_delay: float = 1.0
    power_up_duration: float = 3.0
    tick_interval: float = 1.0

    @property
    def time_limit(self) -> int:
        return self.pairs * self.seconds_per_pair


@dataclass(frozen=True)
class Deferred:
    due: float
    kind: DeferredKind
    indices: tuple[int, ...]


@dataclass
class StepResult:
    ok: bool
    events: list[Event]
    error: str | None = None


@dataclass
class GameSession:
    catalog: Catalog
    config: SessionConfig
    seed: int
    rng: random.Random
    board: BoardState
    time_left: int
    status: Status = "active"
    locked: bool = False
    first: int | None = None
    second: int | None = None
    power_up_used: bool = False
    clock: float = 0.0
    next_tick_at: float | None = None
    pending: list[Deferred] = field(default_factory=list)
    action_log: list[Action] = field(default_factory=list)
    event_log: list[Event] = field(default_factory=list)

    @property
    def is_over(self) -> bool:
        return self.status != "active"

    def pending_compare(self) -> tuple[int, ...]:
        return tuple(i for i in (self.first, self.second) if i is not None)


def _emit(session: GameSession, event: Event) -> Event:
    session.event_log.append(event)
    return event


def _schedule(session: GameSession, delay: float, kind: DeferredKind, indices: tuple[int, ...]) -> None:
    session.pending.append(Deferred(due=session.clock + delay, kind=kind, indices=indices))
    # stable: callbacks due at the same instant fire in scheduling order
    session.pending.sort(key=lambda d: d.due)


def _stop_timer(session: GameSession) -> None:
    session.next_tick_at = None
    session.pending.clear()


def _reset_selection(session: GameSession) -> None:
    session.first = None
    session.second = None
    session.locked = False


def _check_win(session: GameSession) -> None:
    if session.status != "active":
        return
    if session.board.is_complete():
        _stop_timer(session)
        session.locked = True
        session.status = "won"
        _emit(
            session,
            {
                "type": "GAME_WON",
                "clicks": session.board.clicks,
                "time_left": session.time_left,
            },
        )


def _flip(session: GameSession, action: FlipAction) -> StepResult:
    if session.locked:
        return StepResult(ok=False, events=[], error="Board is locked.")
    cards = session.board.cards
    if action.index < 0 or action.index >= len(cards):
        return StepResult(ok=False, events=[], error="Invalid card index.")
    card = cards[action.index]
    if card.revealed or card.item_id in session.board.matched_ids:
        return StepResult(ok=False, events=[], error="Card is already face up.")

    before = len(session.event_log)
    card.revealed = True
    session.board.clicks += 1
    _emit(session, {"type": "CARD_FLIPPED", "index": action.index, "item_id": card.item_id})

    if session.first is None:
        session.first = action.index
        return StepResult(ok=True, events=session.event_log[before:])

    session.second = action.index
    session.locked = True
    a = cards[session.first]
    b = cards[session.second]

    if a.item_id == b.item_id:
        a.matched = True
        b.matched = True
        session.board.matched_ids.add(a.item_id)
        session.board.matched_pairs += 1
        _emit(
            session,
            {
                "type": "PAIR_MATCHED",
                "item_id": a.item_id,
                "indices": [session.first, session.second],
                "matched_pairs": session.board.matched_pairs,
            },
        )
        _reset_selection(session)
        _check_win(session)
    else:
        pair = (session.first, session.second)
        _emit(session, {"type": "PAIR_MISSED", "indices": list(pair)})
        _schedule(session, session.config.mismatch_delay, "hide_mismatch", pair)

    return StepResult(ok=True, events=session.event_log[before:])


def _power_up(session: GameSession) -> StepResult:
    if session.power_up_used:
        return StepResult(ok=False, events=[], error="Power-up already used.")
    if session.locked:
        return StepResult(ok=False, events=[], error="Board is locked.")

    session.power_up_used = True
    hidden = tuple(i for i, c in enumerate(session.board.cards) if not c.revealed)
    for i in hidden:
        session.board.cards[i].revealed = True
    session.locked = True
    _schedule(session, session.config.power_up_duration, "end_power_up", hidden)
    ev = _emit(session, {"type": "POWER_UP_STARTED", "indices": list(hidden)})
    return StepResult(ok=True, events=[ev])


def _fire(session: GameSession, deferred: Deferred) -> None:
    for i in deferred.indices:
        session.board.cards[i].revealed = False
    if deferred.kind == "hide_mismatch":
        _reset_selection(session)
        _emit(session, {"type": "CARDS_HIDDEN", "indices": list(deferred.indices)})
    else:
        session.locked = False
        _emit(session, {"type": "POWER_UP_ENDED", "indices": list(deferred.indices)})


def _tick(session: GameSession) -> None:
    assert session.next_tick_at is not None
    session.time_left -= 1
    session.next_tick_at += session.config.tick_interval
    _emit(session, {"type": "TIMER_TICK", "time_left": session.time_left})
    if session.time_left <= 0:
        _stop_timer(session)
        session.locked = True
        session.status = "lost"
        _emit(session, {"type": "GAME_LOST", "clicks": session.board.clicks})


def _wait(session: GameSession, action: WaitAction) -> StepResult:
    if not math.isfinite(action.seconds) or action.seconds < 0:
        return StepResult(ok=False, events=[], error="Wait time must be a finite, non-negative number.")

    before = len(session.event_log)
    target = session.clock + action.seconds
    while session.status == "active":
        due_deferred = session.pending[0].due if session.pending else None
        due_tick = session.next_tick_at
        candidates = [t for t in (due_deferred, due_tick) if t is not None and t <= target]
        if not candidates:
            break
        now = min(candidates)
        session.clock = now
        # deferred callbacks win ties with the timer tick
        if due_deferred is not None and due_deferred <= now:
            _fire(session, session.pending.pop(0))
        else:
            _tick(session)

    if session.status == "active":
        session.clock = target
    return StepResult(ok=True, events=session.event_log[before:])


def step(session: GameSession, action: Action) -> StepResult:
    """Apply a single action to the session.

    Mutates `session` in place. The outcome depends only on the seed and
    the action sequence, so `replay` reproduces any recorded game.
    """
    if session.status != "active":
        return StepResult(ok=False, events=[], error="Game already ended.")

    session.action_log.append(action)

    if isinstance(action, FlipAction):
        return _flip(session, action)
    if isinstance(action, PowerUpAction):
        return _power_up(session)
    if isinstance(action, WaitAction):
        return _wait(session, action)
    return StepResult(ok=False, events=[], error="Unknown action.")


def new_session(
    catalog: Catalog,
    pairs: int,
    seed: int,
    config: SessionConfig | None = None,
) -> GameSession:
    cfg = config or SessionConfig(pairs=pairs)
    if cfg.pairs != pairs:
        raise ValueError(f"Config is for {cfg.pairs} pairs, not {pairs}.")

    rng = random.Random(seed)
    board = deal(rng, catalog, pairs)
    session = GameSession(
        catalog=catalog,
        config=cfg,
        seed=seed,
        rng=rng,
        board=board,
        time_left=cfg.time_limit,
        next_tick_at=cfg.tick_interval,
    )
    _emit(
        session,
        {
            "type": "BOARD_DEALT",
            "pairs": pairs,
            "item_ids": [c.item_id for c in board.cards],
            "time_left": session.time_left,
        },
    )
    return session


def reset_session(session: GameSession, seed: int | None = None) -> GameSession:
    """Start over with a freshly shuffled board of the same size."""
    next_seed = seed if seed is not None else session.rng.randrange(1, 2**31 - 1)
    return new_session(session.catalog, session.config.pairs, seed=next_seed, config=session.config)


def replay(
    catalog: Catalog,
    pairs: int,
    seed: int,
    actions: Iterable[Action],
    config: SessionConfig | None = None,
) -> GameSession:
    session = new_session(catalog, pairs, seed=seed, config=config)
    for a in actions:
        step(session, a)
        if session.is_over:
            break
    return session


def status_line(session: GameSession) -> str:
    b = session.board
    return (
        f"Clicks: {b.clicks} | Pairs Matched: {b.matched_pairs} / {b.total_pairs} | "
        f"Pairs Left: {b.pairs_left} | Time Left: {session.time_left}s"
    )
