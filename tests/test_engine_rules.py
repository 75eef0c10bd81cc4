from __future__ import annotations

import random

from pokematch.engine.actions import FlipAction, PowerUpAction, WaitAction
from pokematch.engine.session import GameSession, SessionConfig, new_session, reset_session, status_line, step
from pokematch.engine.types import Catalog, CatalogEntry


def _catalog() -> Catalog:
    return Catalog.of([CatalogEntry(id=i, name=f"mon{i}") for i in range(1, 13)])


def _session(pairs: int = 3, seed: int = 42) -> GameSession:
    return new_session(_catalog(), pairs, seed=seed)


def _pairs(session: GameSession) -> dict[int, list[int]]:
    out: dict[int, list[int]] = {}
    for i, c in enumerate(session.board.cards):
        out.setdefault(c.item_id, []).append(i)
    return out


def _mismatch(session: GameSession) -> tuple[int, int]:
    cards = session.board.cards
    for j in range(1, len(cards)):
        if cards[j].item_id != cards[0].item_id:
            return 0, j
    raise AssertionError("board has a single item")


def test_new_session_starts_clean() -> None:
    state = _session()
    assert state.status == "active"
    assert state.time_left == 30
    assert not state.locked
    assert state.pending_compare() == ()
    assert state.event_log[0]["type"] == "BOARD_DEALT"


def test_time_limit_scales_with_pairs() -> None:
    assert SessionConfig(pairs=3).time_limit == 30
    assert SessionConfig(pairs=9).time_limit == 90
    assert _session(pairs=6).time_left == 60


def test_matching_pair_stays_revealed() -> None:
    state = _session()
    a, b = next(iter(_pairs(state).values()))

    res1 = step(state, FlipAction(index=a))
    assert res1.ok
    assert state.pending_compare() == (a,)
    res2 = step(state, FlipAction(index=b))
    assert res2.ok
    assert [e["type"] for e in res2.events] == ["CARD_FLIPPED", "PAIR_MATCHED"]

    board = state.board
    assert board.matched_pairs == 1
    assert board.clicks == 2
    assert board.cards[a].item_id in board.matched_ids
    assert board.cards[a].revealed and board.cards[b].revealed
    assert board.cards[a].matched and board.cards[b].matched
    assert not state.locked
    assert state.pending_compare() == ()

    # Time passing never hides a matched pair
    step(state, WaitAction(seconds=5.0))
    assert board.cards[a].revealed and board.cards[b].revealed


def test_mismatch_reverts_after_delay() -> None:
    state = _session()
    a, b = _mismatch(state)

    step(state, FlipAction(index=a))
    res = step(state, FlipAction(index=b))
    assert res.ok
    assert res.events[-1]["type"] == "PAIR_MISSED"
    assert state.locked
    assert state.pending_compare() == (a, b)

    step(state, WaitAction(seconds=0.5))
    assert state.board.cards[a].revealed and state.board.cards[b].revealed
    assert state.locked

    res2 = step(state, WaitAction(seconds=0.5))
    types = [e["type"] for e in res2.events]
    # the hide fires before the one-second tick due at the same instant
    assert types == ["CARDS_HIDDEN", "TIMER_TICK"]
    assert not state.board.cards[a].revealed
    assert not state.board.cards[b].revealed
    assert not state.locked
    assert state.pending_compare() == ()
    assert state.board.matched_pairs == 0
    assert state.board.clicks == 2
    assert state.time_left == 29


def test_input_ignored_while_locked() -> None:
    state = _session()
    a, b = _mismatch(state)
    step(state, FlipAction(index=a))
    step(state, FlipAction(index=b))

    other = next(i for i in range(len(state.board.cards)) if i not in (a, b))
    res = step(state, FlipAction(index=other))
    assert not res.ok
    assert res.error == "Board is locked."
    assert not state.board.cards[other].revealed
    assert state.board.clicks == 2
    assert len(state.pending_compare()) == 2


def test_same_card_twice_is_ignored() -> None:
    state = _session()
    step(state, FlipAction(index=0))
    res = step(state, FlipAction(index=0))
    assert not res.ok
    assert state.board.clicks == 1
    assert state.pending_compare() == (0,)


def test_invalid_index_rejected() -> None:
    state = _session()
    assert not step(state, FlipAction(index=-1)).ok
    assert not step(state, FlipAction(index=len(state.board.cards))).ok
    assert state.board.clicks == 0


def test_win_when_all_pairs_matched() -> None:
    state = _session()
    for a, b in _pairs(state).values():
        step(state, FlipAction(index=a))
        step(state, FlipAction(index=b))

    assert state.status == "won"
    assert state.board.matched_pairs == state.board.total_pairs == 3
    assert state.locked
    assert state.next_tick_at is None
    assert state.event_log[-1]["type"] == "GAME_WON"

    # No further mutations once the game is over
    res = step(state, WaitAction(seconds=10.0))
    assert not res.ok
    assert res.error == "Game already ended."
    assert state.time_left == 30
    assert not step(state, PowerUpAction()).ok


def test_timer_counts_down_whole_seconds() -> None:
    state = _session()
    step(state, WaitAction(seconds=2.5))
    assert state.time_left == 28
    assert state.clock == 2.5
    step(state, WaitAction(seconds=0.25))
    assert state.time_left == 28
    step(state, WaitAction(seconds=0.25))
    assert state.time_left == 27


def test_timer_reaching_zero_locks_input() -> None:
    state = _session()
    res = step(state, WaitAction(seconds=45.0))
    assert res.ok
    assert res.events[-1]["type"] == "GAME_LOST"
    assert state.status == "lost"
    assert state.time_left == 0
    assert state.locked
    assert state.clock == 30.0

    res2 = step(state, FlipAction(index=0))
    assert not res2.ok
    assert not state.board.cards[0].revealed
    assert state.board.clicks == 0


def test_timeout_discards_pending_hide() -> None:
    state = _session()
    step(state, WaitAction(seconds=29.5))
    a, b = _mismatch(state)
    step(state, FlipAction(index=a))
    step(state, FlipAction(index=b))
    assert state.pending

    step(state, WaitAction(seconds=1.0))
    assert state.status == "lost"
    assert state.pending == []
    # frozen as it was at the moment of the loss
    assert state.board.cards[a].revealed and state.board.cards[b].revealed


def test_power_up_reveals_then_hides() -> None:
    state = _session()
    res = step(state, PowerUpAction())
    assert res.ok
    assert state.power_up_used
    assert state.locked
    assert all(c.revealed for c in state.board.cards)

    assert not step(state, FlipAction(index=0)).ok

    step(state, WaitAction(seconds=2.5))
    assert all(c.revealed for c in state.board.cards)

    res2 = step(state, WaitAction(seconds=0.5))
    assert "POWER_UP_ENDED" in [e["type"] for e in res2.events]
    assert not any(c.revealed for c in state.board.cards)
    assert not state.locked
    assert state.board.clicks == 0


def test_power_up_is_one_shot() -> None:
    state = _session()
    assert step(state, PowerUpAction()).ok
    step(state, WaitAction(seconds=3.0))
    res = step(state, PowerUpAction())
    assert not res.ok
    assert res.error == "Power-up already used."


def test_power_up_rejected_while_mismatch_pending() -> None:
    state = _session()
    a, b = _mismatch(state)
    step(state, FlipAction(index=a))
    step(state, FlipAction(index=b))
    res = step(state, PowerUpAction())
    assert not res.ok
    assert not state.power_up_used


def test_power_up_keeps_first_selection() -> None:
    state = _session()
    a, b = next(iter(_pairs(state).values()))
    step(state, FlipAction(index=a))

    res = step(state, PowerUpAction())
    assert res.ok
    assert a not in res.events[0]["indices"]

    step(state, WaitAction(seconds=3.0))
    assert state.board.cards[a].revealed
    assert not state.board.cards[b].revealed
    assert state.pending_compare() == (a,)

    step(state, FlipAction(index=b))
    assert state.board.matched_pairs == 1


def test_reset_regenerates_board_of_same_size() -> None:
    state = _session(pairs=6)
    a, b = next(iter(_pairs(state).values()))
    step(state, FlipAction(index=a))
    step(state, FlipAction(index=b))
    step(state, PowerUpAction())
    step(state, WaitAction(seconds=7.0))

    fresh = reset_session(state, seed=7)
    assert fresh is not state
    assert len(fresh.board.cards) == 12
    assert fresh.board.total_pairs == 6
    assert fresh.board.clicks == 0
    assert fresh.board.matched_pairs == 0
    assert fresh.board.matched_ids == set()
    assert fresh.time_left == 60
    assert fresh.status == "active"
    assert not fresh.locked
    assert not fresh.power_up_used
    assert not any(c.revealed for c in fresh.board.cards)


def test_reset_after_loss_starts_a_new_game() -> None:
    state = _session()
    step(state, WaitAction(seconds=30.0))
    assert state.status == "lost"
    fresh = reset_session(state)
    assert fresh.status == "active"
    assert step(fresh, FlipAction(index=0)).ok


def test_status_line() -> None:
    state = _session()
    assert status_line(state) == "Clicks: 0 | Pairs Matched: 0 / 3 | Pairs Left: 3 | Time Left: 30s"
    a, b = next(iter(_pairs(state).values()))
    step(state, FlipAction(index=a))
    step(state, FlipAction(index=b))
    step(state, WaitAction(seconds=1.0))
    assert status_line(state) == "Clicks: 2 | Pairs Matched: 1 / 3 | Pairs Left: 2 | Time Left: 29s"


def test_invariants_hold_under_random_play() -> None:
    for seed in range(10):
        state = _session(pairs=6, seed=seed)
        rng = random.Random(seed)
        n = len(state.board.cards)
        for _ in range(400):
            if state.is_over:
                break
            roll = rng.random()
            if roll < 0.7:
                step(state, FlipAction(index=rng.randrange(n)))
            elif roll < 0.72:
                step(state, PowerUpAction())
            else:
                step(state, WaitAction(seconds=rng.choice([0.1, 0.5, 1.0])))

            board = state.board
            assert board.matched_pairs <= board.total_pairs
            assert len(state.pending_compare()) <= 2
            assert (state.status == "won") == (board.matched_pairs == board.total_pairs)
            for c in board.cards:
                if c.item_id in board.matched_ids:
                    assert c.revealed and c.matched


def test_non_finite_wait_rejected() -> None:
    state = _session()
    for bad in (float("nan"), float("inf"), -1.0):
        res = step(state, WaitAction(seconds=bad))
        assert not res.ok
        assert res.events == []
        assert state.clock == 0.0
        assert state.time_left == 30

    # the timer still runs out afterwards
    step(state, WaitAction(seconds=100.0))
    assert state.status == "lost"
    assert state.time_left == 0
