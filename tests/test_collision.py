from __future__ import annotations

from shadowclone.collision import find_collision, resolve_collisions
from shadowclone.models import ActiveEffect, Clone, CloneKind, Outcome, Position, PowerupKind


def _clone_on(pos: Position, kind: CloneKind = CloneKind.BASIC) -> Clone:
    return Clone(snapshot=(pos, pos, pos), kind=kind)


def test_no_clone_on_player_tile(make_state) -> None:
    state = make_state()
    state.engine.clones.append(_clone_on(Position(3, 1)))
    assert find_collision(state) is None
    assert not resolve_collisions(state, now=500)
    assert state.running


def test_contact_ends_the_run_and_scores_elapsed_seconds(make_state) -> None:
    state = make_state()
    state.started_at = 1000
    state.engine.clones.append(_clone_on(state.player, CloneKind.WRAITH))
    assert resolve_collisions(state, now=13999)
    assert not state.running
    assert state.outcome is Outcome.CAUGHT
    assert state.score == 12
    assert state.ended_at == 13999


def test_active_cloak_suppresses_contact(make_state) -> None:
    state = make_state()
    state.engine.clones.append(_clone_on(state.player))
    state.effect = ActiveEffect(PowerupKind.CLOAK, expires_at=6000)
    assert not resolve_collisions(state, now=5999)
    assert state.running


def test_expired_cloak_does_not_protect(make_state) -> None:
    state = make_state()
    state.engine.clones.append(_clone_on(state.player))
    state.effect = ActiveEffect(PowerupKind.CLOAK, expires_at=6000)
    assert resolve_collisions(state, now=6000)
    assert not state.running


def test_other_effects_do_not_protect(make_state) -> None:
    for kind in (PowerupKind.SPEED, PowerupKind.FREEZE):
        state = make_state()
        state.engine.clones.append(_clone_on(state.player))
        state.effect = ActiveEffect(kind, expires_at=10 ** 9)
        assert resolve_collisions(state, now=0)


def test_finished_run_keeps_first_score(make_state) -> None:
    state = make_state()
    state.finish(Outcome.CAUGHT, now=3000)
    state.finish(Outcome.ESCAPED, now=9000)
    assert state.outcome is Outcome.CAUGHT
    assert state.score == 3
