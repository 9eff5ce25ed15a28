from __future__ import annotations

import random

import pytest

from shadowclone.errors import NoSpawnTarget
from shadowclone.models import Clone, CloneKind, Pickup, Position, PowerupKind
from shadowclone.powerups import PowerupSystem, effect_active


def test_pickups_land_on_free_open_tiles(make_state) -> None:
    state = make_state(seed=3)
    system = PowerupSystem(random.Random(3))
    for _ in range(40):
        assert system.spawn_pickup(state) is not None
    spots = [p.pos for p in state.pickups]
    assert len(set(spots)) == len(spots)
    for pos in spots:
        assert state.maze.is_open(pos)
        assert pos != state.player


def test_pickup_kinds_cover_all_variants(make_state) -> None:
    state = make_state(seed=5)
    system = PowerupSystem(random.Random(5))
    for _ in range(60):
        system.spawn_pickup(state)
    assert {p.kind for p in state.pickups} == set(PowerupKind)


def test_no_free_tile_is_not_an_error(make_state, walled) -> None:
    state = make_state(walled(5, 5, open_cells=[(1, 1)]))
    system = PowerupSystem(random.Random(0))
    with pytest.raises(NoSpawnTarget):
        system.place_pickup(state)
    assert system.spawn_pickup(state) is None
    assert state.pickups == []


def test_spawn_cycle_runs_every_600_ticks(make_state) -> None:
    state = make_state(seed=1)
    system = PowerupSystem(random.Random(1))
    placed = 0
    for tick in range(1, 6001):
        state.tick = tick
        if system.maybe_spawn(state) is not None:
            assert tick % 600 == 0
            placed += 1
    assert 1 <= placed <= 10


@pytest.mark.parametrize("kind,duration", [
    (PowerupKind.SPEED, 6000),
    (PowerupKind.CLOAK, 6000),
    (PowerupKind.FREEZE, 4000),
])
def test_collecting_sets_timed_effect(make_state, kind: PowerupKind, duration: int) -> None:
    state = make_state()
    state.pickups.append(Pickup(state.player, kind))
    got = PowerupSystem(random.Random(0)).collect(state, now=1000)
    assert got is not None and got.kind is kind
    assert state.pickups == []
    assert state.effect.kind is kind
    assert state.effect.expires_at == 1000 + duration
    assert effect_active(state, kind, 1000 + duration - 1)
    assert not effect_active(state, kind, 1000 + duration)


def test_new_pickup_overwrites_active_effect(make_state) -> None:
    state = make_state()
    system = PowerupSystem(random.Random(0))
    system.apply(state, PowerupKind.CLOAK, now=0)
    system.apply(state, PowerupKind.SPEED, now=2000)
    assert state.effect.kind is PowerupKind.SPEED
    assert state.effect.expires_at == 8000
    assert not effect_active(state, PowerupKind.CLOAK, 2500)


def test_expire_clears_effect_after_deadline(make_state) -> None:
    state = make_state()
    system = PowerupSystem(random.Random(0))
    system.apply(state, PowerupKind.CLOAK, now=0)
    system.expire(state, now=5999)
    assert state.effect is not None
    system.expire(state, now=6000)
    assert state.effect is None


def test_pickup_elsewhere_is_left_alone(make_state) -> None:
    state = make_state()
    state.pickups.append(Pickup(Position(3, 1), PowerupKind.SPEED))
    assert PowerupSystem(random.Random(0)).collect(state, now=0) is None
    assert len(state.pickups) == 1
    assert state.effect is None


def test_freeze_stops_both_clones_for_exactly_four_seconds(make_state) -> None:
    state = make_state()
    far = tuple(Position(9, y) for y in range(1, 10))
    a = Clone(snapshot=far, kind=CloneKind.BASIC)
    b = Clone(snapshot=far, kind=CloneKind.BASIC, cursor=3)
    state.engine.clones.extend([a, b])
    state.pickups.append(Pickup(state.player, PowerupKind.FREEZE))

    PowerupSystem(random.Random(0)).collect(state, now=10000)
    assert a.frozen and b.frozen

    late = Clone(snapshot=far, kind=CloneKind.BASIC)
    state.engine.clones.append(late)

    tick = 0
    for now in range(10000, 14000, 100):
        tick += 1
        state.engine.update(tick, now)
        assert (a.cursor, b.cursor) == (0, 3)
    assert late.cursor > 0

    state.engine.update(tick + 1, 14000)
    assert (a.cursor, b.cursor) == (1, 4)
    assert not a.frozen and not b.frozen
