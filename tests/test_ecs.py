from dataclasses import dataclass

import pytest

from tiny_world.core.ecs import Component, Entity, EntityManager


@dataclass(slots=True)
class Pos(Component):
    x: int
    y: int


@dataclass(slots=True)
class Tag(Component):
    pass


def test_stale_handle_is_invalid_after_slot_reuse():
    em = EntityManager()
    first = em.create_entity()
    em.destroy_entity(first)
    second = em.create_entity()

    assert second.index == first.index
    assert second.generation == first.generation + 1
    assert not em.is_alive(first)
    assert em.is_alive(second)


def test_stale_handle_cannot_touch_new_entity():
    em = EntityManager()
    first = em.create_entity()
    em.destroy_entity(first)
    second = em.create_entity()
    em.add_component(second, Pos(1, 2))

    assert em.get_component(first, Pos) is None
    em.destroy_entity(first)
    assert em.is_alive(second)
    with pytest.raises(KeyError):
        em.add_component(first, Tag())


def test_none_handle_is_never_alive():
    em = EntityManager()
    em.create_entity()
    assert Entity.NONE.is_none()
    assert not em.is_alive(Entity.NONE)


def test_query_yields_matching_entities_in_requested_order():
    em = EntityManager()
    a = em.create_entity()
    b = em.create_entity()
    em.add_component(a, Pos(1, 1))
    em.add_component(a, Tag())
    em.add_component(b, Pos(2, 2))

    rows = list(em.get_entities_with(Pos, Tag))
    assert len(rows) == 1
    entity, pos, tag = rows[0]
    assert entity == a
    assert pos == Pos(1, 1)
    assert isinstance(tag, Tag)
    assert em.count_with(Pos) == 2


def test_destroy_removes_components_and_counts():
    em = EntityManager()
    a = em.create_entity()
    em.add_component(a, Tag())
    em.destroy_entity(a)

    assert em.count_with(Tag) == 0
    assert em.entity_count() == 0
