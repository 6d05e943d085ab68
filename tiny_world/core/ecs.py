from dataclasses import dataclass
from typing import Type, TypeVar, Optional, Dict, List, Iterable, Tuple

# --- Component ---
@dataclass(slots=True)
class Component:
    """Base class for all components. Subclasses should be dataclasses."""
    pass

T = TypeVar('T', bound=Component)

# --- Entity ---
@dataclass(frozen=True, slots=True)
class Entity:
    """
    Generation-checked handle into the EntityManager.
    A handle to a destroyed entity stays invalid even after its slot is reused.
    """
    index: int = -1
    generation: int = 0

    def is_none(self) -> bool:
        return self.index < 0

# Distinguished "no entity" handle
Entity.NONE = Entity()

# --- System ---
class System:
    """Base class for all systems."""
    def update(self, dt: float):
        raise NotImplementedError

# --- EntityManager ---
class EntityManager:
    def __init__(self):
        # slot index -> current generation
        self._generations: List[int] = []
        self._alive: List[bool] = []
        self._free_slots: List[int] = []
        # component_type -> {slot_index -> component_instance}
        self._components: Dict[Type[Component], Dict[int, Component]] = {}

    def create_entity(self) -> Entity:
        """Creates a new entity, reusing a free slot when one exists."""
        if self._free_slots:
            index = self._free_slots.pop()
            self._generations[index] += 1
            self._alive[index] = True
        else:
            index = len(self._generations)
            self._generations.append(0)
            self._alive.append(True)
        return Entity(index, self._generations[index])

    def destroy_entity(self, entity: Entity):
        """Removes an entity and all its components. Stale handles are ignored."""
        if not self.is_alive(entity):
            return
        index = entity.index
        self._alive[index] = False
        self._free_slots.append(index)
        for store in self._components.values():
            store.pop(index, None)

    def is_alive(self, entity: Entity) -> bool:
        """Checks if a handle refers to a live entity of the same generation."""
        index = entity.index
        return (0 <= index < len(self._generations)
                and self._alive[index]
                and self._generations[index] == entity.generation)

    def has_entity(self, entity: Entity) -> bool:
        return self.is_alive(entity)

    def entity_count(self) -> int:
        return sum(self._alive)

    def add_component(self, entity: Entity, component: Component):
        """Adds a component to a live entity."""
        if not self.is_alive(entity):
            raise KeyError(f"Entity {entity} is not alive")
        comp_type = type(component)
        if comp_type not in self._components:
            self._components[comp_type] = {}
        self._components[comp_type][entity.index] = component

    def remove_component(self, entity: Entity, comp_type: Type[T]):
        """Removes a component from an entity."""
        if self.is_alive(entity) and comp_type in self._components:
            self._components[comp_type].pop(entity.index, None)

    def get_component(self, entity: Entity, comp_type: Type[T]) -> Optional[T]:
        """Retrieves a specific component for an entity."""
        if self.is_alive(entity) and comp_type in self._components:
            return self._components[comp_type].get(entity.index)
        return None

    def has_component(self, entity: Entity, comp_type: Type[Component]) -> bool:
        """Checks if an entity has a specific component."""
        return self.get_component(entity, comp_type) is not None

    def count_with(self, *comp_types: Type[Component]) -> int:
        """Number of live entities carrying ALL specified components."""
        return sum(1 for _ in self.get_entities_with(*comp_types))

    def get_entities_with(self, *comp_types: Type[Component]) -> Iterable[Tuple]:
        """
        Yields (entity, comp1, comp2, ...) for entities that have ALL specified components.
        """
        if not comp_types:
            return

        # Iterate the smallest store to minimize checks
        primary_type = min(comp_types, key=lambda t: len(self._components.get(t, {})))
        primary_store = self._components.get(primary_type, {})

        # Copy to allow modification during iteration
        for index in list(primary_store.keys()):
            stores = [self._components.get(t) for t in comp_types]
            if any(store is None or index not in store for store in stores):
                continue
            entity = Entity(index, self._generations[index])
            yield tuple([entity] + [store[index] for store in stores])
