import random
from typing import Optional
from tiny_world.core.ecs import Entity, EntityManager
from tiny_world.components.data_components import (
    TileComponent, TerrainComponent, SpriteComponent, BuildRadiusComponent,
    PopulationComponent, HousingComponent,
)
from tiny_world.components.tags import IsTerrainTile, IsLandUse, IsWarehouse
from tiny_world.world.layers import TerrainLayer, LandUseLayer, EntityLayer
from tiny_world.world.sprites import SpriteIndex
from tiny_world.world.terrain import Terrain, TerrainBits, TerrainRules

class EntityFactory:
    """Creates the entities backing tile content and registers them in the layers."""
    def __init__(self, entity_manager: EntityManager, rules: TerrainRules, sprites: SpriteIndex,
                 terrain: TerrainLayer, terrain_entities: EntityLayer,
                 land_use: LandUseLayer, land_use_entities: EntityLayer,
                 rng: Optional[random.Random] = None):
        self.entity_manager = entity_manager
        self.rules = rules
        self.sprites = sprites
        self.terrain = terrain
        self.terrain_entities = terrain_entities
        self.land_use = land_use
        self.land_use_entities = land_use_entities
        self.rng = rng or random.Random()

    def _layers(self, is_terrain: bool):
        if is_terrain:
            return self.terrain, self.terrain_entities
        return self.land_use, self.land_use_entities

    def set(self, x: int, y: int, value: Terrain, rand_sprite: bool = False) -> Entity:
        """
        Places content of type `value` at (x, y).

        An entity already registered at the tile is NOT removed; callers
        clear it first when replacing content.
        """
        props = self.rules[value]
        is_terrain = props.has(TerrainBits.IS_TERRAIN)
        layer, entities = self._layers(is_terrain)

        sprite_name = props.sprites[0] if props.sprites else value.name.lower()
        if rand_sprite and len(props.sprites) > 1:
            sprite_name = self.rng.choice(props.sprites)
        sprite_idx = self.sprites.get_index(sprite_name)

        em = self.entity_manager
        entity = em.create_entity()
        em.add_component(entity, TileComponent(x, y))
        em.add_component(entity, TerrainComponent(value))
        em.add_component(entity, SpriteComponent(sprite_idx, self.sprites.height(sprite_idx)))
        em.add_component(entity, IsTerrainTile() if is_terrain else IsLandUse())

        if props.build_radius > 0:
            em.add_component(entity, BuildRadiusComponent(props.build_radius))
        if props.has(TerrainBits.IS_WAREHOUSE):
            em.add_component(entity, IsWarehouse())
        if props.population > 0:
            em.add_component(entity, PopulationComponent(props.population))
        if props.housing > 0:
            em.add_component(entity, HousingComponent(props.housing))

        layer.set(x, y, value)
        entities.set(x, y, entity)
        return entity

    def clear(self, x: int, y: int, is_terrain: bool = False):
        """Destroys the entity at a tile (if any) and resets the layer to AIR."""
        layer, entities = self._layers(is_terrain)
        entity = entities.get(x, y)
        if not entity.is_none():
            self.entity_manager.destroy_entity(entity)
        entities.clear(x, y)
        layer.set(x, y, Terrain.AIR)
