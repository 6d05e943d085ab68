from tiny_world.core.ecs import System
from tiny_world.components.data_components import PopulationComponent, HousingComponent
from tiny_world.world.state import WorldState

class StatsSystem(System):
    """Recounts population and housing capacity from the live structures."""
    def __init__(self, state: WorldState):
        self.state = state

    def update(self, dt: float):
        em = self.state.entity_manager
        stock = self.state.stock

        stock.population = sum(p.population for _, p in em.get_entities_with(PopulationComponent))
        stock.max_population = self.state.base_max_population + sum(
            h.capacity for _, h in em.get_entities_with(HousingComponent)
        )
