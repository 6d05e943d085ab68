from dataclasses import dataclass, field
from typing import Dict
from tiny_world.world.terrain import Cost, Resource, parse_resource

@dataclass
class Stock:
    """The player's resource and population ledger."""
    resources: Dict[Resource, int] = field(default_factory=lambda: {r: 0 for r in Resource})
    population: int = 0
    max_population: int = 0

    def get(self, resource: Resource) -> int:
        return self.resources.get(resource, 0)

    def can_pay(self, cost: Cost) -> bool:
        return all(self.get(res) >= amount for res, amount in cost.items())

    def pay(self, cost: Cost):
        """Deducts a cost. Callers check can_pay() first."""
        for res, amount in cost.items():
            self.resources[res] = self.get(res) - amount

    def to_dict(self) -> dict:
        return {
            "resources": {r.name.lower(): self.get(r) for r in Resource},
            "population": self.population,
            "max_population": self.max_population,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Stock":
        stock = cls()
        for name, amount in data.get("resources", {}).items():
            stock.resources[parse_resource(name)] = int(amount)
        stock.population = int(data.get("population", 0))
        stock.max_population = int(data.get("max_population", 0))
        return stock
