import pygame

class TimeManager:
    """Counts simulation ticks and paces the game loop."""
    def __init__(self, tick_rate: int = 60, max_dt: float = 0.1):
        self.tick_rate = tick_rate
        self.max_dt = max_dt
        self.clock = pygame.time.Clock()

        self.total_ticks = 0
        self.delta_time = 0.0

    def tick(self) -> float:
        """Waits for the next frame. Returns the elapsed seconds, capped to avoid lag spirals."""
        self.delta_time = min(self.clock.tick(self.tick_rate) / 1000.0, self.max_dt)
        self.total_ticks += 1
        return self.delta_time

    @property
    def fps(self) -> float:
        return self.clock.get_fps()
