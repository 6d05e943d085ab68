import datetime
from enum import Enum
from typing import Any, Set

class LogCategory(Enum):
    SYSTEM = "SYSTEM"
    GAMEPLAY = "GAMEPLAY"
    INPUT = "INPUT"
    UI = "UI"
    ERROR = "ERROR"

class Logger:
    """
    Console logger prefixed with wall time and simulation tick:
    [HH:MM:SS][Tick:N][CATEGORY] message
    """
    _time_manager = None
    _muted: Set[LogCategory] = set()

    @classmethod
    def set_time_manager(cls, time_manager: Any):
        """Injects the TimeManager instance to access current tick."""
        cls._time_manager = time_manager

    @classmethod
    def mute(cls, *categories: LogCategory):
        # ERROR is never muted
        cls._muted.update(c for c in categories if c != LogCategory.ERROR)

    @classmethod
    def unmute_all(cls):
        cls._muted.clear()

    @staticmethod
    def format(category: LogCategory, message: str, tick: int) -> str:
        timestamp = datetime.datetime.now().strftime("%H:%M:%S")
        return f"[{timestamp}][Tick:{tick}][{category.value}] {message}"

    @staticmethod
    def log(category: LogCategory, message: str, tick: int = -1):
        if category in Logger._muted:
            return
        if tick == -1:
            tick = Logger._time_manager.total_ticks if Logger._time_manager else 0
        print(Logger.format(category, message, tick))

    @staticmethod
    def info(message: str, tick: int = -1):
        Logger.log(LogCategory.SYSTEM, message, tick)

    @staticmethod
    def gameplay(message: str, tick: int = -1):
        Logger.log(LogCategory.GAMEPLAY, message, tick)

    @staticmethod
    def error(message: str, tick: int = -1):
        Logger.log(LogCategory.ERROR, message, tick)
