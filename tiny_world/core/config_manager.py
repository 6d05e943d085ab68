import json
import os
import time
from typing import Any, Dict
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler
from tiny_world.utils.logger import Logger, LogCategory

class ConfigError(Exception):
    """Malformed or missing static game data. Fatal at startup."""
    pass

class ConfigHandler(FileSystemEventHandler):
    def __init__(self, file_name: str, callback):
        self.file_name = file_name
        self.callback = callback

    def on_modified(self, event):
        if not event.is_directory and event.src_path.endswith(self.file_name):
            # Give file system a moment to flush
            time.sleep(0.1)
            self.callback()

class ConfigManager:
    def __init__(self, config_path: str, watch: bool = True):
        self.config_path = config_path
        self.config: Dict[str, Any] = {}
        self.observer = None

        # Initial load must succeed
        try:
            self.config = self._read()
        except (OSError, ValueError) as e:
            raise ConfigError(f"Failed to load config {config_path}: {e}") from e
        Logger.log(LogCategory.SYSTEM, "Config loaded successfully")

        if watch:
            directory = os.path.dirname(os.path.abspath(config_path))
            handler = ConfigHandler(os.path.basename(config_path), self.load_config)
            self.observer = Observer()
            self.observer.schedule(handler, directory, recursive=False)
            self.observer.start()
            Logger.info(f"ConfigManager watching: {config_path}")

    def _read(self) -> Dict[str, Any]:
        with open(self.config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("top level must be an object")
        return data

    def load_config(self):
        """Reloads the file, keeping the previous config on failure."""
        try:
            self.config = self._read()
            Logger.log(LogCategory.SYSTEM, "Config reloaded successfully")
        except (OSError, ValueError) as e:
            Logger.error(f"Failed to reload config: {e}")

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get config value using dot notation (e.g. "world.width")
        """
        keys = key_path.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def stop(self):
        if self.observer is not None:
            self.observer.stop()
            self.observer.join()
            self.observer = None
