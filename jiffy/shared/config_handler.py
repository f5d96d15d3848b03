import os
import time
import toml
import structlog
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from jiffy.shared import config_template
from jiffy.shared.path_handler import PathHandler

CACHE_FILE_NAME = "appsMenu.json"


@dataclass(frozen=True)
class MenuConfig:
    """Everything the menu pipeline needs, passed explicitly at construction."""

    cache_dir: Path
    search_dirs: Tuple[str, ...] = (
        os.path.expanduser("~/.local/share/applications"),
        "/usr/share/applications",
    )
    icon_theme_dirs: Tuple[str, ...] = (
        os.path.expanduser("~/.local/share/icons"),
        "/usr/share/icons",
    )
    pixmap_dirs: Tuple[str, ...] = ("/usr/share/pixmaps",)
    force_refresh: bool = False

    @property
    def cache_file(self) -> Path:
        """The path of the persisted menu."""
        return self.cache_dir / CACHE_FILE_NAME

    def with_refresh(self, force_refresh: bool) -> "MenuConfig":
        return replace(self, force_refresh=force_refresh)


class ConfigHandler:
    """
    Manages the configuration file (config.toml) and turns it into the
    explicit values consumed by the menu pipeline.
    Handles file I/O and merging with the defaults in config_template.
    """

    def __init__(
        self,
        config_file: Optional[Path] = None,
        path_handler: Optional[PathHandler] = None,
        logger: Any = None,
    ):
        """
        Args:
            config_file: Explicit config.toml location. Defaults to
                $XDG_CONFIG_HOME/jiffy/config.toml.
            path_handler: Resolver for XDG paths.
            logger: Logger to report through; a structlog logger by default.
        """
        self.logger = logger or structlog.get_logger(__name__)
        self.paths = path_handler or PathHandler()
        self.default_config = config_template.default_config
        self.config_file = (
            Path(config_file)
            if config_file
            else self.paths.get_config_dir() / "config.toml"
        )
        self._load_successful: bool = False
        self.config_data = self.load_config()

    def _strip_hints(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Recursively removes keys ending with '_hint' so only settings remain.
        """
        stripped_data = {}
        for key, value in data.items():
            if key.endswith("_hint"):
                continue
            if isinstance(value, dict):
                stripped_data[key] = self._strip_hints(value)
            else:
                stripped_data[key] = value
        return stripped_data

    @property
    def default_config_stripped(self) -> Dict[str, Any]:
        """Returns the default config without the setting hints."""
        return self._strip_hints(self.default_config)

    def _recursive_merge(
        self,
        user_config: Dict[str, Any],
        default_config: Dict[str, Any],
    ) -> bool:
        """
        Recursively merges missing keys from `default_config` into `user_config`.
        Returns:
            True if any key was added.
        """
        write_back_needed = False
        for key, default_value in default_config.items():
            if key not in user_config:
                user_config[key] = default_value
                write_back_needed = True
            elif isinstance(default_value, dict) and isinstance(
                user_config.get(key), dict
            ):
                if self._recursive_merge(user_config[key], default_value):
                    write_back_needed = True
        return write_back_needed

    def save_config(self) -> None:
        """Writes self.config_data to the TOML file."""
        if not self._load_successful:
            self.logger.warning(
                "Skipping configuration save: config.toml failed to load. Please fix it manually."
            )
            return
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w") as f:
                toml.dump(self.config_data, f)
            self.logger.info(f"Configuration saved to {self.config_file}.")
        except OSError as e:
            self.logger.error(f"Failed to save configuration to {self.config_file}: {e}")

    def load_config(self) -> Dict[str, Any]:
        """
        Loads the configuration from file, or uses defaults if missing/corrupt.
        A missing file is created from the defaults.
        Returns:
            The loaded and merged configuration dictionary.
        """
        config_from_file: Dict[str, Any] = {}
        file_must_be_created = not self.config_file.exists()
        load_succeeded = False
        if file_must_be_created:
            self.logger.info("Config file is missing. Will apply defaults and create.")
            load_succeeded = True
        else:
            max_retries = 3
            retry_delay_seconds = 0.1
            for attempt in range(max_retries):
                try:
                    with open(self.config_file, "r") as f:
                        config_from_file = toml.load(f)
                    self.logger.debug("Existing config.toml loaded successfully.")
                    load_succeeded = True
                    break
                except (OSError, toml.TomlDecodeError) as e:
                    self.logger.error(
                        f"Error loading config file on attempt {attempt + 1}: {e}. Retrying..."
                    )
                    time.sleep(retry_delay_seconds)
            else:
                self.logger.error(
                    "Failed to load config file after all retries. Using default configuration."
                )
                config_from_file = {}
        self._load_successful = load_succeeded
        self._recursive_merge(config_from_file, self.default_config_stripped)
        self.config_data = config_from_file
        if file_must_be_created:
            self.save_config()
        return config_from_file

    def get_root_setting(self, key_path: List[str], default_value: Any = None) -> Any:
        """
        Traverses the configuration dict to retrieve a value.
        Args:
            key_path: Path of keys, e.g. ['menu', 'search_dirs'].
            default_value: Returned when the path is not found.
        """
        current_data = self.config_data
        for i, key in enumerate(key_path):
            if isinstance(current_data, dict) and key in current_data:
                current_data = current_data[key]
            else:
                self.logger.debug(
                    f"Missing configuration key at path: {' -> '.join(key_path[: i + 1])}. Using default value: {default_value}"
                )
                return default_value
        return current_data

    def _get_dirs(self, key: str) -> Tuple[str, ...]:
        value = self.get_root_setting(["menu", key], [])
        if isinstance(value, str):
            value = [value]
        return tuple(self.paths.expand(str(entry)) for entry in value if entry)

    def menu_config(self, force_refresh: bool = False) -> MenuConfig:
        """Builds the explicit menu configuration from the loaded settings."""
        cache_dir = self.get_root_setting(["menu", "cache_dir"], "")
        return MenuConfig(
            cache_dir=(
                Path(self.paths.expand(cache_dir))
                if cache_dir
                else self.paths.get_cache_dir()
            ),
            search_dirs=self._get_dirs("search_dirs"),
            icon_theme_dirs=self._get_dirs("icon_theme_dirs"),
            pixmap_dirs=self._get_dirs("pixmap_dirs"),
            force_refresh=force_refresh,
        )

    @property
    def terminal(self) -> str:
        """Terminal command for Terminal=true apps; $TERMINAL wins."""
        return os.getenv("TERMINAL") or self.get_root_setting(
            ["launcher", "terminal"], "kitty -1 --hold"
        )
