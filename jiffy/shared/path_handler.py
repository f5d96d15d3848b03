import os
from pathlib import Path


class PathHandler:
    """
    Resolves the application's paths based on the XDG Base Directory
    Specification.

    Unlike the config handler, nothing here creates directories: the menu
    cache creates its own directory lazily on first write.
    """

    def __init__(self, app_name: str = "jiffy"):
        """
        Args:
            app_name: Name of the per-application subdirectory.
        """
        self.app_name = app_name
        self._home = Path.home()

    def _get_xdg_base_dir(self, env_var: str, default_path: Path) -> Path:
        """Helper to get XDG base directory with fallback."""
        path_str = os.getenv(env_var)
        if path_str:
            return Path(path_str)
        return default_path

    def get_config_dir(self) -> Path:
        """
        Returns $XDG_CONFIG_HOME/jiffy or ~/.config/jiffy.
        """
        config_home = self._get_xdg_base_dir("XDG_CONFIG_HOME", self._home / ".config")
        return config_home / self.app_name

    def get_cache_dir(self) -> Path:
        """
        Returns $XDG_CACHE_HOME/jiffy or ~/.cache/jiffy.
        """
        cache_home = self._get_xdg_base_dir("XDG_CACHE_HOME", self._home / ".cache")
        return cache_home / self.app_name

    def get_state_dir(self) -> Path:
        """
        Returns $XDG_STATE_HOME/jiffy or ~/.local/state/jiffy.
        """
        state_home = self._get_xdg_base_dir(
            "XDG_STATE_HOME", self._home / ".local" / "state"
        )
        return state_home / self.app_name

    def expand(self, path: str) -> str:
        """Expands '~' and environment variables in a configured path."""
        return os.path.expandvars(os.path.expanduser(path))
