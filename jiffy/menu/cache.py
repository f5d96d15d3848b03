import orjson as json
import structlog
from typing import Any, Optional
from jiffy.errors import CacheWriteError
from jiffy.menu.builder import MenuBuilder
from jiffy.menu.models import AppMenu
from jiffy.shared.config_handler import MenuConfig


class MenuCache:
    """
    Read-through cache in front of the MenuBuilder.

    A cached menu stays valid until a forced refresh; there is no expiry
    and the file is never removed automatically. Every rebuild rewrites
    the whole file.

    Attributes:
        config (MenuConfig): Directories and cache location.
        builder (MenuBuilder): Produces the menu on a miss.
    """

    def __init__(
        self,
        config: MenuConfig,
        builder: Optional[MenuBuilder] = None,
        logger: Any = None,
    ):
        self.config = config
        self.logger = logger or structlog.get_logger(__name__)
        self.builder = builder or MenuBuilder(config, logger=self.logger)

    @property
    def cache_file(self):
        return self.config.cache_file

    def get(self, force_refresh: Optional[bool] = None) -> AppMenu:
        """
        Returns the cached menu, building and persisting it on a miss.

        Args:
            force_refresh: Skip the cached file. Defaults to the
                configuration's force_refresh.

        Raises:
            CacheWriteError: The rebuilt menu could not be written.
        """
        if force_refresh is None:
            force_refresh = self.config.force_refresh
        if not force_refresh:
            cached = self.load()
            if cached is not None:
                return cached

        menu = AppMenu(apps=self.builder.build())
        self.save(menu)
        return menu

    def load(self) -> Optional[AppMenu]:
        """Reads the cache file; None when it is missing or unusable."""
        try:
            data = json.loads(self.cache_file.read_bytes())
            menu = AppMenu.from_dict(data)
        except FileNotFoundError:
            self.logger.debug(f"No menu cache at {self.cache_file}.")
            return None
        except (OSError, ValueError, KeyError, TypeError) as e:
            self.logger.warning(f"Ignoring unreadable menu cache {self.cache_file}: {e}")
            return None
        self.logger.debug(f"Loaded {len(menu.apps)} apps from {self.cache_file}.")
        return menu

    def save(self, menu: AppMenu) -> None:
        """
        Overwrites the cache file. A missing cache directory is created
        and the write retried once; anything else raises CacheWriteError.
        """
        payload = json.dumps(menu.to_dict())
        try:
            self._write(payload)
        except FileNotFoundError:
            self.logger.debug(f"Creating menu cache directory {self.config.cache_dir}.")
            try:
                self.config.cache_dir.mkdir(parents=True, exist_ok=True)
                self._write(payload)
            except OSError as e:
                raise CacheWriteError(self.cache_file, e.errno) from e
        except OSError as e:
            raise CacheWriteError(self.cache_file, e.errno) from e
        self.logger.debug(f"Wrote {len(menu.apps)} apps to {self.cache_file}.")

    def invalidate(self) -> bool:
        """Removes the cache file. Returns False if there was none."""
        try:
            self.cache_file.unlink()
        except FileNotFoundError:
            return False
        self.logger.info(f"Removed menu cache {self.cache_file}.")
        return True

    def _write(self, payload: bytes) -> None:
        with open(self.cache_file, "wb") as f:
            f.write(payload)
