import os
import re
from typing import Iterator, List, Sequence

ICON_SIZES = ("48x48", "32x32", "24x24", "16x16", "scalable")
ICON_CATEGORIES = ("apps", "applications")
ICON_EXTENSIONS = (".svg", ".png", ".xpm")
FALLBACK_THEME = "hicolor"

_EXTENSION_RE = re.compile(r"\.[^/.]+$")


class IconResolver:
    """
    Maps an Icon= value from a desktop entry to a file on disk.

    Theme roots are searched first, in order, then the flat pixmap
    directories. Inside a theme root the fallback theme (hicolor) is
    always tried before the themes found on disk. When nothing matches
    the extension-stripped name is returned so callers can still show it.

    Attributes:
        theme_dirs: Icon theme roots such as ~/.local/share/icons.
        pixmap_dirs: Flat directories such as /usr/share/pixmaps.
    """

    def __init__(
        self,
        theme_dirs: Sequence[str],
        pixmap_dirs: Sequence[str] = (),
        sizes: Sequence[str] = ICON_SIZES,
        categories: Sequence[str] = ICON_CATEGORIES,
        extensions: Sequence[str] = ICON_EXTENSIONS,
    ):
        self.theme_dirs = list(theme_dirs)
        self.pixmap_dirs = list(pixmap_dirs)
        self.sizes = tuple(sizes)
        self.categories = tuple(categories)
        self.extensions = tuple(extensions)

    def resolve(self, icon_name: str) -> str:
        """
        Returns the first existing icon path, or the bare icon name.

        Args:
            icon_name: A theme icon name ("firefox"), a file name
                ("firefox.png") or an absolute path.
        """
        if os.path.isabs(icon_name) and os.path.exists(icon_name):
            return icon_name

        name = strip_extension(icon_name)
        for candidate in self.candidates(name):
            if os.path.exists(candidate):
                return candidate
        return name

    def candidates(self, name: str) -> Iterator[str]:
        """Yields every probed path, in search order."""
        # an absolute name stays under each search root
        name = name.lstrip(os.sep)
        for base_path in self.theme_dirs:
            for theme in self._themes(base_path):
                for size in self.sizes:
                    for category in self.categories:
                        for ext in self.extensions:
                            yield os.path.join(
                                base_path, theme, size, category, name + ext
                            )
        for base_path in self.pixmap_dirs:
            for ext in self.extensions:
                yield os.path.join(base_path, name + ext)

    def _themes(self, base_path: str) -> List[str]:
        """hicolor first, then the theme directories present under base_path."""
        try:
            with os.scandir(base_path) as entries:
                found = sorted(
                    entry.name
                    for entry in entries
                    if entry.is_dir() and entry.name != FALLBACK_THEME
                )
        except OSError:
            return []
        return [FALLBACK_THEME] + found


def strip_extension(icon_name: str) -> str:
    """Removes a trailing '.ext' from the last path component."""
    return _EXTENSION_RE.sub("", icon_name)
