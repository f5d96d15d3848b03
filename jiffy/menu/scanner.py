import os
import structlog
from typing import Any, List, Optional, Sequence

DESKTOP_SUFFIX = ".desktop"


class DesktopFileScanner:
    """
    Discovers .desktop files across a list of application directories.

    Directory order is override priority: once a file name has been seen,
    the same name in a later directory is ignored.
    """

    def __init__(self, logger: Any = None):
        self.logger = logger or structlog.get_logger(__name__)

    def scan(self, directories: Sequence[str]) -> List[str]:
        """
        Returns:
            Full paths of the winning descriptor files, in discovery order.
        """
        seen_names = set()
        file_paths: List[str] = []

        for app_dir in directories:
            file_names = self._list_dir(app_dir)
            if file_names is None:
                continue
            for file_name in file_names:
                if not file_name.endswith(DESKTOP_SUFFIX) or file_name in seen_names:
                    continue
                seen_names.add(file_name)
                file_paths.append(os.path.join(app_dir, file_name))

        return file_paths

    def _list_dir(self, app_dir: str) -> Optional[List[str]]:
        try:
            return sorted(os.listdir(app_dir))
        except OSError as e:
            self.logger.debug(f"Skipping unreadable application directory {app_dir}: {e}")
            return None
