import structlog
from typing import Any, List, Optional
from jiffy.menu.desktop_entry import DesktopEntryParser, ParseResult
from jiffy.menu.icon_resolver import IconResolver
from jiffy.menu.models import ApplicationRecord
from jiffy.menu.scanner import DesktopFileScanner
from jiffy.shared.config_handler import MenuConfig


class MenuBuilder:
    """Scans, parses and collects the application menu, in discovery order."""

    def __init__(
        self,
        config: MenuConfig,
        scanner: Optional[DesktopFileScanner] = None,
        parser: Optional[DesktopEntryParser] = None,
        logger: Any = None,
    ):
        self.config = config
        self.logger = logger or structlog.get_logger(__name__)
        self.scanner = scanner or DesktopFileScanner(logger=self.logger)
        self.parser = parser or DesktopEntryParser(
            IconResolver(config.icon_theme_dirs, config.pixmap_dirs),
            logger=self.logger,
        )
        self.failures: List[ParseResult] = []

    def build(self) -> List[ApplicationRecord]:
        apps: List[ApplicationRecord] = []
        self.failures = []
        paths = self.scanner.scan(self.config.search_dirs)
        for path in paths:
            result = self.parser.parse_file(path)
            if not result.ok:
                self.failures.append(result)
            elif result.record is not None:
                apps.append(result.record)
        self.logger.info(
            f"Built application menu: {len(apps)} apps from {len(paths)} desktop files, "
            f"{len(self.failures)} failed."
        )
        return apps
