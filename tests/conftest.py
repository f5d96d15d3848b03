import sys
import textwrap
from pathlib import Path

import pytest
import structlog

from jiffy.shared.config_handler import MenuConfig


def write_desktop(directory: Path, file_name: str, body: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / file_name
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path


@pytest.fixture
def user_apps(tmp_path):
    return tmp_path / "home" / ".local" / "share" / "applications"


@pytest.fixture
def system_apps(tmp_path):
    return tmp_path / "usr" / "share" / "applications"


@pytest.fixture
def menu_config(tmp_path, user_apps, system_apps):
    return MenuConfig(
        cache_dir=tmp_path / "cache" / "jiffy",
        search_dirs=(str(user_apps), str(system_apps)),
        icon_theme_dirs=(
            str(tmp_path / "home" / ".local" / "share" / "icons"),
            str(tmp_path / "usr" / "share" / "icons"),
        ),
        pixmap_dirs=(str(tmp_path / "usr" / "share" / "pixmaps"),),
    )


@pytest.fixture(autouse=True)
def log_to_stderr():
    # stdout carries the menu output
    structlog.configure(logger_factory=structlog.PrintLoggerFactory(sys.stderr))
    yield
    structlog.reset_defaults()
