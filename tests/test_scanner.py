from jiffy.menu.scanner import DesktopFileScanner

from conftest import write_desktop


def test_first_directory_wins_on_duplicate_name(tmp_path):
    a = write_desktop(tmp_path / "a", "app.desktop", "[Desktop Entry]\n")
    write_desktop(tmp_path / "b", "app.desktop", "[Desktop Entry]\n")

    paths = DesktopFileScanner().scan([str(tmp_path / "a"), str(tmp_path / "b")])

    assert paths == [str(a)]


def test_reversed_order_reverses_priority(tmp_path):
    write_desktop(tmp_path / "a", "app.desktop", "[Desktop Entry]\n")
    b = write_desktop(tmp_path / "b", "app.desktop", "[Desktop Entry]\n")

    paths = DesktopFileScanner().scan([str(tmp_path / "b"), str(tmp_path / "a")])

    assert paths == [str(b)]


def test_paths_are_returned_in_discovery_order(tmp_path):
    write_desktop(tmp_path / "a", "zeta.desktop", "")
    write_desktop(tmp_path / "a", "alpha.desktop", "")
    write_desktop(tmp_path / "b", "beta.desktop", "")
    write_desktop(tmp_path / "b", "alpha.desktop", "")

    paths = DesktopFileScanner().scan([str(tmp_path / "a"), str(tmp_path / "b")])

    assert paths == [
        str(tmp_path / "a" / "alpha.desktop"),
        str(tmp_path / "a" / "zeta.desktop"),
        str(tmp_path / "b" / "beta.desktop"),
    ]


def test_only_desktop_files_are_selected(tmp_path):
    write_desktop(tmp_path / "a", "app.desktop", "")
    write_desktop(tmp_path / "a", "mimeinfo.cache", "")
    write_desktop(tmp_path / "a", "app.desktop.bak", "")

    paths = DesktopFileScanner().scan([str(tmp_path / "a")])

    assert paths == [str(tmp_path / "a" / "app.desktop")]


def test_unreadable_directories_are_skipped(tmp_path):
    b = write_desktop(tmp_path / "b", "app.desktop", "")
    not_a_dir = tmp_path / "file"
    not_a_dir.write_text("")

    paths = DesktopFileScanner().scan(
        [str(tmp_path / "missing"), str(not_a_dir), str(tmp_path / "b")]
    )

    assert paths == [str(b)]


def test_no_directories():
    assert DesktopFileScanner().scan([]) == []
