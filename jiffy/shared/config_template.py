default_config = {
    "_section_hint": (
        "General configuration settings for jiffy, a terminal application "
        "launcher backed by a cached desktop-entry menu."
    ),
    "menu": {
        "_section_hint": (
            "Where application descriptors and icons are searched, and where "
            "the built menu is cached."
        ),
        "cache_dir": "",
        "cache_dir_hint": (
            "Directory holding appsMenu.json. Leave empty to use "
            "$XDG_CACHE_HOME/jiffy (usually ~/.cache/jiffy)."
        ),
        "search_dirs": [
            "~/.local/share/applications",
            "/usr/share/applications",
        ],
        "search_dirs_hint": (
            "Directories scanned for .desktop files, in priority order. "
            "When two directories hold the same file name, the earlier one wins."
        ),
        "icon_theme_dirs": [
            "~/.local/share/icons",
            "/usr/share/icons",
        ],
        "icon_theme_dirs_hint": (
            "Icon theme roots, searched in order. Each contains theme "
            "directories such as hicolor/48x48/apps."
        ),
        "pixmap_dirs": ["/usr/share/pixmaps"],
        "pixmap_dirs_hint": (
            "Flat icon directories searched after the theme roots."
        ),
    },
    "launcher": {
        "_section_hint": "Settings for the fuzzy-finder launcher output.",
        "terminal": "kitty -1 --hold",
        "terminal_hint": (
            "Terminal command prefixed to applications that declare "
            "Terminal=true. $TERMINAL overrides this value."
        ),
    },
}
