import os
import sys

APPNAME = "pal"

# Overrides the per-user configuration directory
CONFIG_DIR_ENV = "PAL_CONFIG_DIR"

CATALOG_CONFIG = {
    # Scanned in order; "~" and environment variables are expanded at scan time
    "linux_dirs": [
        "/usr/share/applications",
        "/usr/local/share/applications",
        "~/.local/share/applications",
    ],
    "macos_dirs": [
        "/Applications",
        "/System/Applications",
        "~/Applications",
    ],
    "windows_dirs": [
        "C:\\Program Files",
        "C:\\Program Files (x86)",
        "%APPDATA%\\Microsoft\\Windows\\Start Menu\\Programs",
        "%ProgramData%\\Microsoft\\Windows\\Start Menu\\Programs",
    ],
    "windows_extensions": [".exe", ".lnk"],
    "desktop_suffix": ".desktop",
    "bundle_suffix": ".app",
    # Field codes removed from Exec= lines
    "exec_placeholders": ["%f", "%F", "%u", "%U"],
    "default_category": "Application",
    "default_icon": "🖥️",
    "show_hidden_apps": True,  # Keep NoDisplay=true / Hidden=true entries
}

# Synthesized when discovery finds nothing. Per OS: candidate commands probed
# on PATH in order, then the default. An empty default drops the entry.
FALLBACK_APPS = [
    {
        "id": "terminal",
        "name": "Terminal",
        "description": "Open system terminal",
        "icon": "💻",
        "category": "System",
        "keywords": ["terminal", "console", "shell", "command"],
        "commands": {
            "linux": (["gnome-terminal", "konsole", "xfce4-terminal", "xterm"], "xterm"),
            "darwin": ([], "open -a Terminal"),
            "windows": ([], "cmd"),
        },
    },
    {
        "id": "file-manager",
        "name": "File Manager",
        "description": "Open file manager",
        "icon": "📁",
        "category": "System",
        "keywords": ["files", "folder", "explorer", "finder"],
        "commands": {
            "linux": (["nautilus", "dolphin", "thunar", "pcmanfm"], "nautilus"),
            "darwin": ([], "open -a Finder"),
            "windows": ([], "explorer"),
        },
    },
    {
        "id": "calculator",
        "name": "Calculator",
        "description": "Open calculator",
        "icon": "🧮",
        "category": "Utilities",
        "keywords": ["calculator", "calc", "math"],
        "commands": {
            "linux": (
                ["gnome-calculator", "kcalc", "galculator", "qalculate-gtk"],
                "gnome-calculator",
            ),
            "darwin": ([], "open -a Calculator"),
            "windows": ([], "calc"),
        },
    },
    {
        "id": "text-editor",
        "name": "Text Editor",
        "description": "Open text editor",
        "icon": "📝",
        "category": "Development",
        "keywords": ["editor", "text", "notepad", "vim", "nano"],
        "commands": {
            "linux": (["gedit", "kate", "mousepad", "leafpad", "nano", "vim"], "nano"),
            "darwin": ([], "open -a TextEdit"),
            "windows": ([], "notepad"),
        },
    },
]

CLIPBOARD_CONFIG = {
    "poll_interval": 0.5,  # seconds between clipboard reads
    "read_timeout": 5,  # seconds allowed for a wl-paste/xclip/xsel call
    "backend": None,  # None = autodetect, else a ClipboardBackend value
    "preview_length": 10,  # characters shown in the capture log line
    "store_file": "clips.json",
}

COMMAND_CONFIG = {
    "timeout": 30,  # seconds allowed for execute_command
}

LOG_CONFIG = {
    "file": "pal.log",
    "level": "DEBUG",
    "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
}


def get_config_dir() -> str:
    """Return the per-user configuration directory, creating it owner-only.

    PAL_CONFIG_DIR wins; otherwise %APPDATA%\\pal on Windows and
    ~/.config/pal elsewhere.
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        config_dir = override
    elif sys.platform == "win32":
        base = os.environ.get("APPDATA") or os.path.join(
            os.environ.get("USERPROFILE", os.path.expanduser("~")), "Application Data"
        )
        config_dir = os.path.join(base, APPNAME)
    else:
        config_dir = os.path.join(os.path.expanduser("~"), ".config", APPNAME)

    os.makedirs(config_dir, mode=0o700, exist_ok=True)
    return config_dir
