"""預設設定值。"""

DEFAULT_CONFIG = {
    "file_extensions": {
        "program": [".ACD", ".RSS"],
        "secondary": ".MER",
    },
    "backup": {
        "marker": "bak",
    },
    "archive": {
        "first_sequence": 2,
    },
    "state": {
        "dir_name": "GLACTPM",
        "state_file": "state.json",
        "settings_file": "settings.json",
    },
    "unit_template": {
        "subfolders": [
            "2 - Archive",
            "5 - PLC Program",
            "6 - Flow Computer Program",
            "7 - Auxiliary Equip. Programs",
        ],
    },
    "logging": {
        "level": "INFO",
        "file": "plc_archive_tidy.log",
    },
    "report": {
        "dir_name": "REPORT",
    },
}
