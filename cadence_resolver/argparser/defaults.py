"""
Default value for options
"""

# Those are the flags shared by the command line and the config file
DEFAULTS_FLAG_IN_CONFIG = {
    "aliases": None,
    "deploy": False,
    "account_name": "",
    "account_address": None,
    "working_dir": None,
    "export_dir": "cadence-export",
    "export_json": False,
    "export_to_zip": None,
    "export_to_zip_type": "lzma",
    "print_order": False,
    "print_code": False,
}
