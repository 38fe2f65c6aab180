"""lisp2c Configuration — Project-level .lisp2crc.yml support.

Loads configuration from .lisp2crc.yml (or .lisp2crc.yaml, .lisp2crc.json)
in the project root or any parent directory. Only the command-line wrapper
reads it; the compiler itself takes no configuration.

Example .lisp2crc.yml:
    format: json              # how errors are reported: text | json
    log_level: INFO
    source_extension: .lisp
    output_extension: .c
    include:
      - "src/**"
    exclude:
      - "src/vendor/**"
"""

from __future__ import annotations

import fnmatch
import json
import os
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any

import yaml


@dataclass
class Lisp2cConfig:
    """Project-level lisp2c configuration."""
    # Error output: "text" or "json"
    format: str = "text"
    log_level: str = "WARNING"
    # Files picked up and written by `lisp2c scan`
    source_extension: str = ".lisp"
    output_extension: str = ".c"
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)

    def should_include(self, filepath: str) -> bool:
        """Check if a file should be included based on patterns."""
        if not self.include:
            return True
        return any(fnmatch.fnmatch(filepath, p) for p in self.include)

    def should_exclude(self, filepath: str) -> bool:
        """Check if a file should be excluded based on patterns."""
        if not self.exclude:
            return False
        return any(fnmatch.fnmatch(filepath, p) for p in self.exclude)


# ---------------------------------------------------------------------------
# Config file names (in priority order)
# ---------------------------------------------------------------------------

_CONFIG_FILES = [
    ".lisp2crc.yml",
    ".lisp2crc.yaml",
    ".lisp2crc.json",
    "lisp2c.config.yml",
    "lisp2c.config.json",
]


def find_config(start_dir: str = ".") -> Optional[str]:
    """Find the nearest config file by walking up from start_dir."""
    current = os.path.abspath(start_dir)
    while True:
        for name in _CONFIG_FILES:
            path = os.path.join(current, name)
            if os.path.isfile(path):
                return path
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent
    return None


def load_config(path: Optional[str] = None, start_dir: str = ".") -> Lisp2cConfig:
    """Load configuration from a file.

    If no path is given, searches for a config file starting from start_dir.
    If no config file is found, or it cannot be read, returns defaults.
    """
    if path is None:
        path = find_config(start_dir)

    if path is None:
        return Lisp2cConfig()

    try:
        with open(path, "r") as f:
            content = f.read()
    except (IOError, OSError):
        return Lisp2cConfig()

    if path.endswith(".json"):
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            return Lisp2cConfig()
    else:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError:
            return Lisp2cConfig()

    if not isinstance(data, dict):
        return Lisp2cConfig()
    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> Lisp2cConfig:
    """Convert a parsed dict to Lisp2cConfig."""
    config = Lisp2cConfig()

    if data.get("format") in ("text", "json"):
        config.format = data["format"]
    if "log_level" in data:
        config.log_level = str(data["log_level"]).upper()
    if "source_extension" in data:
        config.source_extension = str(data["source_extension"])
    if "output_extension" in data:
        config.output_extension = str(data["output_extension"])
    if "include" in data and isinstance(data["include"], list):
        config.include = [str(p) for p in data["include"]]
    if "exclude" in data and isinstance(data["exclude"], list):
        config.exclude = [str(p) for p in data["exclude"]]

    return config
