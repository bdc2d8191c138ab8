"""
Resolves the version being released.

The version comes from an override environment variable when present,
otherwise from the `version=` entry of a properties file.
"""
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from decisioning.errors import InvalidInputError


logger = logging.getLogger(__name__)


class VersionSource:
    """Reads the current version string; never writes or bumps it."""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None
    ):
        config = config or {}
        self.version_file = Path(config.get('file', 'version.properties'))
        self.override_env = config.get('override_env', 'RELEASE_VERSION')
        self.environ = os.environ if environ is None else environ

    def resolve(self) -> str:
        """
        Raises:
            InvalidInputError: If no override is set and the file or its
                version entry is missing
        """
        override = self.environ.get(self.override_env, '').strip()
        if override:
            logger.info(f"Using version '{override}' supplied via {self.override_env}")
            return override

        if not self.version_file.exists():
            raise InvalidInputError(f"Version file not found: {self.version_file}")

        properties = self._parse_properties(self.version_file.read_text(encoding='utf-8'))
        version = properties.get('version')
        if not version:
            raise InvalidInputError(f"No 'version' entry in {self.version_file}")

        logger.info(f"Using version '{version}' from '{self.version_file.name}' file")
        return version

    @staticmethod
    def _parse_properties(text: str) -> Dict[str, str]:
        """
        Java-properties reader.

        Supports key=value and key: value, # and ! comments, lines continued
        with a trailing backslash, and backslash-escaped separators in keys.
        Unicode escapes (\\uXXXX) are not decoded.
        """
        properties = {}
        pending = ""
        for raw in text.splitlines():
            line = raw.strip() if not pending else raw.lstrip()
            if not pending and (not line or line[0] in '#!'):
                continue

            trailing = len(line) - len(line.rstrip('\\'))
            if trailing % 2 == 1:
                pending += line[:-1]
                continue
            line, pending = pending + line, ""

            key, value = VersionSource._split_entry(line)
            if key:
                properties[key] = value

        if pending:
            key, value = VersionSource._split_entry(pending)
            if key:
                properties[key] = value
        return properties

    @staticmethod
    def _split_entry(line: str) -> Tuple[str, str]:
        """Split on the first unescaped '=' or ':' and unescape both sides."""
        escaped = False
        for i, char in enumerate(line):
            if escaped:
                escaped = False
            elif char == '\\':
                escaped = True
            elif char in '=:':
                return _unescape(line[:i].strip()), _unescape(line[i + 1:].strip())
        return "", ""


def _unescape(text: str) -> str:
    return re.sub(r'\\(.)', r'\1', text)
