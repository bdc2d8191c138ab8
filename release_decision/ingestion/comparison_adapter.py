"""
Adapter for per-module publication comparison results.

The comparison subsystem writes one file per module into a results
directory. Files may be YAML (.yaml, .yml) or JSON (.json):

    module_id: core
    changed: true
    description: "core-1.2.0.jar differs from the previous release"

The module id falls back to the file stem when omitted.
"""
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

import yaml

from decisioning.errors import InvalidInputError
from decisioning.models import ComparisonResult
from .base_adapter import BaseAdapter


logger = logging.getLogger(__name__)

RESULT_SUFFIXES = {'.yaml', '.yml', '.json'}


class ComparisonResultsAdapter(BaseAdapter):
    """
    Loads comparison results from a directory of per-module files.

    A missing directory means no module wired a comparison, which yields
    an empty collection rather than an error.
    """

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.source_id = "compare_publications"
        self.path = Path(config.get("path", "build/comparisons"))

    def fetch(self) -> List[ComparisonResult]:
        """
        Load all result files in filename order.

        Raises:
            InvalidInputError: If a result file cannot be parsed
        """
        self._last_fetch = datetime.utcnow()

        if not self.path.exists():
            logger.info(f"No comparison results directory at {self.path}")
            self._records_fetched = 0
            self._last_error = None
            return []

        results = []
        for result_file in sorted(self.path.iterdir()):
            if result_file.suffix not in RESULT_SUFFIXES or not result_file.is_file():
                continue
            try:
                raw = self._read(result_file)
                results.append(self.normalize(raw, module_id=result_file.stem))
            except InvalidInputError as e:
                self._last_error = f"{result_file.name}: {e}"
                raise InvalidInputError(f"Invalid comparison result {result_file}: {e}") from e

            logger.debug(f"  {results[-1].module_id}: changed={results[-1].changed}")

        self._records_fetched = len(results)
        self._last_error = None
        logger.info(f"Loaded {len(results)} comparison results from {self.path}")
        return results

    def normalize(self, raw_record: Dict[str, Any], **kwargs) -> ComparisonResult:
        if not isinstance(raw_record, dict):
            raise InvalidInputError(f"Expected a mapping, got {type(raw_record).__name__}")
        if 'changed' not in raw_record:
            raise InvalidInputError("Missing required field 'changed'")

        return ComparisonResult(
            module_id=raw_record.get('module_id') or kwargs.get('module_id'),
            changed=raw_record['changed'],
            description=str(raw_record.get('description') or '')
        )

    def _read(self, result_file: Path) -> Any:
        text = result_file.read_text(encoding='utf-8')
        try:
            if result_file.suffix == '.json':
                return json.loads(text)
            return yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise InvalidInputError(str(e)) from e
