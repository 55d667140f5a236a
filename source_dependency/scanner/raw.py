"""Raw dependency data: JSON files mapping names to lists of names."""

from __future__ import annotations

import json
import logging

from source_dependency.models import ParseContext, ParseResult
from source_dependency.scanner.base import BaseLanguageService

logger = logging.getLogger(__name__)


class RawService(BaseLanguageService):
    name = "raw"
    description = 'raw dependency data: JSON objects like {"a": ["b", "c"]}'
    extensions = (".json",)

    def parse(self, context: ParseContext) -> ParseResult:
        try:
            data = json.loads(context.file_content())
        except ValueError as e:
            logger.debug("failed to parse %s: %s", context.file, e)
            return ParseResult()
        if not isinstance(data, dict):
            logger.debug("failed to parse %s: not a JSON object", context.file)
            return ParseResult()
        deps = {
            str(k): [str(x) for x in v]
            for k, v in data.items()
            if isinstance(v, list)
        }
        return ParseResult(module_dependencies=deps)
