"""JSON output of assembled metadata documents.

Documents go to stdout or to a file. When written to a directory, every
document is stored under ``{kind}/{id}.json`` next to a ``manifest.json``.
"""

import json
import os
import re
import sys
from datetime import datetime, timezone
from typing import Any

from ui_metadata import __version__


def _sanitize_filename(name: str) -> str:
    """Create a safe filename from a document id."""
    return re.sub(r'[^\w\-]', '_', name or 'unknown')[:80] + '.json'


class DocumentWriter:
    """Writes assembled documents as UTF-8 JSON.

    Args:
        pretty: Whether to pretty-print JSON (default True).
    """

    def __init__(self, pretty: bool = True) -> None:
        self._indent = 2 if pretty else None

    def dumps(self, document: Any) -> str:
        return json.dumps(document, indent=self._indent, ensure_ascii=False, default=str)

    def write(self, document: Any, path: str | None = None) -> None:
        """Write one document to ``path``, or to stdout when no path is given."""
        if path is None:
            sys.stdout.write(self.dumps(document) + '\n')
            return
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self._write_json(path, document)

    def write_all(self, kind: str, documents: dict[str, Any], output_dir: str) -> list[str]:
        """Write ``documents`` (keyed by id) under ``output_dir/kind`` plus a manifest.

        Returns:
            Paths of the written document files.
        """
        dir_path = os.path.join(output_dir, kind)
        os.makedirs(dir_path, exist_ok=True)

        paths = []
        for doc_id, document in documents.items():
            path = os.path.join(dir_path, _sanitize_filename(doc_id))
            self._write_json(path, document)
            paths.append(path)

        manifest = {
            '_metadata': {
                'generator_version': __version__,
                'generated_at': datetime.now(timezone.utc).isoformat(),
            },
            'kind': kind,
            'documents': sorted(documents),
        }
        self._write_json(os.path.join(output_dir, 'manifest.json'), manifest)
        return paths

    def _write_json(self, path: str, data: Any) -> None:
        """Write data as JSON to a file."""
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=self._indent, ensure_ascii=False, default=str)
