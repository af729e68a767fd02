"""Exportación JSON de resultados.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines (jq, scripts).
- Permite guardar un listado completo sin depender del render de la terminal.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def dumps_result(result: Any) -> str:
    """Serializa con formato estable (UTF-8, indentado, claves ordenadas)."""

    return json.dumps(result, ensure_ascii=False, indent=2, sort_keys=True)


def export_result_json(*, result: Any, output_path: Path) -> Path:
    """Escribe `result` (lo devuelto por un wrapper) a `output_path`."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dumps_result(result) + "\n", encoding="utf-8")
    return output_path
