"""Exportación JSON de resultados.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines.
- Permite guardar la respuesta normalizada de un comando sin re-consultar la API.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import CommandResult


def export_result_json(*, result: CommandResult, output_path: Path) -> Path:
    """Exporta el resultado de un comando a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = result.to_output()
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
