"""Prover.toml rendering of circuit inputs.

Scalars and arrays come first as ``key = 'value'`` / ``key = ['a', 'b']``
lines, then one ``[key]`` table per struct.  Output is byte-stable for equal
inputs.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import structlog

from .models import CircuitInputs, InputValue

logger = structlog.get_logger()


def _render_value(value: str | list[str]) -> str:
    if isinstance(value, list):
        return "[" + ", ".join(f"'{item}'" for item in value) + "]"
    return f"'{value}'"


def to_prover_toml(inputs: CircuitInputs | Mapping[str, InputValue]) -> str:
    """Render *inputs* in the Prover.toml layout read by the proving CLI."""
    if isinstance(inputs, CircuitInputs):
        inputs = inputs.to_inputs()

    lines: list[str] = []
    structs: list[str] = []
    for key, value in inputs.items():
        if isinstance(value, Mapping):
            body = "".join(f"{k} = {_render_value(v)}\n" for k, v in value.items())
            structs.append(f"[{key}]\n{body}")
        else:
            lines.append(f"{key} = {_render_value(value)}")
    return "\n".join(lines + structs)


def write_prover_toml(path: str | Path, inputs: CircuitInputs | Mapping[str, InputValue]) -> Path:
    """Write :func:`to_prover_toml` output to *path* and return the path."""
    path = Path(path)
    content = to_prover_toml(inputs)
    path.write_text(content, encoding="utf-8")
    logger.info("prover_toml_written", path=str(path), size=len(content))
    return path
