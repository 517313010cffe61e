"""
grammar.json writer.

Writes one ``{out_dir}/{grammar name}/grammar.json`` per compiled grammar.
Output is deterministic so generated grammars can be committed and diffed.
"""

from __future__ import annotations

import logging
from pathlib import Path

from . import ir

logger = logging.getLogger(__name__)

GRAMMAR_FILENAME = "grammar.json"


def grammar_path(grammar: ir.Grammar, out_dir: Path) -> Path:
    return out_dir / grammar.name / GRAMMAR_FILENAME


def write_grammar(grammar: ir.Grammar, out_dir: Path, indent: int | None = 2) -> Path:
    """Write a grammar and return the path of the written file.

    Args:
        grammar: Compiled grammar.
        out_dir: Directory receiving one sub-directory per grammar.
        indent: JSON indentation; None for compact output.

    Returns:
        Path to the written file.
    """
    output_path = grammar_path(grammar, out_dir)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(grammar.dumps(indent=indent) + "\n", encoding="utf-8")
    logger.info("Wrote %s", output_path)
    return output_path
