"""
Schema loading.

Reads a schema document (TOML or JSON), validates it into the IR and
compiles every module that carries a grammar name. Nested modules are
visited before their parent, so a document yields its grammars innermost
first.

Schema example (TOML):

    [[modules]]
    name = "calc"
    grammar = "calc"

    [[modules.definitions]]
    kind = "union"
    name = "Expression"
    language = true

    [[modules.definitions.variants]]
    name = "Number"
    fields = [{ type = "i32", leaf = { pattern = '\\d+' } }]
"""

from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from . import ir
from .assembler import compile_grammar
from .errors import ErrorContext, SchemaError

logger = logging.getLogger(__name__)

SCHEMA_SUFFIXES = (".toml", ".json")


def _read_document(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix == ".json":
            data = json.loads(text)
        else:
            data = tomllib.loads(text)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise SchemaError(f"Cannot read schema: {e}", ErrorContext(file=path)) from e
    if not isinstance(data, dict):
        raise SchemaError("Schema document must be a table", ErrorContext(file=path))
    return data


def _format_validation_error(error: ValidationError) -> str:
    lines = []
    for problem in error.errors():
        location = ".".join(str(part) for part in problem["loc"])
        lines.append(f"  - {location}: {problem['msg']}")
    return "Schema validation failed:\n" + "\n".join(lines)


def parse_schema(data: dict[str, Any], file: Path | None = None) -> ir.GrammarModule:
    """
    Validate a schema document into the IR.

    Raises:
        SchemaError: With one line per validation problem
    """
    try:
        return ir.GrammarModule.model_validate(data)
    except ValidationError as e:
        raise SchemaError(_format_validation_error(e), ErrorContext(file=file)) from e


def load_schema(path: Path) -> ir.GrammarModule:
    """
    Load and validate a schema file.

    Args:
        path: ``.toml`` or ``.json`` schema document

    Returns:
        The top-level module of the schema
    """
    if path.suffix not in SCHEMA_SUFFIXES:
        raise SchemaError(
            f"Unsupported schema format '{path.suffix}', expected one of "
            + ", ".join(SCHEMA_SUFFIXES),
            ErrorContext(file=path),
        )
    logger.debug("Loading schema %s", path)
    return parse_schema(_read_document(path), file=path)


def iter_grammar_modules(module: ir.GrammarModule) -> Iterator[ir.GrammarModule]:
    """Modules carrying a grammar name, nested modules before their parent."""
    for child in module.modules:
        yield from iter_grammar_modules(child)
    if module.grammar is not None:
        yield module


def compile_module(module: ir.GrammarModule) -> ir.Grammar:
    """Compile the definitions of one grammar module."""
    logger.debug("Compiling module %s (grammar %r)", module.name, module.grammar)
    return compile_grammar(module.grammar or "", module.definitions)


def generate_grammars(path: Path) -> list[ir.Grammar]:
    """
    Compile every grammar declared in a schema file.

    Args:
        path: Schema file

    Returns:
        One Grammar per grammar module, innermost modules first

    Raises:
        SchemaError: If the schema is invalid; the file is added to the error context
    """
    root = load_schema(path)
    grammars: list[ir.Grammar] = []
    # grammar name -> module declaring it; each name owns one output directory
    owners: dict[str, str] = {}
    for module in iter_grammar_modules(root):
        if module.grammar in owners:
            raise SchemaError(
                f"Duplicate grammar name '{module.grammar}' "
                f"(modules {owners[module.grammar]}, {module.name})",
                ErrorContext(file=path, rule=module.name),
            )
        try:
            grammar = compile_module(module)
        except SchemaError as e:
            context = e.context or ErrorContext(rule=module.name)
            context.file = path
            raise e.with_context(context)
        owners[grammar.name] = module.name
        grammars.append(grammar)
    if not grammars:
        logger.warning("Schema %s declares no grammar modules", path)
    return grammars
