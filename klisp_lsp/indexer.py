from __future__ import annotations

"""
Static indexer for klisp files. Never evaluates user code.

We scan for top-level `(define name ...)` forms to power document symbols,
hover and completion, and run the real reader over the text to report
syntax errors. Builtin signatures come from the parameter specs of the
values bound in a fresh global environment.
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from klisp.debug_utils.pprint import to_lisp_string
from klisp.errors import KlispError, KlispSyntaxError
from klisp.reader.parser import lex, read_all
from klisp.types.procedure import Procedure
from klisp.types.symbol import Symbol

logger = logging.getLogger(__name__)


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int
    col: int


@dataclass
class SyntaxProblem:
    message: str
    line: int
    col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    paren_balance: int = 0
    problems: List[SyntaxProblem] = field(default_factory=list)


def position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def _scan_defines(text: str, idx: DocumentIndex) -> None:
    depth = 0
    tokens = list(lex(text))
    for i, (tok_type, tok_val, offset) in enumerate(tokens):
        if tok_type == "lparen":
            depth += 1
            # (define name (lambda ...)) at top level
            if depth == 1 and i + 2 < len(tokens):
                head, name = tokens[i + 1], tokens[i + 2]
                if head[:2] == ("atom", "define") and name[0] == "atom":
                    line, col = position_from_offset(text, name[2])
                    is_fn = (
                        i + 4 < len(tokens)
                        and tokens[i + 3][0] == "lparen"
                        and tokens[i + 4][:2] == ("atom", "lambda")
                    )
                    idx.symbols[name[1]] = SymbolDef(
                        name=name[1], kind="function" if is_fn else "var", line=line, col=col
                    )
        elif tok_type == "rparen":
            depth -= 1
    idx.paren_balance = depth


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    try:
        _scan_defines(text, idx)
        for _ in read_all(text):
            pass
    except KlispSyntaxError as ex:
        line, col = position_from_offset(text, ex.position or 0)
        idx.problems.append(SyntaxProblem(message=str(ex), line=line, col=col))
    return idx


def signature_of(name: str, value: Procedure) -> str:
    if isinstance(value.params, Symbol):
        return f"({name} {value.params}...)"
    params = to_lisp_string(value.params)[1:-1]
    return f"({name} {params})" if params else f"({name})"


@lru_cache(maxsize=1)
def builtin_signatures() -> Dict[str, str]:
    """Signatures of every procedure visible in a fresh global environment."""
    # Late import: the indexer itself never needs the evaluator
    from klisp.interpreter import global_environment

    try:
        env = global_environment()
    except (KlispError, OSError, UnicodeDecodeError) as ex:
        logger.warning("Prelude failed to load, offering primitives only: %s", ex)
        env = global_environment(prelude=None)
    signatures = {}
    for name in env.names():
        value = env.lookup(name)
        if isinstance(value, Procedure):
            signatures[str(name)] = signature_of(str(name), value)
    return signatures


def word_at(text: str, line: int, character: int) -> Optional[str]:
    lines = text.splitlines(True)
    if line >= len(lines):
        return None
    current = lines[line]
    start = end = min(character, len(current))
    while start > 0 and current[start - 1] not in " \t()'\n\r":
        start -= 1
    while end < len(current) and current[end] not in " \t()'\n\r":
        end += 1
    return current[start:end] or None


def callee_before(text: str, line: int, character: int) -> Optional[str]:
    """Name of the innermost open call on `line` before `character`."""
    lines = text.splitlines(True)
    if line >= len(lines):
        return None
    prefix = lines[line][:character]
    lp = prefix.rfind("(")
    if lp == -1:
        return None
    parts = prefix[lp + 1:].split()
    return parts[0] if parts else None
