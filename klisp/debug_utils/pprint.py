import json
import math

from klisp.types.nil import NilType
from klisp.types.procedure import Call, Macro, Procedure
from klisp.types.symbol import Symbol

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_SYMBOL = "\033[94m"
COLOR_CALL = "\033[92m"
COLOR_MACRO = "\033[95m"
COLOR_LITERAL = "\033[93m"
COLOR_SPECIAL_FORM = "\033[90m"

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "max_line_length": 80,
    "max_depth": 8,
    "color_symbols": False,
    "color_calls": False,
    "color_macros": False,
    "color_literals": False,
    "color_special_forms": False,
}

COLOR_OPTIONS = {key: True for key in DEFAULT_OPTIONS if key.startswith("color_")}

SPECIAL_FORMS = {"quote", "lambda", "define", "if", "set!", "begin"}

QUOTE = Symbol("quote")


# ----------------- Plain rendering -----------------
def format_number(value: float) -> str:
    if value == 0 and math.copysign(1.0, value) < 0:
        return "-0"
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


def to_lisp_string(value) -> str:
    """Render any klisp value as source-like text."""
    match value:
        case bool():
            return "true" if value else "false"
        case float():
            return format_number(value)
        case NilType():
            return "nil"
        case Symbol():
            return value.id
        case (head, quoted) if head == QUOTE:
            return "'" + to_lisp_string(quoted)
        case tuple():
            return "(" + " ".join(to_lisp_string(x) for x in value) + ")"
        case Procedure():
            return str(value)
        case _:
            return repr(value)


# ----------------- Colorize utility -----------------
def colorize(obj, options: dict = DEFAULT_OPTIONS) -> str:
    text = to_lisp_string(obj)
    if isinstance(obj, Symbol):
        if obj.id in SPECIAL_FORMS and options.get("color_special_forms", False):
            return f"{COLOR_SPECIAL_FORM}{text}{RESET}"
        if options.get("color_symbols", False):
            return f"{COLOR_SYMBOL}{text}{RESET}"
        return text
    if isinstance(obj, Macro) and options.get("color_macros", False):
        return f"{COLOR_MACRO}{text}{RESET}"
    if isinstance(obj, Call) and options.get("color_calls", False):
        return f"{COLOR_CALL}{text}{RESET}"
    if isinstance(obj, (bool, float, NilType)) and options.get("color_literals", False):
        return f"{COLOR_LITERAL}{text}{RESET}"
    return text


# ----------------- Pretty printer -----------------
def pprint_expr(
    expr,
    indent: int = 0,
    options: dict = DEFAULT_OPTIONS,
    _current_depth: int = 0,
) -> str:
    """Render `expr`, breaking lists that do not fit on one line.

    Lists nested deeper than `max_depth` are elided as "...".
    """
    pad = "  " * indent

    if not isinstance(expr, tuple) or not expr:
        return colorize(expr, options)

    if _current_depth >= options.get("max_depth", 8):
        return "..."

    if len(expr) == 2 and expr[0] == QUOTE:
        return "'" + pprint_expr(expr[1], indent, options, _current_depth + 1)

    parts = [pprint_expr(e, indent + 1, options, _current_depth + 1) for e in expr]

    single_line = "(" + " ".join(parts) + ")"
    if "\n" not in single_line and (
        len(to_lisp_string(expr)) + indent * 2 <= options.get("max_line_length", 80)
    ):
        return single_line

    aligned_lines = ["(" + parts[0]]
    for part in parts[1:]:
        aligned_lines.append(pad + "  " + part)
    aligned_lines[-1] += ")"
    return "\n".join(aligned_lines)


# ----------------- Load JSON config -----------------
def load_options_from_json(json_str: str) -> dict:
    try:
        user_opts = json.loads(json_str)
    except json.JSONDecodeError:
        return dict(DEFAULT_OPTIONS)
    if not isinstance(user_opts, dict):
        return dict(DEFAULT_OPTIONS)
    return {**DEFAULT_OPTIONS, **user_opts}
