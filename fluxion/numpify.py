"""
numpify: Compile SymPy expressions to NumPy-callable functions
==============================================================

Purpose
-------
Turn a SymPy expression such as ``sin(x) * cos(y)`` into a plain Python
function evaluating with NumPy, so expression-backed functions and scalar
fields can be sampled over whole grids in one call.

The compiled function:

- takes its arguments positionally, in an explicit order (``vars``),
- converts each argument with ``numpy.asarray`` so it broadcasts,
- returns an array of the broadcast shape even for constant expressions,
- keeps its generated source for inspection.

Public API
----------
- :func:`numpify`
- :func:`numpify_cached`
- :class:`CompiledFunction`

Examples
--------
>>> import numpy as np
>>> import sympy as sp
>>> x, y = sp.symbols("x y")
>>> f = numpify(x**2 + y, vars=(x, y))
>>> f(np.array([1.0, 2.0]), 1.0)
array([2., 5.])

Constants still broadcast against their arguments:

>>> numpify(5, vars=x)(np.zeros(3))
array([5., 5., 5.])

Logging
-------
This module is silent by default. Enable compile timings with:

>>> import logging
>>> logging.getLogger("fluxion.numpify").setLevel(logging.DEBUG)

Notes
-----
Code generation uses ``exec``; do not compile untrusted expressions.
"""

from __future__ import annotations

import builtins
import keyword
import logging
import textwrap
import time
from functools import lru_cache
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple, Union, cast

import numpy as np
import sympy as sp
from sympy.printing.numpy import NumPyPrinter

__all__ = ["CompiledFunction", "numpify", "numpify_cached"]


logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


VarsSpec = Optional[Union[sp.Symbol, Iterable[sp.Symbol]]]


class CompiledFunction:
    """NumPy-evaluable callable compiled from a SymPy expression."""

    __slots__ = ("_fn", "symbolic", "call_signature", "source")

    def __init__(
        self,
        fn: Callable[..., Any],
        symbolic: sp.Basic,
        call_signature: tuple[tuple[sp.Symbol, str], ...],
        source: str,
    ) -> None:
        self._fn = fn
        self.symbolic = symbolic
        self.call_signature = call_signature
        self.source = source

    def __call__(self, *args: Any) -> Any:
        if len(args) != len(self.call_signature):
            raise TypeError(
                f"Expected {len(self.call_signature)} positional argument(s) "
                f"({', '.join(self.var_names)}), got {len(args)}"
            )
        return self._fn(*args)

    @property
    def vars(self) -> tuple[sp.Symbol, ...]:
        return tuple(sym for sym, _ in self.call_signature)

    @property
    def var_names(self) -> tuple[str, ...]:
        return tuple(name for _, name in self.call_signature)

    @property
    def arity(self) -> int:
        return len(self.call_signature)

    def __repr__(self) -> str:
        return f"CompiledFunction({self.symbolic!r}, vars=({', '.join(self.var_names)}))"


def _is_valid_parameter_name(name: str) -> bool:
    return bool(name) and name.isidentifier() and not keyword.iskeyword(name)


def _mangle_base_name(name: str) -> str:
    cleaned = "".join(ch if (ch == "_" or ch.isalnum()) else "_" for ch in name)
    if not cleaned or cleaned[0].isdigit():
        cleaned = f"_{cleaned}"
    if keyword.iskeyword(cleaned):
        cleaned = f"{cleaned}__"
    return cleaned


def _build_call_signature(
    vars_tuple: tuple[sp.Symbol, ...], reserved_names: set[str]
) -> tuple[tuple[sp.Symbol, str], ...]:
    used = set(reserved_names)
    out: list[tuple[sp.Symbol, str]] = []
    for sym in vars_tuple:
        base = sym.name if _is_valid_parameter_name(sym.name) else _mangle_base_name(sym.name)
        candidate = base
        suffix = 0
        while candidate in used or not _is_valid_parameter_name(candidate):
            candidate = f"{base}__{suffix}"
            suffix += 1
        used.add(candidate)
        out.append((sym, candidate))
    return tuple(out)


def _to_sympy(expr: Any) -> sp.Basic:
    try:
        expr_sym = sp.sympify(expr)
    except (sp.SympifyError, TypeError) as e:
        raise TypeError(f"numpify expects a SymPy-compatible expression, got {type(expr)}") from e
    if not isinstance(expr_sym, sp.Basic):
        raise TypeError(f"numpify expects a SymPy expression, got {type(expr_sym)}")
    return cast(sp.Basic, expr_sym)


def _normalize_vars(expr: sp.Basic, vars: VarsSpec) -> Tuple[sp.Symbol, ...]:
    """Normalize vars into a tuple of SymPy Symbols."""
    if vars is None:
        return tuple(sorted(expr.free_symbols, key=sp.default_sort_key))

    if isinstance(vars, sp.Symbol):
        return (vars,)

    try:
        vars_tuple = tuple(vars)
    except TypeError as e:
        raise TypeError("vars must be a SymPy Symbol or an iterable of SymPy Symbols") from e

    for a in vars_tuple:
        if not isinstance(a, sp.Symbol):
            raise TypeError(f"vars must contain only SymPy Symbols, got {type(a)}")
    return cast(Tuple[sp.Symbol, ...], vars_tuple)


def numpify(
    expr: Any,
    *,
    vars: VarsSpec = None,
    bindings: Optional[Mapping[sp.Symbol, Any]] = None,
) -> CompiledFunction:
    """Compile a SymPy expression into a NumPy-evaluable function.

    Every call compiles afresh; use :func:`numpify_cached` to reuse results.

    Parameters
    ----------
    expr:
        A SymPy expression or anything :func:`sympy.sympify` accepts.
    vars:
        Symbols taken as positional arguments, in order. ``None`` uses the
        free symbols sorted by :func:`sympy.default_sort_key`.
    bindings:
        Values injected for symbols that are not arguments, e.g. ``{a: 2.0}``.

    Raises
    ------
    TypeError
        If ``expr`` is not SymPy-compatible or ``vars`` holds non-symbols.
    ValueError
        If the expression has free symbols that are neither arguments nor bound,
        or bindings overlap the arguments.
    """
    expr = _to_sympy(expr)
    vars_tuple = _normalize_vars(expr, vars)

    log_debug = logger.isEnabledFor(logging.DEBUG)
    t0 = time.perf_counter() if log_debug else None

    sym_bindings: Dict[str, Any] = {}
    for key, value in (bindings or {}).items():
        if not isinstance(key, sp.Symbol):
            raise TypeError(f"bindings keys must be SymPy Symbols, got {type(key)}")
        sym_bindings[key.name] = value

    free_names = {s.name for s in expr.free_symbols}
    var_names_set = {a.name for a in vars_tuple}
    missing = free_names - var_names_set - set(sym_bindings)
    if missing:
        raise ValueError(
            "Expression contains unbound symbols: "
            f"{', '.join(sorted(missing))}. Pass them in vars= or bind them via bindings=."
        )

    overlap = var_names_set & set(sym_bindings)
    if overlap:
        raise ValueError(
            "Symbol bindings overlap with vars (would overwrite argument values): "
            + ", ".join(sorted(overlap))
        )

    printer = NumPyPrinter(settings={"user_functions": {}})

    reserved_names = set(keyword.kwlist) | set(dir(builtins)) | {"numpy", "_sym_bindings"}
    reserved_names |= set(sym_bindings)
    call_signature = _build_call_signature(vars_tuple, reserved_names)
    arg_names = [name for _, name in call_signature]
    expr_code = printer.doprint(expr.xreplace({sym: sp.Symbol(name) for sym, name in call_signature}))

    lines = ["def _generated(" + ", ".join(arg_names) + "):"]
    for nm in arg_names:
        lines.append(f"    {nm} = numpy.asarray({nm}, dtype=float)")
    for nm in sorted(sym_bindings):
        lines.append(f"    {nm} = _sym_bindings[{nm!r}]")
    if arg_names:
        # Constant or partially-constant results still take the argument shape.
        lines.append(f"    _shape = numpy.broadcast({', '.join(arg_names)}).shape")
        lines.append(f"    return ({expr_code}) + numpy.zeros(_shape)")
    else:
        lines.append(f"    return numpy.asarray({expr_code}, dtype=float)")
    src = "\n".join(lines)

    glb: Dict[str, Any] = {"numpy": np, "_sym_bindings": sym_bindings}
    loc: Dict[str, Any] = {}
    exec(src, glb, loc)
    fn = cast(Callable[..., Any], loc["_generated"])
    fn.__doc__ = textwrap.dedent(
        f"""
        Auto-generated NumPy function from SymPy expression.

        expr: {expr!r}
        vars: {arg_names}
        """
    ).strip()

    if t0 is not None:
        logger.debug(
            "numpify: compiled %r with vars=%s in %.2f ms",
            expr,
            arg_names,
            1000.0 * (time.perf_counter() - t0),
        )

    return CompiledFunction(fn=fn, symbolic=expr, call_signature=call_signature, source=src)


_NUMPIFY_CACHE_MAXSIZE = 256


@lru_cache(maxsize=_NUMPIFY_CACHE_MAXSIZE)
def _numpify_cached_impl(
    expr: sp.Basic,
    vars_tuple: Tuple[sp.Symbol, ...],
    frozen_bindings: Tuple[Tuple[sp.Symbol, Any], ...],
) -> CompiledFunction:
    logger.debug("numpify_cached: cache MISS (vars=%s)", [a.name for a in vars_tuple])
    return numpify(expr, vars=vars_tuple, bindings=dict(frozen_bindings))


def numpify_cached(
    expr: Any,
    *,
    vars: VarsSpec = None,
    bindings: Optional[Mapping[sp.Symbol, Any]] = None,
) -> CompiledFunction:
    """Cached version of :func:`numpify`.

    The cache key is the sympified expression, the normalized vars tuple and
    the bindings. Bindings holding unhashable values (arrays, dicts) are
    compiled fresh every time.
    """
    expr_sym = _to_sympy(expr)
    vars_tuple = _normalize_vars(expr_sym, vars)
    frozen = tuple(sorted((bindings or {}).items(), key=lambda kv: sp.default_sort_key(kv[0])))
    try:
        hash(frozen)
    except TypeError:
        return numpify(expr_sym, vars=vars_tuple, bindings=bindings)
    return _numpify_cached_impl(expr_sym, vars_tuple, frozen)


numpify_cached.cache_info = _numpify_cached_impl.cache_info  # type: ignore[attr-defined]
numpify_cached.cache_clear = _numpify_cached_impl.cache_clear  # type: ignore[attr-defined]
