"""reasoning_bridge/solver.py

Z3 adapter for SMT-LIB2 formulas.

Each call builds its own Z3 context, loads the formula, and checks it once.
There is no pooling and no retry: one formula in, one SolveOutcome out.
"""

from __future__ import annotations

# Standard Library
import logging
from dataclasses import dataclass, field
from enum import StrEnum

# Third-Party Libraries
import z3

logger = logging.getLogger("reasoning-bridge.solver")

# ---------------------------------------------------------------------------
# Formula preprocessing
# ---------------------------------------------------------------------------

DEFAULT_LOGIC: str = "QF_LIA"
_LOGIC_DECLARATION: str = f"(set-logic {DEFAULT_LOGIC})\n"


def process_formula(formula: str) -> str:
    """Prepend the default logic declaration unless the formula has one.

    The default is not checked against what the formula actually uses, so a
    formula that needs another theory still fails inside the engine.

    Args:
        formula: Raw SMT-LIB2 text.

    Returns:
        The text submitted to the engine.
    """
    if "set-logic" in formula:
        return formula
    return _LOGIC_DECLARATION + formula


# ---------------------------------------------------------------------------
# Error text extraction
# ---------------------------------------------------------------------------

_ERROR_MARKER: str = 'error "'


def extract_error_reason(raw: str) -> str:
    """Pull the quoted reason out of an engine error message.

    Z3 reports parse failures as ``(error "line 1 column 9: unknown constant y")``.
    The text between the quotes is the useful part. Messages without that
    shape come back unchanged.

    Args:
        raw: The full error text.

    Returns:
        The quoted fragment, or ``raw`` when there is none.
    """
    start = raw.find(_ERROR_MARKER)
    if start == -1:
        return raw
    fragment = raw[start + len(_ERROR_MARKER):]
    end = fragment.find('"')
    return fragment if end == -1 else fragment[:end]


def _raw_message(exc: Exception) -> str:
    # Z3Exception keeps the engine's message in ``value``, sometimes as bytes.
    value = getattr(exc, "value", None)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace").strip()
    if isinstance(value, str):
        return value.strip()
    return str(exc)


# ---------------------------------------------------------------------------
# Outcome
# ---------------------------------------------------------------------------


class SolveStatus(StrEnum):
    SAT = "sat"
    UNSAT = "unsat"
    UNKNOWN = "unknown"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class SolveOutcome:
    """Result of one solver call.

    Attributes:
        status: What the engine decided, or ``error``.
        model: ``name = value`` lines in engine order (only when sat).
        reason: Short failure reason (only when error).
        diagnostic: Full raw error text (only when error).
    """

    status: SolveStatus
    model: tuple[str, ...] = field(default_factory=tuple)
    reason: str | None = None
    diagnostic: str | None = None

    def render(self) -> str:
        """Format a decided outcome the way the solve_formula tool reports it."""
        if self.status is SolveStatus.SAT:
            return "SAT\nModel:\n" + "\n".join(self.model)
        return f"Result: {self.status}"


def _model_lines(model: z3.ModelRef) -> tuple[str, ...]:
    lines: list[str] = []
    for decl in model.decls():
        line = f"{decl.name()} = {' '.join(str(model[decl]).split())}".strip()
        if line:
            lines.append(line)
    return tuple(lines)


# ---------------------------------------------------------------------------
# Adapter
# ---------------------------------------------------------------------------


class Z3Solver:
    """One-shot solver adapter. Safe to call from worker threads."""

    def solve(self, formula: str) -> SolveOutcome:
        """Check ``formula`` and report sat/unsat/unknown, or the failure.

        Every exception raised while loading or checking the formula is
        caught and returned as an ``error`` outcome.
        """
        processed = process_formula(formula)
        logger.info("[solve] chars=%d injected_logic=%s", len(formula), processed != formula)
        try:
            ctx = z3.Context()
            solver = z3.Solver(ctx=ctx)
            solver.from_string(processed)
            result = solver.check()
            if result == z3.sat:
                outcome = SolveOutcome(SolveStatus.SAT, model=_model_lines(solver.model()))
            elif result == z3.unsat:
                outcome = SolveOutcome(SolveStatus.UNSAT)
            else:
                outcome = SolveOutcome(SolveStatus.UNKNOWN)
        except Exception as exc:
            raw = _raw_message(exc)
            logger.error("[solve] engine error: %s", raw, exc_info=True)
            return SolveOutcome(
                SolveStatus.ERROR,
                reason=extract_error_reason(raw),
                diagnostic=raw,
            )

        logger.info("[solve] status=%s model_lines=%d", outcome.status, len(outcome.model))
        return outcome
