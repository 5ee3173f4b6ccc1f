"""
Two-phase tableau Simplex solver for linear programs in standard form.

    maximize   sum_j c[j] * x[j]
    subject to sum_j A[i][j] * x[j] <= b[i]   (for all i)
               x[j] >= 0                      (for all j)

Internally the LP is kept in slack form:

    z    = v + sum_{j in N} c[j] * x[j]
    x[i] = b[i] - sum_{j in N} a[i][j] * x[j]   (for i in B)

- Variables 0..n-1 are structural, n..n+m-1 are slacks, and Phase I adds one
  auxiliary variable at index n+m.
- Entering and leaving variables follow Bland's smallest-index rule, so the
  pivot sequence terminates on degenerate problems.
- Every pivot returns a new tableau; tableaux are never modified in place.
- Infeasible and unbounded problems are reported as result statuses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from fractions import Fraction
from typing import Dict, List, Optional, Sequence, Tuple, Union
import math

EPS = 1e-8

Num = Union[int, float, Fraction, Decimal]


def fmt_out(x: Num) -> str:
    """Pretty-print numbers as integers or reduced fractions."""
    if isinstance(x, float):
        if math.isnan(x) or math.isinf(x):
            return str(x)
        if abs(x) < 1e-12:
            return "0"
        fr = Fraction.from_float(x).limit_denominator(10**6)
    else:
        fr = Fraction(x)
    if fr == 0:
        return "0"
    if fr.denominator == 1:
        return str(fr.numerator)
    sign = '-' if fr < 0 else ''
    return f"{sign}{abs(fr.numerator)}/{fr.denominator}"


def variable_names(n: int, m: int, auxiliary: bool = False) -> List[str]:
    names = [f"x{j+1}" for j in range(n)] + [f"s{i+1}" for i in range(m)]
    if auxiliary:
        names.append("a")
    return names


@dataclass(frozen=True)
class StandardForm:
    """maximize c^T x subject to A x <= b, x >= 0.

    Entries are converted to floats; a constraint matrix whose shape does not
    match ``len(b)`` x ``len(c)`` raises ``ValueError``.
    """
    c: Tuple[float, ...]
    A: Tuple[Tuple[float, ...], ...]
    b: Tuple[float, ...]

    def __post_init__(self):
        try:
            c = tuple(float(v) for v in self.c)
            A = tuple(tuple(float(v) for v in row) for row in self.A)
            b = tuple(float(v) for v in self.b)
        except (TypeError, ValueError) as e:
            raise ValueError(f"c, A and b must contain numbers: {e}") from e
        if len(A) != len(b):
            raise ValueError(f"A has {len(A)} rows but b has {len(b)} entries")
        for i, row in enumerate(A):
            if len(row) != len(c):
                raise ValueError(f"row {i} of A has {len(row)} columns, expected {len(c)}")
        object.__setattr__(self, "c", c)
        object.__setattr__(self, "A", A)
        object.__setattr__(self, "b", b)

    @property
    def n(self) -> int:
        return len(self.c)

    @property
    def m(self) -> int:
        return len(self.b)

    def to_slack_form(self) -> SlackForm:
        """All slacks basic, all structural variables nonbasic."""
        return self._slack_form(auxiliary=False)

    def to_auxiliary_slack_form(self) -> SlackForm:
        """Slack form of the Phase I problem: maximize -x_a s.t. A x - x_a <= b.

        Variables are ordered [structural, slack, auxiliary].
        """
        return self._slack_form(auxiliary=True)

    def _slack_form(self, auxiliary: bool) -> SlackForm:
        n, m = self.n, self.m
        aux = n + m
        size = n + m + (1 if auxiliary else 0)

        a = [[0.0] * size for _ in range(size)]
        b = [0.0] * size
        c = [0.0] * size
        for i in range(m):
            a[n + i][:n] = self.A[i]
            b[n + i] = self.b[i]

        nonbasic = list(range(n))
        if auxiliary:
            nonbasic.append(aux)
            for i in range(m):
                a[n + i][aux] = -1.0
            c[aux] = -1.0
        else:
            c[:n] = self.c

        return SlackForm(nonbasic, range(n, n + m), a, b, c, 0.0)


@dataclass(frozen=True)
class SlackForm:
    # a[i][j] is meaningful for i in basic, j in nonbasic; b for basic indices;
    # c for nonbasic indices. Everything else is kept at 0.
    nonbasic: Tuple[int, ...]
    basic: Tuple[int, ...]
    a: Tuple[Tuple[float, ...], ...]
    b: Tuple[float, ...]
    c: Tuple[float, ...]
    v: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "nonbasic", tuple(sorted(self.nonbasic)))
        object.__setattr__(self, "basic", tuple(sorted(self.basic)))
        object.__setattr__(self, "a", tuple(tuple(float(x) for x in row) for row in self.a))
        object.__setattr__(self, "b", tuple(float(x) for x in self.b))
        object.__setattr__(self, "c", tuple(float(x) for x in self.c))
        object.__setattr__(self, "v", float(self.v))

    @property
    def num_variables(self) -> int:
        return len(self.a)

    def check(self) -> None:
        """Raise ValueError unless basic/nonbasic partition the variables."""
        size = self.num_variables
        if set(self.basic) & set(self.nonbasic):
            raise ValueError(f"variables {sorted(set(self.basic) & set(self.nonbasic))} are both basic and nonbasic")
        if sorted(self.basic + self.nonbasic) != list(range(size)):
            raise ValueError(f"basic and nonbasic variables do not cover 0..{size - 1}")
        if len(self.b) != size or len(self.c) != size or any(len(row) != size for row in self.a):
            raise ValueError("a, b and c must be sized to the number of variables")

    def pivot(self, leaving: int, entering: int) -> SlackForm:
        """Exchange basic variable `leaving` with nonbasic variable `entering`.

        The caller picks a pair with a nonzero pivot element a[leaving][entering].
        A new tableau is returned; this one is left untouched.
        """
        if leaving not in self.basic:
            raise ValueError(f"leaving variable {leaving} is not basic")
        if entering not in self.nonbasic:
            raise ValueError(f"entering variable {entering} is not nonbasic")
        piv = self.a[leaving][entering]
        if piv == 0:
            raise RuntimeError("Zero pivot encountered")

        size = self.num_variables
        cols = [j for j in self.nonbasic if j != entering]
        rows = [i for i in self.basic if i != leaving]

        b = [0.0] * size
        b[entering] = self.b[leaving] / piv
        for i in rows:
            b[i] = self.b[i] - self.a[i][entering] * b[entering]

        a = [[0.0] * size for _ in range(size)]
        a[entering][leaving] = 1.0 / piv
        for j in cols:
            a[entering][j] = self.a[leaving][j] / piv
        for i in rows:
            coeff = self.a[i][entering]
            for j in cols:
                a[i][j] = self.a[i][j] - coeff * a[entering][j]
            a[i][leaving] = -coeff * a[entering][leaving]

        c = [0.0] * size
        c[leaving] = -self.c[entering] * a[entering][leaving]
        for j in cols:
            c[j] = self.c[j] - self.c[entering] * a[entering][j]

        v = self.v + self.c[entering] * b[entering]

        return SlackForm(cols + [leaving], rows + [entering], a, b, c, v)

    def choose_entering(self, eps: float = EPS) -> Optional[int]:
        """Smallest nonbasic index with a positive reduced cost, or None at optimum."""
        for j in self.nonbasic:
            if self.c[j] > eps:
                return j
        return None

    def choose_leaving(self, entering: int, eps: float = EPS) -> Optional[int]:
        """Minimum ratio test; the first row wins ties. None means unbounded."""
        leaving = None
        delta = math.inf
        for i in self.basic:
            coeff = self.a[i][entering]
            if coeff > eps:
                ratio = self.b[i] / coeff
                if delta - ratio > eps:
                    delta = ratio
                    leaving = i
        return leaving

    def basic_solution(self) -> List[float]:
        solution = [0.0] * self.num_variables
        for i in self.basic:
            solution[i] = self.b[i]
        return solution

    def objective(self, solution: Sequence[float]) -> float:
        if len(solution) != len(self.c):
            raise ValueError(f"solution has {len(solution)} entries, expected {len(self.c)}")
        return self.v + sum(self.c[j] * solution[j] for j in self.nonbasic)

    def print_tableau(self, names: Sequence[str], header: str = "",
                      entering: Optional[int] = None, leaving: Optional[int] = None,
                      eps: float = EPS):
        # Rows read x_i = RHS - sum_j a_ij x_j; the z row reads z = RHS + sum_j c_j x_j
        print(f"\n{header}")
        headers = ["BV"] + [names[j] for j in self.nonbasic] + ["RHS", "Ratio"]

        z_cells = ["z"] + [fmt_out(self.c[j]) for j in self.nonbasic] + [fmt_out(self.v), ""]
        rows: List[List[str]] = []
        for i in self.basic:
            cells = [names[i]]
            for j in self.nonbasic:
                val_str = fmt_out(self.a[i][j])
                if i == leaving and j == entering:
                    val_str = f"*{val_str}"
                cells.append(val_str)
            ratio_cell = ""
            if entering is not None and self.a[i][entering] > eps:
                ratio_cell = fmt_out(self.b[i] / self.a[i][entering])
            cells.extend([fmt_out(self.b[i]), ratio_cell])
            rows.append(cells)

        samples = headers + z_cells + [s for row in rows for s in row]
        colw = max(6, max(len(s) for s in samples) + 2)

        print(" ".join(f"{h:>{colw}}" for h in headers))
        print("-" * (len(headers) * (colw + 1)))
        print(" ".join(f"{s:>{colw}}" for s in z_cells))
        for row in rows:
            print(" ".join(f"{s:>{colw}}" for s in row))


@dataclass
class LPResult:
    status: str  # feasible | infeasible | unbounded
    solution: Optional[List[float]]  # values for the n structural variables
    objective: Optional[float]
    iterations: int = 0
    tableau: Optional[SlackForm] = None  # terminal tableau
    details: Dict[str, object] = field(default_factory=dict)


def optimize(slack: SlackForm, eps: float = EPS, verbose: bool = False,
             names: Optional[Sequence[str]] = None,
             phase: str = "Phase II") -> Tuple[str, SlackForm, int]:
    """Pivot until no reduced cost exceeds eps.

    Returns ``(status, tableau, pivots)`` with status ``"optimal"`` or
    ``"unbounded"``. On ``"unbounded"`` the returned tableau is the one in
    which the unbounded entering variable was found.
    """
    if names is None:
        names = [f"x{j}" for j in range(slack.num_variables)]
    iterations = 0
    while True:
        entering = slack.choose_entering(eps)
        if entering is None:
            if verbose:
                slack.print_tableau(names, f"{phase}: final tableau (iteration {iterations})", eps=eps)
            return "optimal", slack, iterations
        leaving = slack.choose_leaving(entering, eps)
        if leaving is None:
            if verbose:
                slack.print_tableau(names, f"{phase}: final tableau (unbounded in {names[entering]})",
                                    entering=entering, eps=eps)
            return "unbounded", slack, iterations
        iterations += 1
        if verbose:
            slack.print_tableau(names, f"{phase}: iteration {iterations}, "
                                       f"{names[entering]} enters, {names[leaving]} leaves",
                                entering=entering, leaving=leaving, eps=eps)
        slack = slack.pivot(leaving, entering)


def most_negative_row(b: Sequence[float], eps: float = EPS) -> Optional[int]:
    """Index of the smallest entry of b; an earlier row is kept unless beaten by more than eps."""
    if not b:
        return None
    k = 0
    for i in range(1, len(b)):
        if b[k] - b[i] > eps:
            k = i
    return k


def needs_phase_one(standard: StandardForm, eps: float = EPS) -> bool:
    k = most_negative_row(standard.b, eps)
    return k is not None and standard.b[k] < -eps


def _phase_one(standard: StandardForm, eps: float, verbose: bool) -> Tuple[Optional[SlackForm], int]:
    if not needs_phase_one(standard, eps):
        return standard.to_slack_form(), 0

    n, m = standard.n, standard.m
    aux = n + m
    names = variable_names(n, m, auxiliary=True)
    k = most_negative_row(standard.b, eps)

    if verbose:
        print("\n=== Phase I ===")
    slack = standard.to_auxiliary_slack_form()
    if verbose:
        slack.print_tableau(names, f"Phase I: {names[aux]} enters, {names[n + k]} leaves",
                            entering=aux, leaving=n + k, eps=eps)
    slack = slack.pivot(n + k, aux)

    # the auxiliary objective is bounded above by 0, so this always ends optimal
    _, slack, iterations = optimize(slack, eps, verbose, names, phase="Phase I")
    iterations += 1

    value = slack.b[aux] if aux in slack.basic else 0.0
    if abs(value) > eps:
        if verbose:
            print(f"\nPhase I optimum {fmt_out(-value)} < 0: the LP is infeasible")
        return None, iterations

    if aux in slack.basic:
        entering = next((j for j in slack.nonbasic if abs(slack.a[aux][j]) > eps), None)
        if entering is None:
            raise RuntimeError("auxiliary variable cannot be pivoted out of the basis")
        if verbose:
            print(f"\nPivoting degenerate {names[aux]} out of the basis in favour of {names[entering]}")
        slack = slack.pivot(aux, entering)
        iterations += 1

    # Drop the auxiliary column and restate the original objective over the basis
    size = n + m
    nonbasic = [j for j in slack.nonbasic if j != aux]
    a = [row[:size] for row in slack.a[:size]]
    b = slack.b[:size]
    structural = [i for i in slack.basic if i < n]

    v = sum(standard.c[i] * slack.b[i] for i in structural)
    c = [0.0] * size
    for j in nonbasic:
        cj = standard.c[j] if j < n else 0.0
        c[j] = cj - sum(standard.c[i] * slack.a[i][j] for i in structural)

    return SlackForm(nonbasic, slack.basic, a, b, c, v), iterations


def initialize_simplex(standard: StandardForm, eps: float = EPS,
                       verbose: bool = False) -> Optional[SlackForm]:
    """Feasible slack form for `standard`, or None if the LP is infeasible.

    When every b[i] >= -eps the all-slack basis is returned as is; otherwise
    the auxiliary problem is solved first.
    """
    slack, _ = _phase_one(standard, eps, verbose)
    return slack


def simplex(standard: StandardForm, eps: float = EPS, verbose: bool = False) -> LPResult:
    n, m = standard.n, standard.m
    names = variable_names(n, m)
    phase1 = needs_phase_one(standard, eps)

    slack, iters1 = _phase_one(standard, eps, verbose)
    if slack is None:
        return LPResult(status="infeasible", solution=None, objective=None,
                        iterations=iters1, details={"phase1": phase1, "var_names": names})

    if verbose:
        print("\n=== Phase II ===")
    status, slack, iters2 = optimize(slack, eps, verbose, names, phase="Phase II")
    iterations = iters1 + iters2

    if status == "unbounded":
        return LPResult(status="unbounded", solution=None, objective=None, iterations=iterations,
                        tableau=slack, details={"phase1": phase1, "var_names": names})

    basic_solution = slack.basic_solution()
    optimal = slack.objective(basic_solution)

    # Any nonbasic variable with zero reduced cost can enter without changing z
    alt_vars = [names[j] for j in slack.nonbasic if abs(slack.c[j]) <= eps]
    details = {
        "phase1": phase1,
        "alternate_optimal": len(alt_vars) > 0,
        "alt_zero_rc_vars": alt_vars,
        "var_names": names,
    }
    return LPResult(status="feasible", solution=basic_solution[:n], objective=optimal,
                    iterations=iterations, tableau=slack, details=details)


def solve(c: Sequence[Num], A: Sequence[Sequence[Num]], b: Sequence[Num],
          eps: float = EPS, verbose: bool = False) -> LPResult:
    return simplex(StandardForm(c=c, A=A, b=b), eps=eps, verbose=verbose)
