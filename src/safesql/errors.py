from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class SafeSqlProblem:
    code: str                 # stable machine code, e.g. "SAFESQL_NULL_ARGUMENT"
    category: str             # "template" | "argument" | "config"
    message: str              # short human message
    details: Dict[str, Any]   # structured details; never carries argument values
    remediation: Optional[str] = None  # actionable next step

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        if d.get("remediation") is None:
            d.pop("remediation", None)
        return d


class SafeSqlError(Exception):
    """Base class of every translation and configuration failure."""

    def __init__(self, problem: SafeSqlProblem) -> None:
        super().__init__(problem.message)
        self.problem = problem

    @property
    def code(self) -> str:
        return self.problem.code


class ArgumentCountMismatch(SafeSqlError, ValueError):
    @classmethod
    def of(cls, expected: int, actual: int) -> "ArgumentCountMismatch":
        return cls(
            SafeSqlProblem(
                code="SAFESQL_ARGUMENT_COUNT_MISMATCH",
                category="argument",
                message=f"Template has {expected} placeholder(s) but {actual} argument(s) were given",
                details={"expected": expected, "actual": actual},
                remediation="Pass exactly one argument per placeholder occurrence, in order.",
            )
        )


class NullArgument(SafeSqlError, ValueError):
    @classmethod
    def of(cls, name: str, position: int) -> "NullArgument":
        return cls(
            SafeSqlProblem(
                code="SAFESQL_NULL_ARGUMENT",
                category="argument",
                message=f"Placeholder {{{name}}} received None",
                details={"placeholder": name, "position": position},
                remediation="Write NULL (or IS NULL) into the template, or enable render_null.",
            )
        )


class UnsupportedType(SafeSqlError, TypeError):
    @classmethod
    def of(cls, name: str, position: int, value: Any, reason: Optional[str] = None) -> "UnsupportedType":
        type_name = type(value).__name__
        message = f"Placeholder {{{name}}} cannot render a value of type {type_name}"
        if reason:
            message = f"{message}: {reason}"
        return cls(
            SafeSqlProblem(
                code="SAFESQL_UNSUPPORTED_TYPE",
                category="argument",
                message=message,
                details={"placeholder": name, "position": position, "type": type_name},
            )
        )


class MalformedTemplate(SafeSqlError, ValueError):
    @classmethod
    def of(cls, template: str, reason: str) -> "MalformedTemplate":
        return cls(
            SafeSqlProblem(
                code="SAFESQL_MALFORMED_TEMPLATE",
                category="template",
                message=f"Malformed query template: {reason}",
                details={"template": template},
                remediation="Use {name} placeholders; write literal braces as {{ and }}.",
            )
        )


class ConfigError(SafeSqlError, ValueError):
    @classmethod
    def of(cls, message: str, *, details: Dict[str, Any], remediation: Optional[str] = None) -> "ConfigError":
        return cls(
            SafeSqlProblem(
                code="SAFESQL_CONFIG_INVALID",
                category="config",
                message=message,
                details=details,
                remediation=remediation,
            )
        )
