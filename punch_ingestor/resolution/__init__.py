"""Employee identity resolution."""

from .identity import (
    EmployeeDirectory,
    IdentityResolver,
    ProfileRecord,
    Resolution,
    ResolutionMethod,
    ResolutionOutcome,
    Resolved,
    Unmatched,
    resolve_employee_codes,
)

__all__ = [
    "EmployeeDirectory",
    "IdentityResolver",
    "ProfileRecord",
    "Resolution",
    "ResolutionMethod",
    "ResolutionOutcome",
    "Resolved",
    "Unmatched",
    "resolve_employee_codes",
]
