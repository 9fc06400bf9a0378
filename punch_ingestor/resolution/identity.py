"""Resolution of vendor employee codes to internal profile identities."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from ..schemas.punches import ParsedPunch
from ..utils.logging import setup_logger

logger = setup_logger(__name__, context={"component": "IdentityResolver"})


class ResolutionMethod(str, Enum):
    """Lookup tier that resolved a code."""

    IDENTIFIER = "identifier"
    NAME = "name"
    EMAIL_PREFIX = "email_prefix"


@dataclass(frozen=True, slots=True)
class ProfileRecord:
    """Profile fields used for fallback matching."""

    profile_id: str
    full_name: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class Resolved:
    code: str
    profile_id: str
    method: ResolutionMethod


@dataclass(frozen=True, slots=True)
class Unmatched:
    code: str


Resolution = Resolved | Unmatched


@dataclass(slots=True)
class ResolutionOutcome:
    """Per-code resolutions in first-seen order."""

    resolutions: dict[str, Resolution] = field(default_factory=dict)

    @property
    def code_to_profile(self) -> dict[str, str]:
        return {
            code: result.profile_id
            for code, result in self.resolutions.items()
            if isinstance(result, Resolved)
        }

    @property
    def unmatched_codes(self) -> list[str]:
        return [code for code, result in self.resolutions.items() if isinstance(result, Unmatched)]

    @property
    def methods(self) -> dict[str, str]:
        """Return which tier resolved each matched code."""

        return {
            code: result.method.value
            for code, result in self.resolutions.items()
            if isinstance(result, Resolved)
        }

    @property
    def matched_count(self) -> int:
        return len(self.code_to_profile)


class EmployeeDirectory(Protocol):
    """Lookup collaborator scoped by organization."""

    def identifiers_for(self, organization_id: str, codes: Sequence[str]) -> Mapping[str, str]:
        """Return ``employee code -> profile id`` for the codes that are registered."""
        ...

    def profiles_for(self, organization_id: str) -> Sequence[ProfileRecord]:
        """Return every profile of the organization."""
        ...


def _unique_index(pairs: Iterable[tuple[str, str]]) -> dict[str, str | None]:
    """Index keys to a profile id, or ``None`` when the key is ambiguous."""

    index: dict[str, str | None] = {}
    for key, profile_id in pairs:
        if key in index and index[key] != profile_id:
            index[key] = None
        else:
            index[key] = profile_id
    return index


def _email_local_part(email: str) -> str:
    return email.split("@", 1)[0].strip().lower()


def resolve_employee_codes(
    punches: Sequence[ParsedPunch],
    identifiers: Mapping[str, str],
    profiles: Sequence[ProfileRecord],
) -> ResolutionOutcome:
    """
    Resolve each distinct employee code through three tiers, first match wins.

    1. exact match in the organization's identifier table;
    2. case-insensitive exact match of a printed name against profile names;
    3. case-insensitive match of the email local part against the code.

    Names or email prefixes shared by several profiles never resolve.

    Args:
        punches: Extracted punches, in document order
        identifiers: ``employee code -> profile id`` for the organization
        profiles: Profiles of the organization

    Returns:
        ResolutionOutcome tagging each code with its tier or as unmatched
    """
    names_by_code: dict[str, str | None] = {}
    for punch in punches:
        if punch.employee_code not in names_by_code or (
            names_by_code[punch.employee_code] is None and punch.name
        ):
            names_by_code[punch.employee_code] = punch.name or None

    by_name = _unique_index(
        (profile.full_name.strip().lower(), profile.profile_id)
        for profile in profiles
        if profile.full_name and profile.full_name.strip()
    )
    by_email = _unique_index(
        (_email_local_part(profile.email), profile.profile_id)
        for profile in profiles
        if profile.email and _email_local_part(profile.email)
    )

    outcome = ResolutionOutcome()
    for code, name in names_by_code.items():
        if code in identifiers:
            outcome.resolutions[code] = Resolved(code, identifiers[code], ResolutionMethod.IDENTIFIER)
            continue

        if name:
            profile_id = by_name.get(name.strip().lower())
            if profile_id:
                outcome.resolutions[code] = Resolved(code, profile_id, ResolutionMethod.NAME)
                continue

        profile_id = by_email.get(code.lower())
        if profile_id:
            outcome.resolutions[code] = Resolved(code, profile_id, ResolutionMethod.EMAIL_PREFIX)
            continue

        outcome.resolutions[code] = Unmatched(code)

    return outcome


class IdentityResolver:
    """Load lookup tables from a directory and resolve extracted codes."""

    def __init__(self, directory: EmployeeDirectory) -> None:
        self._directory = directory

    def resolve(self, organization_id: str, punches: Sequence[ParsedPunch]) -> ResolutionOutcome:
        codes = list(dict.fromkeys(punch.employee_code for punch in punches))
        identifiers = self._directory.identifiers_for(organization_id, codes)
        profiles = self._directory.profiles_for(organization_id)

        outcome = resolve_employee_codes(punches, identifiers, profiles)
        logger.debug(
            "Resolved %d of %d employee codes",
            outcome.matched_count,
            len(codes),
            extra={"organization_id": organization_id, "summary": outcome.methods},
        )
        return outcome
