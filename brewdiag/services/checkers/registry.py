# SPDX-License-Identifier: MIT
"""Check registry and severity tiers.

The registry maps stable check names to `Check` values and holds the ordered
tier lists. It is validated when constructed: a tier naming a check that was
never registered is a programming error and raises immediately, before any
check runs.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType

from .base import Check, Tier

__all__ = [
    "BUILD_FROM_SOURCE_CHECKS",
    "CheckRegistry",
    "DEFAULT_TIERS",
    "DuplicateCheckError",
    "FATAL_BUILD_FROM_SOURCE_CHECKS",
    "RegistryError",
    "SUPPORTED_CONFIGURATION_CHECKS",
    "UnknownCheckError",
]

# Order matters: later checks assume the earlier ones passed silently.
FATAL_BUILD_FROM_SOURCE_CHECKS: tuple[str, ...] = (
    "check_xcode_license_approved",
    "check_xcode_minimum_version",
    "check_clt_minimum_version",
    "check_if_xcode_needs_clt_installed",
)

SUPPORTED_CONFIGURATION_CHECKS: tuple[str, ...] = ("check_for_unsupported_macos",)

BUILD_FROM_SOURCE_CHECKS: tuple[str, ...] = (
    "check_for_installed_developer_tools",
    "check_xcode_up_to_date",
    "check_clt_up_to_date",
)

DEFAULT_TIERS: Mapping[Tier, tuple[str, ...]] = MappingProxyType(
    {
        Tier.FATAL_BUILD_FROM_SOURCE: FATAL_BUILD_FROM_SOURCE_CHECKS,
        Tier.SUPPORTED_CONFIGURATION: SUPPORTED_CONFIGURATION_CHECKS,
        Tier.BUILD_FROM_SOURCE: BUILD_FROM_SOURCE_CHECKS,
    }
)


class RegistryError(ValueError):
    """The registry is misconfigured."""


class UnknownCheckError(RegistryError):
    def __init__(self, names: Sequence[str], where: str) -> None:
        self.names = tuple(names)
        self.where = where
        super().__init__(f"unknown check(s) in {where}: {', '.join(self.names)}")


class DuplicateCheckError(RegistryError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"check registered twice: {name}")


class CheckRegistry:
    """Registered checks plus their tier lists."""

    def __init__(
        self,
        checks: Iterable[Check],
        tiers: Mapping[Tier, Sequence[str]] = DEFAULT_TIERS,
    ) -> None:
        self._checks: dict[str, Check] = {}
        for check in checks:
            if check.name in self._checks:
                raise DuplicateCheckError(check.name)
            self._checks[check.name] = check

        self._tiers: dict[Tier, tuple[str, ...]] = {}
        for tier in Tier:
            names = tuple(tiers.get(tier, ()))
            unknown = [name for name in names if name not in self._checks]
            if unknown:
                raise UnknownCheckError(unknown, f"tier {tier.value}")
            self._tiers[tier] = names

    def fatal_checks(self) -> tuple[str, ...]:
        return self._tiers[Tier.FATAL_BUILD_FROM_SOURCE]

    def supported_configuration_checks(self) -> tuple[str, ...]:
        return self._tiers[Tier.SUPPORTED_CONFIGURATION]

    def build_from_source_checks(self) -> tuple[str, ...]:
        return self._tiers[Tier.BUILD_FROM_SOURCE]

    def tier(self, tier: Tier) -> tuple[str, ...]:
        return self._tiers[tier]

    def checks_for(self, tier: Tier) -> list[Check]:
        return [self._checks[name] for name in self._tiers[tier]]

    def get(self, name: str) -> Check:
        try:
            return self._checks[name]
        except KeyError:
            raise UnknownCheckError([name], "lookup") from None

    def resolve(self, names: Sequence[str]) -> list[Check]:
        """Look up several checks at once, reporting every unknown name."""
        unknown = [name for name in names if name not in self._checks]
        if unknown:
            raise UnknownCheckError(unknown, "request")
        return [self._checks[name] for name in names]

    def names(self) -> list[str]:
        return sorted(self._checks)

    def catalog(self) -> list[Check]:
        """Every registered check, sorted by name."""
        return [self._checks[name] for name in self.names()]

    def __contains__(self, name: object) -> bool:
        return name in self._checks

    def __len__(self) -> int:
        return len(self._checks)
