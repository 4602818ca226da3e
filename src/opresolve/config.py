"""Resolver configuration."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class ResolverConfig:
    """Configuration shared by the execution context and the resolver."""
    context_separator: str = "-"  # joins node name and scope id
    strict: bool = False  # warn when an input cannot be resolved

    @classmethod
    def from_env(cls) -> "ResolverConfig":
        """
        Build a config from ``OPRESOLVE_*`` environment variables.

        OPRESOLVE_CONTEXT_SEPARATOR overrides the scope separator and
        OPRESOLVE_STRICT=1 turns on unresolved-input warnings.
        """
        return cls(
            context_separator=os.environ.get('OPRESOLVE_CONTEXT_SEPARATOR', '-'),
            strict=os.environ.get('OPRESOLVE_STRICT', '0') == '1',
        )


DEFAULT_CONFIG = ResolverConfig()
