"""Version resolvers for the Conan registry."""

from .conan import (
    ConanRevisionResolver,
    ConanVersionResolver,
    VersionNotFoundError,
    convert_time_to_timestamp,
)

__all__ = [
    "ConanVersionResolver",
    "ConanRevisionResolver",
    "VersionNotFoundError",
    "convert_time_to_timestamp",
]
