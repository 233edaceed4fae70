"""
CloudEvent spec versions understood by uProtocol.
"""

from enum import Enum
from typing import Mapping, Optional

from up_cloudevent.datamodel.registry import Registry


class SpecVersion(Enum):
    NOT_DEFINED = 0
    V1 = 1


SPEC_VERSION_V1 = "v1"

DEFAULT_SPEC_VERSIONS = {
    SPEC_VERSION_V1: SpecVersion.V1,
}


class SpecVersionRegistry(Registry[SpecVersion]):
    """Maps the ``specversion`` header to a ``SpecVersion``."""

    def __init__(self, table: Optional[Mapping[str, SpecVersion]] = None):
        super().__init__(
            DEFAULT_SPEC_VERSIONS if table is None else table,
            SpecVersion.NOT_DEFINED,
        )


default_spec_versions = SpecVersionRegistry()


def get_spec_version(token: str) -> SpecVersion:
    return default_spec_versions.resolve(token)
