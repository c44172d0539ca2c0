"""
Policy — decides whether a persisted value may be served.

    from revalidate import policy as P

    spec = P.version_policy(1)
    spec = P.time_policy(minutes=10)
    spec = P.of(lambda v: v.etag, lambda etag: etag in known_etags)
"""

from revalidate.policy._spec import (
    Clock,
    PolicySpec,
    of,
    to_delta,
)
from revalidate.policy._time import (
    TimePolicy,
    create_time,
    validate_time,
    time_policy,
)
from revalidate.policy._version import (
    VersionPolicy,
    create_version,
    validate_version,
    version_policy,
)
from revalidate.policy._combined import (
    TimeAndVersionPolicy,
    create_time_and_version,
    validate_time_and_version,
    time_and_version_policy,
)

__all__ = (
    # Spec
    "Clock",
    "PolicySpec",
    "of",
    "to_delta",
    # Time
    "TimePolicy",
    "create_time",
    "validate_time",
    "time_policy",
    # Version
    "VersionPolicy",
    "create_version",
    "validate_version",
    "version_policy",
    # Time + version
    "TimeAndVersionPolicy",
    "create_time_and_version",
    "validate_time_and_version",
    "time_and_version_policy",
)
