"""Contract tests for metadata provider parity.

Every RecordMetadataProvider must implement the full protocol and describe
equivalent declarations the same way, whether they come from dataclass
field metadata or from a YAML descriptor table.

Run contract tests:
    pytest tests/contracts/ -v
"""

import sys


def get_protocol_members(protocol_cls: type) -> frozenset[str]:
    """Return the member names declared by a Protocol class."""
    if sys.version_info >= (3, 13):
        from typing import get_protocol_members as _get_members

        return _get_members(protocol_cls)

    from typing_extensions import get_protocol_members as _get_members_ext

    return _get_members_ext(protocol_cls)
