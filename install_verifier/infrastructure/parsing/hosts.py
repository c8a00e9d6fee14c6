"""Parser for hosts-file formatted text."""
from __future__ import annotations

from typing import Sequence

from install_verifier.domain.models import Host


def parse_hosts_text(text: str, source: str | None = None) -> Sequence[Host]:
    """Turn ``/etc/hosts`` style text into host records.

    Each line holds an address, a canonical name and optional aliases.
    Comments start with ``#``; lines with fewer than two fields are skipped.
    """
    hosts: list[Host] = []
    for line in text.splitlines():
        fields = line.split("#", 1)[0].split()
        if len(fields) < 2:
            continue
        ip, name, *aliases = fields
        hosts.append(Host(name=name, ip=ip, aliases=tuple(aliases), source=source))
    return hosts
