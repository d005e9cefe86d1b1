from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class ParsedBlock:
    host_alias: str
    before: List[str] = field(default_factory=list)
    after: List[str] = field(default_factory=list)
    hostname: str = ""
    user: str = ""
    identity_file: str = ""
    # Raw lines of the matched block other than HostName/User/IdentityFile
    extra_options: List[str] = field(default_factory=list)

    def block_lines(self, keep_extra: bool = False) -> List[str]:
        lines = [f"Host {self.host_alias}"]
        lines.append(f"  HostName {self.hostname}")
        lines.append(f"  User {self.user}")
        lines.append(f"  IdentityFile {self.identity_file}")
        if keep_extra:
            lines.extend(self.extra_options)
        return lines
