from __future__ import annotations

import os
import shutil
import stat
import tempfile
from pathlib import Path
from typing import Iterable, List

# Bytes that are not valid UTF-8 survive a read/write cycle unchanged
ENCODING = "utf-8"
ERRORS = "surrogateescape"


def read_config_lines(path: Path) -> List[str]:
    with path.open(encoding=ENCODING, errors=ERRORS) as fh:
        return [line.rstrip("\n") for line in fh]


def write_config_lines(path: Path, lines: Iterable[str]) -> Path:
    """Overwrite path with lines, each terminated by a newline.

    Symlinks are followed, so the file they point to is the one updated. The
    content goes to a temp file in the same directory first and is then moved
    over the target, so the config is either fully replaced or left as it was.
    """
    target = path.resolve()
    mode = stat.S_IMODE(target.stat().st_mode) if target.exists() else 0o600
    fh = tempfile.NamedTemporaryFile(
        'w',
        dir=target.parent,
        prefix=f".{target.name}.",
        suffix='.tmp',
        delete=False,
        encoding=ENCODING,
        errors=ERRORS,
        newline='\n',
    )
    tmp = Path(fh.name)
    try:
        with fh:
            os.chmod(tmp, mode)
            for line in lines:
                fh.write(f"{line}\n")
        tmp.replace(target)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    return target


def backup_config(path: Path) -> Path:
    dest = path.with_name(path.name + '.bak')
    shutil.copy2(path, dest)
    return dest
