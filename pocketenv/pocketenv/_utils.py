from __future__ import annotations

import shutil
import subprocess
import sys
from pathlib import Path
from typing import Iterable, Literal


def run_logged(
    cmd: Iterable[str],
    *,
    capture_output: bool = False,
    text: bool = True,
    check: bool = True,
    echo: Literal["always", "on_error", "never"] = "always",
    **kwargs: object,
) -> subprocess.CompletedProcess[str]:
    """
    Run a subprocess, mirroring captured stdout/stderr to the caller.
    Returns the CompletedProcess; raises CalledProcessError when check=True.
    """
    result = subprocess.run(
        list(cmd),
        capture_output=capture_output,
        text=text,
        **kwargs,  # type: ignore[arg-type]
    )
    if capture_output and (
        echo == "always" or (echo == "on_error" and result.returncode != 0)
    ):
        if result.stdout:
            sys.stdout.write(result.stdout)
        if result.stderr:
            sys.stderr.write(result.stderr)
    if check and result.returncode != 0:
        raise subprocess.CalledProcessError(
            result.returncode, result.args, output=result.stdout, stderr=result.stderr
        )
    return result


def has_command(name: str) -> bool:
    return shutil.which(name) is not None


def read_env(path: Path) -> list[tuple[str, str]]:
    """Read ``key=value`` pairs in file order, skipping comments and blanks."""
    pairs: list[tuple[str, str]] = []
    with path.open(encoding="utf-8") as handle:
        for raw in handle:
            line = raw.strip()
            if line == "" or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            pairs.append((key.strip(), value))
    return pairs
