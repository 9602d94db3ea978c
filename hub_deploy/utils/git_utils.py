"""Git operation utilities"""

import subprocess
from pathlib import Path
from typing import Optional, Union


def get_short_commit(path: Union[str, Path]) -> Optional[str]:
    """
    Get the abbreviated hash of HEAD

    Args:
        path: Repository path

    Returns:
        Short commit hash or None if it cannot be determined
    """
    try:
        result = subprocess.run(
            ['git', 'rev-parse', '--short', 'HEAD'],
            cwd=path,
            capture_output=True,
            text=True,
            check=True
        )
    except (subprocess.CalledProcessError, FileNotFoundError, NotADirectoryError):
        return None

    commit = result.stdout.strip()
    return commit or None
