"""
Writes refresh scripts to disk.
"""

import logging
from pathlib import Path
from typing import Mapping, Optional, Union

from ..errors import ScriptExistsError
from ..utils.file_store import FileStore
from .templates import ScriptKind, render_script

logger = logging.getLogger(__name__)


def create_refresh_script(store: FileStore, script_path: Union[str, Path], profile_name: str,
                          kind: ScriptKind = ScriptKind.SSO,
                          params: Optional[Mapping[str, str]] = None,
                          force: bool = False) -> Path:
    """
    Create the refresh script for a profile.

    Args:
        store: File access implementation; it decides whether the platform
            has an executable bit
        script_path: Full path of the script file
        profile_name: Profile the script refreshes credentials for
        kind: SSO or OIDC script
        params: Extra template values (``role_arn`` and ``client_id`` for OIDC)
        force: Overwrite an existing script

    Returns:
        Path of the written script

    Raises:
        ScriptExistsError: The script exists and ``force`` is False
    """
    path = Path(script_path)
    if store.exists(path) and not force:
        raise ScriptExistsError(str(path))

    store.ensure_dir(path.parent)
    store.write_text(path, render_script(profile_name, kind, params))
    store.set_executable(path)

    logger.info("Wrote %s refresh script %s", kind.value, path)
    return path
