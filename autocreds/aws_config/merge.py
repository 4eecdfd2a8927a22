"""
Profile merging for AWS config documents.
"""

import logging
from typing import Mapping, Optional

from ..errors import ProfileExistsError
from .parser import ConfigDocument

__all__ = ['upsert_profile']

logger = logging.getLogger(__name__)


def upsert_profile(
    document: ConfigDocument,
    section_header: str,
    desired_pairs: Mapping[str, str],
    force: bool = False,
    *,
    companion_sections: Optional[Mapping[str, Mapping[str, str]]] = None,
) -> ConfigDocument:
    """
    Compute the document that results from writing a profile section.

    The target section ends up holding exactly ``desired_pairs``, in the
    order given. Keys it held before are dropped. Every other section is left
    as it was. The input document is never modified.

    Args:
        document: Parsed content of the config file
        section_header: Raw header of the target section (e.g. "profile dev-sso")
        desired_pairs: Keys and values the section must contain
        force: Overwrite the section if it already exists
        companion_sections: Extra sections written alongside the target with
            the same replace semantics but without the existence check
            (e.g. the ``sso-session`` block of an SSO profile)

    Returns:
        A new ConfigDocument to be serialized and written

    Raises:
        ProfileExistsError: The section exists and ``force`` is False
    """
    if section_header in document and not force:
        raise ProfileExistsError(section_header)

    merged = document.copy()

    for header, pairs in (companion_sections or {}).items():
        merged.set_section(header, pairs)

    if section_header in document:
        logger.debug("Overwriting section [%s]", section_header)
    else:
        logger.debug("Adding section [%s]", section_header)
    merged.set_section(section_header, desired_pairs)

    return merged
