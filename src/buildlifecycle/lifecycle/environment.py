"""
CI environment detection.
"""

import logging
import os
from typing import Mapping, Optional, Sequence

from ..models.config import DEFAULT_CI_ENV_VARS

logger = logging.getLogger(__name__)


def is_ci_server(
    environ: Optional[Mapping[str, str]] = None,
    env_vars: Optional[Sequence[str]] = None,
) -> bool:
    """
    Detect whether the build runs on a CI server.

    A CI server is recognized by the presence of any of ``env_vars`` in the
    environment, whatever its value.

    Args:
        environ: Environment to inspect (defaults to ``os.environ``)
        env_vars: Variable names marking a CI run (defaults to ``["CI"]``)
    """
    environ = os.environ if environ is None else environ
    env_vars = DEFAULT_CI_ENV_VARS if env_vars is None else env_vars
    for name in env_vars:
        if name in environ:
            logger.debug(f"CI server detected through environment variable {name}")
            return True
    return False
