import structlog
from fastapi import Depends, HTTPException, status

from repohint.api.dependencies import get_config
from repohint.core.config import Config
from repohint.core.utils.signing import verify_pr_signature

logger = structlog.get_logger(__name__)


async def verify_recheck_signature(
    pr: str | None = None,
    token: str | None = None,
    config: Config = Depends(get_config),
) -> str:
    """
    FastAPI dependency that verifies a re-check link.

    The token must be the HMAC of the PR number under the shared secret, as
    embedded in failure comments.

    Raises:
        HTTPException: If the PR number is missing or the token is invalid.

    Returns:
        The verified PR number.
    """
    if not pr or not pr.isdigit():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Parameters Need")

    if not verify_pr_signature(config.server.secret_key, pr, token):
        logger.warning("Invalid re-check signature", pr_number=pr)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden Access")

    return pr
