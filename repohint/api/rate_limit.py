"""
Per pull request cooldown for the re-check endpoint.

In-memory, resets on restart. Only accepted requests start a cooldown.
"""

from cachetools import TTLCache
from fastapi import Depends, HTTPException, status

from repohint.api.auth import verify_recheck_signature
from repohint.api.dependencies import get_recheck_history


async def recheck_cooldown(
    pr: str = Depends(verify_recheck_signature),
    history: TTLCache = Depends(get_recheck_history),
) -> str:
    # Checked and recorded without an await in between, so concurrent
    # requests for the same PR cannot both get through.
    if pr in history:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Frequent Request, Please wait for a while",
        )
    mark_rechecked(history, pr)
    return pr


def mark_rechecked(history: TTLCache, pr: str) -> None:
    history[pr] = True
