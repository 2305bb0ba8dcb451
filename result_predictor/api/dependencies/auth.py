# result_predictor/api/dependencies/auth.py
from fastapi import Header, HTTPException


def get_current_user(
    user_id: str = Header(None, alias="X-User-Id"),
) -> str:
    """
    Identity of the authenticated user, set by the session layer in front
    of this service. Requests without one are rejected.
    """
    if not user_id or not user_id.strip():
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user_id.strip()
