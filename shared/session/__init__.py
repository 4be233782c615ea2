from .dependencies import get_session_id

__all__ = ["get_session_id"]
