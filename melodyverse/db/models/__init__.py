from melodyverse.db.models.user import User

__all__ = ["User"]
