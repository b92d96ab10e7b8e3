from .service import AdminService, NotAuthorized

__all__ = ["AdminService", "NotAuthorized"]
