from invites_api.models import Base

__all__ = ["Base"]
