"""HTTP interface"""

from moodmirror.api.routes import create_app, BaselineStore

__all__ = ["create_app", "BaselineStore"]
