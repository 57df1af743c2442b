# package marker for app.models

# Import all models to ensure relationships are properly initialized
from app.models.user import User, Role
from app.models.trips import Trip

__all__ = [
    "User",
    "Role",
    "Trip",
]
