# Import all models to ensure they are registered with SQLAlchemy
from .users import Users
from .roles import Roles
from .userroles import UserRoles
