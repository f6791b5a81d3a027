from enum import Enum


class UserRole(str, Enum):
    ADMIN = "Admin"
    EMPLOYEE = "Employee"


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
