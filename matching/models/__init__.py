# Export all matching models for easy imports
from .base import Base
from .university import University
from .profiles import User, AcademicProfile, FinancialProfile

__all__ = [
    "Base",
    "University",
    "User",
    "AcademicProfile",
    "FinancialProfile",
]
