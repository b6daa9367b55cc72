# app/models/user.py
# Note: User is defined in core/auth.py next to the fastapi-users wiring,
# so we do not redefine it here. Importing this module registers every
# mapped class so relationship("...") strings resolve.

from app.core.auth import User
from .expense import Expense
from .bill import Bill
from .bill_payment import BillPayment
from .user_settings import UserSettings

__all__ = ["User", "Expense", "Bill", "BillPayment", "UserSettings"]
