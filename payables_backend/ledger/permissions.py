# ledger/permissions.py

from rest_framework.permissions import BasePermission


# ---------------- BASE GROUP PERMISSION ----------------
class HasGroup(BasePermission):
    """
    Base permission: authenticated superuser, or member of one of allowed_groups.
    """

    allowed_groups = set()

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if user.is_superuser:
            return True
        return user.groups.filter(name__in=self.allowed_groups).exists()


# ---------------- LEDGER PERMISSIONS ----------------
class CanPostLedger(HasGroup):
    """
    Anything that moves money or a balance:
    - record payments
    - post manual entries
    - onboard vendors
    """

    allowed_groups = {"admin", "manager"}
