"""User model for authentication and account management.

Extends Django's `AbstractUser` with a unique normalized email, a display
name, and a coarse role used to gate administrator operations.
"""

from common.choices import UserRole
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Storefront user.

    Fields:
    - email: primary email, unique at the database level (normalized).
    - name: display name shown on orders and reviews.
    - role: `user` or `admin`; `is_staff` follows the role.
    """

    ROLE_USER = UserRole.USER
    ROLE_ADMIN = UserRole.ADMIN

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=120, blank=True)
    role = models.CharField(max_length=16, choices=UserRole.choices, default=UserRole.USER, db_index=True)

    def save(self, *args, **kwargs):
        """Normalize email, default the display name, and sync staff flag."""
        if self.email:
            self.email = self.email.strip().lower()
        if not self.name:
            self.name = self.get_full_name() or self.username
        if self.role == UserRole.ADMIN:
            self.is_staff = True
        elif not self.is_superuser:
            self.is_staff = False
        super().save(*args, **kwargs)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN or self.is_superuser
