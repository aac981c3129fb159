from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager
import uuid

from django.utils.translation import gettext_lazy as _


class UserManager(BaseUserManager):
    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('The Email field must be set')
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_user(email, password, **extra_fields)


class User(AbstractUser):
    """
    Marketplace account. The UUID primary key is the user identifier that
    appears in ``/users/{userId}/...`` routes and owns products and wishes.
    """
    id = models.UUIDField(default=uuid.uuid4, editable=False, db_index=True, primary_key=True)

    # Logging in is done by email, so the username column is dropped.
    username = None
    email = models.EmailField(unique=True, db_index=True)
    full_username = models.CharField(max_length=100, help_text="Full user name (e.g John Doe)")

    created_at = models.DateTimeField(auto_now_add=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["full_username"]

    objects = UserManager()

    class Meta:
        verbose_name_plural = _("Users")

    def __str__(self):
        return f"User email: {self.email}"
