from django.conf import settings
from django.db import models
import uuid


class AppSetting(models.Model):
    """
    Administrator-editable key/value setting.

    Values are stored as strings; typed accessors live in the services layer.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    key = models.CharField(max_length=100, unique=True)
    value = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='updated_settings'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'app_settings'
        ordering = ['key']

    def __str__(self):
        return f"{self.key}={self.value}"
