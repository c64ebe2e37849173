from django.core.serializers.json import DjangoJSONEncoder
from django.db import models
import uuid


class ActivityLog(models.Model):
    """Audit entry for a state-changing action."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    actor = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='activity_logs'
    )
    activity_type = models.CharField(max_length=64, db_index=True)
    resource_type = models.CharField(max_length=64)
    resource_id = models.CharField(max_length=64, blank=True)
    metadata = models.JSONField(default=dict, blank=True, encoder=DjangoJSONEncoder)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'activity_logs'
        indexes = [
            models.Index(fields=['resource_type', 'resource_id'], name='activity_lo_resourc_7d2e41_idx'),
            models.Index(fields=['actor', 'created_at'], name='activity_lo_actor_i_5c8f03_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.activity_type} on {self.resource_type}:{self.resource_id}"
