import uuid

import django.utils.timezone
from django.db import migrations, models

import notifications.models.notification_preferences


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                (
                    "notification_id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for the notification",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "owner_id",
                    models.CharField(
                        editable=False,
                        help_text="Identity-provider subject of the user owning the notification",
                        max_length=128,
                    ),
                ),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("pantry", "pantry"),
                            ("grocery", "grocery"),
                            ("chef", "chef"),
                            ("community", "community"),
                            ("health", "health"),
                            ("payment", "payment"),
                            ("subscription", "subscription"),
                            ("system", "system"),
                        ],
                        help_text="Notification category",
                        max_length=20,
                    ),
                ),
                ("title", models.CharField(help_text="Display title", max_length=255)),
                ("message", models.TextField(help_text="Display message")),
                (
                    "priority",
                    models.CharField(
                        choices=[
                            ("low", "low"),
                            ("medium", "medium"),
                            ("high", "high"),
                            ("urgent", "urgent"),
                        ],
                        default="low",
                        help_text="Delivery and sort priority",
                        max_length=10,
                    ),
                ),
                (
                    "payload",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text="Structured data interpreted by the client for navigation",
                    ),
                ),
                (
                    "dedup_key",
                    models.CharField(
                        blank=True,
                        help_text="Key identifying duplicate events for the same subject",
                        max_length=255,
                        null=True,
                    ),
                ),
                (
                    "is_read",
                    models.BooleanField(
                        default=False,
                        help_text="Whether the notification has been read by the owner",
                    ),
                ),
                (
                    "read_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="When the notification was marked as read",
                        null=True,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        default=django.utils.timezone.now,
                        editable=False,
                        help_text="When the notification was created",
                    ),
                ),
            ],
            options={
                "db_table": "notifications",
                "ordering": ["-created_at", "-notification_id"],
            },
        ),
        migrations.CreateModel(
            name="NotificationPreferences",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "owner_id",
                    models.CharField(
                        help_text="Identity-provider subject of the user",
                        max_length=128,
                        unique=True,
                    ),
                ),
                (
                    "enabled",
                    models.BooleanField(default=True, help_text="Master on/off switch"),
                ),
                ("pantry_expiry", models.BooleanField(default=True)),
                ("grocery_deadline", models.BooleanField(default=True)),
                ("chef_recipes", models.BooleanField(default=True)),
                ("chef_courses", models.BooleanField(default=True)),
                ("community_activity", models.BooleanField(default=True)),
                ("health_reminders", models.BooleanField(default=True)),
                (
                    "quiet_hours_start",
                    models.CharField(
                        blank=True,
                        help_text="Start of the quiet window (HH:MM, local time)",
                        max_length=5,
                        null=True,
                    ),
                ),
                (
                    "quiet_hours_end",
                    models.CharField(
                        blank=True,
                        help_text="End of the quiet window (HH:MM, local time)",
                        max_length=5,
                        null=True,
                    ),
                ),
                (
                    "timezone",
                    models.CharField(
                        default=notifications.models.notification_preferences.default_timezone,
                        help_text="IANA timezone used to evaluate quiet hours",
                        max_length=64,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "notification_preferences",
                "verbose_name_plural": "notification preferences",
            },
        ),
        migrations.CreateModel(
            name="PushToken",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("token", models.CharField(max_length=255, unique=True)),
                ("owner_id", models.CharField(db_index=True, max_length=128)),
                (
                    "registered_at",
                    models.DateTimeField(default=django.utils.timezone.now),
                ),
                ("last_used_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "db_table": "push_tokens",
                "ordering": ["registered_at"],
            },
        ),
        migrations.AddIndex(
            model_name="notification",
            index=models.Index(
                fields=["owner_id", "-created_at", "-notification_id"],
                name="notif_owner_created_idx",
            ),
        ),
        migrations.AddIndex(
            model_name="notification",
            index=models.Index(
                fields=["owner_id", "is_read"], name="notif_owner_unread_idx"
            ),
        ),
        migrations.AddIndex(
            model_name="notification",
            index=models.Index(
                fields=["owner_id", "dedup_key", "-created_at"],
                name="notif_owner_dedup_idx",
            ),
        ),
    ]
