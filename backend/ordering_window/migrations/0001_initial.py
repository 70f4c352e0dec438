import datetime

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="OrderingWindow",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("start_time", models.TimeField(default=datetime.time(8, 0))),
                ("end_time", models.TimeField(default=datetime.time(10, 30))),
                (
                    "timezone",
                    models.CharField(
                        choices=[
                            ("UTC", "UTC"),
                            ("Australia/Sydney", "Australian Eastern Time"),
                            ("Australia/Melbourne", "Australian Eastern Time"),
                            ("Australia/Brisbane", "Australian Eastern Time"),
                            ("Australia/Adelaide", "Australian Central Time"),
                            ("Australia/Perth", "Australian Western Time"),
                            ("Pacific/Auckland", "New Zealand Time"),
                            ("Asia/Singapore", "Singapore Time"),
                            ("Europe/London", "London (GMT/BST)"),
                            ("America/New_York", "Eastern Time (US)"),
                            ("America/Chicago", "Central Time (US)"),
                            ("America/Los_Angeles", "Pacific Time (US)"),
                        ],
                        default="Australia/Sydney",
                        help_text="Timezone the window times are expressed in.",
                        max_length=50,
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "updated_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Ordering Window",
                "verbose_name_plural": "Ordering Window",
            },
        ),
    ]
