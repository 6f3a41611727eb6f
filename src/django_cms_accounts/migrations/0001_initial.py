# Generated manually for standalone django-cms-accounts package

import django.db.models.deletion
import django.db.models.functions.text
from django.db import migrations, models

import django_cms_accounts.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Role",
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
                    "title",
                    models.CharField(max_length=100, unique=True, verbose_name="title"),
                ),
            ],
            options={
                "verbose_name": "role",
                "verbose_name_plural": "roles",
                "ordering": ["title"],
            },
        ),
        migrations.CreateModel(
            name="User",
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
                ("password", models.CharField(max_length=128, verbose_name="password")),
                (
                    "last_login",
                    models.DateTimeField(blank=True, null=True, verbose_name="last login"),
                ),
                (
                    "username",
                    models.CharField(max_length=255, unique=True, verbose_name="username"),
                ),
                (
                    "email",
                    models.EmailField(max_length=255, unique=True, verbose_name="email address"),
                ),
                (
                    "full_name",
                    models.CharField(blank=True, max_length=255, verbose_name="full name"),
                ),
                (
                    "slug",
                    models.SlugField(blank=True, max_length=255, unique=True, verbose_name="slug"),
                ),
                ("is_active", models.BooleanField(default=True, verbose_name="active")),
                (
                    "sign_in_count",
                    models.PositiveIntegerField(default=0, verbose_name="sign in count"),
                ),
                (
                    "current_sign_in_at",
                    models.DateTimeField(blank=True, null=True, verbose_name="current sign in at"),
                ),
                (
                    "last_sign_in_at",
                    models.DateTimeField(blank=True, null=True, verbose_name="last sign in at"),
                ),
                (
                    "current_sign_in_ip",
                    models.GenericIPAddressField(
                        blank=True, null=True, verbose_name="current sign in IP"
                    ),
                ),
                (
                    "last_sign_in_ip",
                    models.GenericIPAddressField(
                        blank=True, null=True, verbose_name="last sign in IP"
                    ),
                ),
                (
                    "reset_password_token",
                    models.CharField(
                        blank=True,
                        max_length=128,
                        null=True,
                        unique=True,
                        verbose_name="reset password token",
                    ),
                ),
                (
                    "reset_password_sent_at",
                    models.DateTimeField(
                        blank=True, null=True, verbose_name="reset password sent at"
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(auto_now_add=True, verbose_name="created at"),
                ),
                (
                    "updated_at",
                    models.DateTimeField(auto_now=True, verbose_name="updated at"),
                ),
            ],
            options={
                "verbose_name": "user",
                "verbose_name_plural": "users",
                "ordering": ["username"],
            },
            managers=[
                ("objects", django_cms_accounts.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name="RoleMembership",
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
                    "assigned_at",
                    models.DateTimeField(auto_now_add=True, verbose_name="assigned at"),
                ),
                (
                    "role",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="memberships",
                        to="django_cms_accounts.role",
                        verbose_name="role",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="role_memberships",
                        to="django_cms_accounts.user",
                        verbose_name="user",
                    ),
                ),
            ],
            options={
                "verbose_name": "role membership",
                "verbose_name_plural": "role memberships",
            },
        ),
        migrations.AddField(
            model_name="user",
            name="roles",
            field=models.ManyToManyField(
                blank=True,
                related_name="users",
                through="django_cms_accounts.RoleMembership",
                to="django_cms_accounts.role",
                verbose_name="roles",
            ),
        ),
        migrations.CreateModel(
            name="UserPlugin",
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
                ("name", models.CharField(max_length=255, verbose_name="name")),
                (
                    "position",
                    models.PositiveIntegerField(default=0, verbose_name="position"),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="plugins",
                        to="django_cms_accounts.user",
                        verbose_name="user",
                    ),
                ),
            ],
            options={
                "verbose_name": "user plugin",
                "verbose_name_plural": "user plugins",
                "ordering": ["position", "pk"],
            },
        ),
        migrations.AddConstraint(
            model_name="user",
            constraint=models.UniqueConstraint(
                django.db.models.functions.text.Lower("username"),
                name="unique_user_username_lower",
            ),
        ),
        migrations.AddConstraint(
            model_name="user",
            constraint=models.UniqueConstraint(
                django.db.models.functions.text.Lower("email"),
                name="unique_user_email_lower",
            ),
        ),
        migrations.AddConstraint(
            model_name="rolemembership",
            constraint=models.UniqueConstraint(
                fields=("user", "role"),
                name="unique_user_role_membership",
            ),
        ),
        migrations.AddIndex(
            model_name="userplugin",
            index=models.Index(fields=["user", "position"], name="user_plugin_position_idx"),
        ),
        migrations.AddConstraint(
            model_name="userplugin",
            constraint=models.UniqueConstraint(
                fields=("user", "name"),
                name="unique_user_plugin_name",
            ),
        ),
    ]
